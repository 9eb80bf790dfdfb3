import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from rtlauncher.logs import LOG_LEVELS

from .types import ConfigError, LauncherConfig, UnsupportedConfigFormatError


def load_config(path: str | Path | None = None) -> LauncherConfig:
    if path is None:
        return LauncherConfig()

    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    return _build_launcher_config(raw_file)


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"{path}: cannot read config file: {exc}") from exc

    match fmt:
        case "yaml":
            try:
                raw_file = yaml.safe_load(text)
            except yaml.YAMLError as exc:
                raise ConfigError(f"{path}: invalid YAML") from exc
        case "toml":
            try:
                raw_file = tomllib.loads(text)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"{path}: invalid TOML") from exc
        case "json":
            try:
                raw_file = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"{path}: invalid JSON") from exc
        case _:
            raise AssertionError("Unreachable")

    # An empty YAML document is an empty config
    if raw_file is None and fmt == "yaml":
        return {}

    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: parsed successfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_launcher_config(raw: Mapping[str, Any]) -> LauncherConfig:
    keys = {"scheduler", "barrier_name", "barrier_dir", "log_level"}
    config = LauncherConfig()

    for field in raw.keys():
        if field not in keys:
            raise ConfigError(f"Can't process: {field}")

    if "scheduler" in raw:
        scheduler = raw["scheduler"]
        if not isinstance(scheduler, list) or len(scheduler) < 1:
            raise ConfigError("'scheduler' should be a non-empty list of strings")

        for item in scheduler:
            if not isinstance(item, str) or len(item.strip()) < 1:
                raise ConfigError(f"'scheduler': {item!r} should be a non-empty string")

        config.scheduler = [item.strip() for item in scheduler]

    if "barrier_name" in raw:
        name = raw["barrier_name"]
        if not isinstance(name, str) or len(name.strip()) < 1:
            raise ConfigError("'barrier_name' should be a non-empty string")

        if "/" in name:
            raise ConfigError(f"'barrier_name' can't contain '/': {name}")

        config.barrier_name = name.strip()

    if "barrier_dir" in raw:
        barrier_dir = raw["barrier_dir"]
        if not isinstance(barrier_dir, str) or len(barrier_dir.strip()) < 1:
            raise ConfigError("'barrier_dir' should be a non-empty string")

        config.barrier_dir = str(Path(barrier_dir.strip()).expanduser())

    if "log_level" in raw:
        level = raw["log_level"]
        if not isinstance(level, str) or level.strip().upper() not in LOG_LEVELS:
            raise ConfigError(
                f"'log_level' should be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )

        config.log_level = level.strip().upper()

    return config
