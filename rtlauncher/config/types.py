import os
import tempfile
from dataclasses import dataclass, field

from rtlauncher.errors import ArgumentError

DEFAULT_SCHEDULER = ("python", "cluster.py")
DEFAULT_BARRIER_NAME = "RT_GOMP_CLUSTERING_BARRIER"
BARRIER_DIR_ENV = "RTLAUNCHER_BARRIER_DIR"


def default_barrier_dir() -> str:
    env_dir = os.environ.get(BARRIER_DIR_ENV)
    if env_dir:
        return env_dir
    if os.path.isdir("/dev/shm"):
        return "/dev/shm"
    return tempfile.gettempdir()


@dataclass
class LauncherConfig:
    scheduler: list[str] = field(default_factory=lambda: list(DEFAULT_SCHEDULER))
    barrier_name: str = DEFAULT_BARRIER_NAME
    barrier_dir: str = field(default_factory=default_barrier_dir)
    log_level: str = "INFO"


class ConfigError(ArgumentError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
