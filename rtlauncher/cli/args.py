from __future__ import annotations

import argparse

from rtlauncher.errors import ArgumentError
from rtlauncher.logs import LOG_LEVELS


class LauncherArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise ArgumentError(
            f"{message}\nThe program must receive a single argument which is the "
            "taskset/schedule filename without any extension."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = LauncherArgumentParser(
        prog="rtlauncher",
        description="Launch every task of a real-time schedule behind a single-use barrier.",
    )

    parser.add_argument(
        "base",
        help="Taskset/schedule filename without the .rtpt/.rtps extension",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a launcher config file (.yaml/.yml, .toml, .json)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the argument vector of every task without starting anything",
    )

    return parser
