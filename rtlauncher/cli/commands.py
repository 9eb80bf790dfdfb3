from __future__ import annotations

import argparse
import sys

from rtlauncher.config import LauncherConfig, load_config
from rtlauncher.errors import ExitCode, LaunchError
from rtlauncher.launch import launch_schedule, prepare_schedule, project_schedule
from rtlauncher.logs import configure_logging

from .args import build_parser


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        config = load_config(args.config)
        configure_logging(args.log_level or config.log_level)

        if args.dry_run:
            return cmd_dry_run(args, config)
        return cmd_launch(args, config)

    except LaunchError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return int(exc.exit_code)

    except KeyboardInterrupt:
        return 130


def cmd_launch(args: argparse.Namespace, config: LauncherConfig) -> int:
    launch_schedule(args.base, config)
    return ExitCode.SUCCESS


def cmd_dry_run(args: argparse.Namespace, config: LauncherConfig) -> int:
    schedule = prepare_schedule(args.base, config)
    for vector in project_schedule(schedule, config):
        print(" ".join(vector.argv()))
    return ExitCode.SUCCESS
