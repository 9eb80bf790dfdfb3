from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    FILE_OPEN_ERROR = 1
    FILE_PARSE_ERROR = 2
    UNSCHEDULABLE_ERROR = 3
    FORK_EXECV_ERROR = 4
    BARRIER_INITIALIZATION_ERROR = 5
    ARGUMENT_ERROR = 6


class LaunchError(Exception):
    exit_code: ExitCode = ExitCode.ARGUMENT_ERROR

    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class ArgumentError(LaunchError):
    exit_code = ExitCode.ARGUMENT_ERROR


class FileOpenError(LaunchError):
    exit_code = ExitCode.FILE_OPEN_ERROR


class ParseError(LaunchError):
    exit_code = ExitCode.FILE_PARSE_ERROR


class UnschedulableError(LaunchError):
    exit_code = ExitCode.UNSCHEDULABLE_ERROR


class ForkExecError(LaunchError):
    exit_code = ExitCode.FORK_EXECV_ERROR


class BarrierInitializationError(LaunchError):
    exit_code = ExitCode.BARRIER_INITIALIZATION_ERROR
