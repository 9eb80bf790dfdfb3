from .errors import (
    ArgumentError,
    BarrierInitializationError,
    ExitCode,
    FileOpenError,
    ForkExecError,
    LaunchError,
    ParseError,
    UnschedulableError,
)

__all__ = [
    "ExitCode",
    "LaunchError",
    "ArgumentError",
    "FileOpenError",
    "ParseError",
    "UnschedulableError",
    "ForkExecError",
    "BarrierInitializationError",
]
