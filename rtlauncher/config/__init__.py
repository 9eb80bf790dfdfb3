from .loader import load_config
from .types import (
    BARRIER_DIR_ENV,
    ConfigError,
    LauncherConfig,
    UnsupportedConfigFormatError,
)

__all__ = [
    "load_config",
    "LauncherConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
    "BARRIER_DIR_ENV",
]
