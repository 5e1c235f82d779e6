"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    PlatformInfo,
    detect,
    parse_arch,
    parse_platform,
)
from .paths import (
    default_bin_dir,
    default_config_path,
    user_cache_dir,
)
from .process import (
    Completed,
    ProcessError,
    run,
)

__all__ = [
    # detection
    "Arch",
    "Platform",
    "PlatformInfo",
    "detect",
    "parse_arch",
    "parse_platform",
    # paths
    "default_bin_dir",
    "default_config_path",
    "user_cache_dir",
    # process
    "Completed",
    "ProcessError",
    "run",
]
