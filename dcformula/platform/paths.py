"""Platform-aware user directories.

Defaults for the config file, the download cache and the bin directory
when the config file does not set them.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from .detection import Platform, detect_platform

__all__ = [
    "home",
    "user_config_dir",
    "user_cache_dir",
    "default_bin_dir",
    "default_config_path",
    "clear_caches",
]

APP_NAME = "dcformula"
CONFIG_ENV = "DCFORMULA_CONFIG"


@lru_cache(maxsize=1)
def home() -> Path:
    """Get the user's home directory (HOME first, for CI/containers)."""
    home_env = os.environ.get("HOME")
    if home_env:
        return Path(home_env)
    return Path.home()


@lru_cache(maxsize=1)
def user_config_dir() -> Path:
    """~/.config/dcformula (honours XDG_CONFIG_HOME); APPDATA on Windows."""
    if detect_platform() == Platform.WINDOWS:
        app_data = os.environ.get("APPDATA")
        if app_data:
            return Path(app_data) / APP_NAME
        return home() / "AppData" / "Roaming" / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME


@lru_cache(maxsize=1)
def user_cache_dir() -> Path:
    """~/.cache/dcformula (honours XDG_CACHE_HOME); ~/Library/Caches on macOS."""
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        return Path(xdg_cache) / APP_NAME
    if detect_platform() == Platform.MACOS:
        return home() / "Library" / "Caches" / APP_NAME
    return home() / ".cache" / APP_NAME


def default_bin_dir() -> Path:
    return home() / ".local" / "bin"


def default_config_path() -> Path:
    """Config file location: $DCFORMULA_CONFIG, else the user config dir."""
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return user_config_dir() / "config.toml"


def clear_caches() -> None:
    """Clear cached paths (tests change HOME/XDG variables)."""
    home.cache_clear()
    user_config_dir.cache_clear()
    user_cache_dir.cache_clear()
