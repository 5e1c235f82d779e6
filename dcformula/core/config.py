"""Typed configuration loading.

The config file is optional; every field has a default that targets the
upstream ``arkag/dirclean`` releases. Layout::

    [release]
    repository = "arkag/dirclean"
    binary = "dirclean"
    fallback_version = "1.0.0"
    api_base = "https://api.github.com"
    download_base = "https://github.com"

    [http]
    timeout = 30.0
    user_agent = "dcformula/0.1.0"

    [install]
    bin_dir = "~/.local/bin"
    cache_dir = "~/.cache/dcformula"
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "ReleaseConfig",
    "HttpConfig",
    "InstallConfig",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "DEFAULT_REPOSITORY",
    "DEFAULT_BINARY",
    "FALLBACK_VERSION",
]

DEFAULT_REPOSITORY = "arkag/dirclean"
DEFAULT_BINARY = "dirclean"
FALLBACK_VERSION = "1.0.0"
DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_DOWNLOAD_BASE = "https://github.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "dcformula/0.1.0"

_REPOSITORY_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
_BINARY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Where releases come from and what to fall back to."""

    repository: str = DEFAULT_REPOSITORY
    binary: str = DEFAULT_BINARY
    fallback_version: str = FALLBACK_VERSION
    api_base: str = DEFAULT_API_BASE
    download_base: str = DEFAULT_DOWNLOAD_BASE

    def __post_init__(self) -> None:
        if not _REPOSITORY_RE.match(self.repository):
            raise ValueError(f"repository must be 'owner/name': {self.repository!r}")
        if not _BINARY_RE.fullmatch(self.binary):
            raise ValueError(f"binary must be a bare file name: {self.binary!r}")


@dataclass(frozen=True, slots=True)
class HttpConfig:
    """HTTP client settings."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True, slots=True)
class InstallConfig:
    """Install locations. None means the platform default (see platform.paths)."""

    bin_dir: str | None = None
    cache_dir: str | None = None

    def bin_path(self) -> Path | None:
        return Path(self.bin_dir).expanduser() if self.bin_dir else None

    def cache_path(self) -> Path | None:
        return Path(self.cache_dir).expanduser() if self.cache_dir else None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    install: InstallConfig = field(default_factory=InstallConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        release: StrDict = get_table(data, "release") or {}
        http: StrDict = get_table(data, "http") or {}
        install: StrDict = get_table(data, "install") or {}

        return cls(
            release=ReleaseConfig(
                repository=get_str(release, "repository") or DEFAULT_REPOSITORY,
                binary=get_str(release, "binary") or DEFAULT_BINARY,
                fallback_version=get_str(release, "fallback_version") or FALLBACK_VERSION,
                api_base=(get_str(release, "api_base") or DEFAULT_API_BASE).rstrip("/"),
                download_base=(get_str(release, "download_base") or DEFAULT_DOWNLOAD_BASE).rstrip(
                    "/"
                ),
            ),
            http=HttpConfig(
                timeout=get_float(http, "timeout") or DEFAULT_TIMEOUT,
                user_agent=get_str(http, "user_agent") or DEFAULT_USER_AGENT,
            ),
            install=InstallConfig(
                bin_dir=get_str(install, "bin_dir"),
                cache_dir=get_str(install, "cache_dir"),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Like load_config, but a missing file yields the defaults."""
    if not path.exists():
        return Ok(Config())
    return load_config(path)
