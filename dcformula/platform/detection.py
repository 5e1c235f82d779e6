"""Platform and architecture detection.

Release assets are published per (operating system, CPU architecture)
pair, so both are modelled as enums. Detection is cached; parsing accepts
the spellings used by Go release tooling (``darwin``, ``amd64``) as well as
the Python ones (``macos``, ``x86_64``).
"""

from __future__ import annotations

import platform as _platform
import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache

__all__ = [
    "Platform",
    "Arch",
    "PlatformInfo",
    "detect",
    "detect_arch",
    "detect_platform",
    "parse_platform",
    "parse_arch",
]


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Arch(Enum):
    """CPU architecture."""

    AMD64 = auto()
    ARM64 = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    """Detected (or requested) target platform."""

    platform: Platform
    arch: Arch

    def __str__(self) -> str:
        return f"{self.platform}-{self.arch}"


_PLATFORM_ALIASES: dict[str, Platform] = {
    "linux": Platform.LINUX,
    "darwin": Platform.MACOS,
    "macos": Platform.MACOS,
    "osx": Platform.MACOS,
    "windows": Platform.WINDOWS,
    "win32": Platform.WINDOWS,
}

_ARCH_ALIASES: dict[str, Arch] = {
    "amd64": Arch.AMD64,
    "x86_64": Arch.AMD64,
    "x64": Arch.AMD64,
    "arm64": Arch.ARM64,
    "aarch64": Arch.ARM64,
}


def parse_platform(value: str) -> Platform:
    """Parse a platform name; unrecognized names give Platform.UNKNOWN."""
    return _PLATFORM_ALIASES.get(value.strip().lower(), Platform.UNKNOWN)


def parse_arch(value: str) -> Arch:
    """Parse an architecture name; unrecognized names give Arch.UNKNOWN."""
    return _ARCH_ALIASES.get(value.strip().lower(), Arch.UNKNOWN)


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    system = _sys.platform.lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith("darwin"):
        return Platform.MACOS
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_arch() -> Arch:
    """Detect the current CPU architecture (cached)."""
    return parse_arch(_platform.machine())


def detect() -> PlatformInfo:
    """Detect the host platform and architecture."""
    return PlatformInfo(platform=detect_platform(), arch=detect_arch())
