"""Release asset names per platform.

Only four targets are published. Anything else (Windows, 32-bit, unknown
hardware) is an explicit UnsupportedPlatform error rather than a guess.
"""

from __future__ import annotations

from types import MappingProxyType

from dcformula.core.result import Err, Ok, Result
from dcformula.platform.detection import Arch, Platform

from .model import UnsupportedPlatform

__all__ = ["BINARIES", "select_platform_binary"]

BINARIES: MappingProxyType[tuple[Platform, Arch], str] = MappingProxyType(
    {
        (Platform.MACOS, Arch.ARM64): "dirclean-darwin-arm64.tar.gz",
        (Platform.MACOS, Arch.AMD64): "dirclean-darwin-amd64.tar.gz",
        (Platform.LINUX, Arch.ARM64): "dirclean-linux-arm64.tar.gz",
        (Platform.LINUX, Arch.AMD64): "dirclean-linux-amd64.tar.gz",
    }
)


def select_platform_binary(platform: Platform, arch: Arch) -> Result[str, UnsupportedPlatform]:
    """Look up the release tarball name for a platform/arch pair."""
    binary = BINARIES.get((platform, arch))
    if binary is None:
        return Err(UnsupportedPlatform(platform=platform, arch=arch))
    return Ok(binary)
