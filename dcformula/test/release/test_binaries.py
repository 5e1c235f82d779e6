"""Tests for release/binaries.py - platform asset table."""

import pytest

from dcformula.core.result import Err, Ok
from dcformula.platform.detection import Arch, Platform
from dcformula.release.binaries import BINARIES, select_platform_binary
from dcformula.release.model import UnsupportedPlatform


@pytest.mark.parametrize(
    ("platform", "arch", "expected"),
    [
        (Platform.MACOS, Arch.ARM64, "dirclean-darwin-arm64.tar.gz"),
        (Platform.MACOS, Arch.AMD64, "dirclean-darwin-amd64.tar.gz"),
        (Platform.LINUX, Arch.ARM64, "dirclean-linux-arm64.tar.gz"),
        (Platform.LINUX, Arch.AMD64, "dirclean-linux-amd64.tar.gz"),
    ],
)
def test_supported_targets(platform: Platform, arch: Arch, expected: str) -> None:
    assert select_platform_binary(platform, arch) == Ok(expected)


@pytest.mark.parametrize(
    ("platform", "arch"),
    [
        (Platform.WINDOWS, Arch.AMD64),
        (Platform.LINUX, Arch.UNKNOWN),
        (Platform.UNKNOWN, Arch.ARM64),
    ],
)
def test_unsupported_targets(platform: Platform, arch: Arch) -> None:
    result = select_platform_binary(platform, arch)
    assert result == Err(UnsupportedPlatform(platform=platform, arch=arch))


def test_exactly_four_distinct_binaries() -> None:
    assert len(BINARIES) == 4
    assert len(set(BINARIES.values())) == 4


def test_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        BINARIES[(Platform.WINDOWS, Arch.AMD64)] = "dirclean-windows.zip"  # type: ignore[index]


def test_unsupported_message() -> None:
    error = UnsupportedPlatform(platform=Platform.WINDOWS, arch=Arch.AMD64)
    assert str(error) == "no release binary for windows/amd64"
