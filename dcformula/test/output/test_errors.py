"""Tests for dcformula.output.errors - failure presentation and exit codes."""

from __future__ import annotations

from pathlib import Path

import pytest

from dcformula.core.config import ConfigError
from dcformula.core.errors import ErrorCode
from dcformula.install.installer import InstallError
from dcformula.install.service import UnverifiedChecksum
from dcformula.output.console import MockConsole
from dcformula.output.errors import Failure, failure_exit_code, print_failure
from dcformula.platform.detection import Arch, Platform
from dcformula.platform.process import ProcessError
from dcformula.release.checksums import ChecksumMismatch
from dcformula.release.http import HttpError
from dcformula.release.model import LookupFailure, LookupKind, UnsupportedPlatform

URL = "https://api.github.com/repos/arkag/dirclean/releases/latest"


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (UnsupportedPlatform(platform=Platform.WINDOWS, arch=Arch.AMD64), ErrorCode.ENV_ERROR),
        (
            UnverifiedChecksum(binary="dirclean-linux-amd64.tar.gz", version="1.2.3"),
            ErrorCode.VERIFY_ERROR,
        ),
        (
            ChecksumMismatch(path=Path("a.tar.gz"), expected="0" * 64, actual="f" * 64),
            ErrorCode.VERIFY_ERROR,
        ),
        (HttpError(url=URL, status=503, message="Service Unavailable"), ErrorCode.NETWORK_ERROR),
        (
            LookupFailure(kind=LookupKind.VERSION, url=URL, reason="HTTP 404"),
            ErrorCode.NETWORK_ERROR,
        ),
        (InstallError(archive=Path("a.tar.gz"), message="IO error"), ErrorCode.IO_ERROR),
        (
            ProcessError(command=("dirclean", "--version"), returncode=2, stderr=""),
            ErrorCode.ENV_ERROR,
        ),
        (ConfigError("Invalid TOML syntax"), ErrorCode.USER_ERROR),
    ],
)
def test_failure_exit_code(error: Failure, code: ErrorCode) -> None:
    assert failure_exit_code(error) == int(code)


class TestPrintFailure:
    def test_unsupported_platform_has_hint(self) -> None:
        console = MockConsole()
        print_failure(UnsupportedPlatform(platform=Platform.WINDOWS, arch=Arch.ARM64), console)

        assert console.messages[0] == "error: no release binary for windows/arm64"
        assert console.find("--platform/--arch")

    def test_mismatch_mentions_removed_archive(self) -> None:
        console = MockConsole()
        error = ChecksumMismatch(
            path=Path("/cache/1234abcd_dirclean-linux-amd64.tar.gz"),
            expected="0" * 64,
            actual="f" * 64,
        )

        print_failure(error, console)

        assert console.has_error()
        assert console.find("removed cached archive 1234abcd_dirclean-linux-amd64.tar.gz")

    def test_lookup_failure(self) -> None:
        console = MockConsole()
        failure = LookupFailure(kind=LookupKind.CHECKSUM, url=URL, reason="checksum not found")

        print_failure(failure, console)

        assert console.messages == ["error: checksum lookup failed: checksum not found"]

    def test_selftest_failure_shows_stderr(self) -> None:
        console = MockConsole()
        error = ProcessError(
            command=("/bin/dirclean", "--version"), returncode=2, stderr="bad flag\n"
        )

        print_failure(error, console)

        assert console.messages[0].startswith("error: self-test failed:")
        assert console.messages[1] == "bad flag"

    def test_config_error(self) -> None:
        console = MockConsole()
        print_failure(ConfigError("Invalid TOML syntax", path=Path("config.toml")), console)
        assert console.messages == ["error: Invalid TOML syntax (config.toml)"]
