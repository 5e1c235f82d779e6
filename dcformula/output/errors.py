"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from dcformula.core.config import ConfigError
from dcformula.core.errors import ErrorCode
from dcformula.install.installer import InstallError
from dcformula.install.service import UnverifiedChecksum
from dcformula.output.console import Style
from dcformula.platform.process import ProcessError
from dcformula.release.checksums import ChecksumMismatch
from dcformula.release.http import HttpError
from dcformula.release.model import LookupFailure, UnsupportedPlatform

if TYPE_CHECKING:
    from dcformula.install.service import InstallFailure
    from dcformula.output.console import ConsoleProtocol

__all__ = ["print_failure", "failure_exit_code"]

Failure: TypeAlias = "InstallFailure | LookupFailure | ConfigError"


def print_failure(error: Failure, console: ConsoleProtocol) -> None:
    """Print a failure to the console with a hint where one helps."""
    match error:
        case UnsupportedPlatform():
            console.error(str(error))
            console.print("hint: pass --platform/--arch to resolve another target", Style.DIM)
        case UnverifiedChecksum():
            console.error(str(error))
        case ChecksumMismatch(path=path):
            console.error(str(error))
            console.print(f"removed cached archive {path.name}; retry to download again", Style.DIM)
        case HttpError() | LookupFailure():
            console.error(str(error))
        case InstallError():
            console.error(str(error))
        case ProcessError(stderr=stderr):
            console.error(f"self-test failed: {error}")
            if stderr:
                console.print(stderr.strip(), Style.DIM)
        case ConfigError():
            console.error(str(error))


def failure_exit_code(error: Failure) -> int:
    """Get exit code for a failure."""
    match error:
        case UnsupportedPlatform():
            return int(ErrorCode.ENV_ERROR)
        case UnverifiedChecksum() | ChecksumMismatch():
            return int(ErrorCode.VERIFY_ERROR)
        case HttpError() | LookupFailure():
            return int(ErrorCode.NETWORK_ERROR)
        case InstallError():
            return int(ErrorCode.IO_ERROR)
        case ProcessError():
            return int(ErrorCode.ENV_ERROR)
        case ConfigError():
            return int(ErrorCode.USER_ERROR)
    return int(ErrorCode.USER_ERROR)
