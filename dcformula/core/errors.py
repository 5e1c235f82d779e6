"""Exit codes for the dcformula CLI.

Every command maps its failure to one of these codes so scripts (and the
package manager driving the install) can tell what went wrong without
parsing output.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: User error (bad arguments, invalid config file)
    - 2: Environment error (unsupported platform, missing binary)
    - 4: Network error (release API or download unreachable)
    - 5: I/O error (extraction or copy failed)
    - 6: Verification error (checksum mismatch or unverifiable archive)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
    VERIFY_ERROR = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
