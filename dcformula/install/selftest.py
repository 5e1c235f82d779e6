"""Post-install self-test: ``<binary> --version``.

The test passes when the binary can be launched. Its exit status is
reported but, unless ``strict`` is set, does not fail the test.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dcformula.core.result import Err, Ok, Result
from dcformula.platform.process import Completed, ProcessError, run

__all__ = ["SelfTestResult", "self_test"]

SELFTEST_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class SelfTestResult:
    """Outcome of running the installed binary.

    Attributes:
        binary: The binary that was run
        returncode: Its exit status
        output: First non-empty line of stdout (or stderr)
    """

    binary: Path
    returncode: int
    output: str


def _first_line(completed: Completed) -> str:
    for text in (completed.stdout, completed.stderr):
        for line in text.splitlines():
            if line.strip():
                return line.strip()
    return ""


def self_test(binary: Path, *, strict: bool = False) -> Result[SelfTestResult, ProcessError]:
    """Run ``binary --version``.

    Args:
        binary: Installed executable
        strict: Treat a nonzero exit status as failure

    Returns:
        Ok(SelfTestResult) if the binary ran, Err(ProcessError) if it could
        not be started (or, with strict, exited nonzero)
    """
    cmd = [str(binary), "--version"]
    if not binary.is_file():
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr="binary not found"))

    result = run(cmd, cwd=binary.parent, timeout=SELFTEST_TIMEOUT)
    if isinstance(result, Err):
        return result

    completed = result.value
    if strict and completed.returncode != 0:
        return Err(
            ProcessError(
                command=completed.command,
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        )
    return Ok(
        SelfTestResult(
            binary=binary,
            returncode=completed.returncode,
            output=_first_line(completed),
        )
    )
