"""Subprocess execution with Result-based error handling.

Used by the self-test to run the installed binary.

Usage:
    result = run([str(binary), "--version"], cwd=binary.parent)
    match result:
        case Ok(completed):
            print(completed.stdout)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from dcformula.core.result import Err, Ok, Result

__all__ = ["ProcessError", "Completed", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a process that could not be launched or did not finish.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 when the process never ran to completion.
        stderr: Error details.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.returncode == -1:
            return f"{cmd_str} could not run: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


@dataclass(frozen=True, slots=True)
class Completed:
    """A process that ran to completion, whatever its exit code."""

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


def run(
    cmd: list[str],
    cwd: Path,
    *,
    timeout: float | None = None,
) -> Result[Completed, ProcessError]:
    """Execute a command and capture its output.

    A nonzero exit code is not an error here; callers decide.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(Completed) if the process ran, Err(ProcessError) if it could not
        be started or timed out.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stderr=f"timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e)))

    return Ok(
        Completed(
            command=tuple(cmd),
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
    )
