"""Binary extraction and installation.

A release tarball contains the ``dirclean`` executable (possibly under a
directory prefix, possibly next to a README or LICENSE). Only that one
file is installed: it is streamed out of the archive into a temporary file
in the bin directory, made executable, then renamed over any previous
install so a failed extraction never leaves a truncated binary behind.
"""

from __future__ import annotations

import os
import shutil
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from dcformula.core.result import Err, Ok, Result

__all__ = ["Installer", "InstallError", "InstallResult"]


@dataclass(frozen=True, slots=True)
class InstallError:
    """Installation error details.

    Attributes:
        archive: Path to the archive being installed
        message: Human-readable error message
    """

    archive: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.archive}"


@dataclass(frozen=True, slots=True)
class InstallResult:
    """An installed binary.

    Attributes:
        path: Installed executable
        member: Archive member it came from
        replaced: True if a previous binary was overwritten
    """

    path: Path
    member: str
    replaced: bool


class Installer:
    """Installs the executable contained in a .tar.gz release archive.

    Usage:
        installer = Installer("dirclean")
        result = installer.install(archive_path, bin_dir)
        if is_ok(result):
            print(f"Installed {result.value.path}")
    """

    def __init__(self, binary: str = "dirclean") -> None:
        self._binary = binary

    @property
    def binary(self) -> str:
        return self._binary

    def _is_binary_member(self, member: tarfile.TarInfo) -> bool:
        # Symlinks, hardlinks and devices are never installed.
        if not member.isreg():
            return False
        name = member.name.replace("\\", "/")
        parts = PurePosixPath(name).parts
        if not parts or name.startswith("/") or ".." in parts:
            return False
        return parts[-1] == self._binary

    def find_member(self, tar: tarfile.TarFile) -> tarfile.TarInfo | None:
        """First regular member whose base name is the binary name."""
        for member in tar.getmembers():
            if self._is_binary_member(member):
                return member
        return None

    def install(self, archive: Path, bin_dir: Path) -> Result[InstallResult, InstallError]:
        """Extract the binary from ``archive`` into ``bin_dir`` (mode 0755).

        Args:
            archive: Path to the .tar.gz release archive
            bin_dir: Executable directory (created if missing)

        Returns:
            Ok with InstallResult, or Err with InstallError
        """
        if not archive.exists():
            return Err(InstallError(archive=archive, message="Archive not found"))
        if not archive.name.lower().endswith((".tar.gz", ".tgz")):
            return Err(
                InstallError(archive=archive, message=f"Unsupported archive format: {archive.name}")
            )

        target = bin_dir / self._binary
        tmp_name: str | None = None
        try:
            with tarfile.open(archive, "r:gz") as tar:
                member = self.find_member(tar)
                if member is None:
                    return Err(
                        InstallError(
                            archive=archive, message=f"{self._binary} not found in archive"
                        )
                    )
                src = tar.extractfile(member)
                if src is None:
                    return Err(InstallError(archive=archive, message="Unreadable archive member"))

                bin_dir.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(prefix=f".{self._binary}-", dir=bin_dir)
                with src, os.fdopen(fd, "wb") as dst:
                    shutil.copyfileobj(src, dst)

            os.chmod(tmp_name, 0o755)
            replaced = target.exists()
            os.replace(tmp_name, target)
            tmp_name = None
            return Ok(InstallResult(path=target, member=member.name, replaced=replaced))

        except (tarfile.TarError, EOFError) as e:
            return Err(InstallError(archive=archive, message=f"Tar extraction failed: {e}"))
        except OSError as e:
            return Err(InstallError(archive=archive, message=f"IO error: {e}"))
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
