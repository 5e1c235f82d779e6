"""Checksum manifest parsing and file verification.

A release ships ``checksums.txt`` in ``sha256sum`` format::

    3f2a...e1  dirclean-linux-amd64.tar.gz
    9b7c...04  dist/dirclean-darwin-arm64.tar.gz

Matching is by suffix: the first entry whose file name *ends with* the
requested binary wins, so path-qualified entries and sha256sum's ``*``
binary-mode marker still match a bare name. Two assets sharing a suffix
(``x.tar.gz`` and ``legacy-x.tar.gz``) resolve to whichever comes first.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dcformula.core.config import DEFAULT_DOWNLOAD_BASE
from dcformula.core.result import Err, Ok, Result

from .github import checksums_url
from .model import ZERO_CHECKSUM, LookupFailure, LookupKind, is_sha256

if TYPE_CHECKING:
    from .http import HttpClient

__all__ = [
    "ChecksumMismatch",
    "find_checksum",
    "fetch_manifest",
    "checksum_from_manifest",
    "resolve_checksum",
    "checksum_or_fallback",
    "sha256_file",
    "verify_file",
]


@dataclass(frozen=True, slots=True)
class ChecksumMismatch:
    """A downloaded file does not match its expected digest."""

    path: Path
    expected: str
    actual: str

    def __str__(self) -> str:
        return f"checksum mismatch: expected {self.expected}, got {self.actual}"


def find_checksum(manifest: str, binary: str) -> str | None:
    """Return the digest of the first manifest entry ending with ``binary``.

    Lines that do not split into exactly two fields are skipped.
    """
    for line in manifest.splitlines():
        parts = line.split()
        if len(parts) != 2:
            continue
        checksum, filename = parts
        if filename.endswith(binary):
            return checksum.lower()
    return None


def resolve_checksum(
    http: HttpClient,
    repository: str,
    version: str,
    binary: str,
    *,
    download_base: str = DEFAULT_DOWNLOAD_BASE,
) -> Result[str, LookupFailure]:
    """Fetch the release manifest and look up the checksum for ``binary``.

    Args:
        http: HTTP client to use
        repository: Repository in "owner/name" format
        version: Release version without "v" prefix
        binary: Asset file name (e.g., "dirclean-linux-amd64.tar.gz")
        download_base: Release download root

    Returns:
        Ok with the 64-char hex digest, or Err(LookupFailure) if the
        manifest is unreachable, has no matching entry, or the matching
        entry is not a SHA-256 digest.
    """
    url = checksums_url(repository, version, download_base=download_base)
    manifest = fetch_manifest(http, url)
    if isinstance(manifest, Err):
        return manifest
    return checksum_from_manifest(manifest.value, binary, url=url)


def fetch_manifest(http: HttpClient, url: str) -> Result[str, LookupFailure]:
    """Download a checksums.txt manifest."""
    result = http.get_text(url)
    if isinstance(result, Err):
        return Err(LookupFailure(kind=LookupKind.CHECKSUM, url=url, reason=str(result.error)))
    return Ok(result.value)


def checksum_from_manifest(manifest: str, binary: str, *, url: str) -> Result[str, LookupFailure]:
    """Look up and validate the digest for ``binary`` in an already fetched manifest.

    ``url`` is where the manifest came from; it is only used in failures.
    """
    checksum = find_checksum(manifest, binary)
    if checksum is None:
        return Err(
            LookupFailure(
                kind=LookupKind.CHECKSUM, url=url, reason=f"checksum not found for {binary}"
            )
        )
    if not is_sha256(checksum):
        return Err(
            LookupFailure(
                kind=LookupKind.CHECKSUM,
                url=url,
                reason=f"malformed checksum for {binary}: {checksum!r}",
            )
        )
    return Ok(checksum)


def checksum_or_fallback(result: Result[str, LookupFailure]) -> str:
    """The resolved checksum, or ZERO_CHECKSUM when the lookup failed."""
    return result.unwrap_or(ZERO_CHECKSUM)


def sha256_file(path: Path) -> str:
    """Hex SHA-256 of a file, read in chunks."""
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_file(path: Path, expected: str) -> Result[str, ChecksumMismatch]:
    """Compare a file's SHA-256 with ``expected`` (case-insensitive).

    Returns Ok with the actual digest on match.
    """
    actual = sha256_file(path)
    if actual != expected.lower():
        return Err(ChecksumMismatch(path=path, expected=expected.lower(), actual=actual))
    return Ok(actual)
