"""Release data model.

A resolution produces a version, a platform binary name and its expected
SHA-256. Either lookup can fail; failures are values (LookupFailure) and
the ResolvedFormula records which fields hold fallbacks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from dcformula.platform.detection import Arch, Platform

__all__ = [
    "ZERO_CHECKSUM",
    "LookupKind",
    "LookupFailure",
    "UnsupportedPlatform",
    "ResolvedFormula",
    "is_sha256",
]

# Stands in for an unresolved checksum. Never a valid digest: anything
# carrying it must be treated as unverified.
ZERO_CHECKSUM = "0" * 64

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")


def is_sha256(value: str) -> bool:
    """True for a 64-char lowercase hex digest."""
    return bool(_SHA256_RE.match(value))


class LookupKind(Enum):
    VERSION = "version lookup failed"
    CHECKSUM = "checksum lookup failed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class LookupFailure:
    """A failed version or checksum lookup.

    Attributes:
        kind: Which lookup failed
        url: The URL that was queried
        reason: Human-readable cause (HTTP error, parse error, no match)
    """

    kind: LookupKind
    url: str
    reason: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.reason}"


@dataclass(frozen=True, slots=True)
class UnsupportedPlatform:
    """No release binary is published for this platform/arch pair."""

    platform: Platform
    arch: Arch

    def __str__(self) -> str:
        return f"no release binary for {self.platform}/{self.arch}"


@dataclass(frozen=True, slots=True)
class ResolvedFormula:
    """Everything needed to fetch and verify one release binary.

    Attributes:
        repository: "owner/name" of the release repository
        version: Version without "v" prefix (possibly the fallback)
        binary: Release asset file name
        url: Download URL of the asset
        sha256: Expected digest (possibly ZERO_CHECKSUM)
        failures: Lookups that failed and were replaced by fallbacks
    """

    repository: str
    version: str
    binary: str
    url: str
    sha256: str
    failures: tuple[LookupFailure, ...] = ()

    @property
    def version_is_fallback(self) -> bool:
        return any(f.kind == LookupKind.VERSION for f in self.failures)

    @property
    def checksum_is_fallback(self) -> bool:
        return self.sha256 == ZERO_CHECKSUM

    @property
    def is_verified(self) -> bool:
        """True when the checksum was actually resolved from the manifest."""
        return not self.checksum_is_fallback
