"""Release resolution: versions, platform binaries and checksums.

- http.py: HTTP client protocol and implementations
- github.py: latest-release lookup and release URLs
- binaries.py: (platform, arch) -> asset name table
- checksums.py: manifest lookup and file verification
- resolver.py: combined resolution with fallbacks
- formula.py: static Homebrew formula rendering
"""

from dcformula.release.binaries import BINARIES, select_platform_binary
from dcformula.release.checksums import (
    ChecksumMismatch,
    checksum_from_manifest,
    checksum_or_fallback,
    fetch_manifest,
    find_checksum,
    resolve_checksum,
    sha256_file,
    verify_file,
)
from dcformula.release.github import (
    asset_url,
    checksums_url,
    latest_release_url,
    resolve_latest_version,
    version_or_fallback,
)
from dcformula.release.http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from dcformula.release.model import (
    ZERO_CHECKSUM,
    LookupFailure,
    LookupKind,
    ResolvedFormula,
    UnsupportedPlatform,
)
from dcformula.release.resolver import resolve_all, resolve_formula, resolve_version

__all__ = [
    # Model
    "ZERO_CHECKSUM",
    "LookupFailure",
    "LookupKind",
    "ResolvedFormula",
    "UnsupportedPlatform",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # Lookups
    "BINARIES",
    "select_platform_binary",
    "asset_url",
    "checksums_url",
    "latest_release_url",
    "resolve_latest_version",
    "version_or_fallback",
    "ChecksumMismatch",
    "checksum_from_manifest",
    "checksum_or_fallback",
    "fetch_manifest",
    "find_checksum",
    "resolve_checksum",
    "sha256_file",
    "verify_file",
    # Combined
    "resolve_all",
    "resolve_formula",
    "resolve_version",
]
