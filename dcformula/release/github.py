"""GitHub Releases lookups.

URL layout:
- latest release metadata: {api_base}/repos/{repo}/releases/latest
- release assets:          {download_base}/{repo}/releases/download/v{version}/{asset}

All functions take an HttpClient parameter for testability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dcformula.core.config import DEFAULT_API_BASE, DEFAULT_DOWNLOAD_BASE, FALLBACK_VERSION
from dcformula.core.result import Err, Ok, Result

from .model import LookupFailure, LookupKind

if TYPE_CHECKING:
    from .http import HttpClient

__all__ = [
    "latest_release_url",
    "asset_url",
    "checksums_url",
    "resolve_latest_version",
    "version_or_fallback",
]


def latest_release_url(repository: str, *, api_base: str = DEFAULT_API_BASE) -> str:
    return f"{api_base}/repos/{repository}/releases/latest"


def asset_url(
    repository: str,
    version: str,
    asset: str,
    *,
    download_base: str = DEFAULT_DOWNLOAD_BASE,
) -> str:
    """Download URL for a release asset of ``version`` (without "v")."""
    return f"{download_base}/{repository}/releases/download/v{version}/{asset}"


def checksums_url(
    repository: str,
    version: str,
    *,
    download_base: str = DEFAULT_DOWNLOAD_BASE,
) -> str:
    return asset_url(repository, version, "checksums.txt", download_base=download_base)


def resolve_latest_version(
    http: HttpClient,
    repository: str,
    *,
    api_base: str = DEFAULT_API_BASE,
) -> Result[str, LookupFailure]:
    """Fetch the latest release version.

    Args:
        http: HTTP client to use
        repository: Repository in "owner/name" format (e.g., "arkag/dirclean")
        api_base: GitHub API root

    Returns:
        Ok with the tag minus one leading "v" ("v1.2.3" -> "1.2.3"), or
        Err(LookupFailure) on network errors, non-2xx status, malformed
        JSON or a missing/empty ``tag_name``.
    """
    url = latest_release_url(repository, api_base=api_base)
    result = http.get_json(url)
    if isinstance(result, Err):
        return Err(LookupFailure(kind=LookupKind.VERSION, url=url, reason=str(result.error)))

    tag_name = result.value.get("tag_name")
    if not isinstance(tag_name, str) or not tag_name.strip():
        return Err(
            LookupFailure(kind=LookupKind.VERSION, url=url, reason="missing tag_name in response")
        )

    version = tag_name.strip().removeprefix("v")
    if not version:
        return Err(LookupFailure(kind=LookupKind.VERSION, url=url, reason=f"bad tag {tag_name!r}"))
    return Ok(version)


def version_or_fallback(
    result: Result[str, LookupFailure],
    fallback: str = FALLBACK_VERSION,
) -> str:
    """The resolved version, or ``fallback`` ("1.0.0") when the lookup failed."""
    return result.unwrap_or(fallback)
