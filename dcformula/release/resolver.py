"""Release resolution with caller-chosen fallbacks.

resolve_latest_version and resolve_checksum return failures as values; this
module combines them and substitutes the fallbacks ("1.0.0" and
ZERO_CHECKSUM), keeping each failure on the resulting ResolvedFormula so it
can be reported instead of silently swallowed.

Nothing is cached between calls: the same inputs and the same remote state
give the same ResolvedFormula.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dcformula.core.config import ReleaseConfig
from dcformula.core.result import Err, Ok, Result

from .binaries import BINARIES, select_platform_binary
from .checksums import (
    checksum_from_manifest,
    checksum_or_fallback,
    fetch_manifest,
    resolve_checksum,
)
from .github import asset_url, checksums_url, resolve_latest_version, version_or_fallback
from .model import LookupFailure, ResolvedFormula, UnsupportedPlatform

if TYPE_CHECKING:
    from dcformula.platform.detection import Arch, Platform

    from .http import HttpClient

__all__ = ["resolve_version", "resolve_formula", "resolve_all"]


def resolve_version(
    http: HttpClient,
    release: ReleaseConfig,
    pinned: str | None = None,
) -> tuple[str, LookupFailure | None]:
    """Return the version to install and the failure that forced a fallback, if any.

    A pinned version skips the API call entirely.
    """
    if pinned:
        return pinned.removeprefix("v"), None

    result = resolve_latest_version(http, release.repository, api_base=release.api_base)
    version = version_or_fallback(result, release.fallback_version)
    return version, result.error if isinstance(result, Err) else None


def _build(
    release: ReleaseConfig,
    version: str,
    binary: str,
    checksum_result: Result[str, LookupFailure],
    failures: list[LookupFailure],
) -> ResolvedFormula:
    if isinstance(checksum_result, Err):
        failures.append(checksum_result.error)

    return ResolvedFormula(
        repository=release.repository,
        version=version,
        binary=binary,
        url=asset_url(release.repository, version, binary, download_base=release.download_base),
        sha256=checksum_or_fallback(checksum_result),
        failures=tuple(failures),
    )


def resolve_formula(
    http: HttpClient,
    release: ReleaseConfig,
    platform: Platform,
    arch: Arch,
    *,
    version: str | None = None,
) -> Result[ResolvedFormula, UnsupportedPlatform]:
    """Resolve version, binary, URL and checksum for one target.

    Lookup failures never make this fail; only an unsupported target does.

    Args:
        http: HTTP client to use
        release: Release settings (repository, hosts, fallback version)
        platform: Target operating system
        arch: Target CPU architecture
        version: Pinned version; None means "latest"

    Returns:
        Ok(ResolvedFormula), possibly carrying fallbacks, or
        Err(UnsupportedPlatform)
    """
    binary_result = select_platform_binary(platform, arch)
    if isinstance(binary_result, Err):
        return binary_result

    binary = binary_result.value
    resolved_version, failure = resolve_version(http, release, version)
    checksum_result = resolve_checksum(
        http,
        release.repository,
        resolved_version,
        binary,
        download_base=release.download_base,
    )
    failures = [failure] if failure is not None else []
    return Ok(_build(release, resolved_version, binary, checksum_result, failures))


def resolve_all(
    http: HttpClient,
    release: ReleaseConfig,
    *,
    version: str | None = None,
) -> dict[tuple[Platform, Arch], ResolvedFormula]:
    """Resolve every published target from one version lookup and one manifest fetch.

    A failed version lookup is recorded on every entry, since all of them
    were built on the fallback.
    """
    resolved_version, failure = resolve_version(http, release, version)
    url = checksums_url(release.repository, resolved_version, download_base=release.download_base)
    manifest = fetch_manifest(http, url)

    resolved: dict[tuple[Platform, Arch], ResolvedFormula] = {}
    for target, binary in BINARIES.items():
        checksum_result = (
            manifest
            if isinstance(manifest, Err)
            else checksum_from_manifest(manifest.value, binary, url=url)
        )
        failures = [failure] if failure is not None else []
        resolved[target] = _build(release, resolved_version, binary, checksum_result, failures)
    return resolved
