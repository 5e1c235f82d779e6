"""End-to-end install: resolve, download, verify, install, self-test."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from dcformula.core.config import Config
from dcformula.core.result import Err, Ok, Result
from dcformula.output.console import ConsoleProtocol, Style
from dcformula.platform.detection import PlatformInfo
from dcformula.platform.process import ProcessError
from dcformula.release.checksums import ChecksumMismatch, verify_file
from dcformula.release.http import HttpClient, HttpError
from dcformula.release.model import ResolvedFormula, UnsupportedPlatform
from dcformula.release.resolver import resolve_formula

from .download import Downloader
from .installer import Installer, InstallError
from .selftest import SelfTestResult, self_test

__all__ = [
    "InstallFailure",
    "InstallOutcome",
    "InstallService",
    "UnverifiedChecksum",
    "report_fallbacks",
]


@dataclass(frozen=True, slots=True)
class UnverifiedChecksum:
    """The expected checksum could not be resolved, so the archive cannot be trusted."""

    binary: str
    version: str

    def __str__(self) -> str:
        return (
            f"no checksum resolved for {self.binary} {self.version}; "
            "refusing to install an unverified archive (use --allow-unverified)"
        )


InstallFailure: TypeAlias = (
    UnsupportedPlatform
    | UnverifiedChecksum
    | HttpError
    | ChecksumMismatch
    | InstallError
    | ProcessError
)


@dataclass(frozen=True, slots=True)
class InstallOutcome:
    """A completed install.

    Attributes:
        resolved: What was resolved (including any fallbacks)
        path: Installed executable
        from_cache: True if the archive was not downloaded again
        verified: True if the archive matched a resolved checksum
        selftest: Self-test outcome, None when skipped
    """

    resolved: ResolvedFormula
    path: Path
    from_cache: bool
    verified: bool
    selftest: SelfTestResult | None


def report_fallbacks(resolved: ResolvedFormula, console: ConsoleProtocol) -> None:
    """Warn about every lookup that was replaced by a fallback value."""
    for failure in resolved.failures:
        console.warning(str(failure))
        console.debug(failure.url)
    if resolved.version_is_fallback:
        console.warning(f"using fallback version {resolved.version}")
    if resolved.checksum_is_fallback:
        console.warning(f"checksum for {resolved.binary} is unverified")


class InstallService:
    def __init__(
        self,
        *,
        config: Config,
        platform: PlatformInfo,
        http: HttpClient,
        console: ConsoleProtocol,
        bin_dir: Path,
        cache_dir: Path,
    ) -> None:
        self._config = config
        self._platform = platform
        self._http = http
        self._console = console
        self._bin_dir = bin_dir
        self._downloader = Downloader(http, cache_dir)
        self._installer = Installer(config.release.binary)

    @property
    def binary_path(self) -> Path:
        return self._bin_dir / self._installer.binary

    def resolve(
        self, *, version: str | None = None
    ) -> Result[ResolvedFormula, UnsupportedPlatform]:
        return resolve_formula(
            self._http,
            self._config.release,
            self._platform.platform,
            self._platform.arch,
            version=version,
        )

    def install(
        self,
        *,
        version: str | None = None,
        force: bool = False,
        allow_unverified: bool = False,
        run_selftest: bool = True,
        strict_selftest: bool = False,
    ) -> Result[InstallOutcome, InstallFailure]:
        """Install the release binary for the current platform.

        Args:
            version: Pinned version; None means latest
            force: Re-download even if the archive is cached
            allow_unverified: Install even when no checksum could be resolved
            run_selftest: Run ``--version`` after installing
            strict_selftest: Fail the self-test on a nonzero exit status
        """
        resolved_result = self.resolve(version=version)
        if isinstance(resolved_result, Err):
            return resolved_result
        resolved = resolved_result.value
        report_fallbacks(resolved, self._console)

        if not resolved.is_verified and not allow_unverified:
            return Err(UnverifiedChecksum(binary=resolved.binary, version=resolved.version))

        self._console.print(f"install {resolved.binary} {resolved.version}", Style.DIM)
        self._console.debug(resolved.url)
        dres = self._downloader.download(resolved.url, force=force)
        if isinstance(dres, Err):
            return dres
        download = dres.value

        if resolved.is_verified:
            vres = verify_file(download.path, resolved.sha256)
            if isinstance(vres, Err):
                self._downloader.evict(resolved.url)
                return vres
            self._console.print(f"{resolved.binary}: checksum verified", Style.DIM)

        ires = self._installer.install(download.path, self._bin_dir)
        if isinstance(ires, Err):
            return ires

        selftest: SelfTestResult | None = None
        if run_selftest:
            tres = self_test(ires.value.path, strict=strict_selftest)
            if isinstance(tres, Err):
                return tres
            selftest = tres.value

        return Ok(
            InstallOutcome(
                resolved=resolved,
                path=ires.value.path,
                from_cache=download.from_cache,
                verified=resolved.is_verified,
                selftest=selftest,
            )
        )
