"""Download, extract, install and self-test a release binary."""

from dcformula.install.download import Downloader, DownloadResult
from dcformula.install.installer import Installer, InstallError, InstallResult
from dcformula.install.selftest import SelfTestResult, self_test
from dcformula.install.service import (
    InstallFailure,
    InstallOutcome,
    InstallService,
    UnverifiedChecksum,
    report_fallbacks,
)

__all__ = [
    "Downloader",
    "DownloadResult",
    "Installer",
    "InstallError",
    "InstallResult",
    "SelfTestResult",
    "self_test",
    "InstallFailure",
    "InstallOutcome",
    "InstallService",
    "UnverifiedChecksum",
    "report_fallbacks",
]
