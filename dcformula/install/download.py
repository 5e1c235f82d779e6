"""Release archive downloader with a URL-keyed cache.

Archives land in the cache directory as ``<url-hash>_<filename>`` so a
second install of the same version does not download again.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from dcformula.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from dcformula.release.http import HttpClient, HttpError

__all__ = ["Downloader", "DownloadResult"]


@dataclass(frozen=True, slots=True)
class DownloadResult:
    """Result of a download.

    Attributes:
        path: Path to the archive in the cache
        from_cache: True if no request was made
        size: File size in bytes
    """

    path: Path
    from_cache: bool
    size: int


class Downloader:
    """Downloads release archives into a cache directory.

    Usage:
        downloader = Downloader(http, cache_dir)
        result = downloader.download(resolved.url)
        if is_ok(result):
            print(result.value.path)
    """

    def __init__(self, http: HttpClient, cache_dir: Path) -> None:
        self._http = http
        self._cache_dir = cache_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def cache_path(self, url: str) -> Path:
        """Cache location for URL: first 8 hex of sha256(url) + file name."""
        filename = Path(urlparse(url).path).name or "download"
        url_hash = hashlib.sha256(url.encode()).hexdigest()[:8]
        return self._cache_dir / f"{url_hash}_{filename}"

    def evict(self, url: str) -> bool:
        """Drop the cached copy of URL; True if one existed."""
        path = self.cache_path(url)
        if path.exists():
            path.unlink()
            return True
        return False

    def download(self, url: str, *, force: bool = False) -> Result[DownloadResult, HttpError]:
        """Download URL unless cached.

        Args:
            url: Asset URL
            force: Re-download even if cached

        Returns:
            Ok with DownloadResult, or Err with HttpError
        """
        cache_path = self.cache_path(url)

        if not force and cache_path.exists():
            return Ok(
                DownloadResult(path=cache_path, from_cache=True, size=cache_path.stat().st_size)
            )

        self._cache_dir.mkdir(parents=True, exist_ok=True)
        result = self._http.download(url, cache_path)

        if isinstance(result, Err):
            # Partial downloads must not be served from cache later.
            cache_path.unlink(missing_ok=True)
            return result

        return Ok(DownloadResult(path=cache_path, from_cache=False, size=cache_path.stat().st_size))
