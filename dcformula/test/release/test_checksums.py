"""Tests for release/checksums.py - manifest lookup and verification."""

from __future__ import annotations

import hashlib
from pathlib import Path

from dcformula.core.result import Err, Ok
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
from dcformula.release.http import HttpError, MockHttpClient
from dcformula.release.model import ZERO_CHECKSUM, LookupKind

REPO = "arkag/dirclean"
MANIFEST_URL = "https://github.com/arkag/dirclean/releases/download/v1.2.3/checksums.txt"

SUM_LINUX_AMD64 = "a" * 64
SUM_LINUX_ARM64 = "b" * 64
SUM_DARWIN_ARM64 = "c" * 64

MANIFEST = f"""\
{SUM_LINUX_AMD64}  dirclean-linux-amd64.tar.gz
{SUM_LINUX_ARM64}  dirclean-linux-arm64.tar.gz
{SUM_DARWIN_ARM64}  dist/dirclean-darwin-arm64.tar.gz
"""


def _client(manifest: str | HttpError = MANIFEST) -> MockHttpClient:
    client = MockHttpClient()
    client.set_text(MANIFEST_URL, manifest)
    return client


class TestFindChecksum:
    def test_exact_name(self) -> None:
        assert find_checksum(MANIFEST, "dirclean-linux-amd64.tar.gz") == SUM_LINUX_AMD64

    def test_path_qualified_entry_matches_bare_name(self) -> None:
        assert find_checksum(MANIFEST, "dirclean-darwin-arm64.tar.gz") == SUM_DARWIN_ARM64

    def test_binary_mode_marker(self) -> None:
        manifest = f"{SUM_LINUX_AMD64} *dirclean-linux-amd64.tar.gz\n"
        assert find_checksum(manifest, "dirclean-linux-amd64.tar.gz") == SUM_LINUX_AMD64

    def test_first_suffix_match_wins(self) -> None:
        """Entries sharing a suffix resolve to whichever is listed first."""
        manifest = (
            f"{'1' * 64}  legacy-dirclean-linux-amd64.tar.gz\n"
            f"{'2' * 64}  dirclean-linux-amd64.tar.gz\n"
        )
        assert find_checksum(manifest, "dirclean-linux-amd64.tar.gz") == "1" * 64

    def test_skips_malformed_lines(self) -> None:
        manifest = f"\n# comment line here\n{SUM_LINUX_AMD64}  dirclean-linux-amd64.tar.gz\n"
        assert find_checksum(manifest, "dirclean-linux-amd64.tar.gz") == SUM_LINUX_AMD64

    def test_lowercases_digest(self) -> None:
        manifest = f"{'A' * 64}  dirclean-linux-amd64.tar.gz\n"
        assert find_checksum(manifest, "dirclean-linux-amd64.tar.gz") == "a" * 64

    def test_no_match(self) -> None:
        assert find_checksum(MANIFEST, "dirclean-darwin-amd64.tar.gz") is None

    def test_crlf(self) -> None:
        manifest = f"{SUM_LINUX_AMD64}  dirclean-linux-amd64.tar.gz\r\n"
        assert find_checksum(manifest, "dirclean-linux-amd64.tar.gz") == SUM_LINUX_AMD64


class TestResolveChecksum:
    def test_found(self) -> None:
        result = resolve_checksum(_client(), REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")
        assert result == Ok(SUM_LINUX_AMD64)

    def test_not_found(self) -> None:
        result = resolve_checksum(_client(), REPO, "1.2.3", "dirclean-darwin-amd64.tar.gz")

        assert isinstance(result, Err)
        assert result.error.kind == LookupKind.CHECKSUM
        assert result.error.reason == "checksum not found for dirclean-darwin-amd64.tar.gz"
        assert result.error.url == MANIFEST_URL

    def test_manifest_unreachable(self) -> None:
        client = _client(HttpError(url=MANIFEST_URL, status=503, message="Service Unavailable"))

        result = resolve_checksum(client, REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")

        assert isinstance(result, Err)
        assert result.error.kind == LookupKind.CHECKSUM
        assert "HTTP 503" in result.error.reason

    def test_malformed_digest(self) -> None:
        client = _client("abc123  dirclean-linux-amd64.tar.gz\n")

        result = resolve_checksum(client, REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")

        assert isinstance(result, Err)
        assert "malformed checksum" in result.error.reason

    def test_custom_download_base(self) -> None:
        client = MockHttpClient()
        client.set_text(
            "https://mirror.example.com/arkag/dirclean/releases/download/v1.2.3/checksums.txt",
            MANIFEST,
        )

        result = resolve_checksum(
            client,
            REPO,
            "1.2.3",
            "dirclean-linux-arm64.tar.gz",
            download_base="https://mirror.example.com",
        )

        assert result == Ok(SUM_LINUX_ARM64)

    def test_idempotent(self) -> None:
        client = _client()
        first = resolve_checksum(client, REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")
        second = resolve_checksum(client, REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")
        assert first == second


class TestManifestHelpers:
    """One fetched manifest serves several lookups."""

    def test_fetch_then_look_up(self) -> None:
        manifest = fetch_manifest(_client(), MANIFEST_URL)

        assert manifest == Ok(MANIFEST)
        found = checksum_from_manifest(MANIFEST, "dirclean-linux-arm64.tar.gz", url=MANIFEST_URL)
        assert found == Ok(SUM_LINUX_ARM64)

    def test_fetch_failure_is_checksum_lookup(self) -> None:
        result = fetch_manifest(MockHttpClient(), MANIFEST_URL)

        assert isinstance(result, Err)
        assert result.error.kind == LookupKind.CHECKSUM
        assert result.error.url == MANIFEST_URL

    def test_failure_names_manifest_url(self) -> None:
        result = checksum_from_manifest("", "dirclean-linux-amd64.tar.gz", url=MANIFEST_URL)

        assert isinstance(result, Err)
        assert result.error.url == MANIFEST_URL


class TestChecksumOrFallback:
    def test_resolved(self) -> None:
        result = resolve_checksum(_client(), REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")
        assert checksum_or_fallback(result) == SUM_LINUX_AMD64

    def test_no_match_gives_zero_digest(self) -> None:
        """A missing entry is observable only as the all-zero sentinel."""
        result = resolve_checksum(_client(), REPO, "1.2.3", "dirclean-darwin-amd64.tar.gz")
        fallback = checksum_or_fallback(result)
        assert fallback == ZERO_CHECKSUM
        assert fallback == "0" * 64
        assert len(fallback) == 64

    def test_network_failure_gives_zero_digest(self) -> None:
        result = resolve_checksum(MockHttpClient(), REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")
        assert checksum_or_fallback(result) == ZERO_CHECKSUM


class TestVerifyFile:
    def test_sha256_file_matches_hashlib(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.tar.gz"
        path.write_bytes(b"checksum-test-bytes")
        assert sha256_file(path) == hashlib.sha256(b"checksum-test-bytes").hexdigest()

    def test_accepts_match(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.tar.gz"
        path.write_bytes(b"hello")
        digest = hashlib.sha256(b"hello").hexdigest()

        assert verify_file(path, digest.upper()) == Ok(digest)

    def test_rejects_mismatch(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.tar.gz"
        path.write_bytes(b"actual")

        result = verify_file(path, ZERO_CHECKSUM)

        assert isinstance(result, Err)
        assert result.error == ChecksumMismatch(
            path=path,
            expected=ZERO_CHECKSUM,
            actual=hashlib.sha256(b"actual").hexdigest(),
        )
        assert str(result.error).startswith(f"checksum mismatch: expected {ZERO_CHECKSUM}, got ")
