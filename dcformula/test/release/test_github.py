"""Tests for release/github.py - latest release lookup and URLs."""

import pytest

from dcformula.core.result import Err, Ok
from dcformula.release.github import (
    asset_url,
    checksums_url,
    latest_release_url,
    resolve_latest_version,
    version_or_fallback,
)
from dcformula.release.http import HttpError, MockHttpClient
from dcformula.release.model import LookupKind

REPO = "arkag/dirclean"
LATEST = "https://api.github.com/repos/arkag/dirclean/releases/latest"


class TestUrls:
    def test_latest_release_url(self) -> None:
        assert latest_release_url(REPO) == LATEST

    def test_latest_release_url_custom_api(self) -> None:
        url = latest_release_url(REPO, api_base="https://ghe.example.com/api/v3")
        assert url == "https://ghe.example.com/api/v3/repos/arkag/dirclean/releases/latest"

    def test_asset_url(self) -> None:
        url = asset_url(REPO, "1.2.3", "dirclean-linux-amd64.tar.gz")
        assert url == (
            "https://github.com/arkag/dirclean/releases/download"
            "/v1.2.3/dirclean-linux-amd64.tar.gz"
        )

    def test_checksums_url(self) -> None:
        assert (
            checksums_url(REPO, "1.2.3")
            == "https://github.com/arkag/dirclean/releases/download/v1.2.3/checksums.txt"
        )


class TestResolveLatestVersion:
    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("v1.2.3", "1.2.3"),
            ("1.2.3", "1.2.3"),
            ("v0.10.0-rc.1", "0.10.0-rc.1"),
            ("vv2.0.0", "v2.0.0"),
        ],
    )
    def test_strips_one_leading_v(self, tag: str, expected: str) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"tag_name": tag})

        assert resolve_latest_version(client, REPO) == Ok(expected)

    def test_network_error(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, HttpError(url=LATEST, status=0, message="Connection refused"))

        result = resolve_latest_version(client, REPO)

        assert isinstance(result, Err)
        assert result.error.kind == LookupKind.VERSION
        assert result.error.url == LATEST
        assert "Connection refused" in result.error.reason

    def test_http_status_error(self) -> None:
        result = resolve_latest_version(MockHttpClient(), REPO)

        assert isinstance(result, Err)
        assert "HTTP 404" in result.error.reason

    def test_missing_tag_name(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"name": "Release 1.2.3"})

        result = resolve_latest_version(client, REPO)

        assert isinstance(result, Err)
        assert result.error.reason == "missing tag_name in response"

    def test_non_string_tag_name(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"tag_name": 123})

        assert isinstance(resolve_latest_version(client, REPO), Err)

    def test_bare_v_tag(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"tag_name": "v"})

        assert isinstance(resolve_latest_version(client, REPO), Err)

    def test_single_request(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"tag_name": "v1.2.3"})

        resolve_latest_version(client, REPO)

        assert client.calls == [("get_json", LATEST)]

    def test_idempotent(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"tag_name": "v1.2.3"})

        assert resolve_latest_version(client, REPO) == resolve_latest_version(client, REPO)


class TestVersionOrFallback:
    def test_resolved(self) -> None:
        client = MockHttpClient()
        client.set_json(LATEST, {"tag_name": "v1.2.3"})

        assert version_or_fallback(resolve_latest_version(client, REPO)) == "1.2.3"

    def test_failure_gives_1_0_0(self) -> None:
        """Any lookup failure gives the fixed fallback, without raising."""
        assert version_or_fallback(resolve_latest_version(MockHttpClient(), REPO)) == "1.0.0"

    def test_custom_fallback(self) -> None:
        result = resolve_latest_version(MockHttpClient(), REPO)
        assert version_or_fallback(result, "0.9.0") == "0.9.0"
