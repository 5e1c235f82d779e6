"""Tests for release/formula.py - Homebrew formula rendering."""

from __future__ import annotations

import pytest

from dcformula.core.config import ReleaseConfig
from dcformula.platform.detection import Arch, Platform
from dcformula.release.formula import FormulaRenderError, formula_class_name, render_formula
from dcformula.release.http import MockHttpClient
from dcformula.release.model import ResolvedFormula
from dcformula.release.resolver import resolve_all

LATEST = "https://api.github.com/repos/arkag/dirclean/releases/latest"
BASE = "https://github.com/arkag/dirclean/releases/download"


def _resolved() -> dict[tuple[Platform, Arch], ResolvedFormula]:
    client = MockHttpClient()
    client.set_json(LATEST, {"tag_name": "v1.2.3"})
    client.set_text(
        f"{BASE}/v1.2.3/checksums.txt",
        "\n".join(
            [
                f"{'1' * 64}  dirclean-darwin-arm64.tar.gz",
                f"{'2' * 64}  dirclean-darwin-amd64.tar.gz",
                f"{'3' * 64}  dirclean-linux-arm64.tar.gz",
                f"{'4' * 64}  dirclean-linux-amd64.tar.gz",
            ]
        ),
    )
    return resolve_all(client, ReleaseConfig())


class TestRenderFormula:
    def test_header(self) -> None:
        text = render_formula(_resolved())

        assert text.startswith("class Dirclean < Formula\n")
        assert '  homepage "https://github.com/arkag/dirclean"' in text
        assert '  version "1.2.3"' in text

    def test_all_targets_present(self) -> None:
        text = render_formula(_resolved())

        for name, digest in [
            ("dirclean-darwin-arm64.tar.gz", "1" * 64),
            ("dirclean-darwin-amd64.tar.gz", "2" * 64),
            ("dirclean-linux-arm64.tar.gz", "3" * 64),
            ("dirclean-linux-amd64.tar.gz", "4" * 64),
        ]:
            assert f'url "{BASE}/v1.2.3/{name}"' in text
            assert f'sha256 "{digest}"' in text

    def test_arm_branch_comes_first(self) -> None:
        text = render_formula(_resolved())
        macos = text[text.index("on_macos do") : text.index("on_linux do")]

        assert macos.index("darwin-arm64") < macos.index("else") < macos.index("darwin-amd64")

    def test_install_and_test_blocks(self) -> None:
        text = render_formula(_resolved())

        assert '    bin.install "dirclean"' in text
        assert '    system "#{bin}/dirclean", "--version"' in text
        assert text.endswith("end\n")

    def test_missing_target(self) -> None:
        resolved = _resolved()
        del resolved[(Platform.LINUX, Arch.ARM64)]

        with pytest.raises(FormulaRenderError, match="missing resolved target"):
            render_formula(resolved)

    def test_mixed_versions(self) -> None:
        resolved = _resolved()
        entry = resolved[(Platform.LINUX, Arch.ARM64)]
        resolved[(Platform.LINUX, Arch.ARM64)] = ResolvedFormula(
            repository=entry.repository,
            version="9.9.9",
            binary=entry.binary,
            url=entry.url,
            sha256=entry.sha256,
        )

        with pytest.raises(FormulaRenderError, match="different versions"):
            render_formula(resolved)

    def test_description_is_escaped(self) -> None:
        """Quotes and interpolation in the description stay inside the Ruby literal."""
        text = render_formula(_resolved(), description='Say "hi" to #{ENV}')

        assert '  desc "Say \\"hi\\" to \\#{ENV}"' in text


@pytest.mark.parametrize(
    ("binary", "expected"),
    [("dirclean", "Dirclean"), ("dir-clean", "DirClean"), ("dir_clean", "DirClean")],
)
def test_formula_class_name(binary: str, expected: str) -> None:
    assert formula_class_name(binary) == expected
