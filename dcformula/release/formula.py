"""Render a static Homebrew formula from resolved releases.

The rendered formula has the version, URLs and checksums baked in, so
``brew install`` does not need to reach the GitHub API at install time.
Targets whose checksum fell back to ZERO_CHECKSUM still render (Homebrew
then rejects the download with a checksum mismatch); callers are expected
to warn about them first.
"""

from __future__ import annotations

from collections.abc import Mapping

from dcformula.platform.detection import Arch, Platform

from .model import ResolvedFormula

__all__ = ["FormulaRenderError", "render_formula", "formula_class_name"]


class FormulaRenderError(ValueError):
    """The resolved set is incomplete or inconsistent."""


def formula_class_name(binary: str) -> str:
    """Homebrew class name for a formula file name ("dir-clean" -> "DirClean")."""
    return "".join(part.capitalize() for part in binary.replace("_", "-").split("-") if part)


def _ruby_escape(value: str) -> str:
    """Escape text for a double-quoted Ruby literal (no interpolation)."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("#", "\\#")


def _ruby_str(value: str) -> str:
    return f'"{_ruby_escape(value)}"'


def _url_block(entry: ResolvedFormula, indent: str) -> list[str]:
    return [
        f"{indent}url {_ruby_str(entry.url)}",
        f"{indent}sha256 {_ruby_str(entry.sha256)}",
    ]


def _os_block(
    name: str,
    arm: ResolvedFormula,
    intel: ResolvedFormula,
) -> list[str]:
    lines = [f"  {name} do", "    if Hardware::CPU.arm?"]
    lines += _url_block(arm, "      ")
    lines.append("    else")
    lines += _url_block(intel, "      ")
    lines += ["    end", "  end"]
    return lines


def render_formula(
    resolved: Mapping[tuple[Platform, Arch], ResolvedFormula],
    *,
    binary: str = "dirclean",
    description: str = "Clean up old files from directories",
) -> str:
    """Build the Ruby source of the formula.

    Args:
        resolved: One entry per published target (see resolve_all)
        binary: Executable name installed into bin
        description: Formula ``desc``

    Raises:
        FormulaRenderError: If a target is missing or versions disagree.
    """
    try:
        mac_arm = resolved[(Platform.MACOS, Arch.ARM64)]
        mac_intel = resolved[(Platform.MACOS, Arch.AMD64)]
        linux_arm = resolved[(Platform.LINUX, Arch.ARM64)]
        linux_intel = resolved[(Platform.LINUX, Arch.AMD64)]
    except KeyError as e:
        raise FormulaRenderError(f"missing resolved target: {e.args[0]}") from e

    versions = {entry.version for entry in resolved.values()}
    if len(versions) != 1:
        raise FormulaRenderError(f"targets resolved to different versions: {sorted(versions)}")
    (version,) = versions

    lines = [
        f"class {formula_class_name(binary)} < Formula",
        f"  desc {_ruby_str(description)}",
        f"  homepage {_ruby_str(f'https://github.com/{mac_arm.repository}')}",
        f"  version {_ruby_str(version)}",
        "",
    ]
    lines += _os_block("on_macos", mac_arm, mac_intel)
    lines.append("")
    lines += _os_block("on_linux", linux_arm, linux_intel)
    lines += [
        "",
        "  def install",
        f"    bin.install {_ruby_str(binary)}",
        "  end",
        "",
        "  test do",
        f'    system "#{{bin}}/{_ruby_escape(binary)}", "--version"',
        "  end",
        "end",
        "",
    ]
    return "\n".join(lines)
