"""Lookup commands: version, checksum, resolve."""

from __future__ import annotations

import typer

from dcformula.cli.commands._helpers import fail, target_platform
from dcformula.cli.context import build_context
from dcformula.core.result import Err
from dcformula.install.service import report_fallbacks
from dcformula.release.binaries import select_platform_binary
from dcformula.release.checksums import checksum_or_fallback, resolve_checksum
from dcformula.release.github import resolve_latest_version, version_or_fallback
from dcformula.release.resolver import resolve_formula, resolve_version


def version(
    ctx: typer.Context,
    strict: bool = typer.Option(False, "--strict", help="Fail instead of using the fallback."),
) -> None:
    """Print the latest released version."""
    cli = build_context(ctx)
    release = cli.config.release

    result = resolve_latest_version(cli.http, release.repository, api_base=release.api_base)
    if isinstance(result, Err):
        if strict:
            fail(result.error, cli)
        cli.console.warning(str(result.error))
        cli.console.warning(f"using fallback version {release.fallback_version}")

    cli.console.print(version_or_fallback(result, release.fallback_version))


def checksum(
    ctx: typer.Context,
    pinned: str | None = typer.Option(None, "--version", help="Release version (default: latest)."),
    platform: str | None = typer.Option(None, "--platform", help="linux or darwin."),
    arch: str | None = typer.Option(None, "--arch", help="amd64 or arm64."),
    strict: bool = typer.Option(
        False, "--strict", help="Fail instead of printing the zero digest."
    ),
) -> None:
    """Print the expected SHA-256 of the release binary."""
    cli = build_context(ctx)
    release = cli.config.release
    target = target_platform(cli, platform, arch)

    binary = select_platform_binary(target.platform, target.arch)
    if isinstance(binary, Err):
        fail(binary.error, cli)

    resolved_version, failure = resolve_version(cli.http, release, pinned)
    if failure is not None:
        if strict:
            fail(failure, cli)
        cli.console.warning(str(failure))

    result = resolve_checksum(
        cli.http,
        release.repository,
        resolved_version,
        binary.value,
        download_base=release.download_base,
    )
    if isinstance(result, Err):
        if strict:
            fail(result.error, cli)
        cli.console.warning(str(result.error))
        cli.console.warning(f"checksum for {binary.value} is unverified")

    cli.console.print(checksum_or_fallback(result))


def resolve(
    ctx: typer.Context,
    pinned: str | None = typer.Option(None, "--version", help="Release version (default: latest)."),
    platform: str | None = typer.Option(None, "--platform", help="linux or darwin."),
    arch: str | None = typer.Option(None, "--arch", help="amd64 or arm64."),
    strict: bool = typer.Option(False, "--strict", help="Fail if any lookup fell back."),
) -> None:
    """Show version, asset, URL and checksum for a target."""
    cli = build_context(ctx)
    target = target_platform(cli, platform, arch)

    result = resolve_formula(
        cli.http,
        cli.config.release,
        target.platform,
        target.arch,
        version=pinned,
    )
    if isinstance(result, Err):
        fail(result.error, cli)
    resolved = result.value

    if strict and resolved.failures:
        fail(resolved.failures[0], cli)
    report_fallbacks(resolved, cli.console)

    cli.console.print(f"target:  {target}")
    cli.console.print(f"version: {resolved.version}")
    cli.console.print(f"binary:  {resolved.binary}")
    cli.console.print(f"url:     {resolved.url}")
    cli.console.print(f"sha256:  {resolved.sha256}")
