from __future__ import annotations

from pathlib import Path

import typer

from dcformula.cli.commands._helpers import fail
from dcformula.cli.context import build_context
from dcformula.core.result import Err
from dcformula.install.selftest import self_test
from dcformula.install.service import InstallService


def install(
    ctx: typer.Context,
    pinned: str | None = typer.Option(None, "--version", help="Release version (default: latest)."),
    bin_dir: Path | None = typer.Option(None, "--bin-dir", help="Install directory."),
    force: bool = typer.Option(False, "--force", help="Download again even if cached."),
    allow_unverified: bool = typer.Option(
        False,
        "--allow-unverified",
        help="Install even if no checksum could be resolved.",
    ),
    no_test: bool = typer.Option(False, "--no-test", help="Skip the --version self-test."),
    strict: bool = typer.Option(False, "--strict", help="Fail the self-test on nonzero exit."),
) -> None:
    """Download, verify and install the release binary."""
    cli = build_context(ctx)
    service = InstallService(
        config=cli.config,
        platform=cli.platform,
        http=cli.http,
        console=cli.console,
        bin_dir=bin_dir.expanduser() if bin_dir else cli.bin_dir,
        cache_dir=cli.cache_dir,
    )

    result = service.install(
        version=pinned,
        force=force,
        allow_unverified=allow_unverified,
        run_selftest=not no_test,
        strict_selftest=strict,
    )
    if isinstance(result, Err):
        fail(result.error, cli)

    outcome = result.value
    if not outcome.verified:
        cli.console.warning(f"{outcome.path} was installed without checksum verification")
    if outcome.selftest is not None:
        cli.console.print(f"{outcome.selftest.output or '(no output)'}")
    cli.console.success(f"installed {outcome.resolved.version} to {outcome.path}")


def selftest(
    ctx: typer.Context,
    bin_dir: Path | None = typer.Option(None, "--bin-dir", help="Install directory."),
    strict: bool = typer.Option(False, "--strict", help="Fail on nonzero exit."),
) -> None:
    """Run the installed binary with --version."""
    cli = build_context(ctx)
    binary = (bin_dir.expanduser() if bin_dir else cli.bin_dir) / cli.config.release.binary

    result = self_test(binary, strict=strict)
    if isinstance(result, Err):
        fail(result.error, cli)

    outcome = result.value
    if outcome.returncode != 0:
        cli.console.warning(f"{binary} --version exited {outcome.returncode}")
    cli.console.print(outcome.output or "(no output)")
    cli.console.success(f"{binary} runs")
