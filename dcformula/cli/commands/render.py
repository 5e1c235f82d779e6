from __future__ import annotations

from pathlib import Path

import typer

from dcformula.cli.commands._helpers import fail
from dcformula.cli.context import build_context
from dcformula.core.errors import ErrorCode
from dcformula.release.formula import FormulaRenderError, render_formula
from dcformula.release.model import LookupFailure
from dcformula.release.resolver import resolve_all


def render(
    ctx: typer.Context,
    pinned: str | None = typer.Option(None, "--version", help="Release version (default: latest)."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write to file instead of stdout."
    ),
    strict: bool = typer.Option(False, "--strict", help="Fail if any lookup fell back."),
) -> None:
    """Render a Homebrew formula with all checksums resolved."""
    cli = build_context(ctx)
    resolved = resolve_all(cli.http, cli.config.release, version=pinned)

    failures: list[LookupFailure] = []
    for entry in resolved.values():
        failures.extend(f for f in entry.failures if f not in failures)
    if strict and failures:
        fail(failures[0], cli)
    for failure in failures:
        cli.console.warning(str(failure))

    try:
        text = render_formula(resolved, binary=cli.config.release.binary)
    except FormulaRenderError as e:
        cli.console.error(str(e))
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if output is None:
        cli.console.print(text.rstrip("\n"))
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        cli.console.error(f"cannot write {output}: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    cli.console.success(f"wrote {output}")
