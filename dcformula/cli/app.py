from __future__ import annotations

from pathlib import Path

import typer

from dcformula import __version__
from dcformula.cli.commands.install import install, selftest
from dcformula.cli.commands.render import render
from dcformula.cli.commands.resolve import checksum, resolve, version
from dcformula.cli.context import GlobalOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(version)
app.command()(checksum)
app.command()(resolve)
app.command()(render)
app.command()(install)
app.command()(selftest)


def _print_version(value: bool) -> None:
    # Eager so that `dcformula --version` works without a subcommand.
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (default: $DCFORMULA_CONFIG or ~/.config/dcformula/config.toml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show request URLs."),
) -> None:
    ctx.obj = GlobalOptions(
        config_path=config.expanduser() if config is not None else None,
        verbose=verbose,
    )


def main() -> None:
    app()
