from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from dcformula.core.config import Config, load_config_or_default
from dcformula.core.errors import ErrorCode
from dcformula.core.result import Err
from dcformula.output.console import ConsoleProtocol, RichConsole
from dcformula.output.errors import print_failure
from dcformula.platform.detection import PlatformInfo, detect
from dcformula.platform.paths import default_bin_dir, default_config_path, user_cache_dir
from dcformula.release.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the subcommand (stored on typer's ctx.obj)."""

    config_path: Path | None = None
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    platform: PlatformInfo
    console: ConsoleProtocol
    http: HttpClient

    @property
    def bin_dir(self) -> Path:
        return self.config.install.bin_path() or default_bin_dir()

    @property
    def cache_dir(self) -> Path:
        return self.config.install.cache_path() or user_cache_dir()


def _options(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, GlobalOptions) else GlobalOptions()


def build_context(ctx: typer.Context) -> CLIContext:
    options = _options(ctx)
    console = RichConsole(verbose=options.verbose)

    config_path = options.config_path or default_config_path()
    config_result = load_config_or_default(config_path)
    if isinstance(config_result, Err):
        print_failure(config_result.error, console)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value
    console.debug(f"config: {config_path}")

    return CLIContext(
        config=config,
        platform=detect(),
        console=console,
        http=RealHttpClient.from_config(config.http),
    )
