"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from dcformula.core.errors import ErrorCode
from dcformula.output.errors import failure_exit_code, print_failure
from dcformula.platform.detection import (
    Arch,
    Platform,
    PlatformInfo,
    parse_arch,
    parse_platform,
)

if TYPE_CHECKING:
    from dcformula.cli.context import CLIContext
    from dcformula.output.errors import Failure


def fail(error: Failure, ctx: CLIContext) -> NoReturn:
    """Print ``error`` and exit with its mapped code."""
    print_failure(error, ctx.console)
    raise typer.Exit(code=failure_exit_code(error))


def target_platform(
    ctx: CLIContext,
    platform_name: str | None,
    arch_name: str | None,
) -> PlatformInfo:
    """Host platform, with --platform/--arch overriding either half."""
    platform = parse_platform(platform_name) if platform_name else ctx.platform.platform
    arch = parse_arch(arch_name) if arch_name else ctx.platform.arch
    if platform_name and platform == Platform.UNKNOWN:
        ctx.console.error(f"unknown platform: {platform_name}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    if arch_name and arch == Arch.UNKNOWN:
        ctx.console.error(f"unknown architecture: {arch_name}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return PlatformInfo(platform=platform, arch=arch)
