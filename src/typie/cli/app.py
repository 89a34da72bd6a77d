# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point."""

from __future__ import annotations

from typing import Annotated

import typer

from .. import __version__
from ..config import build_config
from ..errors import TypieError
from ..logging import fail
from ..pipeline import TypiePipeline
from .options import (
    COLOR_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    JOBS_OPTION,
    ROOT_OPTION,
    TIMEOUT_OPTION,
    TOOL_OPTION,
    build_cli_options,
)
from .typer_ext import create_typer

app = create_typer(
    name="typie",
    help="Install missing @types packages for the dependencies in package.json.",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"typie {__version__}")
        raise typer.Exit()


@app.command()
def typie(
    tool: TOOL_OPTION = None,
    root: ROOT_OPTION = None,
    timeout: TIMEOUT_OPTION = None,
    jobs: JOBS_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Find dependencies without type definitions and install their @types packages.

    Exit status is 1 when the run cannot start (no package manager, missing or
    malformed package.json, invalid configuration); otherwise it is the
    package manager's own exit status.
    """

    options = build_cli_options(
        tool=tool,
        root=root,
        timeout=timeout,
        jobs=jobs,
        dry_run=dry_run,
        emoji=emoji,
        color=color,
    )
    try:
        config = build_config(options.root, options.config_overrides())
        result = TypiePipeline(config).run()
    except TypieError as exc:
        fail(str(exc), use_emoji=options.use_emoji, use_color=options.use_color)
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=result.exit_code)


def main() -> None:
    """Console script entry point."""

    app()


__all__ = ["app", "main"]
