# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Data structures for the typie CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import typer

from ..tools import known_manager_names

TOOL_OPTION = Annotated[
    str | None,
    typer.Option(
        "--tool",
        "-t",
        help=f"Which package manager tool to use ({', '.join(known_manager_names())}). Auto-detected by default.",
        show_default=False,
    ),
]
ROOT_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--root",
        "-r",
        help="Project directory containing package.json. Defaults to the current directory.",
        file_okay=False,
        show_default=False,
    ),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option(
        "--timeout",
        help="Seconds to wait for each registry lookup.",
        min=0.1,
        show_default=False,
    ),
]
JOBS_OPTION = Annotated[
    int | None,
    typer.Option(
        "--jobs",
        "-j",
        help="Maximum number of concurrent registry lookups.",
        min=1,
        show_default=False,
    ),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Print the install command without executing it."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle coloured output."),
]


@dataclass(slots=True)
class TypieCLIOptions:
    """Normalised CLI inputs for a typie run."""

    root: Path
    tool: str | None
    timeout: float | None
    jobs: int | None
    dry_run: bool
    use_emoji: bool
    use_color: bool

    def config_overrides(self) -> dict[str, Any]:
        """Return the values to layer over file settings; ``None`` means unset."""

        return {
            "tool": self.tool,
            "probe_timeout": self.timeout,
            "max_workers": self.jobs,
            "dry_run": self.dry_run,
            "use_emoji": self.use_emoji,
            "use_color": self.use_color,
        }


def build_cli_options(
    *,
    tool: str | None,
    root: Path | None,
    timeout: float | None,
    jobs: int | None,
    dry_run: bool,
    emoji: bool,
    color: bool,
) -> TypieCLIOptions:
    """Construct ``TypieCLIOptions`` from Typer parameters.

    Returns:
        TypieCLIOptions: Options with the project root made absolute.
    """

    return TypieCLIOptions(
        root=(root or Path.cwd()).resolve(),
        tool=tool.strip().lower() if tool else None,
        timeout=timeout,
        jobs=jobs,
        dry_run=dry_run,
        use_emoji=emoji,
        use_color=color,
    )


__all__ = [
    "COLOR_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "JOBS_OPTION",
    "ROOT_OPTION",
    "TIMEOUT_OPTION",
    "TOOL_OPTION",
    "TypieCLIOptions",
    "build_cli_options",
]
