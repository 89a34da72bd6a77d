# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build and run the package manager command that adds ``@types`` packages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

from .errors import InstallerError
from .process import CommandOptions, run_command
from .resolver import ResolutionReport
from .tools import PackageManager

LOGGER = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Path], CompletedProcess[str]]

COMMAND_NOT_FOUND_EXIT: Final[int] = 127


def install_targets(manager: PackageManager, report: ResolutionReport) -> tuple[str, ...]:
    """Return the package arguments for ``manager``.

    Managers that prompt on a version mismatch get ``name@range`` so the
    install stays non-interactive.
    """

    if manager.pins_versions:
        return tuple(f"{entry.type_package}@{entry.version_range}" for entry in report.install_set)
    return report.type_packages


def build_install_command(manager: PackageManager, report: ResolutionReport) -> tuple[str, ...]:
    """Return the full argv adding every package in the install set as a dev dependency.

    The command is built even when the install set is empty.
    """

    return (*manager.add_dev_args, *install_targets(manager, report))


def _default_runner(args: Sequence[str], cwd: Path) -> CompletedProcess[str]:
    return run_command(args, options=CommandOptions(cwd=cwd, check=False))


def run_install(command: Sequence[str], *, cwd: Path, runner: CommandRunner | None = None) -> int:
    """Execute ``command`` in ``cwd`` with the terminal's standard streams.

    Args:
        command: Argument vector produced by :func:`build_install_command`.
        cwd: Project directory the package manager runs in.
        runner: Optional command runner, mainly for tests.

    Returns:
        int: The installer's exit code, always ``0`` on return.

    Raises:
        InstallerError: If the executable is missing or exits non-zero.
    """

    execute = runner or _default_runner
    LOGGER.debug("running %s in %s", command, cwd)
    try:
        completed = execute(command, cwd)
    except FileNotFoundError as exc:
        raise InstallerError(tuple(command), COMMAND_NOT_FOUND_EXIT) from exc
    if completed.returncode != 0:
        raise InstallerError(tuple(command), completed.returncode)
    return completed.returncode


__all__ = [
    "CommandRunner",
    "build_install_command",
    "install_targets",
    "run_install",
]
