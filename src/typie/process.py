# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; the wrapper normalises arguments and
# never enables ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        super().__init__(f"Command '{command[0]}' exited with status {returncode}.")
        self.command = tuple(command)
        self.returncode = returncode


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable in ``args`` against ``PATH``.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` with inherited standard streams.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring the working directory, environment and
            exit status handling.

    Returns:
        CompletedProcess[str]: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    resolved = options or CommandOptions()
    normalized = _normalize_args(args)
    # Bandit: argument lists are passed directly without shell expansion.
    completed: CompletedProcess[str] = subprocess.run(  # nosec B603
        normalized,
        cwd=str(resolved.cwd) if resolved.cwd is not None else None,
        env=dict(resolved.env) if resolved.env is not None else None,
        check=False,
        text=True,
    )
    if resolved.check and completed.returncode != 0:
        raise SubprocessExecutionError(normalized, completed.returncode)
    return completed


__all__ = ["CommandOptions", "SubprocessExecutionError", "run_command"]
