# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the typie pipeline."""

from __future__ import annotations

from pathlib import Path


class TypieError(RuntimeError):
    """Base class for failures that abort a typie run."""

    exit_code: int = 1


class ConfigError(TypieError):
    """Raised when configuration input is invalid."""


class NoToolDetectedError(TypieError):
    """Raised when no supported package manager is available or requested."""

    def __init__(self, candidates: tuple[str, ...]) -> None:
        super().__init__(
            f"Couldn't find a supported package manager tool (looked for {', '.join(candidates)}).",
        )
        self.candidates = candidates


class UnknownToolError(TypieError):
    """Raised when ``--tool`` names a package manager typie does not support."""

    def __init__(self, name: str, known: tuple[str, ...]) -> None:
        super().__init__(f"Unknown package manager '{name}'. Supported tools: {', '.join(known)}")
        self.name = name
        self.known = known


class ManifestNotFoundError(TypieError):
    """Raised when the project manifest does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No package.json file found at {path}")
        self.path = path


class ManifestParseError(TypieError):
    """Raised when a manifest cannot be decoded as a JSON object."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to parse {path}: {reason}")
        self.path = path
        self.reason = reason


class InstallerError(TypieError):
    """Raised when the package manager exits with a non-zero status."""

    def __init__(self, command: tuple[str, ...], returncode: int) -> None:
        super().__init__(f"Command '{' '.join(command)}' failed with exit code {returncode}")
        self.command = command
        self.returncode = returncode
        self.exit_code = returncode


__all__ = [
    "ConfigError",
    "InstallerError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "NoToolDetectedError",
    "TypieError",
    "UnknownToolError",
]
