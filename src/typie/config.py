# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run configuration with layered precedence (defaults, ``.typie.toml``, CLI)."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

CONFIG_FILENAME: Final[str] = ".typie.toml"
CONFIG_SECTION: Final[str] = "typie"
DEFAULT_PROBE_TIMEOUT: Final[float] = 10.0
DEFAULT_MAX_WORKERS: Final[int] = 8
# Keys accepted from the configuration file; everything else comes from the CLI.
FILE_SETTINGS: Final[tuple[str, ...]] = ("tool", "probe_timeout", "max_workers")


class TypieConfig(BaseModel):
    """Settings for a single pipeline run.

    The instance is built once by the CLI and handed to every stage, so no
    stage consults the working directory or environment on its own.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    root: Path = Field(default_factory=Path.cwd)
    tool: str | None = None
    probe_timeout: float = Field(default=DEFAULT_PROBE_TIMEOUT, gt=0)
    max_workers: int = Field(default=DEFAULT_MAX_WORKERS, ge=1)
    dry_run: bool = False
    use_emoji: bool = True
    use_color: bool = True


def load_file_settings(root: Path) -> dict[str, Any]:
    """Return the ``[typie]`` table from ``root/.typie.toml``.

    Args:
        root: Project directory that may contain the configuration file.

    Returns:
        dict[str, Any]: Raw settings, empty when the file is absent.

    Raises:
        ConfigError: If the file is not valid TOML, the section is not a table, or it
            sets keys outside :data:`FILE_SETTINGS`.
    """

    path = root / CONFIG_FILENAME
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration at {path} is not valid TOML: {exc}") from exc
    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{CONFIG_SECTION}] in {path} must be a table")
    unsupported = sorted(set(section) - set(FILE_SETTINGS))
    if unsupported:
        raise ConfigError(f"Unsupported setting(s) in {path}: {', '.join(unsupported)}")
    return dict(section)


def build_config(root: Path, overrides: Mapping[str, Any] | None = None) -> TypieConfig:
    """Merge defaults, file settings and explicit overrides into a config.

    ``None`` values in ``overrides`` mean "not supplied" and leave lower
    layers untouched.

    Raises:
        ConfigError: If any layer supplies an invalid value.
    """

    resolved_root = root.resolve()
    merged: dict[str, Any] = load_file_settings(resolved_root)
    merged.update({key: value for key, value in (overrides or {}).items() if value is not None})
    merged["root"] = resolved_root
    try:
        return TypieConfig(**merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "CONFIG_SECTION",
    "DEFAULT_MAX_WORKERS",
    "DEFAULT_PROBE_TIMEOUT",
    "FILE_SETTINGS",
    "TypieConfig",
    "build_config",
    "load_file_settings",
]
