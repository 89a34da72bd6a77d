# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Package manager detection and selection."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final

from .errors import NoToolDetectedError, UnknownToolError

LOGGER = logging.getLogger(__name__)

Which = Callable[[str], str | None]


@dataclass(frozen=True, slots=True)
class PackageManager:
    """A package manager able to add development dependencies.

    Attributes:
        name: Executable name, also the identifier accepted by ``--tool``.
        add_dev_args: Argument prefix that adds development dependencies.
        pins_versions: ``True`` when the manager prompts interactively on a
            version mismatch, so each package must carry an explicit range.
    """

    name: str
    add_dev_args: tuple[str, ...]
    pins_versions: bool = False


# Detection order: the first executable found becomes the default.
KNOWN_MANAGERS: Final[tuple[PackageManager, ...]] = (
    PackageManager("yarn", ("yarn", "add", "-D"), pins_versions=True),
    PackageManager("npm", ("npm", "install", "-D")),
    PackageManager("pnpm", ("pnpm", "add", "-D")),
)

MANAGERS_BY_NAME: Final[Mapping[str, PackageManager]] = {manager.name: manager for manager in KNOWN_MANAGERS}


def known_manager_names() -> tuple[str, ...]:
    return tuple(manager.name for manager in KNOWN_MANAGERS)


def detect_default_manager(which: Which | None = None) -> str | None:
    """Return the first known package manager found on ``PATH``.

    Args:
        which: Executable lookup used for probing; defaults to :func:`shutil.which`.

    Returns:
        str | None: Manager identifier, or ``None`` when none is installed.
    """

    lookup = which or shutil.which
    for manager in KNOWN_MANAGERS:
        location = lookup(manager.name)
        if location:
            LOGGER.debug("detected package manager %s at %s", manager.name, location)
            return manager.name
    LOGGER.debug("no package manager found among %s", known_manager_names())
    return None


def select_manager(override: str | None, detected: str | None) -> PackageManager:
    """Pick the manager for this run.

    An override is trusted without checking that it is executable.

    Raises:
        UnknownToolError: If the chosen name is not a supported manager.
        NoToolDetectedError: If there is neither an override nor a detected tool.
    """

    name = override or detected
    if not name:
        raise NoToolDetectedError(known_manager_names())
    manager = MANAGERS_BY_NAME.get(name.lower())
    if manager is None:
        raise UnknownToolError(name, known_manager_names())
    return manager


__all__ = [
    "KNOWN_MANAGERS",
    "MANAGERS_BY_NAME",
    "PackageManager",
    "Which",
    "detect_default_manager",
    "known_manager_names",
    "select_manager",
]
