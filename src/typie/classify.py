# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Split dependency names into type packages and resolution candidates."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

TYPES_SCOPE: Final[str] = "@types"
TYPES_PREFIX: Final[str] = f"{TYPES_SCOPE}/"


@dataclass(frozen=True, slots=True)
class Classification:
    """Dependency names partitioned by whether they are type packages."""

    already_typed: frozenset[str]
    candidates: tuple[str, ...]


def is_type_package(name: str) -> bool:
    return name.startswith(TYPES_PREFIX)


def type_package_name(name: str) -> str:
    """Return the ``@types`` package that would describe ``name``.

    Scoped names follow the DefinitelyTyped convention, so ``@babel/core``
    maps to ``@types/babel__core``.
    """

    if name.startswith("@") and "/" in name:
        scope, _, package = name[1:].partition("/")
        return f"{TYPES_PREFIX}{scope}__{package}"
    return f"{TYPES_PREFIX}{name}"


def classify(names: Iterable[str]) -> Classification:
    """Partition ``names`` into existing type packages and candidates.

    Candidates are sorted so later stages see a stable order regardless of
    how the manifest lists its dependencies.
    """

    unique = set(names)
    already_typed = frozenset(name for name in unique if is_type_package(name))
    candidates = tuple(sorted(unique - already_typed))
    return Classification(already_typed=already_typed, candidates=candidates)


__all__ = [
    "TYPES_PREFIX",
    "TYPES_SCOPE",
    "Classification",
    "classify",
    "is_type_package",
    "type_package_name",
]
