# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reading ``package.json`` manifests."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from .errors import ManifestNotFoundError, ManifestParseError

MANIFEST_FILENAME: Final[str] = "package.json"
MODULES_DIRNAME: Final[str] = "node_modules"
TYPE_ENTRY_KEYS: Final[tuple[str, ...]] = ("types", "typings")

DependencyMap = dict[str, str]


class Manifest(BaseModel):
    """Dependency sections of a project manifest."""

    model_config = ConfigDict(frozen=True)

    path: Path
    dependencies: DependencyMap = Field(default_factory=dict)
    dev_dependencies: DependencyMap = Field(default_factory=dict)

    def dependency_map(self) -> DependencyMap:
        """Return runtime and development dependencies merged into one map.

        Development entries win when a name appears in both sections.
        """

        return {**self.dependencies, **self.dev_dependencies}


def _load_json_object(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        raise ManifestParseError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise ManifestParseError(path, "top-level value must be an object")
    return data


def _section(data: Mapping[str, Any], key: str) -> DependencyMap:
    raw = data.get(key)
    if not isinstance(raw, Mapping):
        return {}
    return {str(name): str(version) for name, version in raw.items()}


def read_manifest(root: Path) -> Manifest:
    """Load the manifest found in ``root``.

    Args:
        root: Project directory expected to contain ``package.json``.

    Returns:
        Manifest: Parsed dependency sections.

    Raises:
        ManifestNotFoundError: If ``package.json`` does not exist.
        ManifestParseError: If the file is not a JSON object.
    """

    path = root / MANIFEST_FILENAME
    if not path.is_file():
        raise ManifestNotFoundError(path)
    data = _load_json_object(path)
    return Manifest(
        path=path,
        dependencies=_section(data, "dependencies"),
        dev_dependencies=_section(data, "devDependencies"),
    )


def bundled_metadata_path(root: Path, name: str) -> Path:
    return root / MODULES_DIRNAME / name / MANIFEST_FILENAME


def read_bundled_metadata(root: Path, name: str) -> dict[str, Any] | None:
    """Return the installed package metadata for ``name``, or ``None`` if not installed.

    Raises:
        ManifestParseError: If the installed ``package.json`` is malformed.
    """

    path = bundled_metadata_path(root, name)
    if not path.is_file():
        return None
    return _load_json_object(path)


def declares_types(metadata: Mapping[str, Any] | None) -> bool:
    """Return ``True`` when ``metadata`` points at a bundled type entry."""

    if metadata is None:
        return False
    return any(metadata.get(key) for key in TYPE_ENTRY_KEYS)


__all__ = [
    "MANIFEST_FILENAME",
    "MODULES_DIRNAME",
    "DependencyMap",
    "Manifest",
    "bundled_metadata_path",
    "declares_types",
    "read_bundled_metadata",
    "read_manifest",
]
