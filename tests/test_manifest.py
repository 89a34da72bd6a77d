# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for manifest reading."""

from __future__ import annotations

from pathlib import Path

import pytest

from typie.errors import ManifestNotFoundError, ManifestParseError
from typie.manifest import declares_types, read_bundled_metadata, read_manifest


def test_read_manifest_merges_sections_with_dev_precedence(tmp_path: Path, write_manifest) -> None:
    write_manifest(
        dependencies={"react": "^18.0.0", "lodash": "^4.0.0"},
        dev_dependencies={"lodash": "^4.17.0", "jest": "^29.0.0"},
    )

    manifest = read_manifest(tmp_path)

    assert manifest.dependency_map() == {
        "react": "^18.0.0",
        "lodash": "^4.17.0",
        "jest": "^29.0.0",
    }


def test_read_manifest_tolerates_missing_sections(tmp_path: Path, write_manifest) -> None:
    write_manifest()

    assert read_manifest(tmp_path).dependency_map() == {}


def test_read_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestNotFoundError) as excinfo:
        read_manifest(tmp_path)

    assert excinfo.value.path == tmp_path / "package.json"


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_read_manifest_rejects_malformed_content(tmp_path: Path, content: str) -> None:
    (tmp_path / "package.json").write_text(content, encoding="utf-8")

    with pytest.raises(ManifestParseError):
        read_manifest(tmp_path)


def test_bundled_metadata_absent_returns_none(tmp_path: Path) -> None:
    assert read_bundled_metadata(tmp_path, "left-pad") is None


def test_bundled_metadata_for_scoped_package(tmp_path: Path, install_module) -> None:
    install_module("@scope/pkg", typings="dist/index.d.ts")

    metadata = read_bundled_metadata(tmp_path, "@scope/pkg")

    assert declares_types(metadata)


def test_bundled_metadata_parse_error_is_fatal(tmp_path: Path) -> None:
    target = tmp_path / "node_modules" / "broken" / "package.json"
    target.parent.mkdir(parents=True)
    target.write_text("{", encoding="utf-8")

    with pytest.raises(ManifestParseError):
        read_bundled_metadata(tmp_path, "broken")


def test_declares_types_requires_truthy_entry() -> None:
    assert declares_types({"types": "index.d.ts"})
    assert declares_types({"typings": "index.d.ts"})
    assert not declares_types({"types": ""})
    assert not declares_types({"main": "index.js"})
    assert not declares_types(None)


def test_read_manifest_unreadable_file(tmp_path: Path, write_manifest, monkeypatch) -> None:
    write_manifest(dependencies={"react": "^18.0.0"})

    def deny(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_text", deny)

    with pytest.raises(ManifestParseError) as excinfo:
        read_manifest(tmp_path)

    assert "Permission denied" in str(excinfo.value)
