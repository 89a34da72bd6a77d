# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any, Sequence

import pytest

from typie.resolver import ProbeResult


class FakeRegistry:
    """Probe double answering from a fixed set of published packages."""

    def __init__(self, published: set[str] | None = None, errors: Mapping[str, str] | None = None) -> None:
        self.published = set(published or ())
        self.errors = dict(errors or {})
        self.calls: list[tuple[str, float]] = []
        self._lock = threading.Lock()

    def __call__(self, type_package: str, timeout: float) -> ProbeResult:
        with self._lock:
            self.calls.append((type_package, timeout))
        if type_package in self.errors:
            return ProbeResult(found=False, error=self.errors[type_package])
        if type_package in self.published:
            return ProbeResult(found=True, status=200)
        return ProbeResult(found=False, status=404)

    @property
    def probed(self) -> set[str]:
        return {call[0] for call in self.calls}


class RecordingRunner:
    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[tuple[tuple[str, ...], Path]] = []

    def __call__(self, args: Sequence[str], cwd: Path) -> CompletedProcess[str]:
        self.calls.append((tuple(args), cwd))
        return CompletedProcess(args=list(args), returncode=self.returncode)


def _write_json(path: Path, payload: Mapping[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing ``package.json`` into ``tmp_path``."""

    def _write(
        dependencies: Mapping[str, str] | None = None,
        dev_dependencies: Mapping[str, str] | None = None,
    ) -> Path:
        payload: dict[str, Any] = {"name": "demo", "version": "1.0.0"}
        if dependencies is not None:
            payload["dependencies"] = dict(dependencies)
        if dev_dependencies is not None:
            payload["devDependencies"] = dict(dev_dependencies)
        return _write_json(tmp_path / "package.json", payload)

    return _write


@pytest.fixture
def install_module(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing ``node_modules/<name>/package.json``."""

    def _install(name: str, **fields: Any) -> Path:
        payload = {"name": name, "version": "1.0.0", **fields}
        return _write_json(tmp_path / "node_modules" / name / "package.json", payload)

    return _install


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()
