# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the typie command."""

from __future__ import annotations

import json
from pathlib import Path
from subprocess import CompletedProcess

from typer.testing import CliRunner

from typie import __version__
from typie.cli.app import app
from typie.resolver import ProbeResult


def _write_manifest(root: Path, dependencies: dict[str, str]) -> None:
    (root / "package.json").write_text(json.dumps({"dependencies": dependencies}), encoding="utf-8")


def _published(*packages: str):
    def probe(type_package: str, timeout: float) -> ProbeResult:
        if type_package in packages:
            return ProbeResult(found=True, status=200)
        return ProbeResult(found=False, status=404)

    return probe


def test_cli_installs_with_detected_manager(monkeypatch, tmp_path: Path) -> None:
    _write_manifest(tmp_path, {"left-pad": "^1.0.0"})
    commands: list[list[str]] = []

    def fake_run_command(args, *, options):
        commands.append(list(args))
        return CompletedProcess(args=list(args), returncode=0)

    monkeypatch.setattr("shutil.which", lambda name: "/usr/bin/yarn" if name == "yarn" else None)
    monkeypatch.setattr("typie.resolver.probe_registry", _published("@types/left-pad"))
    monkeypatch.setattr("typie.installer.run_command", fake_run_command)

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--no-emoji", "--no-color"])

    assert result.exit_code == 0, result.stdout
    assert commands == [["yarn", "add", "-D", "@types/left-pad@^1.0.0"]]
    assert "Using yarn" in result.stdout
    assert "✅" not in result.stdout


def test_cli_tool_override(monkeypatch, tmp_path: Path) -> None:
    _write_manifest(tmp_path, {"left-pad": "^1.0.0"})
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr("typie.resolver.probe_registry", _published("@types/left-pad"))

    result = CliRunner().invoke(
        app,
        ["--root", str(tmp_path), "--tool", "npm", "--dry-run", "--no-emoji"],
    )

    assert result.exit_code == 0
    assert "DRY RUN: npm install -D @types/left-pad" in result.stdout


def test_cli_exits_with_installer_status(monkeypatch, tmp_path: Path) -> None:
    _write_manifest(tmp_path, {"left-pad": "^1.0.0"})
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr("typie.resolver.probe_registry", _published())
    monkeypatch.setattr(
        "typie.installer.run_command",
        lambda args, *, options: CompletedProcess(args=list(args), returncode=3),
    )

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 3
    assert "failed with exit code 3" in result.stdout


def test_cli_missing_manifest(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "No package.json file found" in result.stdout
    assert "Will check" not in result.stdout


def test_cli_without_package_manager(monkeypatch, tmp_path: Path) -> None:
    _write_manifest(tmp_path, {"left-pad": "^1.0.0"})
    monkeypatch.setattr("shutil.which", lambda name: None)

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1
    assert "Couldn't find a supported package manager tool" in result.stdout


def test_cli_unknown_tool(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("shutil.which", lambda name: f"/usr/bin/{name}")

    result = CliRunner().invoke(app, ["--root", str(tmp_path), "--tool", "bun", "--no-emoji"])

    assert result.exit_code == 1
    assert "Unknown package manager 'bun'" in result.stdout


def test_cli_version() -> None:
    result = CliRunner().invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
