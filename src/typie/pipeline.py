# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end run: detect, read, classify, resolve, install."""

from __future__ import annotations

import shlex
from dataclasses import dataclass

from rich.text import Text

from .classify import classify
from .config import TypieConfig
from .installer import CommandRunner, build_install_command, run_install
from .logging import bold, fail, info, ok, skip, warn
from .manifest import read_manifest
from .resolver import Probe, Resolution, ResolutionOutcome, ResolutionReport, TypeResolver
from .tools import PackageManager, Which, detect_default_manager, select_manager


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Summary of a completed run."""

    manager: PackageManager
    report: ResolutionReport
    command: tuple[str, ...]
    executed: bool
    exit_code: int = 0


class TypiePipeline:
    """Run every stage once against the project described by ``config``."""

    def __init__(
        self,
        config: TypieConfig,
        *,
        which: Which | None = None,
        probe: Probe | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self._config = config
        self._which = which
        self._probe = probe
        self._runner = runner

    def select_manager(self) -> PackageManager:
        """Return the manager to use, failing before any project file is read."""

        detected = detect_default_manager(self._which)
        return select_manager(self._config.tool, detected)

    def run(self) -> PipelineResult:
        """Execute the pipeline.

        Raises:
            TypieError: For any fatal condition; registry probe failures are not fatal.
        """

        config = self._config
        manager = self.select_manager()
        self._info(f"Using {manager.name}")

        manifest = read_manifest(config.root)
        dependency_map = manifest.dependency_map()
        classification = classify(dependency_map)
        self._info(f"Will check {len(classification.candidates)} deps from devDependencies and dependencies")

        resolver = TypeResolver(
            config.root,
            already_typed=classification.already_typed,
            probe=self._probe,
            probe_timeout=config.probe_timeout,
            max_workers=config.max_workers,
            on_resolution=self._report_resolution,
        )
        self._info("Communicating with the npm registry to check for types...")
        report = resolver.resolve(classification.candidates, dependency_map)
        ok(
            f"Found {len(report.install_set)} @types packages to install...",
            use_emoji=config.use_emoji,
            use_color=config.use_color,
        )

        command = build_install_command(manager, report)
        if config.dry_run:
            self._info(f"DRY RUN: {shlex.join(command)}")
            return PipelineResult(manager=manager, report=report, command=command, executed=False)

        self._info(shlex.join(command))
        exit_code = run_install(command, cwd=config.root, runner=self._runner)
        return PipelineResult(
            manager=manager,
            report=report,
            command=command,
            executed=True,
            exit_code=exit_code,
        )

    def _info(self, message: str) -> None:
        info(message, use_emoji=self._config.use_emoji, use_color=self._config.use_color)

    def _report_resolution(self, resolution: Resolution) -> None:
        style = {"use_emoji": self._config.use_emoji, "use_color": self._config.use_color}
        name = bold(resolution.dependency)
        match resolution.outcome:
            case ResolutionOutcome.ALREADY_TYPED:
                skip(Text.assemble("Types for ", name, " already installed. Skipping..."), **style)
            case ResolutionOutcome.BUNDLED_TYPES:
                warn(Text.assemble("Module ", name, " includes own types. Skipping..."), **style)
            case ResolutionOutcome.REGISTRY_HAS_TYPES:
                ok(Text.assemble("Type found for ", bold(resolution.type_package), " in registry."), **style)
            case ResolutionOutcome.NO_TYPES if resolution.detail:
                warn(
                    Text.assemble(
                        "Could not reach the registry for ",
                        name,
                        f" ({resolution.detail}). Skipping...",
                    ),
                    **style,
                )
            case ResolutionOutcome.NO_TYPES:
                fail(Text.assemble("No types found for ", name, " in registry. Skipping..."), **style)


__all__ = ["PipelineResult", "TypiePipeline"]
