# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide which dependencies need an ``@types`` package.

Each candidate is settled by the first rule that applies:

1. its ``@types`` counterpart is already declared in the manifest;
2. its installed ``package.json`` declares ``types`` or ``typings``;
3. the public registry answers ``200`` for the ``@types`` package.

Rules 1 and 2 only touch the local filesystem and run in the calling thread,
so dependencies settled by them never reach the network. Registry probes are
fanned out over a bounded thread pool and joined once every probe has
settled; a failing probe only affects its own dependency.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable, Collection, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from pathlib import Path
from typing import Any, Final

from .classify import type_package_name
from .config import DEFAULT_MAX_WORKERS, DEFAULT_PROBE_TIMEOUT
from .manifest import declares_types, read_bundled_metadata

LOGGER = logging.getLogger(__name__)

REGISTRY_URL: Final[str] = "https://registry.npmjs.org/"
# Abbreviated metadata keeps probe responses small.
REGISTRY_ACCEPT: Final[str] = "application/vnd.npm.install-v1+json; q=1.0, application/json; q=0.8"


class ResolutionOutcome(StrEnum):
    """Possible results for a single dependency."""

    ALREADY_TYPED = "already-typed"
    BUNDLED_TYPES = "bundled-types-present"
    REGISTRY_HAS_TYPES = "registry-has-types"
    NO_TYPES = "no-types-available"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome for one dependency.

    Attributes:
        dependency: Name as declared in the manifest.
        type_package: ``@types`` package name derived from ``dependency``.
        version_range: Range declared for ``dependency`` in the manifest.
        outcome: Rule that settled the dependency.
        detail: Probe error text when the registry could not be reached.
    """

    dependency: str
    type_package: str
    version_range: str
    outcome: ResolutionOutcome
    detail: str | None = None

    @property
    def installable(self) -> bool:
        return self.outcome is ResolutionOutcome.REGISTRY_HAS_TYPES


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Registry answer for one ``@types`` package."""

    found: bool
    status: int | None = None
    error: str | None = None


Probe = Callable[[str, float], ProbeResult]
MetadataReader = Callable[[Path, str], Mapping[str, Any] | None]
ResolutionCallback = Callable[[Resolution], None]


def registry_url(type_package: str) -> str:
    return f"{REGISTRY_URL}{urllib.parse.quote(type_package, safe='@/')}"


def probe_registry(type_package: str, timeout: float) -> ProbeResult:
    """Check whether ``type_package`` is published on the public registry.

    Network failures are reported through :attr:`ProbeResult.error` rather
    than raised; no retry is attempted.

    Args:
        type_package: ``@types`` package name to look up.
        timeout: Socket timeout in seconds applied to the request.

    Returns:
        ProbeResult: ``found`` is ``True`` only for an HTTP 200 answer.
    """

    request = urllib.request.Request(
        registry_url(type_package),
        headers={"Accept": REGISTRY_ACCEPT},
        method="GET",
    )
    try:
        # Bandit: the URL is always built from the fixed https registry base.
        with urllib.request.urlopen(request, timeout=timeout) as response:  # nosec B310
            status = response.status
    except urllib.error.HTTPError as exc:
        exc.close()
        return ProbeResult(found=False, status=exc.code)
    except urllib.error.URLError as exc:
        return ProbeResult(found=False, error=str(exc.reason))
    except (http.client.HTTPException, OSError, ValueError) as exc:
        return ProbeResult(found=False, error=str(exc) or type(exc).__name__)
    return ProbeResult(found=status == HTTPStatus.OK, status=status)


@dataclass(frozen=True, slots=True)
class ResolutionReport:
    """Resolutions for every candidate, in candidate order."""

    resolutions: tuple[Resolution, ...]

    @property
    def install_set(self) -> tuple[Resolution, ...]:
        """Installable resolutions without duplicate ``@types`` packages."""

        seen: set[str] = set()
        selected: list[Resolution] = []
        for resolution in self.resolutions:
            if not resolution.installable or resolution.type_package in seen:
                continue
            seen.add(resolution.type_package)
            selected.append(resolution)
        return tuple(selected)

    @property
    def type_packages(self) -> tuple[str, ...]:
        return tuple(resolution.type_package for resolution in self.install_set)


class TypeResolver:
    """Resolve candidates against local metadata and the registry."""

    def __init__(
        self,
        root: Path,
        *,
        already_typed: Collection[str] = frozenset(),
        probe: Probe | None = None,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        metadata_reader: MetadataReader | None = None,
        on_resolution: ResolutionCallback | None = None,
    ) -> None:
        self._root = root
        self._already_typed = frozenset(already_typed)
        self._probe = probe or probe_registry
        self._probe_timeout = probe_timeout
        self._max_workers = max_workers
        self._read_metadata = metadata_reader or read_bundled_metadata
        self._on_resolution = on_resolution

    def resolve(self, candidates: Sequence[str], versions: Mapping[str, str]) -> ResolutionReport:
        """Resolve every name in ``candidates``.

        Args:
            candidates: Dependency names to resolve.
            versions: Version ranges keyed by dependency name.

        Returns:
            ResolutionReport: One resolution per distinct candidate, in input order.

        Raises:
            ManifestParseError: If an installed package's metadata is malformed.
        """

        ordered = list(dict.fromkeys(candidates))
        settled: dict[str, Resolution] = {}
        pending: list[str] = []
        for name in ordered:
            local = self._resolve_locally(name, versions.get(name, ""))
            if local is None:
                pending.append(name)
                continue
            settled[name] = local
            self._emit(local)
        settled.update(self._probe_all(pending, versions))
        return ResolutionReport(resolutions=tuple(settled[name] for name in ordered))

    def _resolve_locally(self, name: str, version_range: str) -> Resolution | None:
        type_package = type_package_name(name)
        if type_package in self._already_typed:
            return Resolution(name, type_package, version_range, ResolutionOutcome.ALREADY_TYPED)
        if declares_types(self._read_metadata(self._root, name)):
            return Resolution(name, type_package, version_range, ResolutionOutcome.BUNDLED_TYPES)
        return None

    def _probe_all(self, pending: Sequence[str], versions: Mapping[str, str]) -> dict[str, Resolution]:
        if not pending:
            return {}
        results: dict[str, Resolution] = {}
        workers = min(self._max_workers, len(pending))
        LOGGER.debug("probing registry for %d package(s) with %d worker(s)", len(pending), workers)
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="typie-probe")
        try:
            future_map = {
                executor.submit(self._probe_one, name, versions.get(name, "")): name for name in pending
            }
            for future in as_completed(future_map):
                resolution = future.result()
                results[future_map[future]] = resolution
                self._emit(resolution)
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return results

    def _probe_one(self, name: str, version_range: str) -> Resolution:
        type_package = type_package_name(name)
        try:
            result = self._probe(type_package, self._probe_timeout)
        except Exception as exc:  # noqa: BLE001 - a failed lookup only skips its own dependency
            LOGGER.debug("probe %s raised %r", type_package, exc)
            result = ProbeResult(found=False, error=str(exc) or type(exc).__name__)
        LOGGER.debug("probe %s status=%s error=%s", type_package, result.status, result.error)
        if result.found:
            return Resolution(name, type_package, version_range, ResolutionOutcome.REGISTRY_HAS_TYPES)
        return Resolution(name, type_package, version_range, ResolutionOutcome.NO_TYPES, detail=result.error)

    def _emit(self, resolution: Resolution) -> None:
        if self._on_resolution is not None:
            self._on_resolution(resolution)


__all__ = [
    "REGISTRY_URL",
    "Probe",
    "ProbeResult",
    "Resolution",
    "ResolutionOutcome",
    "ResolutionReport",
    "TypeResolver",
    "probe_registry",
    "registry_url",
]
