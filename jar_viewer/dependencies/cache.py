"""Process-lifetime cache of dependency scan results."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from jar_viewer.dependencies.gradle_script import normalize_configurations
from jar_viewer.models.dependency import DependencyScanResult, ScanOptions


@dataclass(frozen=True)
class CacheKey:
    """Project root plus every option that changes what gets resolved.

    The text query is deliberately absent: it is applied after resolution.
    """

    project_root: str
    exclude_transitive: bool
    configurations: tuple[str, ...]
    include_log_tail: bool

    @classmethod
    def build(cls, project_root: str, options: ScanOptions) -> CacheKey:
        return cls(
            project_root=project_root,
            exclude_transitive=bool(options.exclude_transitive),
            configurations=tuple(normalize_configurations(options.configurations)),
            include_log_tail=bool(options.include_log_tail),
        )


class DependencyCache:
    """Results keyed by :class:`CacheKey`, never evicted.

    :meth:`lock` hands out one ``asyncio.Lock`` per key so concurrent scans
    of the same key run the build tool once; later waiters find the stored
    result.
    """

    def __init__(self) -> None:
        self._results: dict[CacheKey, DependencyScanResult] = {}
        self._locks: dict[CacheKey, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, key: object) -> bool:
        return key in self._results

    def get(self, key: CacheKey) -> DependencyScanResult | None:
        return self._results.get(key)

    def put(self, key: CacheKey, result: DependencyScanResult) -> None:
        self._results[key] = result

    def lock(self, key: CacheKey) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock
