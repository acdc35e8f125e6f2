"""JarViewerService facade — the three operations exposed to the transport.

Usage::

    service = JarViewerService()

    listing = await service.list_jar_entries("/path/app.jar", "com/example")
    result = await service.read_jar_entry("/path/app.jar", "com/example/App.class")
    deps = await service.scan_project_dependencies("/path/project", query="guava")
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jar_viewer.archive.index import ArchiveIndex
from jar_viewer.build.detector import ProjectTypeDetector
from jar_viewer.dependencies.scanner import DependencyScanner
from jar_viewer.models.archive import ListResult, ReadResult
from jar_viewer.models.dependency import DependencyRecord, DependencyScanResult, ScanOptions
from jar_viewer.source.resolver import SourceResolver
from jar_viewer.tools.locator import DecompilerLocator
from jar_viewer.tools.runner import ToolRunner


class JarViewerService:
    """Wire the archive index, source resolver and dependency scanner together.

    One instance owns one dependency cache; keep it alive for the life of
    the server.
    """

    def __init__(
        self,
        runner: ToolRunner | None = None,
        locator: DecompilerLocator | None = None,
        detector: ProjectTypeDetector | None = None,
    ) -> None:
        detector = detector or ProjectTypeDetector()
        runner = runner or ToolRunner(detector)
        self._index = ArchiveIndex()
        self._resolver = SourceResolver(self._index, runner, locator)
        self._scanner = DependencyScanner(runner, detector)

    @property
    def scanner(self) -> DependencyScanner:
        return self._scanner

    async def list_jar_entries(
        self, archive_path: str | Path, inner_path: str | None = None
    ) -> ListResult:
        return await asyncio.to_thread(self._index.list_entries, archive_path, inner_path)

    async def read_jar_entry(self, archive_path: str | Path, entry_path: str) -> ReadResult:
        return await self._resolver.read_entry(archive_path, entry_path)

    async def scan_project_dependencies(
        self,
        project_path: str | Path,
        *,
        exclude_transitive: bool = False,
        configurations: list[str] | None = None,
        include_log_tail: bool = False,
        query: str | None = None,
    ) -> DependencyScanResult:
        options = ScanOptions(
            exclude_transitive=exclude_transitive,
            configurations=list(configurations or []),
            include_log_tail=include_log_tail,
            query=query,
        )
        return await self._scanner.scan(project_path, options)


# ── JSON payloads ────────────────────────────────────────────────────────


def list_result_payload(result: ListResult) -> dict[str, Any]:
    return {
        "jarPath": result.archive_path,
        "innerPath": result.inner_path,
        "total": result.total,
        "truncated": result.truncated,
        "entries": [
            {
                "path": e.path,
                "directory": e.directory,
                "size": e.size,
                "compressedSize": e.compressed_size,
            }
            for e in result.entries
        ],
    }


def _dependency_payload(dep: DependencyRecord) -> dict[str, Any]:
    return {
        "groupId": dep.group_id,
        "artifactId": dep.artifact_id,
        "type": dep.type,
        "classifier": dep.classifier,
        "version": dep.version,
        "scope": dep.scope,
        "path": dep.path,
    }


def scan_result_payload(result: DependencyScanResult) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "projectPath": result.project_path,
        "projectRoot": result.project_root,
        "projectType": result.project_kind.value,
        "dependencies": [_dependency_payload(d) for d in result.dependencies],
        "cached": result.cached,
    }
    if result.log_tail is not None:
        payload["logTail"] = result.log_tail
    return payload
