"""Source attachment and the decompilation fallback chain.

For a compiled class the tiers are tried in order, first hit wins:

    1. attached source   — ``<base>-sources.jar`` next to the archive
    2. decompiled        — CFR run against the archive
    3. signature summary — ``javap -public``

Each tier returns a :class:`ReadResult` or ``None``; only when all of
them return ``None`` is :class:`DecompilationFailedError` raised.
Non-class entries are returned as raw text.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from jar_viewer.archive.index import ArchiveIndex, ensure_readable, limit_text
from jar_viewer.archive.paths import (
    class_name_from_entry,
    is_class_entry,
    java_entry_for,
    normalize_entry_path,
    source_archive_for,
)
from jar_viewer.exceptions import ArchiveNotFoundError, DecompilationFailedError
from jar_viewer.models.archive import Provenance, ReadResult
from jar_viewer.source.decompiler import CfrDecompiler, JavapInspector
from jar_viewer.tools.locator import DecompilerLocator
from jar_viewer.tools.runner import ToolRunner

log = structlog.get_logger("jar_viewer.source")


@dataclass
class _ClassRequest:
    """State carried through the tiers for one class entry."""

    archive: Path
    entry_path: str
    class_name: str
    decompiler_exit_code: int | None = None
    decompiler_stderr: str = ""
    tried: list[str] = field(default_factory=list)


Tier = Callable[[_ClassRequest], Awaitable["ReadResult | None"]]


class SourceResolver:
    """Produce the best available text for an archive entry."""

    def __init__(
        self,
        index: ArchiveIndex | None = None,
        runner: ToolRunner | None = None,
        locator: DecompilerLocator | None = None,
    ) -> None:
        self._index = index or ArchiveIndex()
        runner = runner or ToolRunner()
        self._decompiler = CfrDecompiler(runner, locator)
        self._javap = JavapInspector(runner)
        self._tiers: list[tuple[str, Tier]] = [
            (Provenance.ATTACHED_SOURCE.value, self._attached_source),
            (Provenance.DECOMPILED.value, self._decompiled),
            (Provenance.SIGNATURE_SUMMARY.value, self._signature_summary),
        ]

    async def read_entry(self, archive_path: str | Path, entry_path: str) -> ReadResult:
        archive = await asyncio.to_thread(ensure_readable, archive_path)
        entry = normalize_entry_path(entry_path)
        if not entry:
            raise ArchiveNotFoundError("entryPath is required")

        if not is_class_entry(entry):
            return await self._raw_resource(archive, entry)

        if not await asyncio.to_thread(self._index.has_entry, archive, entry):
            raise ArchiveNotFoundError(f"Entry {entry} not found in {archive}")

        request = _ClassRequest(
            archive=archive, entry_path=entry, class_name=class_name_from_entry(entry)
        )
        for name, tier in self._tiers:
            request.tried.append(name)
            result = await tier(request)
            if result is not None:
                log.info("source.resolved", entry=entry, provenance=result.provenance.value)
                return result

        log.warning("source.exhausted", entry=entry, tiers=request.tried)
        raise DecompilationFailedError(
            entry, request.decompiler_exit_code, request.decompiler_stderr
        )

    async def _raw_resource(self, archive: Path, entry: str) -> ReadResult:
        content = await asyncio.to_thread(self._index.read_text, archive, entry)
        if content is None:
            raise ArchiveNotFoundError(f"Entry {entry} not found in {archive}")
        return ReadResult(content=content, entry_path=entry, provenance=Provenance.RAW_RESOURCE)

    # ── tiers ────────────────────────────────────────────────────────────

    async def _attached_source(self, request: _ClassRequest) -> ReadResult | None:
        source_archive = source_archive_for(request.archive)
        if not source_archive.is_file():
            return None

        java_entry = java_entry_for(request.entry_path)
        try:
            content = await asyncio.to_thread(self._index.read_text, source_archive, java_entry)
        except ArchiveNotFoundError:
            log.info("source.attached_unreadable", source_archive=str(source_archive))
            return None
        if content is None:
            return None

        return ReadResult(
            content=f"// Source: Attached ({source_archive.name})\n{content}",
            entry_path=java_entry,
            provenance=Provenance.ATTACHED_SOURCE,
            source_archive=str(source_archive),
        )

    async def _decompiled(self, request: _ClassRequest) -> ReadResult | None:
        outcome = await self._decompiler.decompile(
            request.archive, request.entry_path, request.class_name
        )
        request.decompiler_exit_code = outcome.exit_code
        request.decompiler_stderr = outcome.stderr
        if outcome.text is None:
            return None

        text, _ = limit_text(outcome.text)
        return ReadResult(
            content=f"// Decompiled via CFR\n{text}",
            entry_path=java_entry_for(request.entry_path),
            provenance=Provenance.DECOMPILED,
        )

    async def _signature_summary(self, request: _ClassRequest) -> ReadResult | None:
        signature = await self._javap.signature(request.archive, request.class_name)
        if not signature:
            return None

        text, _ = limit_text(signature)
        return ReadResult(
            content=f"// javap signature fallback\n{text}",
            entry_path=request.entry_path,
            provenance=Provenance.SIGNATURE_SUMMARY,
        )
