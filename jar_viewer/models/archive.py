"""Data models for archive listings and entry reads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Provenance(str, Enum):
    """Where the text returned for an entry came from."""

    ATTACHED_SOURCE = "attached-source"
    DECOMPILED = "decompiled"
    RAW_RESOURCE = "raw-resource"
    SIGNATURE_SUMMARY = "signature-summary"


@dataclass
class ArchiveEntrySummary:
    """One row of a folder-style archive listing."""

    path: str  # relative to the listed prefix, no leading/trailing "/"
    directory: bool
    size: int = 0
    compressed_size: int = 0


@dataclass
class ListResult:
    """Result of listing one directory level of an archive."""

    archive_path: str
    inner_path: str  # "/" when listing the archive root
    total: int
    truncated: bool
    entries: list[ArchiveEntrySummary] = field(default_factory=list)


@dataclass
class ReadResult:
    """Text produced for a single archive entry."""

    content: str
    entry_path: str
    provenance: Provenance
    source_archive: str | None = None
