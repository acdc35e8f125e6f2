"""Data models shared across the JAR viewer components."""

from jar_viewer.models.archive import ArchiveEntrySummary, ListResult, Provenance, ReadResult
from jar_viewer.models.dependency import DependencyRecord, DependencyScanResult, ScanOptions
from jar_viewer.models.project import ProjectDetection, ProjectKind

__all__ = [
    "ArchiveEntrySummary",
    "DependencyRecord",
    "DependencyScanResult",
    "ListResult",
    "ProjectDetection",
    "ProjectKind",
    "Provenance",
    "ReadResult",
    "ScanOptions",
]
