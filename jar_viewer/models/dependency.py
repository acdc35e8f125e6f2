"""Data models for resolved project dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field

from jar_viewer.models.project import ProjectKind


@dataclass(frozen=True)
class DependencyRecord:
    """A single resolved artifact and its absolute location on disk."""

    group_id: str
    artifact_id: str
    type: str  # packaging, e.g. "jar" / "aar"
    version: str
    scope: str  # Maven scope or Gradle configuration name
    path: str
    classifier: str | None = None

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass
class ScanOptions:
    """Caller-facing options of a dependency scan."""

    exclude_transitive: bool = False
    configurations: list[str] = field(default_factory=list)
    include_log_tail: bool = False
    query: str | None = None


@dataclass
class DependencyScanResult:
    """Result of one dependency scan, cached or freshly resolved."""

    project_path: str
    project_root: str
    project_kind: ProjectKind
    dependencies: list[DependencyRecord] = field(default_factory=list)
    cached: bool = False
    log_tail: str | None = None
