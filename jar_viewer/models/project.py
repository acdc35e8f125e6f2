"""Data models for build-system detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProjectKind(str, Enum):
    MAVEN = "maven"
    GRADLE = "gradle"
    NATIVE = "native"  # no build markers found


@dataclass
class ProjectDetection:
    """Build system owning a path. ``root`` is None iff kind is NATIVE."""

    kind: ProjectKind
    root: str | None = None
    markers: list[str] = field(default_factory=list)
