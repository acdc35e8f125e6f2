"""Build-system detection — walk upward from a path looking for marker files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from jar_viewer.models.project import ProjectDetection, ProjectKind

logger = logging.getLogger(__name__)

# Detection rules: (kind, marker files), ordered by priority.
# Maven wins over Gradle when both live in the same directory.
DETECTION_RULES: list[tuple[ProjectKind, list[str]]] = [
    (ProjectKind.MAVEN, ["pom.xml"]),
    (
        ProjectKind.GRADLE,
        ["build.gradle", "build.gradle.kts", "settings.gradle", "settings.gradle.kts"],
    ),
]


def _readable(path: Path) -> bool:
    return path.exists() and os.access(path, os.R_OK)


class ProjectTypeDetector:
    """Detect which build tool owns a path.

    The closest ancestor carrying any marker wins; the walk stops at the
    filesystem root.
    """

    def detect(self, start_path: str | Path) -> ProjectDetection:
        current = Path(start_path).expanduser().resolve()
        if current.is_file():
            current = current.parent

        while True:
            for kind, markers in DETECTION_RULES:
                found = [m for m in markers if _readable(current / m)]
                if found:
                    logger.debug("Detected %s project at %s (found %s)", kind.value, current, found)
                    return ProjectDetection(kind=kind, root=str(current), markers=found)

            parent = current.parent
            if parent == current:
                break
            current = parent

        logger.debug("No build markers at or above %s", start_path)
        return ProjectDetection(kind=ProjectKind.NATIVE)
