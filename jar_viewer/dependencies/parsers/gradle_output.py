"""Parser for the delimited lines printed by the injected Gradle task.

Line format::

    JAR_VIEWER_DEP|<configuration>|<file name>|<absolute path>

Coordinates are recovered from the Gradle module cache layout
``.../modules-2/files-2.1/<group>/<artifact>/<version>/<sha1>/<file>``.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from jar_viewer.models.dependency import DependencyRecord

DEP_LINE_PREFIX = "JAR_VIEWER_DEP|"
CACHE_MARKER = "/modules-2/files-2.1/"


@dataclass
class GradleCacheCoords:
    group_id: str
    artifact_id: str
    version: str
    classifier: str | None


def _split_ext(file_name: str) -> tuple[str, str]:
    base, ext = posixpath.splitext(file_name)
    return base, ext


def parse_gradle_cache_path(file_path: str, file_name: str) -> GradleCacheCoords | None:
    """Coordinates from a module-cache path, or None outside the cache."""
    normalized = file_path.replace("\\", "/")
    idx = normalized.find(CACHE_MARKER)
    if idx == -1:
        return None

    parts = normalized[idx + len(CACHE_MARKER) :].split("/")
    if len(parts) < 4:
        return None
    group_id, artifact_id, version = parts[0], parts[1], parts[2]
    if not group_id or not artifact_id or not version:
        return None

    base, _ = _split_ext(file_name)
    prefix = f"{artifact_id}-{version}-"
    classifier = base[len(prefix) :] if base.startswith(prefix) else None
    return GradleCacheCoords(group_id, artifact_id, version, classifier or None)


def parse_gradle_line(raw_line: str) -> DependencyRecord | None:
    line = raw_line.strip()
    if not line.startswith(DEP_LINE_PREFIX):
        return None

    parts = line.split("|")
    if len(parts) < 4:
        return None
    configuration = parts[1].strip()
    file_name = parts[2].strip()
    file_path = "|".join(parts[3:]).strip()
    if not configuration or not file_name or not file_path:
        return None

    base, ext = _split_ext(file_name)
    coords = parse_gradle_cache_path(file_path, file_name)
    return DependencyRecord(
        group_id=coords.group_id if coords else "unknown",
        artifact_id=coords.artifact_id if coords else (base or "unknown"),
        type=ext.lstrip(".") or "jar",
        version=coords.version if coords else "unknown",
        scope=configuration,
        path=file_path,
        classifier=coords.classifier if coords else None,
    )


def parse_gradle_output(output: str) -> list[DependencyRecord]:
    """Parse task stdout. A path seen in several configurations keeps the first."""
    records: dict[str, DependencyRecord] = {}
    for raw_line in output.splitlines():
        record = parse_gradle_line(raw_line)
        if record is None or record.path in records:
            continue
        records[record.path] = record
    return list(records.values())
