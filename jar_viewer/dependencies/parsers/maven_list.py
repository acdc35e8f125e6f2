"""Parser for ``mvn dependency:list -DoutputAbsoluteArtifactFilename=true`` output.

Each dependency line looks like::

    group:artifact:type[:classifier]:version:scope:/abs/path/artifact.jar

optionally prefixed with ``[INFO]`` and, on newer Maven versions, followed
by `` -- module name (auto)``. Group ids may contain colons, so fields are
taken from the right.
"""

from __future__ import annotations

import re

from jar_viewer.models.dependency import DependencyRecord

_LOG_PREFIX_RE = re.compile(r"^\[INFO\]\s+")
_MODULE_SUFFIX_RE = re.compile(r"\s+--\s+module\s+.*$")
# ":C:\..." or ":C:/..." — a Windows path in the final field
_DRIVE_PATH_RE = re.compile(r":([A-Za-z]:[\\/].*)$")

_SKIP_PREFIXES = ("---", "The following")


def _split_path(line: str) -> tuple[str, str] | None:
    """Split off the trailing path field, honouring drive letters."""
    m = _DRIVE_PATH_RE.search(line)
    if m:
        return line[: m.start()], m.group(1)
    head, sep, path = line.rpartition(":")
    if not sep:
        return None
    return head, path


def parse_maven_line(raw_line: str) -> DependencyRecord | None:
    line = _LOG_PREFIX_RE.sub("", raw_line).strip()
    if not line or ":" not in line or line.startswith(_SKIP_PREFIXES):
        return None
    line = _MODULE_SUFFIX_RE.sub("", line)

    split = _split_path(line)
    if split is None:
        return None
    head, path = split
    parts = head.split(":")
    # group, artifact, type, version, scope at minimum
    if len(parts) < 5:
        return None

    scope = parts.pop()
    version = parts.pop()
    classifier = parts.pop() if len(parts) > 3 else None
    packaging = parts.pop()
    artifact_id = parts.pop()
    group_id = ":".join(parts)

    return DependencyRecord(
        group_id=group_id,
        artifact_id=artifact_id,
        type=packaging,
        version=version,
        scope=scope,
        path=path.strip(),
        classifier=classifier,
    )


def parse_maven_dependency_list(output: str) -> list[DependencyRecord]:
    """Parse a dependency:list output file. Duplicate paths keep the first record."""
    records: dict[str, DependencyRecord] = {}
    for raw_line in output.splitlines():
        record = parse_maven_line(raw_line)
        if record is None or record.path in records:
            continue
        records[record.path] = record
    return list(records.values())
