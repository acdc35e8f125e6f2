"""Archive-internal path helpers."""

from __future__ import annotations

import re
from pathlib import Path

_LEADING_SEP_RE = re.compile(r"^[/\\]+")
_REPEATED_SLASH_RE = re.compile(r"/+")
_CLASS_SUFFIX_RE = re.compile(r"\.class$", re.IGNORECASE)


def normalize_entry_path(path: str | None) -> str:
    """Canonical form of an archive-internal path.

    Strips leading separators, converts backslashes, collapses repeated
    slashes and drops a trailing slash. ``None`` and "" become "".
    """
    if not path:
        return ""
    normalized = _LEADING_SEP_RE.sub("", path).replace("\\", "/")
    normalized = _REPEATED_SLASH_RE.sub("/", normalized)
    return normalized[:-1] if normalized.endswith("/") else normalized


def is_class_entry(entry_path: str) -> bool:
    return entry_path.lower().endswith(".class")


def java_entry_for(entry_path: str) -> str:
    """``com/x/Foo.class`` -> ``com/x/Foo.java``."""
    return _CLASS_SUFFIX_RE.sub(".java", entry_path)


def class_name_from_entry(entry_path: str) -> str:
    """``com/x/Foo$Bar.class`` -> ``com.x.Foo$Bar``."""
    name = _CLASS_SUFFIX_RE.sub("", normalize_entry_path(entry_path))
    return name.replace("/", ".").lstrip(".")


def source_archive_for(archive_path: str | Path) -> Path:
    """Sibling ``<base>-sources.jar`` next to *archive_path*."""
    archive = Path(archive_path)
    base = archive.name[: -len(".jar")] if archive.name.lower().endswith(".jar") else archive.name
    return archive.with_name(f"{base}-sources.jar")
