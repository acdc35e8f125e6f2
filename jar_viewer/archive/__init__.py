"""Archive access — path normalization, listings, raw entry reads."""

from jar_viewer.archive.index import ArchiveIndex
from jar_viewer.archive.paths import normalize_entry_path

__all__ = ["ArchiveIndex", "normalize_entry_path"]
