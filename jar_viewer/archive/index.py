"""Folder-style view over a zip-format archive."""

from __future__ import annotations

import os
import zipfile
from pathlib import Path

from jar_viewer.archive.paths import normalize_entry_path
from jar_viewer.core.config import MAX_LIST_ENTRIES, MAX_TEXT_CHARS
from jar_viewer.exceptions import ArchiveNotFoundError
from jar_viewer.models.archive import ArchiveEntrySummary, ListResult


def limit_text(text: str, limit: int = MAX_TEXT_CHARS) -> tuple[str, bool]:
    """Cut *text* to *limit* characters, appending a marker when cut."""
    if len(text) <= limit:
        return text, False
    return f"{text[:limit]}\n\n// [Truncated output at {limit} characters]", True


def ensure_readable(archive_path: str | Path) -> Path:
    """Resolve *archive_path* and check it is a readable file."""
    resolved = Path(archive_path).expanduser().resolve()
    if not resolved.is_file() or not os.access(resolved, os.R_OK):
        raise ArchiveNotFoundError(f"Jar file not found at {resolved}")
    return resolved


def _open(archive: Path) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(archive)
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveNotFoundError(f"Cannot read {archive} as a zip archive: {exc}") from exc


class ArchiveIndex:
    """List and read entries of JAR / zip archives.

    All methods are synchronous; callers on an event loop should run them
    through ``asyncio.to_thread``.
    """

    def __init__(self, max_entries: int = MAX_LIST_ENTRIES) -> None:
        self.max_entries = max_entries

    def list_entries(self, archive_path: str | Path, inner_path: str | None = None) -> ListResult:
        """List the direct children of *inner_path* inside the archive.

        Deeper entries are folded into their first path segment, reported
        once as a directory. Directories come first, then files, each
        sorted by name; the list is capped at ``max_entries``.
        """
        archive = ensure_readable(archive_path)
        prefix = normalize_entry_path(inner_path)

        directories: set[str] = set()
        files: dict[str, ArchiveEntrySummary] = {}

        with _open(archive) as zf:
            for info in zf.infolist():
                name = normalize_entry_path(info.filename)
                if not name:
                    continue
                if prefix:
                    if name == prefix or not name.startswith(f"{prefix}/"):
                        continue
                    relative = name[len(prefix) + 1 :]
                else:
                    relative = name
                if not relative:
                    continue

                head, sep, _ = relative.partition("/")
                if sep or info.is_dir():
                    directories.add(head)
                elif head not in files:
                    files[head] = ArchiveEntrySummary(
                        path=head,
                        directory=False,
                        size=info.file_size,
                        compressed_size=info.compress_size,
                    )

        entries = [ArchiveEntrySummary(path=d, directory=True) for d in sorted(directories)]
        entries.extend(files[name] for name in sorted(files) if name not in directories)

        total = len(entries)
        return ListResult(
            archive_path=str(archive),
            inner_path=prefix or "/",
            total=total,
            truncated=total > self.max_entries,
            entries=entries[: self.max_entries],
        )

    def has_entry(self, archive_path: str | Path, entry_path: str) -> bool:
        """True if *entry_path* names a file (not a directory) in the archive."""
        archive = ensure_readable(archive_path)
        with _open(archive) as zf:
            return self._find(zf, normalize_entry_path(entry_path)) is not None

    def read_text(self, archive_path: str | Path, entry_path: str) -> str | None:
        """Read an entry as UTF-8 text, size-limited.

        Returns None when the entry is missing or is a directory.
        """
        archive = ensure_readable(archive_path)
        with _open(archive) as zf:
            info = self._find(zf, normalize_entry_path(entry_path))
            if info is None:
                return None
            data = zf.read(info)
        text, _ = limit_text(data.decode("utf-8", errors="replace"))
        return text

    @staticmethod
    def _find(zf: zipfile.ZipFile, name: str) -> zipfile.ZipInfo | None:
        if not name:
            return None
        try:
            info = zf.getinfo(name)
        except KeyError:
            # Entry names written with backslashes or a leading slash.
            info = next(
                (i for i in zf.infolist() if normalize_entry_path(i.filename) == name),
                None,
            )
        if info is None or info.is_dir():
            return None
        return info
