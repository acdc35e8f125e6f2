"""Best-available source text for archive entries."""

from jar_viewer.source.resolver import SourceResolver

__all__ = ["SourceResolver"]
