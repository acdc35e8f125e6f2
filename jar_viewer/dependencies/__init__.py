"""Dependency scanner — resolve absolute artifact paths for Maven and Gradle projects."""

from jar_viewer.dependencies.cache import CacheKey, DependencyCache
from jar_viewer.dependencies.scanner import DependencyScanner, filter_by_query

__all__ = ["CacheKey", "DependencyCache", "DependencyScanner", "filter_by_query"]
