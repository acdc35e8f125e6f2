"""Parsers for build-tool dependency listings — pure text in, records out."""

from jar_viewer.dependencies.parsers.gradle_output import (
    DEP_LINE_PREFIX,
    parse_gradle_cache_path,
    parse_gradle_output,
)
from jar_viewer.dependencies.parsers.maven_list import parse_maven_dependency_list

__all__ = [
    "DEP_LINE_PREFIX",
    "parse_gradle_cache_path",
    "parse_gradle_output",
    "parse_maven_dependency_list",
]
