"""Java JAR viewer: archive listings, source attachment and dependency resolution."""

__version__ = "0.1.0"

from jar_viewer.exceptions import (
    ArchiveNotFoundError,
    BuildToolFailedError,
    DecompilationFailedError,
    JarViewerError,
    NoProjectDetectedError,
    ProjectTypeMismatchError,
    ToolNotExecutableError,
    ToolNotFoundError,
)
from jar_viewer.service import JarViewerService

__all__ = [
    "ArchiveNotFoundError",
    "BuildToolFailedError",
    "DecompilationFailedError",
    "JarViewerError",
    "JarViewerService",
    "NoProjectDetectedError",
    "ProjectTypeMismatchError",
    "ToolNotExecutableError",
    "ToolNotFoundError",
]
