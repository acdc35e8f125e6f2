"""Custom exceptions for the JAR viewer."""

from __future__ import annotations


class JarViewerError(Exception):
    """Base exception for all JAR viewer errors."""


class ArchiveNotFoundError(JarViewerError):
    """Raised when an archive, or an entry inside it, cannot be found or read."""


class ProjectTypeMismatchError(JarViewerError):
    """Raised when a build command is about to run outside a matching project."""

    def __init__(self, command: str, required: str, detected: str, root: str | None):
        self.command = command
        self.required = required
        self.detected = detected
        self.root = root
        root_label = f" (root: {root})" if root else ""
        super().__init__(
            f'Command "{command}" requires a {required} project, '
            f"but detected {detected}{root_label}."
        )


class ToolNotFoundError(JarViewerError):
    """Raised when an external executable (or the bundled decompiler) is missing."""

    def __init__(self, executable: str, hint: str = ""):
        self.executable = executable
        message = f"Executable '{executable}' was not found"
        super().__init__(f"{message}. {hint}" if hint else f"{message} on PATH.")


class ToolNotExecutableError(JarViewerError):
    """Raised when an external executable exists but lacks execute permission."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"Executable '{executable}' exists but is not executable.")


class NoProjectDetectedError(JarViewerError):
    """Raised when no Maven or Gradle marker exists at or above a path."""


class DecompilationFailedError(JarViewerError):
    """Raised when every source tier for a class entry came up empty."""

    def __init__(self, entry_path: str, exit_code: int | None, stderr: str):
        self.entry_path = entry_path
        self.exit_code = exit_code
        self.stderr = stderr
        detail = stderr.strip() or "no output"
        super().__init__(
            f"Could not produce source for {entry_path} "
            f"(decompiler exit code {exit_code}): {detail}"
        )


class BuildToolFailedError(JarViewerError):
    """Raised when a dependency resolution command exits non-zero."""

    def __init__(self, command: str, exit_code: int | None, output_tail: str):
        self.command = command
        self.exit_code = exit_code
        self.output_tail = output_tail
        super().__init__(
            f"{command} failed with code {exit_code}. output: {output_tail or 'no output'}"
        )
