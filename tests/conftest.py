"""Shared pytest fixtures for JAR viewer tests.

No Java, Maven or Gradle installation is needed: external tools are
replaced by :class:`FakeRunner`, which records calls and answers them
through a handler function.
"""

from __future__ import annotations

import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

from jar_viewer.models.project import ProjectDetection, ProjectKind
from jar_viewer.tools.runner import CommandResult

Handler = Callable[[str, list[str]], CommandResult]


def result(exit_code: int = 0, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(
        exit_code=exit_code,
        stdout=stdout,
        stderr=stderr,
        project=ProjectDetection(kind=ProjectKind.NATIVE),
    )


class FakeRunner:
    """Stand-in for ToolRunner.run — never spawns anything."""

    def __init__(self, handler: Handler | None = None) -> None:
        self.handler = handler or (lambda command, args: result())
        self.calls: list[tuple[str, list[str], str | None]] = []

    async def run(self, command, args, *, cwd=None, project_path=None):
        self.calls.append((command, list(args), cwd))
        return self.handler(command, list(args))

    def commands(self) -> list[str]:
        return [Path(c).name for c, _, _ in self.calls]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_jar(tmp_path: Path):
    """Build a zip archive from a ``{entry_name: bytes | str}`` mapping."""

    def _make(name: str, entries: dict[str, bytes | str], directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(target, "w") as zf:
            for entry_name, data in entries.items():
                zf.writestr(entry_name, data)
        return target

    return _make


@pytest.fixture
def fake_runner():
    """Factory: ``fake_runner(handler)`` -> FakeRunner."""
    return FakeRunner


@pytest.fixture
def cmd_result():
    """Factory for CommandResult values: ``cmd_result(0, stdout="...")``."""
    return result
