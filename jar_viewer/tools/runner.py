"""Run external tools, guarded by build-system detection."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path

import structlog

from jar_viewer.build.detector import ProjectTypeDetector
from jar_viewer.exceptions import (
    ProjectTypeMismatchError,
    ToolNotExecutableError,
    ToolNotFoundError,
)
from jar_viewer.models.project import ProjectDetection, ProjectKind

log = structlog.get_logger("jar_viewer.tools")

_COMMAND_KINDS: dict[str, ProjectKind] = {
    "mvn": ProjectKind.MAVEN,
    "mvn.cmd": ProjectKind.MAVEN,
    "mvnw": ProjectKind.MAVEN,
    "mvnw.cmd": ProjectKind.MAVEN,
    "gradle": ProjectKind.GRADLE,
    "gradle.bat": ProjectKind.GRADLE,
    "gradlew": ProjectKind.GRADLE,
    "gradlew.bat": ProjectKind.GRADLE,
}


def required_kind_for_command(command: str) -> ProjectKind | None:
    """Project kind a command may only run in; None means anywhere."""
    return _COMMAND_KINDS.get(Path(command).name.lower())


@dataclass
class CommandResult:
    """Captured outcome of one external process."""

    exit_code: int | None
    stdout: str
    stderr: str
    project: ProjectDetection

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def tail(self, lines: int) -> str:
        """Last *lines* lines of stderr, or of stdout when stderr is empty."""
        text = (self.stderr.strip() or self.stdout.strip())
        if not text:
            return ""
        return "\n".join(text.splitlines()[-lines:])


class ToolRunner:
    """Spawn external tools and capture their output in memory.

    Before spawning, the project owning *project_path* (else *cwd*, else the
    process working directory) is detected; Maven and Gradle commands are
    refused outside a project of their own kind.
    """

    def __init__(self, detector: ProjectTypeDetector | None = None) -> None:
        self._detector = detector or ProjectTypeDetector()

    async def run(
        self,
        command: str,
        args: list[str],
        *,
        cwd: str | None = None,
        project_path: str | None = None,
    ) -> CommandResult:
        context = project_path or cwd or os.getcwd()
        project = await asyncio.to_thread(self._detector.detect, context)

        required = required_kind_for_command(command)
        if required is not None and project.kind != required:
            raise ProjectTypeMismatchError(
                command, required.value, project.kind.value, project.root
            )

        log.debug("tool.spawn", command=command, args=args, cwd=cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                command,
                *args,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(command) from exc
        except PermissionError as exc:
            raise ToolNotExecutableError(command) from exc

        stdout, stderr = await proc.communicate()
        log.debug("tool.exited", command=command, exit_code=proc.returncode)
        return CommandResult(
            exit_code=proc.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            project=project,
        )
