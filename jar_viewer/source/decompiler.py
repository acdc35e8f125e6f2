"""CFR decompilation and javap signature summaries for single classes."""

from __future__ import annotations

import asyncio
import re
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

import structlog

from jar_viewer.archive.paths import java_entry_for
from jar_viewer.core import config
from jar_viewer.exceptions import ToolNotExecutableError, ToolNotFoundError
from jar_viewer.tools.locator import DecompilerLocator
from jar_viewer.tools.runner import ToolRunner

log = structlog.get_logger("jar_viewer.source")

_REGEX_SPECIAL_RE = re.compile(r"([.*+?^${}()|\[\]\\])")


def class_filter(class_name: str) -> str:
    """Anchored regex matching exactly *class_name* (CFR ``--jarfilter``).

    ``com.x.Foo`` must not also match ``com.x.FooBar`` or ``com.xyFoo``.
    """
    escaped = _REGEX_SPECIAL_RE.sub(r"\\\1", class_name)
    return f"^{escaped}$"


@dataclass
class DecompileOutcome:
    """What one decompiler run produced. ``text`` is None on any failure."""

    text: str | None
    exit_code: int | None = None
    stderr: str = ""


def _read_if_exists(path: Path) -> str | None:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8", errors="replace")


class CfrDecompiler:
    """Run CFR against a whole archive, filtered down to one class.

    Output goes to a private scratch directory that is removed before
    returning, whatever happened.
    """

    def __init__(self, runner: ToolRunner, locator: DecompilerLocator | None = None) -> None:
        self._runner = runner
        self._locator = locator or DecompilerLocator()

    async def decompile(self, archive: Path, entry_path: str, class_name: str) -> DecompileOutcome:
        try:
            cfr_jar = self._locator.locate()
        except (ToolNotFoundError, ToolNotExecutableError) as exc:
            return DecompileOutcome(text=None, stderr=str(exc))

        output_dir = tempfile.mkdtemp(prefix="jar-viewer-cfr-")
        try:
            try:
                result = await self._runner.run(
                    config.java_executable(),
                    [
                        "-jar",
                        cfr_jar,
                        str(archive),
                        "--outputdir",
                        output_dir,
                        "--jarfilter",
                        class_filter(class_name),
                        "--silent",
                        "true",
                    ],
                    project_path=str(archive),
                )
            except (ToolNotFoundError, ToolNotExecutableError) as exc:
                return DecompileOutcome(text=None, stderr=str(exc))

            stderr = result.stderr or result.stdout
            if not result.ok:
                log.info("cfr.failed", class_name=class_name, exit_code=result.exit_code)
                return DecompileOutcome(text=None, exit_code=result.exit_code, stderr=stderr)

            text = await asyncio.to_thread(_read_if_exists, Path(output_dir) / java_entry_for(entry_path))
            if not text:
                log.info("cfr.no_output", class_name=class_name)
                stderr = stderr or f"CFR did not produce output for {entry_path}"
            return DecompileOutcome(text=text or None, exit_code=result.exit_code, stderr=stderr)
        finally:
            shutil.rmtree(output_dir, ignore_errors=True)


class JavapInspector:
    """Public member signatures of a class via ``javap -public``."""

    def __init__(self, runner: ToolRunner) -> None:
        self._runner = runner

    async def signature(self, archive: Path, class_name: str) -> str | None:
        try:
            result = await self._runner.run(
                config.javap_executable(),
                ["-classpath", str(archive), "-public", class_name],
                project_path=str(archive),
            )
        except (ToolNotFoundError, ToolNotExecutableError):
            return None
        if not result.ok:
            return None
        return result.stdout or result.stderr or None
