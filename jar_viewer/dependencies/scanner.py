"""DependencyScanner — run the project's build tool and collect resolved artifacts."""

from __future__ import annotations

import asyncio
import os
import shutil
import tempfile
from dataclasses import replace
from pathlib import Path

import structlog

from jar_viewer.build.detector import ProjectTypeDetector
from jar_viewer.core.config import ERROR_TAIL_LINES, LOG_TAIL_LINES
from jar_viewer.dependencies.cache import CacheKey, DependencyCache
from jar_viewer.dependencies.gradle_script import SCRIPT_NAME, TASK_NAME, render_init_script
from jar_viewer.dependencies.parsers.gradle_output import parse_gradle_output
from jar_viewer.dependencies.parsers.maven_list import parse_maven_dependency_list
from jar_viewer.exceptions import BuildToolFailedError, NoProjectDetectedError, ToolNotFoundError
from jar_viewer.models.dependency import DependencyRecord, DependencyScanResult, ScanOptions
from jar_viewer.models.project import ProjectKind
from jar_viewer.tools.runner import CommandResult, ToolRunner

log = structlog.get_logger("jar_viewer.engine")

_IS_WINDOWS = os.name == "nt"


def filter_by_query(
    dependencies: list[DependencyRecord], query: str | None
) -> list[DependencyRecord]:
    """Case-insensitive substring match on ``group:artifact`` or the path.

    Always returns a new list, so callers never hold the cached one.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(dependencies)
    return [
        dep
        for dep in dependencies
        if needle in dep.coordinates.lower() or needle in dep.path.lower()
    ]


def _read_optional(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return ""


class DependencyScanner:
    """Resolve dependency artifacts of the project owning a path.

    Results are cached per :class:`CacheKey` for the life of the scanner;
    the query filter is re-applied on every call, cached or not.
    """

    def __init__(
        self,
        runner: ToolRunner | None = None,
        detector: ProjectTypeDetector | None = None,
        cache: DependencyCache | None = None,
    ) -> None:
        self._detector = detector or ProjectTypeDetector()
        self._runner = runner or ToolRunner(self._detector)
        self._cache = cache if cache is not None else DependencyCache()

    @property
    def cache(self) -> DependencyCache:
        return self._cache

    async def scan(
        self, project_path: str | Path, options: ScanOptions | None = None
    ) -> DependencyScanResult:
        options = options or ScanOptions()
        resolved = Path(project_path).expanduser().resolve()
        detection = await asyncio.to_thread(self._detector.detect, resolved)
        if detection.kind is ProjectKind.NATIVE or detection.root is None:
            raise NoProjectDetectedError(
                f"No Maven or Gradle project detected at or above {resolved}."
            )

        root = detection.root
        key = CacheKey.build(root, options)

        cached = self._cache.get(key)
        if cached is None:
            async with self._cache.lock(key):
                # Another scan of the same key may have finished while we waited.
                cached = self._cache.get(key)
                if cached is None:
                    log.info("scanner.resolving", root=root, kind=detection.kind.value)
                    if detection.kind is ProjectKind.MAVEN:
                        result = await self._scan_maven(str(resolved), root, options)
                    else:
                        result = await self._scan_gradle(str(resolved), root, options)
                    self._cache.put(key, result)
                    log.info(
                        "scanner.resolved",
                        root=root,
                        kind=detection.kind.value,
                        count=len(result.dependencies),
                    )
                    return replace(
                        result, dependencies=filter_by_query(result.dependencies, options.query)
                    )

        log.info("scanner.cache_hit", root=root, kind=detection.kind.value)
        return replace(
            cached,
            project_path=str(resolved),
            cached=True,
            dependencies=filter_by_query(cached.dependencies, options.query),
        )

    # ── Maven ────────────────────────────────────────────────────────────

    async def _scan_maven(
        self, resolved_project: str, project_root: str, options: ScanOptions
    ) -> DependencyScanResult:
        temp_dir = tempfile.mkdtemp(prefix="jar-viewer-mvn-")
        output_file = Path(temp_dir) / "dependencies.txt"
        command = "mvn.cmd" if _IS_WINDOWS else "mvn"
        args = [
            "dependency:list",
            "-DoutputAbsoluteArtifactFilename=true",
            "-DincludeScope=runtime",
            "-DappendOutput=false",
            f"-DoutputFile={output_file}",
            "-B",
        ]
        if options.exclude_transitive:
            args.append("-DexcludeTransitive=true")

        try:
            try:
                result = await self._runner.run(
                    command, args, cwd=project_root, project_path=project_root
                )
            except ToolNotFoundError as exc:
                raise ToolNotFoundError(
                    command, hint="Maven executable (mvn) was not found on PATH."
                ) from exc

            self._check_exit(f"{command} dependency:list", result)
            content = await asyncio.to_thread(_read_optional, output_file)
            return DependencyScanResult(
                project_path=resolved_project,
                project_root=project_root,
                project_kind=ProjectKind.MAVEN,
                dependencies=parse_maven_dependency_list(content),
                cached=False,
                log_tail=self._log_tail(result, options),
            )
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    # ── Gradle ───────────────────────────────────────────────────────────

    @staticmethod
    def _gradle_command(project_root: str) -> str:
        wrapper = Path(project_root) / ("gradlew.bat" if _IS_WINDOWS else "gradlew")
        # A wrapper unpacked without its exec bit cannot be spawned.
        if wrapper.is_file() and os.access(wrapper, os.X_OK):
            return str(wrapper)
        return "gradle"

    async def _scan_gradle(
        self, resolved_project: str, project_root: str, options: ScanOptions
    ) -> DependencyScanResult:
        temp_dir = tempfile.mkdtemp(prefix="jar-viewer-gradle-")
        script_path = Path(temp_dir) / SCRIPT_NAME
        script = render_init_script(options.configurations, options.exclude_transitive)

        try:
            await asyncio.to_thread(script_path.write_text, script, encoding="utf-8")
            command = self._gradle_command(project_root)
            try:
                result = await self._runner.run(
                    command,
                    ["--init-script", str(script_path), TASK_NAME, "-q"],
                    cwd=project_root,
                    project_path=project_root,
                )
            except ToolNotFoundError as exc:
                raise ToolNotFoundError(
                    command, hint="Gradle executable (gradle/gradlew) was not found on PATH."
                ) from exc

            self._check_exit(f"gradle {TASK_NAME}", result)
            return DependencyScanResult(
                project_path=resolved_project,
                project_root=project_root,
                project_kind=ProjectKind.GRADLE,
                dependencies=parse_gradle_output(result.stdout),
                cached=False,
                log_tail=self._log_tail(result, options),
            )
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    # ── helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _check_exit(label: str, result: CommandResult) -> None:
        if not result.ok:
            log.warning("scanner.build_tool_failed", command=label, exit_code=result.exit_code)
            raise BuildToolFailedError(label, result.exit_code, result.tail(ERROR_TAIL_LINES))

    @staticmethod
    def _log_tail(result: CommandResult, options: ScanOptions) -> str | None:
        if not options.include_log_tail:
            return None
        return result.tail(LOG_TAIL_LINES)
