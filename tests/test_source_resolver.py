"""Tests for SourceResolver — tier ordering with a fake CFR / javap."""

from __future__ import annotations

from pathlib import Path

import pytest

from jar_viewer.exceptions import ArchiveNotFoundError, DecompilationFailedError
from jar_viewer.models.archive import Provenance
from jar_viewer.source.decompiler import class_filter
from jar_viewer.source.resolver import SourceResolver
from jar_viewer.tools.locator import DecompilerLocator

CLASS_ENTRY = "com/example/App.class"
JAVA_SOURCE = "package com.example;\n\npublic class App {}\n"


@pytest.fixture(autouse=True)
def cfr_jar(tmp_path: Path, monkeypatch) -> Path:
    jar = tmp_path / "tools" / "cfr.jar"
    jar.parent.mkdir()
    jar.write_bytes(b"PK")
    monkeypatch.setenv("JAR_VIEWER_CFR_JAR", str(jar))
    monkeypatch.delenv("JAR_VIEWER_JAVA", raising=False)
    monkeypatch.delenv("JAR_VIEWER_JAVAP", raising=False)
    return jar


@pytest.fixture
def app_jar(make_jar, tmp_path: Path) -> Path:
    return make_jar(
        "app-1.0.jar",
        {
            CLASS_ENTRY: b"\xca\xfe\xba\xbe",
            "com/example/messages.properties": "greeting=hi\n",
        },
        directory=tmp_path / "repo",
    )


def _arg(args: list[str], flag: str) -> str:
    return args[args.index(flag) + 1]


def cfr_writes(source: str, cmd_result):
    """Handler emulating a successful CFR run; javap is never expected."""

    def handler(command, args):
        assert Path(command).name == "java"
        out = Path(_arg(args, "--outputdir")) / "com" / "example" / "App.java"
        out.parent.mkdir(parents=True)
        out.write_text(source)
        return cmd_result(0)

    return handler


class TestClassFilter:
    def test_anchored_and_escaped(self):
        assert class_filter("com.example.App") == r"^com\.example\.App$"
        assert class_filter("com.example.App$Inner") == r"^com\.example\.App\$Inner$"


class TestRawResource:
    @pytest.mark.anyio
    async def test_reads_resource_text(self, app_jar, fake_runner):
        runner = fake_runner()
        result = await SourceResolver(runner=runner).read_entry(
            app_jar, "/com/example/messages.properties"
        )
        assert result.provenance is Provenance.RAW_RESOURCE
        assert result.content == "greeting=hi\n"
        assert result.entry_path == "com/example/messages.properties"
        assert runner.calls == []

    @pytest.mark.anyio
    async def test_missing_resource(self, app_jar, fake_runner):
        with pytest.raises(ArchiveNotFoundError, match="not found"):
            await SourceResolver(runner=fake_runner()).read_entry(app_jar, "nope.txt")

    @pytest.mark.anyio
    async def test_missing_archive(self, tmp_path: Path, fake_runner):
        with pytest.raises(ArchiveNotFoundError):
            await SourceResolver(runner=fake_runner()).read_entry(tmp_path / "x.jar", "a.txt")

    @pytest.mark.anyio
    async def test_empty_entry_path(self, app_jar, fake_runner):
        with pytest.raises(ArchiveNotFoundError, match="entryPath is required"):
            await SourceResolver(runner=fake_runner()).read_entry(app_jar, "/")


class TestAttachedSource:
    @pytest.mark.anyio
    async def test_prefers_sources_jar(self, app_jar, make_jar, fake_runner):
        make_jar(
            "app-1.0-sources.jar",
            {"com/example/App.java": JAVA_SOURCE},
            directory=app_jar.parent,
        )
        runner = fake_runner()
        result = await SourceResolver(runner=runner).read_entry(app_jar, CLASS_ENTRY)

        assert result.provenance is Provenance.ATTACHED_SOURCE
        assert result.entry_path == "com/example/App.java"
        assert result.content.startswith("// Source: Attached (app-1.0-sources.jar)\n")
        assert JAVA_SOURCE in result.content
        assert result.source_archive == str(app_jar.parent / "app-1.0-sources.jar")
        assert runner.calls == []

    @pytest.mark.anyio
    async def test_sources_jar_without_entry_falls_through(
        self, app_jar, make_jar, fake_runner, cmd_result
    ):
        make_jar("app-1.0-sources.jar", {"com/example/Other.java": "x"}, directory=app_jar.parent)
        runner = fake_runner(cfr_writes(JAVA_SOURCE, cmd_result))
        result = await SourceResolver(runner=runner).read_entry(app_jar, CLASS_ENTRY)
        assert result.provenance is Provenance.DECOMPILED

    @pytest.mark.anyio
    async def test_missing_class_entry(self, app_jar, fake_runner):
        runner = fake_runner()
        with pytest.raises(ArchiveNotFoundError):
            await SourceResolver(runner=runner).read_entry(app_jar, "com/example/Missing.class")
        assert runner.calls == []


class TestDecompiled:
    @pytest.mark.anyio
    async def test_cfr_output(self, app_jar, fake_runner, cmd_result, cfr_jar):
        runner = fake_runner(cfr_writes(JAVA_SOURCE, cmd_result))
        result = await SourceResolver(runner=runner).read_entry(app_jar, CLASS_ENTRY)

        assert result.provenance is Provenance.DECOMPILED
        assert result.entry_path == "com/example/App.java"
        assert result.content == "// Decompiled via CFR\n" + JAVA_SOURCE

        command, args, _ = runner.calls[0]
        assert args[:3] == ["-jar", str(cfr_jar), str(app_jar.resolve())]
        assert _arg(args, "--jarfilter") == r"^com\.example\.App$"
        assert _arg(args, "--silent") == "true"

    @pytest.mark.anyio
    async def test_scratch_dir_removed(self, app_jar, fake_runner, cmd_result):
        seen: list[Path] = []
        inner = cfr_writes(JAVA_SOURCE, cmd_result)

        def handler(command, args):
            seen.append(Path(_arg(args, "--outputdir")))
            return inner(command, args)

        await SourceResolver(runner=fake_runner(handler)).read_entry(app_jar, CLASS_ENTRY)
        assert seen and not seen[0].exists()

    @pytest.mark.anyio
    async def test_scratch_dir_removed_on_error(self, app_jar, fake_runner):
        seen: list[Path] = []

        def handler(command, args):
            seen.append(Path(_arg(args, "--outputdir")))
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await SourceResolver(runner=fake_runner(handler)).read_entry(app_jar, CLASS_ENTRY)
        assert seen and not seen[0].exists()


class TestSignatureSummary:
    @pytest.mark.anyio
    async def test_javap_when_cfr_emits_nothing(self, app_jar, fake_runner, cmd_result):
        def handler(command, args):
            if Path(command).name == "javap":
                assert args == ["-classpath", str(app_jar.resolve()), "-public", "com.example.App"]
                return cmd_result(0, stdout="public class com.example.App {\n}\n")
            return cmd_result(0)

        runner = fake_runner(handler)
        result = await SourceResolver(runner=runner).read_entry(app_jar, CLASS_ENTRY)

        assert result.provenance is Provenance.SIGNATURE_SUMMARY
        assert result.entry_path == CLASS_ENTRY
        assert result.content.startswith("// javap signature fallback\npublic class")
        assert runner.commands() == ["java", "javap"]

    @pytest.mark.anyio
    async def test_all_tiers_fail(self, app_jar, fake_runner, cmd_result):
        def handler(command, args):
            if Path(command).name == "javap":
                return cmd_result(1, stderr="class not found")
            return cmd_result(2, stderr="Unsupported class file major version")

        with pytest.raises(DecompilationFailedError) as excinfo:
            await SourceResolver(runner=fake_runner(handler)).read_entry(app_jar, CLASS_ENTRY)
        err = excinfo.value
        assert err.exit_code == 2
        assert "Unsupported class file" in err.stderr
        assert "exit code 2" in str(err)

    @pytest.mark.anyio
    async def test_missing_decompiler_jar_still_tries_javap(
        self, app_jar, fake_runner, cmd_result, monkeypatch, tmp_path
    ):
        monkeypatch.setenv("JAR_VIEWER_CFR_JAR", str(tmp_path / "absent.jar"))
        monkeypatch.chdir(tmp_path)

        def handler(command, args):
            assert Path(command).name == "javap"
            return cmd_result(0, stdout="public class com.example.App {}")

        resolver = SourceResolver(
            runner=fake_runner(handler), locator=DecompilerLocator("cfr-test-only.jar")
        )
        result = await resolver.read_entry(app_jar, CLASS_ENTRY)
        assert result.provenance is Provenance.SIGNATURE_SUMMARY
