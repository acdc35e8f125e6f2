"""Tests for the FastMCP tool surface and JSON payloads."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from jar_viewer.server import create_jar_viewer_mcp
from jar_viewer.service import JarViewerService

GUAVA = "/r/com/google/guava/guava/33.0.0-jre/guava-33.0.0-jre.jar"


def _text(result) -> str:
    blocks = result[0] if isinstance(result, tuple) else result
    return blocks[0].text


@pytest.fixture
def service(fake_runner, cmd_result):
    def handler(command, args):
        output = next(a for a in args if a.startswith("-DoutputFile="))
        Path(output.split("=", 1)[1]).write_text(
            f"com.google.guava:guava:jar:33.0.0-jre:compile:{GUAVA}\n"
        )
        return cmd_result(0, stderr="warn: offline\n")

    return JarViewerService(runner=fake_runner(handler))


@pytest.fixture
def mcp(service):
    return create_jar_viewer_mcp(service)


class TestTools:
    @pytest.mark.anyio
    async def test_tools_registered(self, mcp):
        names = {tool.name for tool in await mcp.list_tools()}
        assert names == {"list_jar_entries", "read_jar_entry", "scan_project_dependencies"}

    @pytest.mark.anyio
    async def test_list_jar_entries(self, mcp, make_jar):
        jar = make_jar("lib.jar", {"com/a/A.class": b"", "README.txt": "hi"})
        payload = json.loads(_text(await mcp.call_tool("list_jar_entries", {"jarPath": str(jar)})))
        assert payload["innerPath"] == "/"
        assert payload["total"] == 2
        assert payload["truncated"] is False
        assert payload["entries"][0] == {
            "path": "com",
            "directory": True,
            "size": 0,
            "compressedSize": 0,
        }
        assert payload["entries"][1]["path"] == "README.txt"

    @pytest.mark.anyio
    async def test_read_jar_entry_returns_content(self, mcp, make_jar):
        jar = make_jar("lib.jar", {"META-INF/MANIFEST.MF": "Manifest-Version: 1.0\n"})
        result = await mcp.call_tool(
            "read_jar_entry", {"jarPath": str(jar), "entryPath": "META-INF/MANIFEST.MF"}
        )
        assert _text(result) == "Manifest-Version: 1.0\n"

    @pytest.mark.anyio
    async def test_read_missing_entry_is_error(self, mcp, make_jar):
        jar = make_jar("lib.jar", {"a.txt": "a"})
        with pytest.raises(ToolError, match="not found"):
            await mcp.call_tool("read_jar_entry", {"jarPath": str(jar), "entryPath": "b.txt"})

    @pytest.mark.anyio
    async def test_scan_project_dependencies(self, mcp, tmp_path: Path):
        (tmp_path / "pom.xml").write_text("<project/>")
        args = {"projectPath": str(tmp_path), "includeLogTail": True, "query": "guava"}

        first = json.loads(_text(await mcp.call_tool("scan_project_dependencies", args)))
        second = json.loads(_text(await mcp.call_tool("scan_project_dependencies", args)))

        assert first["projectType"] == "maven"
        assert first["projectRoot"] == str(tmp_path.resolve())
        assert first["cached"] is False
        assert first["logTail"] == "warn: offline"
        assert first["dependencies"] == [
            {
                "groupId": "com.google.guava",
                "artifactId": "guava",
                "type": "jar",
                "classifier": None,
                "version": "33.0.0-jre",
                "scope": "compile",
                "path": GUAVA,
            }
        ]
        assert second["cached"] is True


class TestService:
    @pytest.mark.anyio
    async def test_scan_options_passed_through(self, service, tmp_path: Path):
        (tmp_path / "pom.xml").write_text("<project/>")
        result = await service.scan_project_dependencies(tmp_path, query="nothing-matches")
        assert result.dependencies == []
        assert len(service.scanner.cache) == 1
