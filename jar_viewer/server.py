"""FastMCP server exposing the JAR viewer tools over stdio."""

from __future__ import annotations

import json

from mcp.server.fastmcp import FastMCP

from jar_viewer.service import JarViewerService, list_result_payload, scan_result_payload

SERVER_NAME = "java-jar-viewer"
INSTRUCTIONS = (
    "Use the provided tools to inspect JAR files. "
    "Prefer list_jar_entries before read_jar_entry to confirm exact paths."
)


def create_jar_viewer_mcp(service: JarViewerService | None = None) -> FastMCP:
    """Create a FastMCP server with the JAR viewer tools registered.

    *service* is captured by closure so its dependency cache lives as long
    as the server.
    """
    service = service or JarViewerService()
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool()
    async def list_jar_entries(jarPath: str, innerPath: str = "") -> str:
        """List top-level entries inside a JAR (folder-style view).

        innerPath narrows the listing to one directory, e.g. "com/example".
        """
        result = await service.list_jar_entries(jarPath, innerPath or None)
        return json.dumps(list_result_payload(result))

    @mcp.tool()
    async def read_jar_entry(jarPath: str, entryPath: str) -> str:
        """Read a specific file from a JAR.

        For .class files, prefer attached source (-sources.jar).
        Falls back to CFR decompilation, then to a javap signature summary.
        """
        result = await service.read_jar_entry(jarPath, entryPath)
        return result.content

    @mcp.tool()
    async def scan_project_dependencies(
        projectPath: str,
        excludeTransitive: bool = False,
        configurations: list[str] | None = None,
        includeLogTail: bool = False,
        query: str = "",
    ) -> str:
        """Resolve absolute paths for Maven/Gradle dependencies.

        Supports excludeTransitive, query, and Gradle configurations
        filters; cached per project root.
        """
        result = await service.scan_project_dependencies(
            projectPath,
            exclude_transitive=excludeTransitive,
            configurations=configurations,
            include_log_tail=includeLogTail,
            query=query or None,
        )
        return json.dumps(scan_result_payload(result))

    return mcp
