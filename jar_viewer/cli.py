"""CLI entry point: jar-viewer.

Subcommands:
    jar-viewer serve                               # stdio MCP server
    jar-viewer list app.jar com/example            # folder-style listing
    jar-viewer read app.jar com/example/App.class  # source / decompiled text
    jar-viewer scan /path/to/project --json        # resolved dependency paths
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from jar_viewer.core.logging import setup_logging
from jar_viewer.exceptions import JarViewerError
from jar_viewer.service import JarViewerService, list_result_payload, scan_result_payload


def _run(coro):
    try:
        return asyncio.run(coro)
    except JarViewerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Inspect JAR files and resolve Maven/Gradle dependency paths."""
    setup_logging("DEBUG" if verbose else None)


@main.command("serve")
def serve() -> None:
    """Run the MCP server on stdio."""
    from jar_viewer.server import create_jar_viewer_mcp

    create_jar_viewer_mcp().run()


@main.command("list")
@click.argument("jar_path", type=click.Path())
@click.argument("inner_path", required=False, default="")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_entries(jar_path: str, inner_path: str, as_json: bool) -> None:
    """List one directory level of JAR_PATH."""
    result = _run(JarViewerService().list_jar_entries(jar_path, inner_path or None))
    if as_json:
        click.echo(json.dumps(list_result_payload(result), indent=2))
        return

    click.echo(f"{result.archive_path}:{result.inner_path}")
    for entry in result.entries:
        if entry.directory:
            click.echo(f"  {entry.path}/")
        else:
            click.echo(f"  {entry.path}  ({entry.size} bytes)")
    if result.truncated:
        click.echo(f"  ... {result.total - len(result.entries)} more")


@main.command("read")
@click.argument("jar_path", type=click.Path())
@click.argument("entry_path")
def read_entry(jar_path: str, entry_path: str) -> None:
    """Print the best available text for ENTRY_PATH."""
    result = _run(JarViewerService().read_jar_entry(jar_path, entry_path))
    click.echo(f"[{result.provenance.value}] {result.entry_path}", err=True)
    click.echo(result.content)


@main.command("scan")
@click.argument("project_path", type=click.Path(exists=True), default=".")
@click.option("--exclude-transitive", is_flag=True, help="First-level dependencies only")
@click.option(
    "-c", "--configuration", "configurations", multiple=True,
    help="Gradle configuration to include (repeatable)",
)
@click.option("--log-tail", is_flag=True, help="Include the last build log lines")
@click.option("-q", "--query", default=None, help="Filter by group:artifact or path")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def scan(
    project_path: str,
    exclude_transitive: bool,
    configurations: tuple[str, ...],
    log_tail: bool,
    query: str | None,
    as_json: bool,
) -> None:
    """Resolve dependency artifact paths of the project at PROJECT_PATH."""
    result = _run(
        JarViewerService().scan_project_dependencies(
            project_path,
            exclude_transitive=exclude_transitive,
            configurations=list(configurations),
            include_log_tail=log_tail,
            query=query,
        )
    )
    if as_json:
        click.echo(json.dumps(scan_result_payload(result), indent=2))
        return

    click.echo(
        f"{result.project_kind.value} project at {result.project_root}: "
        f"{len(result.dependencies)} dependencies\n"
    )
    for dep in result.dependencies:
        classifier = f":{dep.classifier}" if dep.classifier else ""
        click.echo(f"  {dep.coordinates}:{dep.version}{classifier} [{dep.scope}]")
        click.echo(f"    {dep.path}")
    if result.log_tail:
        click.echo("\n" + result.log_tail)


if __name__ == "__main__":
    main()
