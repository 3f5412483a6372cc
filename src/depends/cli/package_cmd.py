"""``depends package <id> <version>`` -- Graph a published package.

Resolves the package's transitive dependencies against the configured
package sources (nuget.org by default), selecting the lowest version that
satisfies every requested range.

Exit Codes:
    0 -- Graph produced.
    1 -- Resolution failed (unsatisfiable ranges, feed errors, timeout).
"""

from __future__ import annotations

import asyncio

import click

from depends.cli.output import FORMATS, emit_graph, fail
from depends.config import load_settings
from depends.core.analyzer import DependencyAnalyzer
from depends.exceptions import DependsError


@click.command("package")
@click.argument("package_id")
@click.argument("version")
@click.option("--framework", "-f", default="netstandard2.0", show_default=True, help="Target framework.")
@click.option(
    "--source", "-s", "sources",
    multiple=True,
    help="Package source URL or directory; repeat for several (overrides settings).",
)
@click.option("--timeout", type=float, default=None, help="Overall discovery timeout in seconds.")
@click.option(
    "--format", "output_format",
    type=click.Choice(FORMATS),
    default="summary",
    help="Output format (default: summary).",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write output to a file.")
@click.pass_context
def package_command(
    ctx: click.Context,
    package_id: str,
    version: str,
    framework: str,
    sources: tuple[str, ...],
    timeout: float | None,
    output_format: str,
    output: str | None,
) -> None:
    """Resolve a package version and build its dependency graph.

    Examples:

        depends package Newtonsoft.Json 12.0.3

        depends package Serilog 2.10.0 -f net6.0 --format dot -o serilog.dot
    """
    try:
        settings = load_settings(ctx.obj.get("config")).with_overrides(
            sources=sources or None,
            discovery_timeout=timeout,
        )
        graph = DependencyAnalyzer(settings).analyze_package(package_id, version, framework)
    except asyncio.TimeoutError:
        fail(f"Discovery of {package_id} {version} timed out")
    except DependsError as exc:
        fail(str(exc))

    emit_graph(graph, output_format, output)
