"""``depends project <path>`` -- Graph a restored project or solution.

PATH is a ``.csproj``/``.fsproj``/``.vbproj`` file or a ``.sln`` file.
The project (every project, for a solution) must have been restored, since
the graph is read from ``obj/project.assets.json``.

Exit Codes:
    0 -- Graph produced.
    1 -- Analysis failed (not restored, unsupported project, bad input).
"""

from __future__ import annotations

import click

from depends.cli.output import FORMATS, emit_graph, fail
from depends.config import load_settings
from depends.core.analyzer import DependencyAnalyzer
from depends.exceptions import DependsError


@click.command("project")
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--framework", "-f", default=None, help="Target framework (default: the project's first).")
@click.option(
    "--format", "output_format",
    type=click.Choice(FORMATS),
    default="summary",
    help="Output format (default: summary).",
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write output to a file.")
@click.pass_context
def project_command(
    ctx: click.Context,
    path: str,
    framework: str | None,
    output_format: str,
    output: str | None,
) -> None:
    """Build the dependency graph of a restored project or solution.

    Examples:

        depends project src/App/App.csproj

        depends project App.sln --format html -o deps.html
    """
    try:
        settings = load_settings(ctx.obj.get("config"))
        graph = DependencyAnalyzer(settings).analyze(path, framework)
    except DependsError as exc:
        fail(str(exc))

    emit_graph(graph, output_format, output)
