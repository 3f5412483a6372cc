"""depends CLI -- Dependency graphs for .NET projects and packages.

Entry point for the ``depends`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    project  -- Graph a restored project or solution.
    package  -- Resolve and graph a published package.

Usage::

    depends project src/App/App.csproj
    depends project App.sln --format dot -o app.dot
    depends -v package Newtonsoft.Json 12.0.3 --framework net6.0
    depends --config depends.yaml package Serilog 2.10.0 --format html -o serilog.html
"""

from __future__ import annotations

import logging

import click
from rich.logging import RichHandler

from depends import __version__
from depends.cli.output import error_console
from depends.cli.package_cmd import package_command
from depends.cli.project_cmd import project_command

_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _configure_logging(verbosity: int) -> None:
    """Send log records to stderr: WARNING, INFO with -v, DEBUG with -vv."""
    logging.basicConfig(
        level=_LEVELS.get(verbosity, logging.DEBUG),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING if verbosity < 2 else logging.DEBUG)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Settings file (default: $DEPENDS_CONFIG or ./depends.yaml).",
)
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv).")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: int) -> None:
    """depends: dependency graphs for .NET projects and NuGet packages.

    Builds the graph of projects, packages and assemblies a project or
    package depends on, and prints it as a summary, Graphviz DOT, JSON or
    an interactive HTML browser.
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config_path


cli.add_command(project_command)
cli.add_command(package_command)
