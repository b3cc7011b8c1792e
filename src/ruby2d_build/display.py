"""Rich-based terminal output for the CLI.

Uses a module-level :class:`~rich.console.Console` singleton so output is
consistent across commands and easy to capture in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from src.ruby2d_build.models import BuildResult

_console = Console(highlight=False)

USAGE = """\
Usage: ruby2d-build <command> <options>
                    [-v|--version]

Summary of commands and options:
  build       Build a Ruby source file
                <file>          Build native and web versions
                --native <file> Build the native version only
                --web <file>    Build the web version only
                --debug         Keep the intermediate build files
  package     Package the native build as a macOS application
  launch      Run the last build
                --native        Run build/app (default)
                --web           Open build/app.html
  clean       Remove intermediate build files
                --all           Also remove final artifacts
  -v|--version  Print the installed version
"""


def print_usage() -> None:
    _console.print(USAGE, end="", markup=False)


def print_version(tool_version: str, library_version: str | None = None) -> None:
    if library_version:
        _console.print(f"Ruby 2D {library_version}")
    _console.print(f"ruby2d-build {tool_version}")


def print_success(message: str) -> None:
    _console.print(Text(message, style="bold green"))


def print_error_panel(error: str | Exception) -> None:
    """Print an error message in a red Rich panel."""
    _console.print(
        Panel(
            Text(str(error), style="bold white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            expand=False,
        )
    )


def print_build_summary(results: Sequence[BuildResult], removed: Sequence[Path] = ()) -> None:
    """Print a table of the artifacts produced by this run."""
    if not results:
        return
    table = Table(title="Build Artifacts", show_header=True, header_style="bold magenta")
    table.add_column("Target", style="cyan", min_width=8)
    table.add_column("Artifact", min_width=20)

    for result in results:
        for artifact in result.artifacts:
            table.add_row(result.target.value, str(artifact))

    _console.print(table)
    if removed:
        _console.print(f"[dim]Removed {len(removed)} intermediate files.[/dim]")
