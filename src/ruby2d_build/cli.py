"""Command-line entry point for ruby2d-build.

:func:`main` dispatches on the first token: ``build``, ``package``,
``launch``, ``clean`` and ``-v``/``--version`` go to the Typer app; any
other input prints the usage text and exits cleanly.  ``--debug`` is
accepted anywhere on the command line; on ``build`` it keeps the
intermediate files and compiles the bytecode with debug information.
Unknown options or surplus arguments on a command also print the usage text.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import typer

from src.ruby2d_build import __version__
from src.ruby2d_build.cleanup import clean_up
from src.ruby2d_build.config import BuildConfig, load_build_config
from src.ruby2d_build.display import (
    print_build_summary,
    print_error_panel,
    print_success,
    print_usage,
    print_version,
)
from src.ruby2d_build.exceptions import BuildError, MissingInputError
from src.ruby2d_build.launch import launch_native, launch_web
from src.ruby2d_build.library import library_version, resolve_library_root
from src.ruby2d_build.models import BuildContext, BuildResult
from src.ruby2d_build.native import build_native
from src.ruby2d_build.packaging import package_app
from src.ruby2d_build.web import build_web
from src.shared.config import SharedConfig
from src.shared.logging import new_build_id, setup_logging

logger = logging.getLogger(__name__)

PROG_NAME = "ruby2d-build"

_COMMANDS = {"build", "package", "launch", "clean", "-v", "--version", "--help"}

# Unknown options and surplus arguments reach the command instead of raising a
# Click usage error, so each command can answer with the usage text.
_LENIENT = {"ignore_unknown_options": True, "allow_extra_args": True}

app = typer.Typer(
    name=PROG_NAME,
    help="Build Ruby 2D applications for native and web targets.",
    add_completion=False,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Render any :class:`BuildError` and exit with status 1."""
    try:
        yield
    except BuildError as exc:
        logger.info("Command failed: %s", exc)
        print_error_panel(exc)
        raise typer.Exit(code=1) from exc


def _reject_extra_args(context: typer.Context) -> None:
    if context.args:
        logger.info("Unexpected arguments: %s", " ".join(context.args))
        print_usage()
        raise typer.Exit()


def _load_config() -> tuple[SharedConfig, BuildConfig]:
    settings = SharedConfig()
    return settings, load_build_config(settings.config_path)


def _load_context() -> BuildContext:
    settings, config = _load_config()
    library = resolve_library_root(config, settings)
    return BuildContext(config=config, library=library, build_dir=Path(config.build_dir))


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        settings, config = _load_config()
        lib_version = library_version(resolve_library_root(config, settings))
    except BuildError as exc:
        logger.info("Library version unavailable: %s", exc)
        lib_version = None
    print_version(__version__, lib_version)
    raise typer.Exit()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Print the installed version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    setup_logging(PROG_NAME, SharedConfig().log_level)
    new_build_id()


@app.command(context_settings=_LENIENT)
def build(
    files: Optional[List[str]] = typer.Argument(None, metavar="FILE", show_default=False),
    native: bool = typer.Option(False, "--native", help="Build the native version only."),
    web: bool = typer.Option(False, "--web", help="Build the web version only."),
    debug: bool = typer.Option(
        False, "--debug", help="Keep intermediate files and compile with debug info."
    ),
) -> None:
    """Build a Ruby source file."""
    if not files or len(files) != 1 or files[0].startswith("-"):
        print_usage()
        raise typer.Exit()

    source = Path(files[0])
    if not native and not web:
        native = web = True

    results: list[BuildResult] = []
    with _handle_errors():
        if not source.is_file():
            raise MissingInputError(source)
        ctx = _load_context()
        if native:
            results.append(build_native(source, ctx, debug=debug))
            print_success(f"Native app created at `{results[-1].artifacts[0]}`")
        if web:
            results.append(build_web(source, ctx))
            print_success(
                f"Web app created at `{results[-1].artifacts[0]}`\n"
                f"  Run by opening `{results[-1].artifacts[1]}`"
            )
        removed = [] if debug else clean_up(ctx.build_dir)

    print_build_summary(results, removed)


@app.command(context_settings=_LENIENT)
def package(context: typer.Context) -> None:
    """Package the native build as a macOS application."""
    _reject_extra_args(context)
    with _handle_errors():
        ctx = _load_context()
        result = package_app(ctx)
    print_success(f"App written to `{result.artifacts[0]}`")


@app.command(context_settings=_LENIENT)
def launch(
    context: typer.Context,
    native: bool = typer.Option(False, "--native", help="Run the native build (default)."),
    web: bool = typer.Option(False, "--web", help="Open the web build."),
) -> None:
    """Run the last build."""
    _reject_extra_args(context)
    with _handle_errors():
        _, config = _load_config()
        build_dir = Path(config.build_dir)
        code = launch_web(build_dir) if web and not native else launch_native(build_dir)
    if code:
        raise typer.Exit(code=code)


@app.command(context_settings=_LENIENT)
def clean(
    context: typer.Context,
    all_: bool = typer.Option(False, "--all", help="Also remove final artifacts."),
) -> None:
    """Remove intermediate build files."""
    _reject_extra_args(context)
    with _handle_errors():
        _, config = _load_config()
        removed = clean_up(Path(config.build_dir), include_final=all_)
    print_success(f"Removed {len(removed)} files from `{config.build_dir}`")


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """Console-script entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    debug = "--debug" in args
    args = [arg for arg in args if arg != "--debug"]

    if not args or args[0] not in _COMMANDS:
        print_usage()
        return

    if debug and args[0] == "build":
        args.insert(1, "--debug")

    app(args=args, prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
