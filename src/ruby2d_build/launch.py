"""Run a finished build."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import typer

from src.ruby2d_build.constants import APP_BINARY, APP_HTML
from src.ruby2d_build.exceptions import FilesystemError, MissingInputError

logger = logging.getLogger(__name__)


def launch_native(build_dir: Path) -> int:
    """Run ``<build_dir>/app`` in the foreground and return its exit status."""
    binary = Path(build_dir) / APP_BINARY
    if not binary.is_file():
        raise MissingInputError(binary, f"No native build found at {binary}")
    logger.info("Launching %s", binary)
    try:
        return subprocess.run([str(binary.resolve())]).returncode
    except PermissionError as exc:
        raise FilesystemError(binary, "not executable") from exc


def launch_web(build_dir: Path) -> int:
    """Open ``<build_dir>/app.html`` with the default handler."""
    page = Path(build_dir) / APP_HTML
    if not page.is_file():
        raise MissingInputError(page, f"No web build found at {page}")
    logger.info("Opening %s", page)
    return typer.launch(str(page.resolve()))
