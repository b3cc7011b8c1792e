"""Merging and copying build artifacts."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Sequence

from src.ruby2d_build.constants import SECTION_SEPARATOR
from src.ruby2d_build.exceptions import FilesystemError, MissingInputError
from src.shared.utils import atomic_write_text, read_text

logger = logging.getLogger(__name__)


def read_source(path: Path) -> str:
    """Read a UTF-8 build input, reporting failures as :class:`FilesystemError`."""
    try:
        return read_text(path)
    except UnicodeDecodeError as exc:
        raise FilesystemError(
            path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})"
        ) from exc
    except OSError as exc:
        raise FilesystemError(path, exc.strerror or str(exc)) from exc


def write_artifact(destination: Path, text: str) -> Path:
    """Write *text* to *destination*, reporting failures as :class:`FilesystemError`."""
    try:
        atomic_write_text(destination, text)
    except OSError as exc:
        raise FilesystemError(destination, exc.strerror or str(exc)) from exc
    return destination


def concatenate(
    destination: Path,
    sources: Sequence[Path],
    header: str | None = None,
) -> Path:
    """Join *sources* (and an optional leading *header* line) into *destination*.

    Parts are separated by a blank line, in the given order.
    """
    parts: list[str] = [] if header is None else [header]
    for source in sources:
        if not source.is_file():
            raise MissingInputError(source)
        parts.append(read_source(source))

    write_artifact(destination, SECTION_SEPARATOR.join(parts))

    logger.info("Merged %d parts into %s", len(parts), destination)
    return destination


def copy_artifact(source: Path, destination: Path) -> Path:
    """Copy *source* to *destination*, keeping permission bits."""
    if not source.is_file():
        raise MissingInputError(source)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)
    except OSError as exc:
        raise FilesystemError(destination, exc.strerror or str(exc)) from exc
    logger.info("Copied %s to %s", source, destination)
    return destination
