"""Removal of intermediate (and optionally final) build files."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from src.ruby2d_build.constants import (
    APP_BUNDLE,
    FINAL_ARTIFACTS,
    INTERMEDIATE_PATTERNS,
)
from src.ruby2d_build.exceptions import FilesystemError

logger = logging.getLogger(__name__)


def intermediate_files(build_dir: Path) -> list[Path]:
    """Return the intermediate files currently present in *build_dir*."""
    found: list[Path] = []
    for pattern in INTERMEDIATE_PATTERNS:
        found.extend(p for p in sorted(build_dir.glob(pattern)) if p.is_file())
    return found


def clean_up(build_dir: Path, include_final: bool = False) -> list[Path]:
    """Delete intermediates from *build_dir*; return the removed paths.

    Final artifacts are kept unless *include_final* is set, in which case
    the binary, the web bundle, the HTML page and the app bundle go too.
    """
    build_dir = Path(build_dir)
    if not build_dir.is_dir():
        return []

    targets = intermediate_files(build_dir)
    if include_final:
        targets.extend(p for p in (build_dir / name for name in FINAL_ARTIFACTS) if p.is_file())

    removed: list[Path] = []
    for path in targets:
        try:
            path.unlink()
        except OSError as exc:
            raise FilesystemError(path, exc.strerror or str(exc)) from exc
        removed.append(path)

    bundle = build_dir / APP_BUNDLE
    if include_final and bundle.is_dir():
        try:
            shutil.rmtree(bundle)
        except OSError as exc:
            raise FilesystemError(bundle, exc.strerror or str(exc)) from exc
        removed.append(bundle)

    logger.info("Removed %d build files from %s", len(removed), build_dir)
    return removed
