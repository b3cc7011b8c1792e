"""Library assembly: concatenate the library units into one source bundle.

The bundle is the concatenation of ``lib/ruby2d/<unit>.rb`` in manifest
order, each followed by a blank line, then a fixed trailer that brings the
library's interface into the top-level scope.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Sequence

from src.ruby2d_build.artifacts import read_source
from src.ruby2d_build.constants import (
    LIB_RB,
    LIBRARY_TRAILER,
    LIBRARY_UNITS,
    SECTION_SEPARATOR,
)
from src.ruby2d_build.exceptions import (
    FilesystemError,
    ManifestOrderError,
    MissingInputError,
)
from src.ruby2d_build.models import LibraryInstall
from src.shared.utils import atomic_write_text, ensure_dir

logger = logging.getLogger(__name__)

_DEFINITION_RE = re.compile(r"^\s*(?:class|module)\s+([A-Z]\w*(?:::[A-Z]\w*)*)", re.MULTILINE)
_SUPERCLASS_RE = re.compile(r"^\s*class\s+[A-Z][\w:]*\s*<\s*([A-Z]\w*(?:::[A-Z]\w*)*)", re.MULTILINE)
_MIXIN_RE = re.compile(r"^\s*(?:include|extend|prepend)\s+([A-Z]\w*(?:::[A-Z]\w*)*)", re.MULTILINE)


def _read_units(library: LibraryInstall, units: Sequence[str]) -> list[str]:
    sources = []
    for unit in units:
        path = library.unit_path(unit)
        if not path.is_file():
            raise MissingInputError(path, f"Missing library unit '{unit}': {path}")
        sources.append(read_source(path))
    return sources


def _short_name(constant: str) -> str:
    return constant.rsplit("::", 1)[-1]


def check_manifest_order(
    library: LibraryInstall, units: Sequence[str] = LIBRARY_UNITS
) -> list[str]:
    """Scan the units for load-time references to later units.

    A unit "defines" every class or module it opens that no earlier unit
    opened.  Superclasses and mixins are resolved when the file loads, so
    referencing a constant first defined further down the manifest breaks
    the bundle.

    Returns:
        Human-readable violations; empty when the order is sound.
    """
    sources = _read_units(library, units)

    defined_in: dict[str, int] = {}
    for index, source in enumerate(sources):
        for constant in _DEFINITION_RE.findall(source):
            defined_in.setdefault(_short_name(constant), index)

    violations: list[str] = []
    for index, source in enumerate(sources):
        references = _SUPERCLASS_RE.findall(source) + _MIXIN_RE.findall(source)
        for constant in references:
            owner = defined_in.get(_short_name(constant))
            if owner is not None and owner > index:
                violations.append(
                    f"{units[index]} references {constant} defined later in {units[owner]}"
                )
    return violations


def render_library(
    library: LibraryInstall, units: Sequence[str] = LIBRARY_UNITS
) -> str:
    """Return the library bundle text for *units*."""
    sources = _read_units(library, units)
    return "".join(source + SECTION_SEPARATOR for source in sources) + LIBRARY_TRAILER


def assemble_library(
    library: LibraryInstall,
    build_dir: Path,
    units: Sequence[str] = LIBRARY_UNITS,
    strict: bool = False,
) -> Path:
    """Write the library bundle to ``<build_dir>/lib.rb``.

    Args:
        library: Installed library layout.
        build_dir: Output directory, created if absent.
        units: Manifest in dependency order.
        strict: Raise :class:`ManifestOrderError` on order violations
            instead of logging them.

    Returns:
        Path of the written bundle.
    """
    violations = check_manifest_order(library, units)
    if violations:
        if strict:
            raise ManifestOrderError(violations)
        for violation in violations:
            logger.warning("Manifest order: %s", violation)

    bundle = render_library(library, units)
    output = Path(build_dir) / LIB_RB
    try:
        ensure_dir(build_dir)
        atomic_write_text(output, bundle)
    except OSError as exc:
        raise FilesystemError(output, exc.strerror or str(exc)) from exc

    logger.info("Assembled %d library units into %s", len(units), output)
    return output
