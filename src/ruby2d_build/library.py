"""Locating the installed library and reading its version."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from src.ruby2d_build.artifacts import read_source
from src.ruby2d_build.config import BuildConfig
from src.ruby2d_build.constants import LIBRARY_NAME, STAGE_LOCATE_LIBRARY
from src.ruby2d_build.exceptions import MissingInputError, ToolFailedError
from src.ruby2d_build.models import LibraryInstall, ToolInvocation
from src.ruby2d_build.toolchain import run_tool
from src.shared.config import SharedConfig

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"""VERSION\s*=\s*['"]([^'"]+)['"]""")


def resolve_library_root(config: BuildConfig, settings: SharedConfig) -> LibraryInstall:
    """Find the library installation root.

    Resolution order: ``library.root`` in the YAML config, the
    ``RUBY2D_GEM_DIR`` environment variable, then ``gem which ruby2d``.
    """
    explicit = config.library.root or settings.library_root
    if explicit:
        root = Path(explicit).expanduser()
        source = "config" if config.library.root else "environment"
    else:
        result = run_tool(
            ToolInvocation(
                stage=STAGE_LOCATE_LIBRARY,
                executable=config.toolchain.gem_command,
                args=("which", LIBRARY_NAME),
            )
        )
        lines = [line for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            raise ToolFailedError(
                STAGE_LOCATE_LIBRARY,
                message=f"'{config.toolchain.gem_command} which {LIBRARY_NAME}' returned nothing",
            )
        # <root>/lib/ruby2d.rb
        root = Path(lines[-1].strip()).parent.parent
        source = "gem"

    if not root.is_dir():
        raise MissingInputError(root, f"Library installation not found at {root}")

    logger.info("Using library at %s (from %s)", root, source)
    return LibraryInstall(root=root)


def library_version(library: LibraryInstall) -> str:
    """Return the ``VERSION`` constant declared in the library's version file."""
    path = library.version_file
    if not path.is_file():
        raise MissingInputError(path)
    match = _VERSION_RE.search(read_source(path))
    if match is None:
        raise MissingInputError(path, f"No VERSION constant in {path}")
    return match.group(1)
