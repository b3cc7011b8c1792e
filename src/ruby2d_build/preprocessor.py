"""Strip the library's own import directive from an application source."""

from __future__ import annotations

import re
from pathlib import Path

from src.ruby2d_build.artifacts import read_source
from src.ruby2d_build.constants import LIBRARY_NAME
from src.ruby2d_build.exceptions import MissingInputError

# require 'ruby2d' / require "ruby2d" / require('ruby2d')
LIBRARY_IMPORT_RE = re.compile(
    r"""\brequire\s*\(?\s*(['"])""" + re.escape(LIBRARY_NAME) + r"""\1"""
)


def strip_library_import(text: str) -> str:
    """Return *text* without the lines that import the library itself.

    Every other line, including its line ending, is kept in order.
    """
    return "".join(
        line
        for line in text.splitlines(keepends=True)
        if not LIBRARY_IMPORT_RE.search(line)
    )


def preprocess_source(path: Path | str) -> str:
    """Read an application source file and strip the library import."""
    path = Path(path)
    if not path.is_file():
        raise MissingInputError(path)
    return strip_library_import(read_source(path))

