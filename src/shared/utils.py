"""Shared filesystem helpers."""
from __future__ import annotations

import os
from pathlib import Path


def ensure_dir(path: Path | str) -> Path:
    """Ensure a directory exists, creating parent directories as needed.

    Args:
        path: Directory path to create.

    Returns:
        The Path object for the directory.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_text(path: Path | str, text: str) -> None:
    """Write text atomically by writing to a temp file then renaming.

    Args:
        path: Target file path.
        text: Content to write.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(str(tmp_path), str(path))
    except BaseException:
        # Clean up temp file on any failure
        if tmp_path.exists():
            tmp_path.unlink()
        raise


def read_text(path: Path | str) -> str:
    """Read a UTF-8 text file without newline translation."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()
