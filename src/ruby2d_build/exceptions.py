"""Custom exceptions for the build pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BuildError(Exception):
    """Base exception for all build errors."""

    pass


class ConfigurationError(BuildError):
    """Raised for an unreadable or malformed configuration file."""

    pass


class MissingInputError(BuildError):
    """Raised when a required input file does not exist."""

    def __init__(self, path: Path | str, message: str = "") -> None:
        self.path = str(path)
        super().__init__(message or f"File not found: {self.path}")


class MissingToolError(BuildError):
    """Raised when a required external executable is not on PATH."""

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"Required tool '{tool}' not found on PATH")


class ToolFailedError(BuildError):
    """Raised when an external tool exits non-zero or leaves no output."""

    def __init__(
        self,
        stage: str,
        command: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
        message: str = "",
    ) -> None:
        self.stage = stage
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        if not message:
            message = f"Stage '{stage}' failed"
            if returncode is not None:
                message += f" (exit {returncode})"
            if stderr.strip():
                message += f":\n{stderr.strip()}"
        super().__init__(message)


class FilesystemError(BuildError):
    """Raised when reading, writing, copying or removing a build file fails."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class ManifestOrderError(BuildError):
    """Raised when a library unit depends on a unit assembled after it."""

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = list(violations)
        super().__init__(
            "Library manifest order is broken:\n  " + "\n  ".join(self.violations)
        )
