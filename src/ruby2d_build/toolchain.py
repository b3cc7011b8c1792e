"""Synchronous invocation of external tools.

Every external call goes through :func:`run_tool`, which checks the exit
status *and* that each expected output file exists and is non-empty.
Nothing is retried.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import Sequence

from src.ruby2d_build.exceptions import (
    FilesystemError,
    MissingToolError,
    ToolFailedError,
)
from src.ruby2d_build.models import ToolInvocation, ToolResult
from src.shared.utils import atomic_write_text

logger = logging.getLogger(__name__)


def require_tools(*names: str) -> None:
    """Raise :class:`MissingToolError` for the first name not on PATH."""
    for name in names:
        if shutil.which(name) is None:
            logger.info("Required tool not found: %s", name)
            raise MissingToolError(name)


def run_tool(invocation: ToolInvocation) -> ToolResult:
    """Run *invocation* to completion and verify its outputs.

    Raises:
        MissingToolError: The executable could not be started.
        ToolFailedError: Non-zero exit, or an expected output is missing
            or empty.
    """
    command = invocation.command
    logger.info("Running stage %s", invocation.stage)
    logger.debug("Command: %s", shlex.join(command))

    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as exc:
        raise MissingToolError(invocation.executable) from exc
    except OSError as exc:
        raise ToolFailedError(
            invocation.stage,
            command=command,
            message=f"Could not start {invocation.executable}: {exc.strerror or exc}",
        ) from exc

    result = ToolResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )

    if result.returncode != 0:
        logger.info(
            "Stage %s failed with exit %d", invocation.stage, result.returncode
        )
        raise ToolFailedError(
            invocation.stage,
            command=command,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    if invocation.stdout_path is not None:
        try:
            atomic_write_text(invocation.stdout_path, result.stdout)
        except OSError as exc:
            raise FilesystemError(invocation.stdout_path, exc.strerror or str(exc)) from exc

    for output in invocation.expected_outputs:
        if not output.is_file() or output.stat().st_size == 0:
            logger.info("Stage %s produced no %s", invocation.stage, output)
            raise ToolFailedError(
                invocation.stage,
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
                message=f"Stage '{invocation.stage}' did not produce {output}",
            )

    return result


def link_flags(stage: str, command: Sequence[str]) -> list[str]:
    """Run a link-flags query (e.g. ``simple2d --libs``) and split its output."""
    if not command:
        return []
    result = run_tool(
        ToolInvocation(stage=stage, executable=command[0], args=tuple(command[1:]))
    )
    flags = shlex.split(result.stdout)
    if not flags:
        raise ToolFailedError(
            stage,
            command=list(command),
            returncode=result.returncode,
            stderr=result.stderr,
            message=f"Stage '{stage}' returned no link flags",
        )
    return flags
