"""Tests for the build error hierarchy."""

from __future__ import annotations

import pytest

from src.ruby2d_build.exceptions import (
    BuildError,
    ConfigurationError,
    FilesystemError,
    ManifestOrderError,
    MissingInputError,
    MissingToolError,
    ToolFailedError,
)


@pytest.mark.parametrize(
    "cls",
    [ConfigurationError, FilesystemError, ManifestOrderError, MissingInputError,
     MissingToolError, ToolFailedError],
)
def test_all_errors_are_build_errors(cls):
    assert issubclass(cls, BuildError)


class TestMessages:
    def test_missing_input_default(self):
        err = MissingInputError("game.rb")
        assert err.path == "game.rb"
        assert str(err) == "File not found: game.rb"

    def test_missing_tool(self):
        err = MissingToolError("mrbc")
        assert err.tool == "mrbc"
        assert "mrbc" in str(err)

    def test_tool_failed_includes_exit_and_stderr(self):
        err = ToolFailedError("link", ["cc", "app.c"], 1, "undefined reference\n")
        assert err.command == ["cc", "app.c"]
        assert str(err) == "Stage 'link' failed (exit 1):\nundefined reference"

    def test_tool_failed_custom_message(self):
        err = ToolFailedError("link", message="no output")
        assert str(err) == "no output"
        assert err.returncode is None

    def test_filesystem_error(self):
        err = FilesystemError("build/app", "Permission denied")
        assert str(err) == "build/app: Permission denied"

    def test_manifest_order_lists_violations(self):
        err = ManifestOrderError(["a references B", "c references D"])
        assert err.violations == ["a references B", "c references D"]
        assert "a references B" in str(err)
