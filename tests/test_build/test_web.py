"""Tests for src.ruby2d_build.web."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.ruby2d_build.exceptions import (
    FilesystemError,
    MissingInputError,
    MissingToolError,
    ToolFailedError,
)
from src.ruby2d_build.models import BuildContext, BuildTarget
from src.ruby2d_build.web import build_web


class TestBuildWeb:
    def test_produces_bundle_and_page(self, build_ctx: BuildContext, app_source: Path, toolchain):
        result = build_web(app_source, build_ctx)
        assert result.target is BuildTarget.WEB
        assert result.artifacts == [Path("build/app.js"), Path("build/app.html")]

    def test_three_transpiles_without_runtime(self, build_ctx: BuildContext, app_source: Path, toolchain, library):
        build_web(app_source, build_ctx)
        assert toolchain.tools_called() == ["opal", "opal", "opal"]
        for call in toolchain.calls:
            assert call[1:3] == ["--compile", "--no-opal"]
        assert [call[-1] for call in toolchain.calls] == [
            "build/lib.rb",
            str(library.interop_shim),
            "build/src.rb",
        ]

    def test_bundle_order(self, build_ctx: BuildContext, app_source: Path, toolchain):
        build_web(app_source, build_ctx)
        bundle = Path("build/app.js").read_text(encoding="utf-8")
        markers = [
            "// simple2d.js",
            "// opal.js",
            "/* opal: lib.rb */",
            "/* opal: ruby2d-opal.rb */",
            "/* opal: src.rb */",
        ]
        positions = [bundle.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_template_copied_unmodified(self, build_ctx: BuildContext, app_source: Path, toolchain, library):
        build_web(app_source, build_ctx)
        assert Path("build/app.html").read_bytes() == library.html_template.read_bytes()

    def test_intermediates_written(self, build_ctx: BuildContext, app_source: Path, toolchain):
        build_web(app_source, build_ctx)
        for name in ("lib.rb", "lib.js", "ruby2d-opal.js", "src.rb", "src.js"):
            assert Path("build", name).is_file(), name

    def test_transpile_failure_is_fatal(self, build_ctx: BuildContext, app_source: Path, toolchain):
        toolchain.failing.add("opal")
        with pytest.raises(ToolFailedError) as exc_info:
            build_web(app_source, build_ctx)
        assert exc_info.value.stage == "transpile_lib"
        assert "opal: boom" in exc_info.value.stderr
        assert not Path("build/app.js").exists()

    def test_missing_transpiler(self, build_ctx: BuildContext, app_source: Path, toolchain):
        toolchain.missing.add("opal")
        with pytest.raises(MissingToolError):
            build_web(app_source, build_ctx)
        assert not Path("build").exists()

    def test_non_utf8_source_touches_nothing(self, build_ctx: BuildContext, workdir: Path, toolchain):
        source = workdir / "latin.rb"
        source.write_bytes(b"puts 'caf\xe9'\n")
        with pytest.raises(FilesystemError, match="UTF-8"):
            build_web(source, build_ctx)
        assert not Path("build").exists()
        assert toolchain.calls == []

    def test_missing_shim(self, build_ctx: BuildContext, app_source: Path, toolchain, library):
        library.interop_shim.unlink()
        with pytest.raises(MissingInputError):
            build_web(app_source, build_ctx)
