"""Shared test fixtures for the ruby2d-build test suite."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from src.ruby2d_build.config import BuildConfig
from src.ruby2d_build.constants import LIBRARY_UNITS
from src.ruby2d_build.models import BuildContext, LibraryInstall

# Load-time superclasses used by the fake library units.
_SUPERCLASSES = {
    "square": "Rectangle",
    "rectangle": "Quad",
}


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by the CLI so they never outlive a test."""
    yield
    logging.getLogger("src").handlers.clear()


def unit_source(unit: str) -> str:
    """Return a small Ruby source defining one class for *unit*."""
    name = unit.capitalize()
    superclass = _SUPERCLASSES.get(unit)
    header = f"class {name} < {superclass}" if superclass else f"class {name}"
    return f"# {unit}.rb\nmodule Ruby2D\n  {header}\n  end\nend\n"


@pytest.fixture
def library_root(tmp_path: Path) -> Path:
    """Create a fake library installation tree."""
    root = tmp_path / "gems" / "ruby2d-0.9.4"
    lib_dir = root / "lib" / "ruby2d"
    lib_dir.mkdir(parents=True)
    for unit in LIBRARY_UNITS:
        (lib_dir / f"{unit}.rb").write_text(unit_source(unit), encoding="utf-8")
    (lib_dir / "version.rb").write_text(
        "module Ruby2D\n  VERSION = '0.9.4'\nend\n", encoding="utf-8"
    )
    (root / "lib" / "ruby2d.rb").write_text("# entry\n", encoding="utf-8")

    ext_dir = root / "ext" / "ruby2d"
    ext_dir.mkdir(parents=True)
    (ext_dir / "ruby2d.c").write_text("int main(void) { return 0; }\n", encoding="utf-8")
    (ext_dir / "ruby2d-opal.rb").write_text("# opal shim\n", encoding="utf-8")

    assets = root / "assets"
    assets.mkdir()
    (assets / "simple2d.js").write_text("// simple2d.js\n", encoding="utf-8")
    (assets / "opal.js").write_text("// opal.js\n", encoding="utf-8")
    (assets / "template.html").write_text(
        "<html><body><script src=\"app.js\"></script></body></html>\n",
        encoding="utf-8",
    )
    (assets / "app.icns").write_bytes(b"icns\x00\x01")
    return root


@pytest.fixture
def library(library_root: Path) -> LibraryInstall:
    return LibraryInstall(root=library_root)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def app_source(workdir: Path) -> Path:
    """A minimal application that imports the library."""
    source = workdir / "hello.rb"
    source.write_text(
        "require 'ruby2d'\n\nset title: 'Hello'\n\nShow\n", encoding="utf-8"
    )
    return source


@pytest.fixture
def build_ctx(workdir: Path, library: LibraryInstall) -> BuildContext:
    return BuildContext(config=BuildConfig(), library=library, build_dir=Path("build"))
