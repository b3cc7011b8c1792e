"""Data models shared by the build drivers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from src.ruby2d_build.config import BuildConfig


class BuildTarget(str, Enum):
    """Artifact families produced by the pipeline."""
    NATIVE = "native"
    WEB = "web"
    PACKAGE = "package"


@dataclass(frozen=True)
class ToolInvocation:
    """One call to an external tool.

    ``expected_outputs`` must exist and be non-empty once the tool returns.
    When ``stdout_path`` is set, the tool's standard output is written there
    (for tools that only emit on stdout).
    """
    stage: str
    executable: str
    args: tuple[str, ...] = ()
    expected_outputs: tuple[Path, ...] = ()
    stdout_path: Path | None = None

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.args]


@dataclass
class ToolResult:
    """Outcome of a completed tool invocation."""
    returncode: int
    stdout: str = ""
    stderr: str = ""


@dataclass
class BuildResult:
    """Final artifacts produced by one driver."""
    target: BuildTarget
    artifacts: list[Path] = field(default_factory=list)


@dataclass(frozen=True)
class LibraryInstall:
    """Fixed file layout of an installed library."""
    root: Path

    @property
    def lib_dir(self) -> Path:
        return self.root / "lib" / "ruby2d"

    def unit_path(self, unit: str) -> Path:
        return self.lib_dir / f"{unit}.rb"

    @property
    def version_file(self) -> Path:
        return self.lib_dir / "version.rb"

    @property
    def native_glue(self) -> Path:
        return self.root / "ext" / "ruby2d" / "ruby2d.c"

    @property
    def interop_shim(self) -> Path:
        return self.root / "ext" / "ruby2d" / "ruby2d-opal.rb"

    @property
    def simple2d_js(self) -> Path:
        return self.root / "assets" / "simple2d.js"

    @property
    def opal_js(self) -> Path:
        return self.root / "assets" / "opal.js"

    @property
    def html_template(self) -> Path:
        return self.root / "assets" / "template.html"

    @property
    def icon(self) -> Path:
        return self.root / "assets" / "app.icns"


@dataclass
class BuildContext:
    """Everything a driver needs, resolved once by the dispatcher."""
    config: BuildConfig
    library: LibraryInstall
    build_dir: Path

    def artifact(self, name: str) -> Path:
        """Return the path of a named file inside the build directory."""
        return self.build_dir / name
