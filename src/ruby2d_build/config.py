"""Configuration dataclasses and loader for ruby2d-build."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.ruby2d_build.constants import DEFAULT_BUILD_DIR
from src.ruby2d_build.exceptions import ConfigurationError


@dataclass
class ToolchainConfig:
    """Executable names for the external tools."""

    bytecode_compiler: str = "mrbc"
    transpiler: str = "opal"
    c_compiler: str = "cc"
    link_flags_command: list[str] = field(
        default_factory=lambda: ["simple2d", "--libs"]
    )
    runtime_libs: list[str] = field(default_factory=lambda: ["-lmruby"])
    gem_command: str = "gem"


@dataclass
class LibraryConfig:
    """Where the library is installed and how strictly to assemble it."""

    root: str = ""
    strict_order: bool = False


@dataclass
class BuildConfig:
    """Top-level configuration composing all sub-configs."""

    toolchain: ToolchainConfig = field(default_factory=ToolchainConfig)
    library: LibraryConfig = field(default_factory=LibraryConfig)
    build_dir: str = DEFAULT_BUILD_DIR


def _pick(data: dict[str, Any], cls: type) -> dict[str, Any]:
    """Filter *data* to only keys accepted by *cls*."""
    valid = {f.name for f in cls.__dataclass_fields__.values()}
    return {k: v for k, v in data.items() if k in valid}


def load_build_config(path: Path | str | None = None) -> BuildConfig:
    """Load build configuration from a YAML file.

    Missing sections fall back to defaults.  Unknown keys are silently
    ignored so that forward-compatible config files work.

    Args:
        path: Path to config YAML.  If ``None`` or the file does not
              exist, returns full defaults.

    Returns:
        Populated configuration dataclass.

    Raises:
        ConfigurationError: If the file is not valid YAML or any section
            is not a mapping.
    """
    if path is None:
        return BuildConfig()

    path = Path(path)
    if not path.exists():
        return BuildConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")

    toolchain_raw = raw.get("toolchain") or {}
    library_raw = raw.get("library") or {}
    for name, section in (("toolchain", toolchain_raw), ("library", library_raw)):
        if not isinstance(section, dict):
            raise ConfigurationError(f"{path}: '{name}' must be a mapping")

    top_level = _pick(raw, BuildConfig)
    for key in ("toolchain", "library"):
        top_level.pop(key, None)

    return BuildConfig(
        toolchain=ToolchainConfig(**_pick(toolchain_raw, ToolchainConfig)),
        library=LibraryConfig(**_pick(library_raw, LibraryConfig)),
        **top_level,
    )
