"""Packaging: wrap the native binary into a macOS application bundle."""

from __future__ import annotations

import logging
import plistlib
from typing import Any

from src.ruby2d_build.artifacts import copy_artifact
from src.ruby2d_build.constants import (
    APP_BINARY,
    APP_BUNDLE,
    BUNDLE_ICON,
    BUNDLE_MACOS_DIR,
    BUNDLE_PLIST,
    BUNDLE_RESOURCES_DIR,
)
from src.ruby2d_build.exceptions import FilesystemError, MissingInputError
from src.ruby2d_build.models import BuildContext, BuildResult, BuildTarget
from src.shared.utils import ensure_dir

logger = logging.getLogger(__name__)


def bundle_manifest(executable: str = APP_BINARY, icon: str = BUNDLE_ICON) -> dict[str, Any]:
    """Return the ``Info.plist`` keys for the bundle."""
    return {
        "CFBundleExecutable": executable,
        "CFBundleIconFile": icon,
        "CFBundleInfoDictionaryVersion": "1.0",
        "CFBundlePackageType": "APPL",
        "CFBundleSignature": "????",
    }


def package_app(ctx: BuildContext) -> BuildResult:
    """Create ``<build_dir>/App.app`` around an existing ``<build_dir>/app``.

    The binary is checked before any directory is created.  A failure after
    that point leaves the partial bundle in place.
    """
    binary = ctx.artifact(APP_BINARY)
    if not binary.is_file():
        raise MissingInputError(
            binary, f"No native build found at {binary}; run 'build --native' first"
        )

    bundle = ctx.artifact(APP_BUNDLE)
    macos_dir = bundle / BUNDLE_MACOS_DIR
    resources_dir = bundle / BUNDLE_RESOURCES_DIR
    plist_path = bundle / BUNDLE_PLIST
    try:
        ensure_dir(macos_dir)
        ensure_dir(resources_dir)
    except OSError as exc:
        raise FilesystemError(bundle, exc.strerror or str(exc)) from exc

    copy_artifact(ctx.library.icon, resources_dir / BUNDLE_ICON)

    try:
        with open(plist_path, "wb") as f:
            plistlib.dump(bundle_manifest(), f)
    except OSError as exc:
        raise FilesystemError(plist_path, exc.strerror or str(exc)) from exc

    copy_artifact(binary, macos_dir / APP_BINARY)

    logger.info("App written to %s", bundle)
    return BuildResult(target=BuildTarget.PACKAGE, artifacts=[bundle])
