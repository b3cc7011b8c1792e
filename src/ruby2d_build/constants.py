"""Fixed names for the build pipeline: library manifest, artifacts, symbols."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Library manifest
# ---------------------------------------------------------------------------
# Assembly order of ``lib/ruby2d/<unit>.rb``.  Each unit may only depend at
# load time on units listed before it.
LIBRARY_UNITS: tuple[str, ...] = (
    "exceptions",
    "renderable",
    "color",
    "window",
    "dsl",
    "entity",
    "controller",
    "vertices",
    "line",
    "quad",
    "rectangle",
    "square",
    "triangle",
    "circle",
    "pixel",
    "image",
    "sprite",
    "tileset",
    "font",
    "text",
    "sound",
    "music",
    "texture",
)

LIBRARY_NAME = "ruby2d"

# Activates the library's public interface in the top-level scope.
LIBRARY_TRAILER = "\ninclude Ruby2D\nextend  Ruby2D::DSL\n"

# ---------------------------------------------------------------------------
# Build directory layout
# ---------------------------------------------------------------------------
DEFAULT_BUILD_DIR = "build"

LIB_RB = "lib.rb"
LIB_C = "lib.c"
LIB_JS = "lib.js"
SRC_RB = "src.rb"
SRC_C = "src.c"
SRC_JS = "src.js"
SHIM_RB = "ruby2d-opal.rb"
SHIM_JS = "ruby2d-opal.js"
APP_C = "app.c"

APP_BINARY = "app"
APP_JS = "app.js"
APP_HTML = "app.html"

APP_BUNDLE = "App.app"
BUNDLE_MACOS_DIR = "Contents/MacOS"
BUNDLE_RESOURCES_DIR = "Contents/Resources"
BUNDLE_PLIST = "Contents/Info.plist"
BUNDLE_ICON = "app.icns"

# Intermediate files removed by cleanup, as glob patterns relative to the
# build directory.
INTERMEDIATE_PATTERNS: tuple[str, ...] = (
    "src.rb",
    "src.c",
    "src.js",
    "lib.rb",
    "lib.c",
    "lib.js",
    "ruby2d-opal.rb",
    "ruby2d-opal.js",
    "app.c",
)

FINAL_ARTIFACTS: tuple[str, ...] = (APP_BINARY, APP_JS, APP_HTML)

# ---------------------------------------------------------------------------
# Native build
# ---------------------------------------------------------------------------
# Symbol names of the two embedded bytecode blobs.  The runtime glue source
# loads both by name, so they must be distinct.
NATIVE_LIB_SYMBOL = "ruby2d_lib"
NATIVE_APP_SYMBOL = "ruby2d_app"

NATIVE_FEATURE_FLAG = "#define MRUBY 1"

# Separator between concatenated units in every generated file.
SECTION_SEPARATOR = "\n\n"

# ---------------------------------------------------------------------------
# Stage names (used in logs and ToolFailedError)
# ---------------------------------------------------------------------------
STAGE_COMPILE_LIB = "compile_lib"
STAGE_COMPILE_APP = "compile_app"
STAGE_LINK_FLAGS = "link_flags"
STAGE_LINK = "link"
STAGE_TRANSPILE_LIB = "transpile_lib"
STAGE_TRANSPILE_SHIM = "transpile_shim"
STAGE_TRANSPILE_APP = "transpile_app"
STAGE_LOCATE_LIBRARY = "locate_library"
