"""Native build: mruby bytecode linked into a Simple 2D executable.

Pipeline (order matters):

1. assemble the library bundle (``lib.rb``);
2. ``mrbc -Bruby2d_lib -o lib.c lib.rb``;
3. strip the library import from the app into ``src.rb``;
4. ``mrbc -Bruby2d_app -o src.c src.rb``;
5. merge ``#define MRUBY 1``, ``lib.c``, ``src.c`` and the runtime glue
   source into ``app.c``;
6. ``cc app.c -lmruby <simple2d --libs> -o app``.

Both bytecode blobs end up in one binary, so the two symbol names must
differ.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.ruby2d_build.artifacts import concatenate, write_artifact
from src.ruby2d_build.assembler import assemble_library
from src.ruby2d_build.constants import (
    APP_BINARY,
    APP_C,
    LIB_C,
    NATIVE_APP_SYMBOL,
    NATIVE_FEATURE_FLAG,
    NATIVE_LIB_SYMBOL,
    SRC_C,
    SRC_RB,
    STAGE_COMPILE_APP,
    STAGE_COMPILE_LIB,
    STAGE_LINK,
    STAGE_LINK_FLAGS,
)
from src.ruby2d_build.exceptions import MissingInputError
from src.ruby2d_build.models import (
    BuildContext,
    BuildResult,
    BuildTarget,
    ToolInvocation,
)
from src.ruby2d_build.preprocessor import preprocess_source
from src.ruby2d_build.toolchain import link_flags, require_tools, run_tool

logger = logging.getLogger(__name__)


def bytecode_invocation(
    ctx: BuildContext,
    stage: str,
    symbol: str,
    source: Path,
    output: Path,
    debug: bool = False,
) -> ToolInvocation:
    """Describe one ``mrbc`` call emitting C with *symbol* as the blob name.

    *debug* adds ``-g`` so the bytecode keeps line information for backtraces.
    """
    args = ("-g",) if debug else ()
    return ToolInvocation(
        stage=stage,
        executable=ctx.config.toolchain.bytecode_compiler,
        args=(*args, f"-B{symbol}", f"-o{output}", str(source)),
        expected_outputs=(output,),
    )


def link_invocation(ctx: BuildContext, source: Path, output: Path, flags: list[str]) -> ToolInvocation:
    toolchain = ctx.config.toolchain
    return ToolInvocation(
        stage=STAGE_LINK,
        executable=toolchain.c_compiler,
        args=(str(source), *toolchain.runtime_libs, *flags, "-o", str(output)),
        expected_outputs=(output,),
    )


def build_native(source: Path | str, ctx: BuildContext, debug: bool = False) -> BuildResult:
    """Build ``<build_dir>/app`` from the application at *source*.

    The source is read before anything is written, so an unreadable file
    leaves the build directory untouched.  *debug* compiles with ``-g``.

    Raises:
        MissingInputError: *source* or a library file does not exist.
        FilesystemError: A build input could not be read or written.
        MissingToolError: The bytecode compiler is not on PATH.  Checked
            before anything is written.
        ToolFailedError: A compile, link-flag or link stage failed.
    """
    source = Path(source)
    if not source.is_file():
        raise MissingInputError(source)
    app_text = preprocess_source(source)
    require_tools(ctx.config.toolchain.bytecode_compiler)

    build_dir = ctx.build_dir
    lib_rb = assemble_library(
        ctx.library, build_dir, strict=ctx.config.library.strict_order
    )

    lib_c = ctx.artifact(LIB_C)
    run_tool(bytecode_invocation(ctx, STAGE_COMPILE_LIB, NATIVE_LIB_SYMBOL, lib_rb, lib_c, debug))

    src_rb = write_artifact(ctx.artifact(SRC_RB), app_text)
    src_c = ctx.artifact(SRC_C)
    run_tool(bytecode_invocation(ctx, STAGE_COMPILE_APP, NATIVE_APP_SYMBOL, src_rb, src_c, debug))

    app_c = concatenate(
        ctx.artifact(APP_C),
        [lib_c, src_c, ctx.library.native_glue],
        header=NATIVE_FEATURE_FLAG,
    )

    flags = link_flags(STAGE_LINK_FLAGS, ctx.config.toolchain.link_flags_command)
    binary = ctx.artifact(APP_BINARY)
    run_tool(link_invocation(ctx, app_c, binary, flags))

    logger.info("Native app created at %s", binary)
    return BuildResult(target=BuildTarget.NATIVE, artifacts=[binary])
