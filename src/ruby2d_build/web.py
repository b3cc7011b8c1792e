"""Web build: Opal-transpiled JavaScript bundle plus an HTML page.

The library bundle, the interop shim and the stripped application are
transpiled separately (without the Opal runtime), then merged after the
two runtime assets into ``app.js``.  The HTML template is copied as
``app.html``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.ruby2d_build.artifacts import concatenate, copy_artifact, write_artifact
from src.ruby2d_build.assembler import assemble_library
from src.ruby2d_build.constants import (
    APP_HTML,
    APP_JS,
    LIB_JS,
    SHIM_JS,
    SRC_JS,
    SRC_RB,
    STAGE_TRANSPILE_APP,
    STAGE_TRANSPILE_LIB,
    STAGE_TRANSPILE_SHIM,
)
from src.ruby2d_build.exceptions import MissingInputError
from src.ruby2d_build.models import (
    BuildContext,
    BuildResult,
    BuildTarget,
    ToolInvocation,
)
from src.ruby2d_build.preprocessor import preprocess_source
from src.ruby2d_build.toolchain import require_tools, run_tool

logger = logging.getLogger(__name__)


def transpile_invocation(ctx: BuildContext, stage: str, source: Path, output: Path) -> ToolInvocation:
    """Describe ``opal --compile --no-opal <source> > <output>``."""
    return ToolInvocation(
        stage=stage,
        executable=ctx.config.toolchain.transpiler,
        args=("--compile", "--no-opal", str(source)),
        expected_outputs=(output,),
        stdout_path=output,
    )


def build_web(source: Path | str, ctx: BuildContext) -> BuildResult:
    """Build ``<build_dir>/app.js`` and ``<build_dir>/app.html``.

    Raises:
        MissingInputError: *source* or a library asset does not exist.
        FilesystemError: A build input could not be read or written.
        MissingToolError: The transpiler is not on PATH.
        ToolFailedError: A transpile stage failed.
    """
    source = Path(source)
    if not source.is_file():
        raise MissingInputError(source)
    app_text = preprocess_source(source)
    require_tools(ctx.config.toolchain.transpiler)

    lib_rb = assemble_library(
        ctx.library, ctx.build_dir, strict=ctx.config.library.strict_order
    )
    lib_js = ctx.artifact(LIB_JS)
    run_tool(transpile_invocation(ctx, STAGE_TRANSPILE_LIB, lib_rb, lib_js))

    shim = ctx.library.interop_shim
    if not shim.is_file():
        raise MissingInputError(shim)
    shim_js = ctx.artifact(SHIM_JS)
    run_tool(transpile_invocation(ctx, STAGE_TRANSPILE_SHIM, shim, shim_js))

    src_rb = write_artifact(ctx.artifact(SRC_RB), app_text)
    src_js = ctx.artifact(SRC_JS)
    run_tool(transpile_invocation(ctx, STAGE_TRANSPILE_APP, src_rb, src_js))

    app_js = concatenate(
        ctx.artifact(APP_JS),
        [ctx.library.simple2d_js, ctx.library.opal_js, lib_js, shim_js, src_js],
    )
    app_html = copy_artifact(ctx.library.html_template, ctx.artifact(APP_HTML))

    logger.info("Web app created at %s", app_js)
    return BuildResult(target=BuildTarget.WEB, artifacts=[app_js, app_html])
