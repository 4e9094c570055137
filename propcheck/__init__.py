"""propcheck — keep propTypes validation alive in production builds.

Rewrites component functions, arrow functions and class render methods
that declare `propTypes` so they call `prop-types/checkPropTypes` with the
props they receive.

Public API:
    transform_source(source, file_path, cwd, options) → TransformResult
    transform_file(path, cwd, options) → TransformResult
"""

import logging
from typing import Any, Mapping, Optional, TextIO

from .core.ast_parser.base import relative_path
from .core.ast_parser.models import ParseError
from .core.instrument import PropTypesInstrumenter, TransformResult

__all__ = [
    "transform_source",
    "transform_file",
    "PropTypesInstrumenter",
    "TransformResult",
]

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def transform_source(
    source_text: str,
    file_path: Optional[str] = None,
    cwd: Optional[str] = None,
    options: Optional[Mapping[str, Any]] = None,
    stream: Optional[TextIO] = None,
) -> TransformResult:
    """Instrument JavaScript source code.

    Args:
        source_text: Source code as string
        file_path: Absolute path of the file, if known (for diagnostics)
        cwd: Working directory diagnostics paths are relative to
        options: Plugin options (classComponentExtends, ...)
        stream: Diagnostic sink; stderr when None

    Returns:
        TransformResult with the instrumented code
    """
    return PropTypesInstrumenter(options, stream).transform(source_text, file_path, cwd)


def transform_file(
    file_path: str,
    cwd: str = "",
    options: Optional[Mapping[str, Any]] = None,
    stream: Optional[TextIO] = None,
) -> TransformResult:
    """Instrument a JavaScript file (the file itself is not written).

    Args:
        file_path: Path to the source file
        cwd: Working directory diagnostics paths are relative to
        options: Plugin options
        stream: Diagnostic sink; stderr when None

    Returns:
        TransformResult; code is empty and errors is set if the file is unreadable
    """
    try:
        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            source_text = f.read()
    except OSError as e:
        logger.error(f"Cannot read {file_path}: {e}")
        rel_path = relative_path(file_path, cwd)
        return TransformResult(
            file_path=rel_path,
            code="",
            errors=[ParseError(file_path=rel_path, line=0, message=str(e), severity="error")],
        )

    return transform_source(source_text, file_path, cwd, options, stream)
