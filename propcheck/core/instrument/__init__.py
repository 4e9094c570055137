"""propcheck instrumentation engine.

Public API:
    PropTypesInstrumenter(options, stream).transform(source, file_path, cwd) → TransformResult
"""

from .config import PluginOptions, load_options_file, parse_options
from .engine import PropTypesInstrumenter, UnitContext
from .models import BindingShape, TransformResult

__all__ = [
    "PropTypesInstrumenter",
    "UnitContext",
    "PluginOptions",
    "parse_options",
    "load_options_file",
    "BindingShape",
    "TransformResult",
]
