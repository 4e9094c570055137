"""propcheck AST layer — tree-sitter parsing, scope resolution, edits.

Public API:
    parse_source(source, file_path, language) → ParseResult
    detect_language(file_path) → str | None
"""

from .models import Binding, ParseError, ParseResult, TextEdit
from .program import ProgramUnit
from .scope import ScopeResolver
from .utils import detect_language, get_parser, is_supported_file, should_skip_directory

__all__ = [
    "parse_source",
    "detect_language",
    "is_supported_file",
    "should_skip_directory",
    "Binding",
    "ParseError",
    "ParseResult",
    "ProgramUnit",
    "ScopeResolver",
    "TextEdit",
]

DEFAULT_LANGUAGE = "javascript"


def parse_source(source_text: str, file_path: str = "", language: str | None = None) -> ParseResult:
    """Parse source code string into a ProgramUnit.

    Args:
        source_text: Source code as string
        file_path: Relative file path (for metadata)
        language: Language identifier. If None, detected from file_path
            and defaulting to JavaScript.

    Returns:
        ParseResult holding the program unit
    """
    if language is None:
        language = detect_language(file_path) or DEFAULT_LANGUAGE
    return get_parser(language).parse_source(source_text, file_path)
