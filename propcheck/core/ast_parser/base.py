"""Base interface for language-specific AST parsers.

Defines the Strategy pattern base class that all language parsers implement.
Shared parsing logic (relative paths, syntax checks) lives here.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

import tree_sitter

from .models import ParseError, ParseResult
from .program import ProgramUnit

logger = logging.getLogger(__name__)


def relative_path(file_path: str, project_root: str = "") -> str:
    """Path of file_path relative to project_root (unchanged if outside it)."""
    if not project_root:
        return file_path
    prefix = project_root.rstrip("/") + "/"
    if file_path.startswith(prefix):
        return file_path[len(prefix):]
    return file_path


class BaseLanguageParser(ABC):
    """Abstract base for language-specific tree-sitter parsers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'javascript')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    def create_parser(self) -> tree_sitter.Parser:
        return tree_sitter.Parser(self.get_tree_sitter_language())

    def parse_source(self, source_text: str, file_path: str) -> ParseResult:
        """Parse source code string into a ParseResult.

        Args:
            source_text: Source code as string
            file_path: Relative file path (for metadata)

        Returns:
            ParseResult holding the ProgramUnit
        """
        errors: List[ParseError] = []
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        program = ProgramUnit(source_text.encode("utf-8"), file_path, self.create_parser())

        # Check for parse errors
        if program.has_error:
            line = self._first_error_line(program.root)
            logger.debug(f"Tree-sitter reported parse errors in {file_path or '<source>'} at line {line}")
            errors.append(
                ParseError(
                    file_path=file_path,
                    line=line,
                    message="Tree-sitter reported parse errors in file",
                    severity="error",
                )
            )

        return ParseResult(
            file_path=file_path,
            language=self.get_language(),
            program=program,
            line_count=line_count,
            errors=errors,
        )

    @staticmethod
    def _first_error_line(root: tree_sitter.Node) -> int:
        """1-based line of the first ERROR or MISSING node, 0 if none is found."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point.row + 1
            if node.has_error:
                stack.extend(reversed(node.children))
        return 0
