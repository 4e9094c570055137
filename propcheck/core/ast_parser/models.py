"""AST Parser data models.

Defines the core data structures shared by the parser, the scope service
and the edit primitives. These are pure data containers with no parsing logic.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

import tree_sitter

if TYPE_CHECKING:
    from .program import ProgramUnit


@dataclass
class ParseError:
    """An error encountered during parsing."""

    file_path: str
    line: int
    message: str
    severity: str = "warning"  # "warning" | "error"


@dataclass
class ParseResult:
    """Parse output for a single file."""

    file_path: str
    language: str
    program: "ProgramUnit"
    line_count: int = 0
    errors: List[ParseError] = field(default_factory=list)


@dataclass(frozen=True)
class TextEdit:
    """Replace source[start:end] with text (an insertion when start == end).

    Offsets are byte offsets into the UTF-8 source, as reported by tree-sitter.
    """

    start: int
    end: int
    text: bytes

    @classmethod
    def insert(cls, offset: int, text: str) -> "TextEdit":
        return cls(offset, offset, text.encode("utf-8"))

    @classmethod
    def replace(cls, node: tree_sitter.Node, text: str) -> "TextEdit":
        return cls(node.start_byte, node.end_byte, text.encode("utf-8"))


@dataclass
class Binding:
    """A name resolved through lexical scope to its declaring construct.

    kind is one of:
        "function_declaration" | "class_declaration" | "variable_declarator"
        | "import" | "parameter" | "catch_parameter" | "destructuring_pattern"
        | "function_name" | "class_name"
    """

    name: str
    kind: str
    identifier: tree_sitter.Node  # the declaring identifier
    node: tree_sitter.Node  # the declaring construct
    scope: tree_sitter.Node  # the scope node the binding lives in

    @property
    def initializer(self) -> Optional[tree_sitter.Node]:
        """Initializer of a variable declarator, if any."""
        if self.kind != "variable_declarator":
            return None
        return self.node.child_by_field_name("value")
