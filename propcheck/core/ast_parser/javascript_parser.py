"""JavaScript AST parser using tree-sitter.

Parses JavaScript (JSX and decorators included) into ProgramUnits and
provides the node helpers the scope service and the instrumenter share.
"""

import logging
from typing import Iterator, List, Optional

import tree_sitter
import tree_sitter_javascript

from ..constants import PROP_TYPES_PROPERTY
from .base import BaseLanguageParser

logger = logging.getLogger(__name__)

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())

# Older grammar releases name function expressions "function"
FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})
FUNCTION_EXPRESSION_TYPES = frozenset({"function_expression", "function", "generator_function"})
ARROW_FUNCTION_TYPE = "arrow_function"
CLASS_DECLARATION_TYPE = "class_declaration"
CLASS_EXPRESSION_TYPE = "class"

FUNCTION_TYPES = FUNCTION_DECLARATION_TYPES | FUNCTION_EXPRESSION_TYPES | {ARROW_FUNCTION_TYPE, "method_definition"}
CLASS_TYPES = frozenset({CLASS_DECLARATION_TYPE, CLASS_EXPRESSION_TYPE})
PATTERN_TYPES = frozenset({"object_pattern", "array_pattern"})


class JavaScriptParser(BaseLanguageParser):
    """tree-sitter based JavaScript parser."""

    def get_language(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE


# =========================================================================
# Helpers
# =========================================================================

def node_text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
    for child in node.children:
        if child.type == type_name:
            return child
    return None


def character_column(source: bytes, offset: int) -> int:
    """Column of a byte offset counted in UTF-16 code units, as JavaScript tools report it."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    prefix = source[line_start:offset].decode("utf-8", errors="replace")
    return len(prefix.encode("utf-16-le")) // 2


def has_token(node: tree_sitter.Node, *tokens: str) -> bool:
    """True if node has a direct anonymous child of one of the given types."""
    return any(not child.is_named and child.type in tokens for child in node.children)


def named_children(node: tree_sitter.Node) -> List[tree_sitter.Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def unwrap_parentheses(node: tree_sitter.Node) -> tree_sitter.Node:
    while node.type == "parenthesized_expression":
        inner = named_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def string_value(node: tree_sitter.Node, source: bytes) -> str:
    """Value of a string literal node (quotes stripped, escapes kept)."""
    return node_text(node, source)[1:-1]


def class_superclass(class_node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """Expression after `extends`, or None for a base class."""
    heritage = get_child_by_type(class_node, "class_heritage")
    if heritage is None:
        return None
    expressions = named_children(heritage)
    return expressions[0] if expressions else None


def is_prop_types_assignment(node: tree_sitter.Node, source: bytes) -> bool:
    """True for `<anything>.propTypes = ...`."""
    if node.type != "assignment_expression":
        return False
    left = node.child_by_field_name("left")
    if left is None or left.type != "member_expression":
        return False
    prop = left.child_by_field_name("property")
    return prop is not None and prop.type == "property_identifier" and node_text(prop, source) == PROP_TYPES_PROPERTY


def iter_prop_types_assignments(root: tree_sitter.Node, source: bytes) -> Iterator[tree_sitter.Node]:
    """Yield `.propTypes` assignments in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if is_prop_types_assignment(node, source):
            yield node
        stack.extend(reversed(node.children))
