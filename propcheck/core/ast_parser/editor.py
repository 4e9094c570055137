"""Tree mutation primitives expressed as TextEdits.

Statements handed to these helpers are source snippets whose continuation
lines are indented relative to the snippet's first line (see dedent_tail);
the helpers place them at the indentation of the surrounding code.
"""

from typing import List, Sequence

import tree_sitter

from .javascript_parser import named_children
from .models import TextEdit
from .program import ProgramUnit

DEFAULT_INDENT_UNIT = "  "


def line_indent(source: bytes, offset: int) -> str:
    """Leading whitespace of the line containing offset."""
    start = source.rfind(b"\n", 0, offset) + 1
    end = start
    while end < len(source) and source[end:end + 1] in (b" ", b"\t"):
        end += 1
    return source[start:end].decode("utf-8")


def detect_indent_unit(source: bytes) -> str:
    """Indentation step used by the file: a tab, or the smallest space indent."""
    smallest = 0
    for raw in source.split(b"\n"):
        stripped = raw.lstrip(b" ")
        if raw.startswith(b"\t"):
            return "\t"
        if not stripped or stripped.startswith(b"*"):
            continue
        width = len(raw) - len(stripped)
        if width and (not smallest or width < smallest):
            smallest = width
    if smallest in (2, 4):
        return " " * smallest
    return DEFAULT_INDENT_UNIT


def dedent_tail(text: str, indent: str) -> str:
    """Strip indent from every line after the first."""
    lines = text.split("\n")
    for index in range(1, len(lines)):
        if lines[index].startswith(indent):
            lines[index] = lines[index][len(indent):]
    return "\n".join(lines)


def _place(statement: str, indent: str) -> str:
    lines = statement.split("\n")
    return "\n".join(indent + line if line else line for line in lines)


def prepend_statements(
    program: ProgramUnit,
    block: tree_sitter.Node,
    statements: Sequence[str],
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> TextEdit:
    """Insert statements at the start of a statement_block."""
    source = program.source
    open_brace = block.children[0]
    close_brace = block.children[-1]
    base = line_indent(source, block.start_byte)
    members = block.named_children

    if not members:
        inner = base + indent_unit
        text = "\n" + "".join(_place(s, inner) + "\n" for s in statements) + base
        return TextEdit(open_brace.end_byte, close_brace.start_byte, text.encode("utf-8"))

    first = members[0]
    if first.start_point.row > open_brace.start_point.row:
        inner = line_indent(source, first.start_byte)
        text = "".join("\n" + _place(s, inner) for s in statements)
        return TextEdit.insert(open_brace.end_byte, text)

    # `{ return x; }` on one line: break it open
    inner = base + indent_unit
    text = "".join("\n" + _place(s, inner) for s in statements) + "\n" + inner
    return TextEdit(open_brace.end_byte, first.start_byte, text.encode("utf-8"))


def wrap_expression_body(
    program: ProgramUnit,
    function: tree_sitter.Node,
    body: tree_sitter.Node,
    statements: Sequence[str],
    indent_unit: str = DEFAULT_INDENT_UNIT,
) -> TextEdit:
    """Turn an arrow's expression body into a block ending in `return <expr>;`."""
    source = program.source
    base = line_indent(source, function.start_byte)
    inner = base + indent_unit
    expression = dedent_tail(program.text(body), line_indent(source, body.start_byte))

    lines: List[str] = [_place(s, inner) for s in statements]
    lines.append(_place(f"return {expression};", inner))
    text = "{\n" + "\n".join(lines) + "\n" + base + "}"
    return TextEdit.replace(body, text)


def insert_at_top(program: ProgramUnit, statement: str) -> TextEdit:
    """Insert a statement before all others, after a hashbang and directive prologue."""
    anchor = None
    for child in program.root.children:
        if child.type == "hash_bang_line" or _is_directive(child):
            anchor = child
            continue
        if child.type == "comment" and anchor is not None:
            continue
        break

    if anchor is None:
        return TextEdit.insert(0, statement + "\n")
    return TextEdit.insert(anchor.end_byte, "\n" + statement)


def _is_directive(node: tree_sitter.Node) -> bool:
    if node.type != "expression_statement":
        return False
    children = named_children(node)
    return len(children) == 1 and children[0].type == "string"
