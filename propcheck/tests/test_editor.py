"""Tests for the edit primitives."""

from propcheck.core.ast_parser import parse_source
from propcheck.core.ast_parser.editor import (
    dedent_tail,
    detect_indent_unit,
    insert_at_top,
    line_indent,
    prepend_statements,
)


class TestIndentation:
    def test_line_indent(self):
        source = b"a\n    b\n"
        assert line_indent(source, source.index(b"b")) == "    "
        assert line_indent(source, 0) == ""

    def test_detect_two_spaces(self):
        assert detect_indent_unit(b"if (a) {\n  b;\n    c;\n}\n") == "  "

    def test_detect_four_spaces(self):
        assert detect_indent_unit(b"if (a) {\n    b;\n}\n") == "    "

    def test_detect_tabs(self):
        assert detect_indent_unit(b"if (a) {\n\tb;\n}\n") == "\t"

    def test_doc_comment_lines_ignored(self):
        assert detect_indent_unit(b"/**\n * doc\n */\nif (a) {\n    b;\n}\n") == "    "

    def test_default(self):
        assert detect_indent_unit(b"a;\n") == "  "

    def test_dedent_tail(self):
        assert dedent_tail("{\n      a,\n    }", "    ") == "{\n  a,\n}"


class TestStatementPlacement:
    def test_prepend_into_indented_block(self):
        program = parse_source("function f() {\n    return 1;\n}\n").program
        block = program.body[0].child_by_field_name("body")
        assert program.apply_edits([prepend_statements(program, block, ["a();", "b();"])])
        assert program.code == "function f() {\n    a();\n    b();\n    return 1;\n}\n"

    def test_prepend_into_empty_nested_block(self):
        program = parse_source("if (x) {\n  if (y) {}\n}\n").program
        inner = program.body[0].child_by_field_name("consequence").named_children[0]
        block = inner.child_by_field_name("consequence")
        assert program.apply_edits([prepend_statements(program, block, ["a();"])])
        assert program.code == "if (x) {\n  if (y) {\n    a();\n  }\n}\n"

    def test_insert_at_top(self):
        program = parse_source("a();\n").program
        assert program.apply_edits([insert_at_top(program, "b();")])
        assert program.code == "b();\na();\n"

    def test_insert_after_directives(self):
        program = parse_source('"use strict";\n"use client";\na();\n').program
        assert program.apply_edits([insert_at_top(program, "b();")])
        assert program.code == '"use strict";\n"use client";\nb();\na();\n'
