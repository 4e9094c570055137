"""Tests for the AST parser module."""

import pytest
from propcheck.core.ast_parser import (
    ParseResult,
    TextEdit,
    detect_language,
    is_supported_file,
    parse_source,
    should_skip_directory,
)
from propcheck.core.ast_parser.base import relative_path
from propcheck.core.ast_parser.javascript_parser import (
    character_column,
    class_superclass,
    iter_prop_types_assignments,
    node_text,
    unwrap_parentheses,
)
from propcheck.core.ast_parser.utils import get_parser


# =========================================================================
# Sample JavaScript source fixtures
# =========================================================================

ASSIGNMENTS = """\
function A() {}
A.propTypes = {};
if (debug) {
  B.propTypes = {};
}
const propTypes = C.propTypes = {};
D.defaultProps = {};
E["propTypes"] = {};
"""

CLASS_WITH_HERITAGE = """\
class A extends (_Base = React.Component) {}
"""

JSX_COMPONENT = """\
const Title = ({ text }) => <h1 className="title">{text}</h1>;
"""

SYNTAX_ERROR_FILE = """\
function broken( {
"""


# =========================================================================
# Tests: Language detection
# =========================================================================

class TestLanguageDetection:
    def test_javascript(self):
        assert detect_language("src/App.js") == "javascript"

    def test_jsx_and_modules(self):
        assert detect_language("src/App.jsx") == "javascript"
        assert detect_language("src/app.mjs") == "javascript"
        assert detect_language("src/app.cjs") == "javascript"

    def test_unknown(self):
        assert detect_language("foo/bar.py") is None

    def test_case_insensitive(self):
        assert detect_language("APP.JS") == "javascript"

    def test_is_supported_file(self):
        assert is_supported_file("index.js")
        assert not is_supported_file("README.md")

    def test_skip_directories(self):
        assert should_skip_directory("node_modules")
        assert should_skip_directory(".git")
        assert should_skip_directory(".hidden")
        assert not should_skip_directory("src")

    def test_unsupported_parser(self):
        with pytest.raises(ValueError):
            get_parser("cobol")


# =========================================================================
# Tests: Parsing
# =========================================================================

class TestParseSource:
    def test_clean_source(self):
        result = parse_source(ASSIGNMENTS, "test.js")
        assert isinstance(result, ParseResult)
        assert result.language == "javascript"
        assert result.errors == []
        assert result.line_count == 8

    def test_jsx_parses_cleanly(self):
        result = parse_source(JSX_COMPONENT, "title.jsx")
        assert result.errors == []

    def test_syntax_error_reported(self):
        result = parse_source(SYNTAX_ERROR_FILE, "broken.js")
        assert len(result.errors) == 1
        assert result.errors[0].severity == "error"
        assert result.errors[0].line >= 1

    def test_body_lists_top_level_statements(self):
        program = parse_source(ASSIGNMENTS).program
        assert [node.type for node in program.body][:2] == ["function_declaration", "expression_statement"]


# =========================================================================
# Tests: Node helpers
# =========================================================================

class TestNodeHelpers:
    def test_prop_types_assignments_in_source_order(self):
        program = parse_source(ASSIGNMENTS).program
        targets = [
            node_text(node.child_by_field_name("left").child_by_field_name("object"), program.source)
            for node in iter_prop_types_assignments(program.root, program.source)
        ]
        assert targets == ["A", "B", "C"]

    def test_superclass_and_parentheses(self):
        program = parse_source(CLASS_WITH_HERITAGE).program
        class_node = program.body[0]
        superclass = class_superclass(class_node)
        inner = unwrap_parentheses(superclass)
        assert inner.type == "assignment_expression"
        assert program.text(inner.child_by_field_name("right")) == "React.Component"

    def test_base_class_has_no_superclass(self):
        program = parse_source("class A {}\n").program
        assert class_superclass(program.body[0]) is None


# =========================================================================
# Tests: Edits
# =========================================================================

class TestApplyEdits:
    def test_insert_and_replace(self):
        program = parse_source("const a = 1;\n").program
        number = program.body[0].named_children[0].child_by_field_name("value")
        applied = program.apply_edits([
            TextEdit.insert(0, "// header\n"),
            TextEdit.replace(number, "2"),
        ])
        assert applied
        assert program.code == "// header\nconst a = 2;\n"
        assert program.body[0].type == "lexical_declaration"

    def test_same_offset_keeps_order(self):
        program = parse_source("x;\n").program
        program.apply_edits([TextEdit.insert(0, "a;\n"), TextEdit.insert(0, "b;\n")])
        assert program.code == "a;\nb;\nx;\n"

    def test_overlapping_batch_is_discarded(self):
        program = parse_source("const abc = 1;\n").program
        applied = program.apply_edits([TextEdit(0, 5, b"let"), TextEdit(3, 8, b"x")])
        assert not applied
        assert program.code == "const abc = 1;\n"

    def test_batch_breaking_syntax_is_discarded(self):
        program = parse_source("const a = 1;\n").program
        applied = program.apply_edits([TextEdit.insert(0, "(")])
        assert not applied
        assert program.code == "const a = 1;\n"
        assert not program.has_error


# =========================================================================
# Tests: Locations
# =========================================================================

class TestLocations:
    def test_relative_path(self):
        assert relative_path("/project/src/App.js", "/project") == "src/App.js"
        assert relative_path("/project/src/App.js", "/project/") == "src/App.js"

    def test_relative_path_needs_separator_boundary(self):
        assert relative_path("/project2/App.js", "/project") == "/project2/App.js"

    def test_relative_path_without_root(self):
        assert relative_path("/project/App.js") == "/project/App.js"

    def test_character_column_ascii(self):
        source = b"a;\n  const Foo = 1;\n"
        assert character_column(source, source.index(b"Foo")) == 8

    def test_character_column_counts_utf16_units(self):
        source = "/* ééé */ const Foo = 1;\n".encode("utf-8")
        assert character_column(source, source.index(b"Foo")) == 16
        source = "/* \U0001F600 */ Foo;\n".encode("utf-8")
        assert character_column(source, source.index(b"Foo")) == 9
