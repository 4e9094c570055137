"""Tests for the lexical scope service."""

from propcheck.core.ast_parser import ScopeResolver, parse_source


SCOPES = """\
import Default, { named as alias } from "./module";
import * as ns from "./ns";

function outer(param, { destructured }, ...rest) {
  var hoisted = 1;
  if (param) {
    var nested = 2;
    let blockScoped = 3;
    probeBlock;
  }
  probeFunction;
}

const Arrow = () => null;
let Uninitialized;
const { picked } = source;
class Klass {}
export const Exported = function () {};
export default function DefaultExported() {}

try {
  risky();
} catch (failure) {
  probeCatch;
}

for (const item of items) {
  probeLoop;
}

probeProgram;
"""


def _probe(program, name):
    """Identifier node of the expression statement `<name>;`."""
    stack = [program.root]
    while stack:
        node = stack.pop()
        if node.type == "identifier" and program.text(node) == name:
            return node
        stack.extend(node.children)
    raise AssertionError(f"probe {name} not found")


def _resolve(name, probe):
    program = parse_source(SCOPES, "scopes.js").program
    scope = ScopeResolver(program)
    return scope.resolve_binding(name, _probe(program, probe))


class TestProgramScope:
    def test_function_declaration(self):
        binding = _resolve("outer", "probeProgram")
        assert binding.kind == "function_declaration"
        assert binding.node.type == "function_declaration"

    def test_variable_declarator(self):
        binding = _resolve("Arrow", "probeProgram")
        assert binding.kind == "variable_declarator"
        assert binding.initializer.type == "arrow_function"
        assert binding.identifier.start_point.row + 1 == 14
        assert binding.identifier.start_point.column == 6

    def test_uninitialized_declarator(self):
        binding = _resolve("Uninitialized", "probeProgram")
        assert binding.kind == "variable_declarator"
        assert binding.initializer is None

    def test_destructured_declarator(self):
        assert _resolve("picked", "probeProgram").kind == "destructuring_pattern"

    def test_class_declaration(self):
        assert _resolve("Klass", "probeProgram").kind == "class_declaration"

    def test_imports(self):
        assert _resolve("Default", "probeProgram").kind == "import"
        assert _resolve("alias", "probeProgram").kind == "import"
        assert _resolve("ns", "probeProgram").kind == "import"
        assert _resolve("named", "probeProgram") is None

    def test_exports(self):
        assert _resolve("Exported", "probeProgram").kind == "variable_declarator"
        assert _resolve("DefaultExported", "probeProgram").kind == "function_declaration"

    def test_hoisted_var_from_nested_block(self):
        # `var` inside a function does not leak to the program
        assert _resolve("nested", "probeProgram") is None

    def test_unbound(self):
        assert _resolve("missing", "probeProgram") is None


class TestNestedScopes:
    def test_parameters(self):
        assert _resolve("param", "probeFunction").kind == "parameter"
        assert _resolve("destructured", "probeFunction").kind == "parameter"
        assert _resolve("rest", "probeFunction").kind == "parameter"

    def test_var_hoisting(self):
        assert _resolve("hoisted", "probeFunction").kind == "variable_declarator"
        assert _resolve("nested", "probeFunction").kind == "variable_declarator"

    def test_block_scoping(self):
        assert _resolve("blockScoped", "probeBlock").kind == "variable_declarator"
        assert _resolve("blockScoped", "probeFunction") is None

    def test_catch_parameter(self):
        assert _resolve("failure", "probeCatch").kind == "catch_parameter"
        assert _resolve("failure", "probeProgram") is None

    def test_loop_variable(self):
        assert _resolve("item", "probeLoop").kind == "loop_variable"

    def test_outer_names_visible_inside(self):
        assert _resolve("Klass", "probeBlock").kind == "class_declaration"


class TestDeclaredNames:
    def test_collects_identifiers(self):
        program = parse_source(SCOPES, "scopes.js").program
        names = ScopeResolver(program).declared_names()
        assert {"outer", "Arrow", "picked", "probeProgram", "alias"} <= names
