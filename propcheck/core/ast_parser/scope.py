"""Lexical scope service over tree-sitter JavaScript trees.

Resolves a name, as seen from a given node, to the construct declaring it.
Covers the scopes that matter for component bindings: program (imports,
exports, hoisted var and function declarations), blocks, functions and
arrows (parameters, hoisted var), named function and class expressions,
for loops, switch bodies and catch clauses.
"""

import logging
from typing import Iterable, Optional, Set

import tree_sitter

from .javascript_parser import (
    CLASS_DECLARATION_TYPE,
    CLASS_EXPRESSION_TYPE,
    CLASS_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_EXPRESSION_TYPES,
    FUNCTION_TYPES,
    PATTERN_TYPES,
    named_children,
    node_text,
)
from .models import Binding
from .program import ProgramUnit

logger = logging.getLogger(__name__)

_BLOCK_SCOPE_TYPES = frozenset({"program", "statement_block", "class_static_block", "switch_body"})
_LOOP_SCOPE_TYPES = frozenset({"for_statement", "for_in_statement"})
_SCOPE_TYPES = _BLOCK_SCOPE_TYPES | _LOOP_SCOPE_TYPES | FUNCTION_TYPES | {"catch_clause", CLASS_EXPRESSION_TYPE}

_DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
_IDENTIFIER_TYPES = frozenset({"identifier", "shorthand_property_identifier", "shorthand_property_identifier_pattern"})


def collect_identifiers(node: tree_sitter.Node, source: bytes) -> Set[str]:
    """Every identifier spelled anywhere under node."""
    names: Set[str] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in _IDENTIFIER_TYPES:
            names.add(node_text(current, source))
        stack.extend(current.children)
    return names


class ScopeResolver:
    """Name resolution against the current tree of a ProgramUnit."""

    def __init__(self, program: ProgramUnit):
        self._program = program

    @property
    def _source(self) -> bytes:
        return self._program.source

    def resolve_binding(self, name: str, at: tree_sitter.Node) -> Optional[Binding]:
        """Find the innermost declaration of name visible from node at."""
        node: Optional[tree_sitter.Node] = at
        while node is not None:
            if node.type in _SCOPE_TYPES:
                binding = self._declared_in(node, name)
                if binding is not None:
                    return binding
            node = node.parent
        return None

    def has_binding(self, name: str, at: tree_sitter.Node) -> bool:
        return self.resolve_binding(name, at) is not None

    def declared_names(self) -> Set[str]:
        """All identifiers spelled in the program (hygiene check for new names)."""
        return collect_identifiers(self._program.root, self._source)

    # =========================================================================
    # Scope scanners
    # =========================================================================

    def _declared_in(self, scope: tree_sitter.Node, name: str) -> Optional[Binding]:
        if scope.type == "program":
            return (
                self._scan_statements(named_children(scope), name, scope)
                or self._scan_hoisted_var(scope, name, scope)
            )

        if scope.type == "switch_body":
            for case in named_children(scope):
                binding = self._scan_statements(self._case_statements(case), name, scope)
                if binding is not None:
                    return binding
            return None

        if scope.type in _BLOCK_SCOPE_TYPES:
            return self._scan_statements(named_children(scope), name, scope)

        if scope.type in FUNCTION_TYPES:
            return self._scan_function(scope, name)

        if scope.type in _LOOP_SCOPE_TYPES:
            return self._scan_loop(scope, name)

        if scope.type == "catch_clause":
            param = scope.child_by_field_name("parameter")
            if param is not None:
                found = self._find_in_pattern(param, name)
                if found is not None:
                    return Binding(name, "catch_parameter", found, scope, scope)
            return None

        if scope.type == CLASS_EXPRESSION_TYPE:
            class_name = scope.child_by_field_name("name")
            if class_name is not None and node_text(class_name, self._source) == name:
                return Binding(name, "class_name", class_name, scope, scope)
        return None

    def _scan_statements(
        self, statements: Iterable[tree_sitter.Node], name: str, scope: tree_sitter.Node
    ) -> Optional[Binding]:
        for statement in statements:
            binding = self._scan_statement(statement, name, scope)
            if binding is not None:
                return binding
        return None

    def _scan_statement(self, statement: tree_sitter.Node, name: str, scope: tree_sitter.Node) -> Optional[Binding]:
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is not None:
                return self._scan_statement(declaration, name, scope)
            value = statement.child_by_field_name("value")
            if value is not None:
                return self._scan_default_export(value, name, scope)
            return None

        if statement.type in FUNCTION_DECLARATION_TYPES or statement.type == CLASS_DECLARATION_TYPE:
            name_node = statement.child_by_field_name("name")
            if name_node is not None and node_text(name_node, self._source) == name:
                kind = "class_declaration" if statement.type == CLASS_DECLARATION_TYPE else "function_declaration"
                return Binding(name, kind, name_node, statement, scope)
            return None

        if statement.type in _DECLARATION_TYPES:
            return self._scan_declaration(statement, name, scope)

        if statement.type == "import_statement" and scope.type == "program":
            return self._scan_import(statement, name, scope)

        return None

    def _scan_default_export(self, value: tree_sitter.Node, name: str, scope: tree_sitter.Node) -> Optional[Binding]:
        """`export default function Foo() {}` parsed as an expression still binds Foo."""
        if value.type not in FUNCTION_EXPRESSION_TYPES and value.type not in CLASS_TYPES:
            return None
        name_node = value.child_by_field_name("name")
        if name_node is None or node_text(name_node, self._source) != name:
            return None
        kind = "class_declaration" if value.type in CLASS_TYPES else "function_declaration"
        return Binding(name, kind, name_node, value, scope)

    def _scan_declaration(self, declaration: tree_sitter.Node, name: str, scope: tree_sitter.Node) -> Optional[Binding]:
        for declarator in named_children(declaration):
            if declarator.type != "variable_declarator":
                continue
            target = declarator.child_by_field_name("name")
            if target is None:
                continue
            if target.type == "identifier":
                if node_text(target, self._source) == name:
                    return Binding(name, "variable_declarator", target, declarator, scope)
            elif target.type in PATTERN_TYPES:
                found = self._find_in_pattern(target, name)
                if found is not None:
                    return Binding(name, "destructuring_pattern", found, declarator, scope)
        return None

    def _scan_import(self, statement: tree_sitter.Node, name: str, scope: tree_sitter.Node) -> Optional[Binding]:
        clause = None
        for child in named_children(statement):
            if child.type == "import_clause":
                clause = child
                break
        if clause is None:
            return None

        stack = [clause]
        while stack:
            node = stack.pop()
            if node.type == "import_specifier":
                local = node.child_by_field_name("alias") or node.child_by_field_name("name")
                if local is not None and node_text(local, self._source) == name:
                    return Binding(name, "import", local, statement, scope)
                continue
            if node.type == "identifier" and node_text(node, self._source) == name:
                return Binding(name, "import", node, statement, scope)
            stack.extend(named_children(node))
        return None

    def _scan_hoisted_var(self, root: tree_sitter.Node, name: str, scope: tree_sitter.Node) -> Optional[Binding]:
        """`var` declarations anywhere below root, not crossing function or class boundaries."""
        stack = list(reversed(named_children(root)))
        while stack:
            node = stack.pop()
            if node.type in FUNCTION_TYPES or node.type in CLASS_TYPES:
                continue
            if node.type == "variable_declaration":
                binding = self._scan_declaration(node, name, scope)
                if binding is not None:
                    return binding
            stack.extend(reversed(named_children(node)))
        return None

    def _scan_function(self, function: tree_sitter.Node, name: str) -> Optional[Binding]:
        single = function.child_by_field_name("parameter")
        if single is not None and node_text(single, self._source) == name:
            return Binding(name, "parameter", single, function, function)

        params = function.child_by_field_name("parameters")
        if params is not None:
            for param in named_children(params):
                found = self._find_in_pattern(param, name)
                if found is not None:
                    return Binding(name, "parameter", found, function, function)

        if function.type in FUNCTION_EXPRESSION_TYPES:
            own_name = function.child_by_field_name("name")
            if own_name is not None and node_text(own_name, self._source) == name:
                return Binding(name, "function_name", own_name, function, function)

        body = function.child_by_field_name("body")
        if body is not None and body.type == "statement_block":
            return self._scan_hoisted_var(body, name, function)
        return None

    def _scan_loop(self, loop: tree_sitter.Node, name: str) -> Optional[Binding]:
        if loop.type == "for_statement":
            initializer = loop.child_by_field_name("initializer")
            if initializer is not None and initializer.type in _DECLARATION_TYPES:
                return self._scan_declaration(initializer, name, loop)
            return None

        if loop.child_by_field_name("kind") is None:
            return None
        left = loop.child_by_field_name("left")
        if left is not None:
            found = self._find_in_pattern(left, name)
            if found is not None:
                return Binding(name, "loop_variable", found, loop, loop)
        return None

    @staticmethod
    def _case_statements(case: tree_sitter.Node) -> Iterable[tree_sitter.Node]:
        value = case.child_by_field_name("value")
        return [child for child in named_children(case) if value is None or child.id != value.id]

    def _find_in_pattern(self, pattern: tree_sitter.Node, name: str) -> Optional[tree_sitter.Node]:
        """Identifier node binding name inside a parameter or destructuring pattern."""
        if pattern.type in ("identifier", "shorthand_property_identifier_pattern"):
            return pattern if node_text(pattern, self._source) == name else None

        if pattern.type in ("assignment_pattern", "object_assignment_pattern"):
            left = pattern.child_by_field_name("left")
            return self._find_in_pattern(left, name) if left is not None else None

        if pattern.type == "pair_pattern":
            value = pattern.child_by_field_name("value")
            return self._find_in_pattern(value, name) if value is not None else None

        if pattern.type in PATTERN_TYPES or pattern.type == "rest_pattern":
            for child in named_children(pattern):
                found = self._find_in_pattern(child, name)
                if found is not None:
                    return found
        return None
