"""Injection-site resolver.

For each supported binding shape, finds the body that receives the
validation call and the expression standing for the received props:

- function declarations and function expressions: the body, `arguments[0]`
- arrow functions: the (possibly expression) body, and the first parameter,
  after replacing a destructuring first parameter with a fresh name and
  hoisting the pattern into the body
- classes: the own instance `render` method, `this.props`, with
  `this.constructor.propTypes` as the schema so subclasses overriding
  propTypes are validated against their own schema
"""

import logging
from typing import Optional, Set

import tree_sitter

from ..ast_parser.editor import dedent_tail, line_indent
from ..ast_parser.javascript_parser import (
    CLASS_DECLARATION_TYPE,
    CLASS_EXPRESSION_TYPE,
    PATTERN_TYPES,
    class_superclass,
    has_token,
    named_children,
    node_text,
    unwrap_parentheses,
)
from ..ast_parser.models import TextEdit
from ..ast_parser.program import ProgramUnit
from ..ast_parser.scope import ScopeResolver, collect_identifiers
from ..constants import (
    CLASS_PROP_TYPES_REFERENCE,
    CLASS_PROPS_EXPRESSION,
    FUNCTION_PROPS_EXPRESSION,
    PROPS_IDENTIFIER,
    RENDER_METHOD,
)
from .config import PluginOptions
from .diagnostics import Diagnostics
from .models import CLASS_SHAPES, FUNCTION_SHAPES, BindingShape, Classification, InjectionSite
from .policy import is_acceptable_superclass, read_superclass

logger = logging.getLogger(__name__)

# Inheritance chains followed when a superclass is a local class
MAX_LOCAL_BASE_DEPTH = 16


class InjectionSiteResolver:
    """Resolves classifications to injection sites for one program unit."""

    def __init__(
        self,
        program: ProgramUnit,
        scope: ScopeResolver,
        options: PluginOptions,
        diagnostics: Diagnostics,
    ):
        self._program = program
        self._scope = scope
        self._options = options
        self._diagnostics = diagnostics

    def resolve(self, classification: Classification) -> Optional[InjectionSite]:
        """Injection site for a classified candidate, or None to leave it alone."""
        shape = classification.shape
        if shape in FUNCTION_SHAPES:
            return self._resolve_function(classification)
        if shape == BindingShape.VAR_ARROW_FUNCTION:
            return self._resolve_arrow(classification)
        if shape in CLASS_SHAPES:
            return self._resolve_class(classification)
        return None

    # =========================================================================
    # Functions
    # =========================================================================

    def _resolve_function(self, classification: Classification) -> Optional[InjectionSite]:
        function = classification.target
        body = function.child_by_field_name("body")
        if body is None:
            return None
        return InjectionSite(
            shape=classification.shape,
            name=classification.name,
            function=function,
            body=body,
            props_expression=FUNCTION_PROPS_EXPRESSION,
            prop_types_reference=f"{classification.name}.propTypes",
        )

    # =========================================================================
    # Arrow functions
    # =========================================================================

    def _resolve_arrow(self, classification: Classification) -> Optional[InjectionSite]:
        arrow = classification.target
        body = arrow.child_by_field_name("body")
        if body is None:
            return None

        site = InjectionSite(
            shape=classification.shape,
            name=classification.name,
            function=arrow,
            body=body,
            props_expression=PROPS_IDENTIFIER,
            prop_types_reference=f"{classification.name}.propTypes",
            expression_body=body.type != "statement_block",
        )

        single = arrow.child_by_field_name("parameter")
        if single is not None:
            site.props_expression = node_text(single, self._program.source)
            return site

        params = arrow.child_by_field_name("parameters")
        if params is None:
            return None
        members = named_children(params)

        if not members:
            fresh = self._fresh_parameter(arrow)
            site.props_expression = fresh
            site.parameter_edit = TextEdit.replace(params, fresh)
            return site

        first = members[0]
        if first.type == "identifier":
            site.props_expression = node_text(first, self._program.source)
            return site

        if first.type == "rest_pattern":
            rest = named_children(first)
            if rest and rest[0].type == "identifier":
                site.props_expression = f"{node_text(rest[0], self._program.source)}[0]"
                return site
            pattern = rest[0] if rest else None
            return self._hoist_pattern(site, arrow, params, pattern, first, rest_pattern=True)

        if first.type == "assignment_pattern":
            left = first.child_by_field_name("left")
            if left is not None and left.type == "identifier":
                site.props_expression = node_text(left, self._program.source)
                return site
            return self._hoist_pattern(site, arrow, params, left, left)

        if first.type in PATTERN_TYPES:
            replaced = params if len(members) == 1 else first
            return self._hoist_pattern(site, arrow, params, first, replaced)

        logger.debug(f"Unsupported first parameter {first.type} for {classification.name}")
        return None

    def _hoist_pattern(
        self,
        site: InjectionSite,
        arrow: tree_sitter.Node,
        params: tree_sitter.Node,
        pattern: Optional[tree_sitter.Node],
        replaced: tree_sitter.Node,
        rest_pattern: bool = False,
    ) -> Optional[InjectionSite]:
        """Replace a destructuring parameter with a fresh name and hoist the pattern.

        `({a} = d, b) => ...` becomes `(_props = d, b) => { const {a} = _props; ... }`.
        """
        if pattern is None or pattern.type not in PATTERN_TYPES:
            return None

        source = self._program.source
        fresh = self._fresh_parameter(arrow)
        pattern_text = dedent_tail(node_text(pattern, source), line_indent(source, pattern.start_byte))

        if rest_pattern:
            # `(...[a, b]) => ...` destructures the whole argument list
            site.props_expression = f"{fresh}[0]"
            site.hoisted = f"const {pattern_text} = {fresh};"
            site.parameter_edit = TextEdit.replace(replaced, f"...{fresh}")
            return site

        site.props_expression = fresh
        site.hoisted = f"const {pattern_text} = {fresh};"
        site.parameter_edit = TextEdit.replace(replaced, fresh)
        return site

    def _fresh_parameter(self, arrow: tree_sitter.Node) -> str:
        taken: Set[str] = collect_identifiers(arrow, self._program.source)
        candidate = PROPS_IDENTIFIER
        suffix = 2
        while candidate in taken:
            candidate = f"{PROPS_IDENTIFIER}{suffix}"
            suffix += 1
        return candidate

    # =========================================================================
    # Classes
    # =========================================================================

    def _resolve_class(self, classification: Classification) -> Optional[InjectionSite]:
        class_node = classification.target
        superclass = class_superclass(class_node)
        if superclass is None:
            logger.debug(f"Class {classification.name} has no superclass, skipping")
            return None

        reference = read_superclass(superclass, self._program.source)
        decision = is_acceptable_superclass(reference, self._options)
        if not decision.accepted and not self._is_local_component(reference, set()):
            self._diagnostics.warn_class(
                self._options.log_ignored_class_component_extends,
                classification.identifier,
                classification.name,
                decision.display_name,
            )
            return None

        render = self._find_render(class_node)
        if render is None:
            # inherited render was instrumented with its own class
            logger.debug(f"Class {classification.name} has no own render method, skipping")
            return None

        body = render.child_by_field_name("body")
        if body is None:
            return None
        return InjectionSite(
            shape=classification.shape,
            name=classification.name,
            function=render,
            body=body,
            props_expression=CLASS_PROPS_EXPRESSION,
            prop_types_reference=CLASS_PROP_TYPES_REFERENCE,
        )

    def _is_local_component(self, reference, seen: Set[int]) -> bool:
        """True if a bare-name superclass is a class in scope that itself extends a component base."""
        if reference.shape != "name" or reference.node is None or len(seen) >= MAX_LOCAL_BASE_DEPTH:
            return False

        binding = self._scope.resolve_binding(reference.name, reference.node)
        if binding is None:
            return False

        if binding.kind == "class_declaration":
            class_node = binding.node
        elif binding.kind == "variable_declarator" and binding.initializer is not None:
            class_node = unwrap_parentheses(binding.initializer)
        else:
            return False
        if class_node.type not in (CLASS_DECLARATION_TYPE, CLASS_EXPRESSION_TYPE) or class_node.id in seen:
            return False

        superclass = class_superclass(class_node)
        if superclass is None:
            return False
        parent = read_superclass(superclass, self._program.source)
        if is_acceptable_superclass(parent, self._options).accepted:
            return True
        return self._is_local_component(parent, seen | {class_node.id})

    def _find_render(self, class_node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        """Own, non-static, non-accessor, non-computed `render` method."""
        body = class_node.child_by_field_name("body")
        if body is None:
            return None
        for member in named_children(body):
            if member.type != "method_definition":
                continue
            name = member.child_by_field_name("name")
            if name is None or name.type != "property_identifier":
                continue
            if node_text(name, self._program.source) != RENDER_METHOD:
                continue
            if has_token(member, "static", "static get", "get", "set"):
                continue
            return member
        return None
