"""Data contracts for the instrumentation engine.

All structured types passed between the classifier, the resolver and the
synthesizer. Kept as dataclasses for transport between stages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import tree_sitter

from ..ast_parser.models import Binding, ParseError, TextEdit


class BindingShape(Enum):
    """Declaring-construct shapes a component candidate can take."""
    FUNCTION_DECLARATION = "function_declaration"
    VAR_FUNCTION_EXPRESSION = "var_function_expression"
    VAR_ARROW_FUNCTION = "var_arrow_function"
    VAR_CLASS_EXPRESSION = "var_class_expression"
    CLASS_DECLARATION = "class_declaration"
    UNSUPPORTED = "unsupported"


FUNCTION_SHAPES = frozenset({BindingShape.FUNCTION_DECLARATION, BindingShape.VAR_FUNCTION_EXPRESSION})
CLASS_SHAPES = frozenset({BindingShape.CLASS_DECLARATION, BindingShape.VAR_CLASS_EXPRESSION})


@dataclass
class Classification:
    """Outcome of classifying a component candidate.

    For supported shapes, target is the function, arrow or class node.
    For UNSUPPORTED, binding_type ("assignment" | "declaration" | "reference")
    and kind describe the rejection for diagnostics.
    """
    shape: BindingShape
    name: str
    identifier: tree_sitter.Node
    binding: Optional[Binding] = None
    target: Optional[tree_sitter.Node] = None
    binding_type: Optional[str] = None
    kind: Optional[str] = None


@dataclass(frozen=True)
class SuperclassReference:
    """A class's `extends` expression after unwrapping.

    shape is "name" (Name), "member" (Namespace.Name) or "other".
    For "other", name holds the expression's source text.
    """
    shape: str
    name: str
    namespace: Optional[str] = None
    node: Optional[tree_sitter.Node] = None


@dataclass(frozen=True)
class PolicyDecision:
    """Base-class policy verdict; name/namespace identify the superclass."""
    accepted: bool
    name: str
    namespace: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass
class InjectionSite:
    """Where and with what the validation call is injected.

    body is a statement_block, or the expression body of an arrow that
    still has to be wrapped into a block (expression_body=True).
    """
    shape: BindingShape
    name: str
    function: tree_sitter.Node
    body: tree_sitter.Node
    props_expression: str
    prop_types_reference: str
    expression_body: bool = False
    hoisted: Optional[str] = None  # `const <pattern> = <props>;`
    parameter_edit: Optional[TextEdit] = None


@dataclass
class TransformResult:
    """Output of one instrumentation pass over a program unit."""
    file_path: str
    code: str
    changed: bool = False
    instrumented: List[str] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
