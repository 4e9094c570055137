"""Binding classifier — maps a component candidate to its shape.

Pure lookup on an already-resolved binding; never mutates the tree.
"""

from typing import Optional

import tree_sitter

from ..ast_parser.javascript_parser import (
    ARROW_FUNCTION_TYPE,
    CLASS_EXPRESSION_TYPE,
    FUNCTION_EXPRESSION_TYPES,
    unwrap_parentheses,
)
from ..ast_parser.models import Binding
from .models import BindingShape, Classification


def classify(name: str, reference: tree_sitter.Node, binding: Optional[Binding]) -> Classification:
    """Classify the binding a `<name>.propTypes` assignment refers to.

    Args:
        name: Object name of the propTypes assignment
        reference: Identifier node of that object (location when unbound)
        binding: Resolved binding, or None for an unbound name

    Returns:
        Classification; UNSUPPORTED ones carry binding_type and kind
    """
    if binding is None:
        return Classification(
            BindingShape.UNSUPPORTED, name, reference,
            binding_type="reference", kind="unbound",
        )

    if binding.kind == "function_declaration":
        return Classification(BindingShape.FUNCTION_DECLARATION, name, binding.identifier, binding, binding.node)

    if binding.kind == "class_declaration":
        return Classification(BindingShape.CLASS_DECLARATION, name, binding.identifier, binding, binding.node)

    if binding.kind != "variable_declarator":
        return Classification(
            BindingShape.UNSUPPORTED, name, binding.identifier, binding,
            binding_type="declaration", kind=binding.kind,
        )

    initializer = binding.initializer
    if initializer is None:
        return Classification(
            BindingShape.UNSUPPORTED, name, binding.identifier, binding,
            binding_type="assignment", kind="uninitialized",
        )

    value = unwrap_parentheses(initializer)
    if value.type in FUNCTION_EXPRESSION_TYPES:
        shape = BindingShape.VAR_FUNCTION_EXPRESSION
    elif value.type == CLASS_EXPRESSION_TYPE:
        shape = BindingShape.VAR_CLASS_EXPRESSION
    elif value.type == ARROW_FUNCTION_TYPE:
        shape = BindingShape.VAR_ARROW_FUNCTION
    else:
        return Classification(
            BindingShape.UNSUPPORTED, name, binding.identifier, binding,
            binding_type="assignment", kind=value.type,
        )
    return Classification(shape, name, binding.identifier, binding, value)
