"""Base-class policy — which `extends` targets mark a class component.

Bare names are checked against classComponentExtends. `React.X` accepts
only the built-in React bases, whatever the configuration says. Other
`Namespace.Name` forms need both the namespace (classComponentExtendsObject)
and the name (classComponentExtends) to be allowed. Anything else is rejected.
"""

import tree_sitter

from ..ast_parser.javascript_parser import node_text, unwrap_parentheses
from ..constants import REACT_CLASS_COMPONENT_EXTENDS, REACT_NAMESPACE
from .config import PluginOptions
from .models import PolicyDecision, SuperclassReference


def read_superclass(node: tree_sitter.Node, source: bytes) -> SuperclassReference:
    """Classify an `extends` expression.

    Decorator lowering rewrites `extends Base` into `extends (_Base = Base)`;
    one such assignment is unwrapped before the shape is decided.
    """
    node = unwrap_parentheses(node)
    if node.type == "assignment_expression":
        right = node.child_by_field_name("right")
        if right is not None:
            node = unwrap_parentheses(right)

    if node.type == "identifier":
        return SuperclassReference("name", node_text(node, source), node=node)

    if node.type == "member_expression":
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if (
            obj is not None and obj.type == "identifier"
            and prop is not None and prop.type == "property_identifier"
            and not _is_optional(node)
        ):
            return SuperclassReference("member", node_text(prop, source), node_text(obj, source), node=node)
        if prop is not None and prop.type == "property_identifier":
            return SuperclassReference("other", node_text(prop, source), node_text(obj, source) if obj else None, node=node)

    return SuperclassReference("other", node_text(node, source), node=node)


def _is_optional(member: tree_sitter.Node) -> bool:
    return any(child.type == "optional_chain" for child in member.children)


def is_acceptable_superclass(reference: SuperclassReference, options: PluginOptions) -> PolicyDecision:
    """Apply the base-class allow-list to a superclass reference."""
    if reference.shape == "name":
        return PolicyDecision(reference.name in options.class_component_extends, reference.name)

    if reference.shape == "member":
        if reference.namespace == REACT_NAMESPACE:
            accepted = reference.name in REACT_CLASS_COMPONENT_EXTENDS
        else:
            accepted = (
                reference.namespace in options.class_component_extends_object
                and reference.name in options.class_component_extends
            )
        return PolicyDecision(accepted, reference.name, reference.namespace)

    return PolicyDecision(False, reference.name, reference.namespace)
