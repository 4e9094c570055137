"""Call-site synthesizer — builds the validation call and its edits.

The guard is structural: a target whose first statement already calls the
validator is left as is, so re-running the pass, or meeting a propTypes
re-assignment, never stacks a second call.
"""

from typing import Collection, List

import tree_sitter

from ..ast_parser.editor import prepend_statements, wrap_expression_body
from ..ast_parser.javascript_parser import PATTERN_TYPES, named_children, node_text
from ..ast_parser.models import TextEdit
from ..ast_parser.program import ProgramUnit
from ..constants import PROP_LOCATION, VALIDATOR_ARITY
from .models import InjectionSite


def build_call(validator: str, site: InjectionSite) -> str:
    """`validator(<propTypes>, <props>, "prop", <Name>.displayName || "<Name>");`"""
    return (
        f"{validator}({site.prop_types_reference}, {site.props_expression}, "
        f'"{PROP_LOCATION}", {site.name}.displayName || "{site.name}");'
    )


def is_validation_call(statement: tree_sitter.Node, validator_names: Collection[str], source: bytes) -> bool:
    """True for `<validator>(schema, props, location, name);` with a known validator name."""
    if statement.type != "expression_statement":
        return False
    expressions = named_children(statement)
    if not expressions or expressions[0].type != "call_expression":
        return False
    callee = expressions[0].child_by_field_name("function")
    if callee is None or callee.type != "identifier" or node_text(callee, source) not in validator_names:
        return False
    arguments = expressions[0].child_by_field_name("arguments")
    return arguments is not None and len(named_children(arguments)) == VALIDATOR_ARITY


def _is_hoisted_pattern(statement: tree_sitter.Node, props_expression: str, source: bytes) -> bool:
    """`const <pattern> = <props>;`, as emitted for destructured arrow parameters."""
    if statement.type != "lexical_declaration":
        return False
    declarators = [child for child in named_children(statement) if child.type == "variable_declarator"]
    if len(declarators) != 1:
        return False
    target = declarators[0].child_by_field_name("name")
    value = declarators[0].child_by_field_name("value")
    return (
        target is not None and target.type in PATTERN_TYPES
        and value is not None and value.type == "identifier"
        and node_text(value, source) == props_expression.split("[", 1)[0]
    )


def is_instrumented(program: ProgramUnit, site: InjectionSite, validator_names: Collection[str]) -> bool:
    """True if the site's body already opens with a validation call."""
    if site.expression_body:
        return False
    statements = named_children(site.body)
    if statements and _is_hoisted_pattern(statements[0], site.props_expression, program.source):
        statements = statements[1:]
    return bool(statements) and is_validation_call(statements[0], validator_names, program.source)


def synthesize(
    program: ProgramUnit,
    site: InjectionSite,
    validator: str,
    validator_names: Collection[str],
    indent_unit: str,
) -> List[TextEdit]:
    """Edits injecting the validation call at site; empty if already there."""
    if is_instrumented(program, site, validator_names):
        return []

    statements = [build_call(validator, site)]
    if site.hoisted:
        statements.insert(0, site.hoisted)

    edits: List[TextEdit] = []
    if site.parameter_edit is not None:
        edits.append(site.parameter_edit)
    if site.expression_body:
        edits.append(wrap_expression_body(program, site.function, site.body, statements, indent_unit))
    else:
        edits.append(prepend_statements(program, site.body, statements, indent_unit))
    return edits
