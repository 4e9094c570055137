"""Import manager — one validator import per program unit.

The validator's local name is picked when the unit is entered: an existing
default import of the validator module is reused, otherwise the reserved
name is taken unless the file already spells it, in which case a numbered
variant is used so nothing the file declares is shadowed.
"""

import logging
from typing import Iterator, Optional

import tree_sitter

from ..ast_parser.editor import insert_at_top
from ..ast_parser.javascript_parser import named_children, node_text, string_value
from ..ast_parser.models import TextEdit
from ..ast_parser.program import ProgramUnit
from ..ast_parser.scope import ScopeResolver
from ..constants import VALIDATOR_IDENTIFIER, VALIDATOR_MODULE

logger = logging.getLogger(__name__)


class ImportManager:
    """Validator import bookkeeping for one program unit."""

    def __init__(self, program: ProgramUnit, scope: ScopeResolver):
        self._program = program
        self._scope = scope

    def validator_name(self) -> str:
        """Local name the validator is (or will be) imported as."""
        existing = self._existing_default_import()
        if existing is not None:
            return existing

        taken = self._scope.declared_names()
        candidate = VALIDATOR_IDENTIFIER
        suffix = 2
        while candidate in taken:
            candidate = f"{VALIDATOR_IDENTIFIER}{suffix}"
            suffix += 1
        if candidate != VALIDATOR_IDENTIFIER:
            logger.debug(f"{VALIDATOR_IDENTIFIER} is taken in {self._program.file_path or '<source>'}, using {candidate}")
        return candidate

    def has_import(self, name: str) -> bool:
        """True if any import declaration binds name."""
        for statement in self._import_statements():
            clause = self._import_clause(statement)
            if clause is not None and name in self._local_names(clause):
                return True
        return False

    def ensure_import(self, anchor: tree_sitter.Node, name: str) -> Optional[TextEdit]:
        """Edit adding `import <name> from "<module>";` at the top, or None if not needed.

        Args:
            anchor: Node the validator will be referenced from
            name: Validator local name
        """
        if self._scope.has_binding(name, anchor) or self.has_import(name):
            return None
        return insert_at_top(self._program, f'import {name} from "{VALIDATOR_MODULE}";')

    # =========================================================================
    # Helpers
    # =========================================================================

    def _import_statements(self) -> Iterator[tree_sitter.Node]:
        for statement in self._program.body:
            if statement.type == "import_statement":
                yield statement

    @staticmethod
    def _import_clause(statement: tree_sitter.Node) -> Optional[tree_sitter.Node]:
        for child in named_children(statement):
            if child.type == "import_clause":
                return child
        return None

    def _local_names(self, clause: tree_sitter.Node) -> Iterator[str]:
        source = self._program.source
        for child in named_children(clause):
            if child.type == "identifier":
                yield node_text(child, source)
            elif child.type == "namespace_import":
                for ident in named_children(child):
                    if ident.type == "identifier":
                        yield node_text(ident, source)
            elif child.type == "named_imports":
                for spec in named_children(child):
                    local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                    if local is not None:
                        yield node_text(local, source)

    def _existing_default_import(self) -> Optional[str]:
        source = self._program.source
        for statement in self._import_statements():
            module = statement.child_by_field_name("source")
            if module is None or string_value(module, source) != VALIDATOR_MODULE:
                continue
            clause = self._import_clause(statement)
            if clause is None:
                continue
            for child in named_children(clause):
                if child.type == "identifier":
                    return node_text(child, source)
        return None
