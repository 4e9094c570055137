"""PropTypesInstrumenter — the single pass over one program unit.

enter() builds the unit context (options, diagnostics, scope service,
validator name); every `<name>.propTypes = ...` assignment is then visited
in source order. Each visit classifies the binding, resolves the injection
site, synthesizes the call and applies the resulting edits (plus the
validator import when first needed) as one batch.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, TextIO, Tuple

import tree_sitter

from ..ast_parser.base import relative_path
from ..ast_parser.editor import detect_indent_unit
from ..ast_parser.javascript_parser import iter_prop_types_assignments, node_text
from ..ast_parser.program import ProgramUnit
from ..ast_parser.scope import ScopeResolver
from ..ast_parser.utils import get_parser
from ..constants import UNKNOWN_FILE_NAME, VALIDATOR_IDENTIFIER
from .classifier import classify
from .config import PluginOptions, parse_options
from .diagnostics import Diagnostics
from .imports import ImportManager
from .models import BindingShape, TransformResult
from .resolver import InjectionSiteResolver
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


@dataclass
class UnitContext:
    """Per-unit state; created by enter() and dropped after the pass."""
    file_name: str
    program: ProgramUnit
    options: PluginOptions
    diagnostics: Diagnostics
    scope: ScopeResolver
    imports: ImportManager
    resolver: InjectionSiteResolver
    validator: str
    indent_unit: str
    instrumented: List[str] = field(default_factory=list)

    @property
    def validator_names(self) -> Tuple[str, ...]:
        return (VALIDATOR_IDENTIFIER, self.validator)


def display_file_name(file_path: Optional[str], cwd: Optional[str] = None) -> str:
    """File name used in diagnostics: relative to cwd, "" when unknown."""
    if not file_path or file_path == UNKNOWN_FILE_NAME:
        return file_path or ""
    return relative_path(file_path, cwd or "")


class PropTypesInstrumenter:
    """Injects runtime propTypes validation into component bindings.

    Args:
        options: Plugin options mapping (camelCase keys), read at each enter
        stream: Diagnostic sink; stderr when None
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None, stream: Optional[TextIO] = None):
        self._raw_options = dict(options or {})
        self._stream = stream

    def transform(
        self,
        source_text: str,
        file_path: Optional[str] = None,
        cwd: Optional[str] = None,
    ) -> TransformResult:
        """Instrument one program unit.

        Args:
            source_text: JavaScript source
            file_path: Absolute path of the file (None if unknown)
            cwd: Working directory the display path is relative to

        Returns:
            TransformResult with the (possibly unchanged) code
        """
        file_name = display_file_name(file_path, cwd)
        parsed = get_parser("javascript").parse_source(source_text, file_name)
        context = self.enter(parsed.program, file_name)

        if parsed.errors:
            logger.warning(f"Skipping {file_name or '<source>'}: source does not parse cleanly")
            return TransformResult(
                file_path=file_name,
                code=source_text,
                diagnostics=context.diagnostics.messages,
                errors=parsed.errors,
            )

        index = 0
        while True:
            # edits re-parse the unit, so assignments are re-collected each round
            assignments = list(iter_prop_types_assignments(context.program.root, context.program.source))
            if index >= len(assignments):
                break
            self.visit_assignment(context, assignments[index])
            index += 1

        code = context.program.code
        return TransformResult(
            file_path=file_name,
            code=code,
            changed=code != source_text,
            instrumented=context.instrumented,
            diagnostics=context.diagnostics.messages,
        )

    def enter(self, program: ProgramUnit, file_name: str) -> UnitContext:
        """Start a program unit: resolve options and build the unit context."""
        diagnostics = Diagnostics(file_name, self._stream, program)
        options, ignored = parse_options(self._raw_options)
        for entry in ignored:
            diagnostics.warn_options(entry)

        scope = ScopeResolver(program)
        imports = ImportManager(program, scope)
        return UnitContext(
            file_name=file_name,
            program=program,
            options=options,
            diagnostics=diagnostics,
            scope=scope,
            imports=imports,
            resolver=InjectionSiteResolver(program, scope, options, diagnostics),
            validator=imports.validator_name(),
            indent_unit=detect_indent_unit(program.source),
        )

    def visit_assignment(self, context: UnitContext, assignment: tree_sitter.Node) -> bool:
        """Handle one `<name>.propTypes = ...` assignment.

        Returns:
            True if the candidate was instrumented by this visit
        """
        program = context.program
        left = assignment.child_by_field_name("left")
        target = left.child_by_field_name("object") if left is not None else None
        if target is None or target.type != "identifier":
            return False

        name = node_text(target, program.source)
        classification = classify(name, target, context.scope.resolve_binding(name, target))
        if classification.shape == BindingShape.UNSUPPORTED:
            context.diagnostics.warn_binding(
                context.options.log_ignored_binding,
                classification.binding_type,
                classification.identifier,
                name,
                classification.kind,
            )
            return False

        site = context.resolver.resolve(classification)
        if site is None:
            return False

        edits = synthesize(program, site, context.validator, context.validator_names, context.indent_unit)
        if not edits:
            logger.debug(f"{name} is already instrumented")
            return False

        import_edit = context.imports.ensure_import(site.body, context.validator)
        if import_edit is not None:
            edits.append(import_edit)

        if not program.apply_edits(edits):
            return False

        logger.debug(f"Instrumented {classification.shape.value} {name} in {context.file_name or '<source>'}")
        context.instrumented.append(name)
        return True
