"""User-facing diagnostics.

Each message is a single line `[propcheck] Warning: ...` appended to the
sink stream (stderr unless a stream is given) and kept on `messages`.
Diagnostics are advisory: they never fail the pass.
"""

import json
import sys
from typing import Any, List, Mapping, Optional, TextIO

import tree_sitter

from ..ast_parser.javascript_parser import character_column
from ..ast_parser.program import ProgramUnit
from ..constants import PLUGIN_NAME, UNKNOWN_FILE_NAME


class Diagnostics:
    """Diagnostic sink for one program unit."""

    def __init__(self, file_name: str = "", stream: Optional[TextIO] = None, program: Optional[ProgramUnit] = None):
        self.file_name = file_name
        self._program = program
        self._stream = stream
        self.messages: List[str] = []

    def warn(self, enabled: bool, message: str) -> None:
        if not enabled:
            return
        line = f"[{PLUGIN_NAME}] Warning: {message}"
        self.messages.append(line)
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(line + "\n")

    def warn_options(self, options: Mapping[str, Any]) -> None:
        payload = json.dumps(dict(options), separators=(",", ":"), default=str)
        self.warn(True, f"Ignored plugin options: {payload}")

    def warn_class(
        self,
        enabled: bool,
        identifier: tree_sitter.Node,
        name: str,
        superclass: str,
    ) -> None:
        self.warn(
            enabled,
            f'Ignored propTypes {self._location(identifier)} for class "{name}" '
            f'with "{superclass}" super class',
        )

    def warn_binding(
        self,
        enabled: bool,
        binding_type: str,
        identifier: tree_sitter.Node,
        name: str,
        kind: str,
    ) -> None:
        self.warn(
            enabled,
            f'Ignored propTypes {self._location(identifier)} for {binding_type} "{name}" '
            f'with "{kind}" type',
        )

    def _location(self, identifier: tree_sitter.Node) -> str:
        line = identifier.start_point.row + 1
        if self._program is not None:
            column = character_column(self._program.source, identifier.start_byte)
        else:
            column = identifier.start_point.column
        source_file = ""
        if self.file_name and self.file_name != UNKNOWN_FILE_NAME:
            source_file = f' "{self.file_name}" file'
        return f"at{source_file} {line} line {column} column"
