"""ProgramUnit — one parsed file plus the edit primitive the engine mutates it with.

tree-sitter trees are read-only, so mutation is expressed as a batch of
byte-range TextEdits applied to the source followed by a re-parse. Nodes
obtained before apply_edits() are stale afterwards.
"""

import logging
from typing import Iterable, List

import tree_sitter

from .models import TextEdit

logger = logging.getLogger(__name__)


class ProgramUnit:
    """A program unit under transformation.

    Attributes:
        source: Current UTF-8 source bytes.
        file_path: Display path of the file ("" when unknown).
        tree: Current tree-sitter tree for source.
    """

    def __init__(self, source: bytes, file_path: str, parser: tree_sitter.Parser):
        self.source = source
        self.file_path = file_path
        self._parser = parser
        self.tree = parser.parse(source)

    @property
    def root(self) -> tree_sitter.Node:
        return self.tree.root_node

    @property
    def body(self) -> List[tree_sitter.Node]:
        """Top-level statements, in order."""
        return [child for child in self.root.named_children if child.type != "comment"]

    @property
    def has_error(self) -> bool:
        return self.root.has_error

    @property
    def code(self) -> str:
        return self.source.decode("utf-8", errors="replace")

    def text(self, node: tree_sitter.Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def apply_edits(self, edits: Iterable[TextEdit]) -> bool:
        """Apply a batch of non-overlapping edits and re-parse.

        Edits sharing an insertion offset keep their given order. A batch that
        overlaps, or that turns a clean tree into one with syntax errors, is
        discarded and the unit is left untouched.

        Returns:
            True if the batch was applied
        """
        ordered = sorted(enumerate(edits), key=lambda item: (item[1].start, item[0]))
        if not ordered:
            return True

        chunks: List[bytes] = []
        cursor = 0
        for _, edit in ordered:
            if edit.start < cursor:
                logger.error(
                    f"Discarding overlapping edit batch in {self.file_path or '<source>'} "
                    f"at byte {edit.start}"
                )
                return False
            chunks.append(self.source[cursor:edit.start])
            chunks.append(edit.text)
            cursor = edit.end
        chunks.append(self.source[cursor:])

        new_source = b"".join(chunks)
        new_tree = self._parser.parse(new_source)
        if new_tree.root_node.has_error and not self.tree.root_node.has_error:
            logger.error(
                f"Discarding edit batch that breaks the syntax of {self.file_path or '<source>'}"
            )
            return False

        self.source = new_source
        self.tree = new_tree
        return True
