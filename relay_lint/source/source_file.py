"""Parsed host source files backed by tree-sitter."""

from __future__ import annotations

import bisect
from pathlib import Path

from relay_lint.models import SourceLocation
from relay_lint.source.language_map import EXT_TO_GRAMMAR

try:
    from tree_sitter_language_pack import get_parser
except ImportError as _err:
    raise ImportError(
        "tree-sitter-language-pack is required. Install with: "
        "pip install tree-sitter-language-pack"
    ) from _err

_parser_cache: dict[str, object] = {}


def _get_parser(grammar_name: str):
    if grammar_name not in _parser_cache:
        _parser_cache[grammar_name] = get_parser(grammar_name)
    return _parser_cache[grammar_name]


def grammar_for(filename: str | Path) -> str:
    suffix = Path(filename).suffix
    if suffix not in EXT_TO_GRAMMAR:
        raise ValueError(f"Unsupported file extension: {suffix or filename!r}")
    return EXT_TO_GRAMMAR[suffix]


class SourceFile:
    """One host file: its text, its syntax tree, and a line map.

    Offsets coming out of tree-sitter are byte offsets; offsets used for
    reporting are character offsets into ``text``.
    """

    def __init__(self, text: str, filename: str | Path = "input.js"):
        self.path = Path(filename)
        self.text = text
        self.source_bytes = text.encode("utf-8")
        self.grammar = grammar_for(filename)
        self.tree = _get_parser(self.grammar).parse(self.source_bytes)
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)

    @classmethod
    def from_path(cls, path: Path) -> SourceFile:
        text = path.read_text(encoding="utf-8", errors="replace")
        return cls(text, path)

    @property
    def root_node(self):
        return self.tree.root_node

    def node_text(self, node) -> str:
        return self.source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def string_value(self, node) -> str | None:
        """Value of a plain string literal node, else None."""
        if node is None or node.type != "string":
            return None
        return self.node_text(node)[1:-1]

    def char_offset(self, byte_offset: int) -> int:
        """Convert a byte offset into a character offset into ``text``."""
        return len(self.source_bytes[:byte_offset].decode("utf-8", errors="replace"))

    def location_at(self, offset: int) -> SourceLocation:
        """Map a character offset to a 1-based line and column."""
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return SourceLocation(
            line=line_index + 1,
            column=offset - self._line_starts[line_index] + 1,
        )

    def node_location(self, node) -> SourceLocation:
        return self.location_at(self.char_offset(node.start_byte))
