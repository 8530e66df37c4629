"""Host source parsing and traversal."""

from __future__ import annotations

from relay_lint.source.language_map import EXT_TO_GRAMMAR, LINTABLE_EXTENSIONS
from relay_lint.source.source_file import SourceFile, grammar_for
from relay_lint.source.syntax import call_arguments
from relay_lint.source.walker import TreeWalker

__all__ = [
    "EXT_TO_GRAMMAR",
    "LINTABLE_EXTENSIONS",
    "SourceFile",
    "TreeWalker",
    "call_arguments",
    "grammar_for",
]
