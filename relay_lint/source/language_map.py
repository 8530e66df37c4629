"""Extension-to-grammar mapping for the source parser."""

from __future__ import annotations

# Maps file extension -> tree-sitter grammar name.
# Plain JavaScript goes through the TSX grammar so that Flow-style
# `import type` declarations and JSX both parse.
EXT_TO_GRAMMAR: dict[str, str] = {
    ".js": "tsx",
    ".jsx": "tsx",
    ".mjs": "tsx",
    ".cjs": "tsx",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

LINTABLE_EXTENSIONS: set[str] = set(EXT_TO_GRAMMAR)
