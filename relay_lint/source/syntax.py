"""Small helpers over tree-sitter JavaScript nodes."""

from __future__ import annotations


def call_arguments(node) -> list:
    """Argument nodes of a call_expression, without punctuation or comments."""
    args = node.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return []
    return [child for child in args.named_children if child.type != "comment"]
