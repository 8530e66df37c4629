"""Depth-first traversal of tree-sitter trees with per-type handlers."""

from __future__ import annotations

from typing import Callable

Handler = Callable[[object], None]


class TreeWalker:
    """Dispatches enter/exit callbacks by node type.

    Handlers run in document order: a node's enter handler fires before any
    of its descendants are visited and its exit handler after all of them.
    The walk keeps its own stack so deeply nested sources do not hit the
    interpreter recursion limit.
    """

    def __init__(
        self,
        enter: dict[str, Handler] | None = None,
        exit: dict[str, Handler] | None = None,
    ):
        self.enter = enter or {}
        self.exit = exit or {}

    def walk(self, root) -> None:
        stack: list[tuple[object, bool]] = [(root, False)]
        while stack:
            node, leaving = stack.pop()
            if leaving:
                self.exit[node.type](node)
                continue

            handler = self.enter.get(node.type)
            if handler is not None:
                handler(node)
            if node.type in self.exit:
                stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))
