"""Embedded ``graphql`` tagged templates: detection, parsing and locations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from graphql import GraphQLSyntaxError, parse
from graphql.language import DocumentNode, Node, TokenKind

from relay_lint.source import SourceFile

logger = logging.getLogger(__name__)

GRAPHQL_TAG = "graphql"
DISABLE_NEXT_LINE = "eslint-disable-next-line"


@dataclass
class GraphQLTemplate:
    """A ``graphql`...``` literal without ``${}`` substitutions."""
    node: object  # tree-sitter call_expression
    body: str
    body_offset: int  # character offset of the body in the host text

    def parse(self) -> DocumentNode | None:
        """Parse the body, returning None on a GraphQL syntax error."""
        try:
            return parse(self.body)
        except GraphQLSyntaxError as err:
            logger.debug("Skipping graphql template with syntax error: %s", err.message)
            return None

    def host_offset(self, offset: int) -> int:
        return self.body_offset + offset


def template_from_call(node, source: SourceFile) -> GraphQLTemplate | None:
    """Return the template if ``node`` is a ``graphql`` tagged template."""
    func = node.child_by_field_name("function")
    args = node.child_by_field_name("arguments")
    if func is None or args is None:
        return None
    if func.type != "identifier" or source.node_text(func) != GRAPHQL_TAG:
        return None
    if args.type != "template_string":
        return None
    if any(child.type == "template_substitution" for child in args.children):
        return None

    # Skip the enclosing backticks
    body_start = args.start_byte + 1
    body_end = max(body_start, args.end_byte - 1)
    body = source.source_bytes[body_start:body_end].decode("utf-8", errors="replace")
    return GraphQLTemplate(node=node, body=body, body_offset=source.char_offset(body_start))


def disable_comment(rule_name: str) -> str:
    return f"{DISABLE_NEXT_LINE} {rule_name}"


def has_preceding_disable_comment(node: Node, rule_name: str) -> bool:
    """Check for ``# eslint-disable-next-line <rule>`` right before ``node``."""
    if node.loc is None:
        return False
    prev = node.loc.start_token.prev
    if prev is None or prev.kind != TokenKind.COMMENT:
        return False
    return (prev.value or "").strip() == disable_comment(rule_name)
