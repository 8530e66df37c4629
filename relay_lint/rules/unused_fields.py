"""Warns about fields queried in ``graphql`` templates that the file never reads.

Usage is collected across the whole file from four access idioms:

* ``obj.field`` and ``obj?.field``
* destructuring keys, ``const { field, other: renamed } = obj``
* ``getByPath(obj, ['field', 'nested'])``
* ``dotAccess(obj, 'field.nested')``

Reconciliation runs once, after the traversal, so declaration and usage
order within a file do not matter.
"""

from __future__ import annotations

import logging

from graphql.language import (
    DocumentNode,
    FieldNode,
    Node,
    OperationDefinitionNode,
    OperationType,
)

from relay_lint.graphql_template import (
    GraphQLTemplate,
    has_preceding_disable_comment,
    template_from_call,
)
from relay_lint.models import Diagnostic, QueriedField
from relay_lint.options import UnusedFieldsOptions
from relay_lint.rules.base import BaseRule
from relay_lint.source import SourceFile, TreeWalker, call_arguments

logger = logging.getLogger(__name__)

PAGE_INFO_FIELDS = frozenset({
    "pageInfo", "page_info",
    "hasNextPage", "has_next_page",
    "hasPreviousPage", "has_previous_page",
    "startCursor", "start_cursor",
    "endCursor", "end_cursor",
})
CONNECTION_WRAPPER_FIELDS = frozenset({"edges", "node"})
TYPENAME_FIELD = "__typename"

# Relay container config; its queries are consumed reflectively
CONFIGS_METHOD = "getConfigs"
GET_BY_PATH = "getByPath"
DOT_ACCESS = "dotAccess"

_SKIPPED_OPERATIONS = (OperationType.MUTATION, OperationType.SUBSCRIPTION)


def unused_field_message(field: str) -> str:
    return (
        f"This queries for the field `{field}` but this file does "
        "not seem to use it directly. If a different file needs this "
        "information that file should export a fragment and colocate "
        "the query for the data with the usage.\n"
        "If only interested in the existence of a record, __typename "
        "can be used without this warning."
    )


# ── Query field extraction ────────────────────────────────────

def _contains_edges(field: FieldNode) -> bool:
    return any(
        isinstance(selection, FieldNode) and selection.name.value == "edges"
        for selection in field.selection_set.selections
    )


def get_graphql_field_names(
    document: Node, rule_name: str,
) -> tuple[dict[str, QueriedField], set[str]]:
    """Collect queried fields by effective name, plus connection parents.

    Root fields of queries are walked but not recorded: they are passed on
    through response helpers rather than read as leaf data. Mutations,
    subscriptions and suppressed nodes are skipped with their subtrees.
    """
    field_names: dict[str, QueriedField] = {}
    edges_parents: set[str] = set()

    def walk(node: Node, ignored: bool = False) -> None:
        if isinstance(node, FieldNode) and not ignored:
            if has_preceding_disable_comment(node, rule_name):
                return
            name_node = node.alias or node.name
            is_edges_parent = node.selection_set is not None and _contains_edges(node)
            field_names[name_node.value] = QueriedField(
                name=name_node.value,
                start=name_node.loc.start,
                end=name_node.loc.end,
                is_edges_parent=is_edges_parent,
            )
            if is_edges_parent:
                edges_parents.add(node.name.value)

        if isinstance(node, OperationDefinitionNode):
            if (node.operation in _SKIPPED_OPERATIONS
                    or has_preceding_disable_comment(node, rule_name)):
                return
            for selection in node.selection_set.selections:
                walk(selection, ignored=True)
            return

        if isinstance(node, DocumentNode):
            for definition in node.definitions:
                walk(definition)
            return

        selection_set = getattr(node, "selection_set", None)
        if selection_set is not None:
            for selection in selection_set.selections:
                walk(selection)

    walk(document)
    return field_names, edges_parents


# ── Allow-list resolution ─────────────────────────────────────

def resolve_argument_name(arg, source: SourceFile) -> str | None:
    """Best-effort name of the field an argument refers to.

    ``fields`` -> "fields", ``data.fields`` / ``data?.fields`` -> "fields".
    Any other shape is unresolvable and yields None.
    """
    if arg.type == "identifier":
        return source.node_text(arg)
    if arg.type == "member_expression":
        prop = arg.child_by_field_name("property")
        if prop is not None and prop.type == "property_identifier":
            return source.node_text(prop)
    return None


def was_connection_helper_called(edges_parents: set[str], argument_names: set[str]) -> bool:
    return not edges_parents.isdisjoint(argument_names)


# ── Usage collection ──────────────────────────────────────────

class UsageCollector:
    """Per-file analysis context for the unused-fields rule."""

    def __init__(self, source: SourceFile, helper_name: str | None = None):
        self.source = source
        self.helper_name = helper_name
        self.used_names: set[str] = set()
        self.templates: list[GraphQLTemplate] = []
        self.helper_calls: list = []
        self.method_stack: list[str] = []

    def collect(self) -> UsageCollector:
        walker = TreeWalker(
            enter={
                "call_expression": self._visit_call,
                "member_expression": self._visit_member,
                "object_pattern": self._visit_object_pattern,
                "method_definition": self._enter_method,
            },
            exit={"method_definition": self._exit_method},
        )
        walker.walk(self.source.root_node)
        return self

    def helper_argument_names(self) -> set[str]:
        names: set[str] = set()
        for call in self.helper_calls:
            for arg in call_arguments(call):
                name = resolve_argument_name(arg, self.source)
                if name is not None:
                    names.add(name)
        return names

    def _visit_call(self, node) -> None:
        template = template_from_call(node, self.source)
        if template is not None:
            if not (self.method_stack and self.method_stack[-1] == CONFIGS_METHOD):
                self.templates.append(template)
            return

        func = node.child_by_field_name("function")
        if func is None or func.type != "identifier":
            return
        name = self.source.node_text(func)
        if self.helper_name and name == self.helper_name:
            self.helper_calls.append(node)
        elif name == GET_BY_PATH:
            self._visit_get_by_path(call_arguments(node))
        elif name == DOT_ACCESS:
            self._visit_dot_access(call_arguments(node))

    def _visit_get_by_path(self, args: list) -> None:
        # getByPath(thing, ['field', 'nestedField'])
        if len(args) < 2 or args[1].type != "array":
            return
        for element in args[1].named_children:
            value = self.source.string_value(element)
            if value is not None:
                self.used_names.add(value)

    def _visit_dot_access(self, args: list) -> None:
        # dotAccess(thing, 'field.nestedField')
        if len(args) < 2:
            return
        value = self.source.string_value(args[1])
        if value is not None:
            self.used_names.update(value.split("."))

    def _visit_member(self, node) -> None:
        prop = node.child_by_field_name("property")
        if prop is not None and prop.type == "property_identifier":
            self.used_names.add(self.source.node_text(prop))

    def _visit_object_pattern(self, node) -> None:
        for child in node.named_children:
            if child.type == "shorthand_property_identifier_pattern":
                self.used_names.add(self.source.node_text(child))
            elif child.type == "pair_pattern":
                key = self._static_key(child.child_by_field_name("key"))
                if key is not None:
                    self.used_names.add(key)
            elif child.type == "object_assignment_pattern":
                left = child.child_by_field_name("left")
                if left is not None and left.type == "shorthand_property_identifier_pattern":
                    self.used_names.add(self.source.node_text(left))

    def _static_key(self, key) -> str | None:
        # Computed keys cannot be resolved to a fixed name
        if key is None:
            return None
        if key.type == "property_identifier":
            return self.source.node_text(key)
        return self.source.string_value(key)

    def _enter_method(self, node) -> None:
        name_node = node.child_by_field_name("name")
        self.method_stack.append(self.source.node_text(name_node) if name_node else "")

    def _exit_method(self, node) -> None:
        self.method_stack.pop()


# ── Rule ──────────────────────────────────────────────────────

class UnusedFieldsRule(BaseRule):
    name = "unused-fields"
    description = "Warns about unused fields in graphql queries"
    options_model = UnusedFieldsOptions

    def check(self, source: SourceFile) -> list[Diagnostic]:
        usage = UsageCollector(
            source, self.options.edgesAndNodesWhiteListFunctionName,
        ).collect()
        helper_arguments = usage.helper_argument_names()

        diagnostics: list[Diagnostic] = []
        for template in usage.templates:
            document = template.parse()
            if document is None:
                # Syntax errors belong to a syntax rule, not this one
                continue

            field_names, edges_parents = get_graphql_field_names(document, self.qualified_name)
            connection_exempt = was_connection_helper_called(edges_parents, helper_arguments)

            for name, field in field_names.items():
                if name in usage.used_names or self._is_exempt(name, connection_exempt):
                    continue
                diagnostics.append(self.report_in_template(
                    source, template, field.start, field.end, unused_field_message(name),
                ))

        logger.debug(
            "%s: %d template(s), %d unused field(s)",
            source.path, len(usage.templates), len(diagnostics),
        )
        return diagnostics

    @staticmethod
    def _is_exempt(name: str, connection_exempt: bool) -> bool:
        if name in PAGE_INFO_FIELDS or name == TYPENAME_FIELD:
            return True
        return connection_exempt and name in CONNECTION_WRAPPER_FIELDS
