"""Warns about fragment spreads not colocated with the module that uses them.

A spread ``...componentName_suffix`` is considered colocated when the file
imports (``import``, ``require`` or ``import()``) a module whose name, as
derived from its path, prefixes the fragment name. The match is a naming
heuristic, not a resolution of what the module actually exports.
"""

from __future__ import annotations

import logging
import posixpath
import re

from graphql.language import (
    BooleanValueNode,
    DocumentNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    Node,
    OperationDefinitionNode,
    OperationType,
)

from relay_lint.graphql_template import (
    GraphQLTemplate,
    has_preceding_disable_comment,
    template_from_call,
)
from relay_lint.models import Diagnostic
from relay_lint.options import MustColocateOptions
from relay_lint.rules.base import BaseRule
from relay_lint.source import SourceFile, TreeWalker, call_arguments

logger = logging.getLogger(__name__)

_SKIPPED_OPERATIONS = (OperationType.MUTATION, OperationType.SUBSCRIPTION)
_TYPE_IMPORT_KEYWORDS = {"type", "typeof"}
_EXTENSIONS_RE = re.compile(r"(\.(?!ios|android)[\w-]+)+")
_SEPARATOR_RE = re.compile(r"[^a-zA-Z0-9]+(\w?)")


def unused_spread_message(fragment: str) -> str:
    return (
        f"This spreads the fragment `{fragment}` but "
        "this module does not use it directly or the fragment is named incorrectly. If a different module "
        "needs the data from this fragment, that module should directly define it's own fragment "
        "to query for it's own data, and such fragment should be spread in the parent component."
        "The naming convention is <nameOfComponentCamelCase>_<optionalSuffix>. "
        "The <nameOfComponentCamelCase> must match the import name. The optional suffix should be separated "
        "by underscore (usually when you need to pass multiple fragments to the same component).\n"
    )


def module_name_from_path(path: str) -> str:
    """Derive the component name a module path is expected to export.

    ``../shared/component-module.react.js`` -> ``componentModule``,
    ``./button/index.js`` -> ``button``.
    """
    stem, _ = posixpath.splitext(posixpath.basename(path))
    stem = _EXTENSIONS_RE.sub("", stem)
    if stem == "index":
        stem = posixpath.basename(posixpath.dirname(path))
    return _SEPARATOR_RE.sub(lambda m: m.group(1).upper(), stem)


def binding_module_name(binding: str) -> str:
    """``Component`` -> ``component``."""
    return binding[:1].lower() + binding[1:]


def is_colocated(fragment: str, module_names: list[str]) -> bool:
    return any(name and fragment.startswith(name) for name in module_names)


# ── Fragment spread extraction ────────────────────────────────

def _is_unmasked(spread: FragmentSpreadNode) -> bool:
    # @relay(mask: false) inlines the fragment data into this component
    for directive in spread.directives or ():
        if directive.name.value != "relay":
            continue
        for arg in directive.arguments or ():
            if (arg.name.value == "mask"
                    and isinstance(arg.value, BooleanValueNode)
                    and arg.value.value is False):
                return True
    return False


def _is_module_spread(spread: FragmentSpreadNode) -> bool:
    return any(d.name.value == "module" for d in spread.directives or ())


def get_graphql_fragment_spreads(
    document: Node, rule_name: str,
) -> dict[str, FragmentSpreadNode]:
    """Collect fragment spreads that need a colocated consumer."""
    spreads: dict[str, FragmentSpreadNode] = {}

    def walk(node: Node) -> None:
        if has_preceding_disable_comment(node, rule_name):
            return
        if isinstance(node, OperationDefinitionNode) and node.operation in _SKIPPED_OPERATIONS:
            return
        if isinstance(node, FragmentSpreadNode):
            if not (_is_unmasked(node) or _is_module_spread(node)):
                spreads[node.name.value] = node
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
    return spreads


def get_fragment_definition_names(document: DocumentNode) -> set[str]:
    return {
        definition.name.value
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


# ── Module collection ─────────────────────────────────────────

class ModuleCollector:
    """Per-file analysis context: imported module names and templates."""

    def __init__(self, source: SourceFile, allow_named_imports: bool = False):
        self.source = source
        self.allow_named_imports = allow_named_imports
        self.module_names: list[str] = []
        self.templates: list[GraphQLTemplate] = []

    def collect(self) -> ModuleCollector:
        walker = TreeWalker(enter={
            "import_statement": self._visit_import,
            "call_expression": self._visit_call,
        })
        walker.walk(self.source.root_node)
        return self

    def _add_path(self, path: str) -> None:
        name = module_name_from_path(path)
        if name:
            self.module_names.append(name)

    def _add_binding(self, node) -> None:
        if node is not None and node.type == "identifier":
            self.module_names.append(binding_module_name(self.source.node_text(node)))

    def _visit_import(self, node) -> None:
        # import type {...} / import typeof X bring no runtime module
        if any(not child.is_named and child.type in _TYPE_IMPORT_KEYWORDS for child in node.children):
            return
        path = self.source.string_value(node.child_by_field_name("source"))
        if path is None:
            return
        self._add_path(path)
        if self.allow_named_imports:
            for clause in node.named_children:
                if clause.type == "import_clause":
                    self._add_import_clause_bindings(clause)

    def _add_import_clause_bindings(self, clause) -> None:
        for child in clause.named_children:
            if child.type == "identifier":
                self._add_binding(child)
            elif child.type == "namespace_import":
                for ident in child.named_children:
                    self._add_binding(ident)
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    if any(not c.is_named and c.type in _TYPE_IMPORT_KEYWORDS for c in spec.children):
                        continue
                    self._add_binding(spec.child_by_field_name("alias") or spec.child_by_field_name("name"))

    def _visit_call(self, node) -> None:
        template = template_from_call(node, self.source)
        if template is not None:
            self.templates.append(template)
            return

        func = node.child_by_field_name("function")
        if func is None:
            return
        is_require = func.type == "identifier" and self.source.node_text(func) == "require"
        if not (is_require or func.type == "import"):
            return

        args = call_arguments(node)
        path = self.source.string_value(args[0]) if args else None
        if path is None:
            # import(`./__generated__/${name}`) cannot be resolved statically
            return
        self._add_path(path)

        if self.allow_named_imports:
            parent = node.parent
            if parent is not None and parent.type == "variable_declarator":
                self._add_binding(parent.child_by_field_name("name"))


# ── Rule ──────────────────────────────────────────────────────

class MustColocateFragmentSpreadsRule(BaseRule):
    name = "must-colocate-fragment-spreads"
    description = "Warns about fragment spreads without a colocated consumer module"
    options_model = MustColocateOptions

    def check(self, source: SourceFile) -> list[Diagnostic]:
        modules = ModuleCollector(source, self.options.allowNamedImports).collect()

        parsed: list[tuple[GraphQLTemplate, DocumentNode]] = []
        for template in modules.templates:
            document = template.parse()
            if document is not None:
                parsed.append((template, document))

        local_fragments: set[str] = set()
        for _, document in parsed:
            local_fragments |= get_fragment_definition_names(document)

        diagnostics: list[Diagnostic] = []
        for template, document in parsed:
            spreads = get_graphql_fragment_spreads(document, self.qualified_name)
            for name, spread in spreads.items():
                if name in local_fragments or is_colocated(name, modules.module_names):
                    continue
                diagnostics.append(self.report_in_template(
                    source, template, spread.loc.start, spread.loc.end,
                    unused_spread_message(name),
                ))

        logger.debug(
            "%s: %d module(s), %d uncolocated spread(s)",
            source.path, len(modules.module_names), len(diagnostics),
        )
        return diagnostics
