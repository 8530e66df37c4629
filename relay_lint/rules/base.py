"""Abstract base rule."""

from __future__ import annotations

import abc
from typing import Any

from relay_lint.graphql_template import GraphQLTemplate
from relay_lint.models import Diagnostic, Severity
from relay_lint.options import RuleOptions, parse_options
from relay_lint.source import SourceFile

PLUGIN_NAMESPACE = "@productboard/relay"


class BaseRule(abc.ABC):
    """Base class for lint rules.

    A rule instance holds only its validated options. All per-file state is
    created inside :meth:`check` and dropped when it returns.
    """

    name: str
    description: str
    options_model: type[RuleOptions]

    def __init__(
        self,
        options: dict[str, Any] | None = None,
        severity: Severity = Severity.WARN,
    ):
        self.options = parse_options(self.options_model, options)
        self.severity = severity

    @property
    def qualified_name(self) -> str:
        """Name used in ``eslint-disable-next-line`` comments."""
        return f"{PLUGIN_NAMESPACE}/{self.name}"

    @abc.abstractmethod
    def check(self, source: SourceFile) -> list[Diagnostic]:
        """Analyse a single file and return its diagnostics."""

    def report_in_template(
        self,
        source: SourceFile,
        template: GraphQLTemplate,
        start: int,
        end: int,
        message: str,
    ) -> Diagnostic:
        """Build a diagnostic for a span inside a template body."""
        loc_start = source.location_at(template.host_offset(start))
        loc_end = source.location_at(template.host_offset(end))
        return Diagnostic(
            rule=self.name,
            message=message,
            line=loc_start.line,
            column=loc_start.column,
            end_line=loc_end.line,
            end_column=loc_end.column,
            severity=self.severity,
            file_path=source.path,
        )
