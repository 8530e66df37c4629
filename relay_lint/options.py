"""Rule options and lint settings."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from relay_lint.models import Severity


class RuleConfigError(ValueError):
    """Raised when a rule is configured with invalid options."""


class RuleOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class UnusedFieldsOptions(RuleOptions):
    # Calls to this helper count as consuming a connection's edges/node
    edgesAndNodesWhiteListFunctionName: str | None = None


class MustColocateOptions(RuleOptions):
    allowNamedImports: bool = False


RuleSetting = Union[Severity, tuple[Severity, dict[str, Any]]]


class LintSettings(BaseModel):
    """A preset plus per-rule overrides, as read from a JSON config file.

    Example::

        {
          "preset": "strict",
          "rules": {
            "unused-fields": ["error", {"edgesAndNodesWhiteListFunctionName": "collectConnectionNodes"}],
            "must-colocate-fragment-spreads": "off"
          }
        }
    """
    model_config = ConfigDict(extra="forbid")

    preset: str = "recommended"
    rules: dict[str, RuleSetting] = {}


def parse_options(model: type[RuleOptions], raw: dict[str, Any] | None) -> RuleOptions:
    """Validate raw options, raising RuleConfigError on bad keys or values."""
    try:
        return model.model_validate(raw or {})
    except ValidationError as err:
        raise RuleConfigError(f"Invalid options for {model.__name__}: {err}") from err


def parse_settings(raw: dict[str, Any]) -> LintSettings:
    try:
        return LintSettings.model_validate(raw)
    except ValidationError as err:
        raise RuleConfigError(f"Invalid lint settings: {err}") from err
