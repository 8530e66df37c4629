"""Rule registry and presets."""

from __future__ import annotations

import logging

from relay_lint.models import Severity
from relay_lint.options import LintSettings, RuleConfigError
from relay_lint.rules.base import PLUGIN_NAMESPACE, BaseRule
from relay_lint.rules.must_colocate_fragment_spreads import MustColocateFragmentSpreadsRule
from relay_lint.rules.unused_fields import UnusedFieldsRule

logger = logging.getLogger(__name__)

RULES: dict[str, type[BaseRule]] = {
    UnusedFieldsRule.name: UnusedFieldsRule,
    MustColocateFragmentSpreadsRule.name: MustColocateFragmentSpreadsRule,
}

PRESETS: dict[str, dict[str, Severity]] = {
    "recommended": {
        UnusedFieldsRule.name: Severity.WARN,
        MustColocateFragmentSpreadsRule.name: Severity.WARN,
    },
    "strict": {
        UnusedFieldsRule.name: Severity.ERROR,
        MustColocateFragmentSpreadsRule.name: Severity.ERROR,
    },
}


def build_rules(settings: LintSettings | None = None) -> list[BaseRule]:
    """Instantiate the enabled rules, validating all options up front."""
    settings = settings or LintSettings()
    if settings.preset not in PRESETS:
        raise RuleConfigError(
            f"Unknown preset {settings.preset!r}, expected one of {sorted(PRESETS)}"
        )
    unknown = set(settings.rules) - set(RULES)
    if unknown:
        raise RuleConfigError(f"Unknown rule(s): {', '.join(sorted(unknown))}")

    rules: list[BaseRule] = []
    for name, rule_cls in RULES.items():
        severity = PRESETS[settings.preset].get(name, Severity.OFF)
        options = None
        override = settings.rules.get(name)
        if isinstance(override, tuple):
            severity, options = override
        elif override is not None:
            severity = override

        if severity == Severity.OFF:
            logger.debug("Rule %s disabled", name)
            continue
        rules.append(rule_cls(options, severity=severity))
    return rules


__all__ = [
    "PLUGIN_NAMESPACE",
    "PRESETS",
    "RULES",
    "BaseRule",
    "MustColocateFragmentSpreadsRule",
    "UnusedFieldsRule",
    "build_rules",
]
