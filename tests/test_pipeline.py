"""Tests for the lint pipeline."""

from pathlib import Path

import pytest

from relay_lint.models import LintConfig, Severity
from relay_lint.options import RuleConfigError
from relay_lint.pipeline import discover_files, lint_file, lint_source, run_lint

FIXTURES = Path(__file__).parent / "fixtures"
APP = FIXTURES / "app"

HELPER_RULES = {
    "unused-fields": ["warn", {"edgesAndNodesWhiteListFunctionName": "collectConnectionNodes"}],
}


def _summary(result):
    return [(d.file_path.name, d.line, d.rule) for d in result.diagnostics]


def test_discover_files_skips_vendor_dirs():
    files = discover_files([APP], LintConfig().skip_dirs)
    names = [f.name for f in files]
    assert names == ["Avatar.react.js", "FieldList.tsx", "PageHeader.js"]


def test_run_lint_recommended():
    result = run_lint(LintConfig(paths=[APP]))
    assert len(result.files_checked) == 3
    assert _summary(result) == [
        ("FieldList.tsx", 14, "unused-fields"),
        ("FieldList.tsx", 15, "unused-fields"),
        ("PageHeader.js", 10, "unused-fields"),
        ("PageHeader.js", 13, "must-colocate-fragment-spreads"),
    ]
    assert result.warning_count == 4
    assert result.error_count == 0


def test_run_lint_with_connection_helper():
    result = run_lint(LintConfig(paths=[APP], rules=HELPER_RULES))
    assert _summary(result) == [
        ("PageHeader.js", 10, "unused-fields"),
        ("PageHeader.js", 13, "must-colocate-fragment-spreads"),
    ]


def test_strict_preset_reports_errors():
    result = run_lint(LintConfig(paths=[APP], preset="strict"))
    assert result.error_count == 4
    assert all(d.severity == Severity.ERROR for d in result.diagnostics)


def test_rule_can_be_turned_off():
    result = run_lint(LintConfig(
        paths=[APP], rules={"must-colocate-fragment-spreads": "off"},
    ))
    assert {d.rule for d in result.diagnostics} == {"unused-fields"}


def test_invalid_options_fail_before_linting():
    config = LintConfig(paths=[APP], rules={"unused-fields": ["warn", {"bogus": True}]})
    with pytest.raises(RuleConfigError):
        run_lint(config)


def test_unknown_rule_rejected():
    with pytest.raises(RuleConfigError):
        run_lint(LintConfig(paths=[APP], rules={"graphql-syntax": "error"}))


def test_explicit_unsupported_file_is_skipped():
    result = run_lint(LintConfig(paths=[APP / "README.md"]))
    assert result.files_checked == []
    assert result.diagnostics == []


def test_lint_file_labels_diagnostics():
    diagnostics = lint_file(APP / "components" / "PageHeader.js")
    assert all(d.file_path == APP / "components" / "PageHeader.js" for d in diagnostics)


def test_lint_source_default_rules():
    diagnostics = lint_source("graphql`fragment F on Page { ...Missing_page unused }`;")
    assert [d.rule for d in diagnostics] == ["must-colocate-fragment-spreads", "unused-fields"]


def test_lint_source_unsupported_extension():
    with pytest.raises(ValueError):
        lint_source("x", "notes.txt")


def test_run_lint_is_repeatable():
    first = run_lint(LintConfig(paths=[APP]))
    second = run_lint(LintConfig(paths=[APP]))
    assert first.diagnostics == second.diagnostics
