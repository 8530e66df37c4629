"""Tests for the click CLI."""

import json
from pathlib import Path

from click.testing import CliRunner

from relay_lint.cli import cli

APP = Path(__file__).parent / "fixtures" / "app"


def test_check_text_output():
    runner = CliRunner()
    result = runner.invoke(cli, ["check", str(APP)])
    assert result.exit_code == 0
    assert "subtitle" in result.output
    assert "Badge_user" in result.output
    assert "4 problem(s)" in result.output


def test_check_strict_exits_nonzero():
    result = CliRunner().invoke(cli, ["check", "--preset", "strict", str(APP)])
    assert result.exit_code == 1


def test_check_json_output():
    result = CliRunner().invoke(cli, ["check", "--format", "json", str(APP)])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["files_checked"] == 3
    assert data["warnings"] == 4
    assert {d["rule"] for d in data["diagnostics"]} == {
        "unused-fields", "must-colocate-fragment-spreads",
    }


def test_check_with_config_file(tmp_path):
    config = tmp_path / "relay-lint.json"
    config.write_text(json.dumps({
        "rules": {
            "unused-fields": ["error", {"edgesAndNodesWhiteListFunctionName": "collectConnectionNodes"}],
            "must-colocate-fragment-spreads": "off",
        },
    }))
    result = CliRunner().invoke(cli, ["check", "-c", str(config), "-f", "json", str(APP)])
    assert result.exit_code == 1
    data = json.loads(result.output)
    assert [d["line"] for d in data["diagnostics"]] == [10]


def test_check_rejects_bad_options(tmp_path):
    config = tmp_path / "relay-lint.json"
    config.write_text(json.dumps({"rules": {"unused-fields": ["warn", {"nope": 1}]}}))
    result = CliRunner().invoke(cli, ["check", "-c", str(config), str(APP)])
    assert result.exit_code == 2


def test_check_clean_file(tmp_path):
    source = tmp_path / "Clean.js"
    source.write_text("graphql`fragment Clean_page on Page { title }`;\nprops.page.title;\n")
    result = CliRunner().invoke(cli, ["check", str(source)])
    assert result.exit_code == 0
    assert "No problems found in 1 file(s)." in result.output


def test_rules_command():
    result = CliRunner().invoke(cli, ["rules"])
    assert result.exit_code == 0
    assert "unused-fields" in result.output
    assert "must-colocate-fragment-spreads" in result.output
