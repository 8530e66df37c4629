"""Click CLI with check, rules, and serve subcommands."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from relay_lint import __version__
from relay_lint.models import LintConfig, LintResult, Severity
from relay_lint.options import RuleConfigError
from relay_lint.pipeline import run_lint
from relay_lint.rules import PRESETS, RULES

_SEVERITY_COLORS = {
    Severity.ERROR: "red",
    Severity.WARN: "yellow",
}


@click.group()
@click.version_option(version=__version__)
def cli():
    """relay-lint: Find GraphQL fields and fragment spreads a file never uses."""


def _load_config_file(path: Path | None) -> dict:
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"{path} must contain a JSON object")
    return data


@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--preset", type=click.Choice(sorted(PRESETS)), help="Rule preset (overrides config file)")
@click.option("--config", "-c", "config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="JSON file with {\"preset\": ..., \"rules\": {...}}")
@click.option("--format", "-f", "output_format", type=click.Choice(["text", "json"]), default="text")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def check(paths: tuple[Path, ...], preset: str | None, config_file: Path | None,
          output_format: str, verbose: bool):
    """Lint JavaScript/TypeScript files for unused GraphQL data."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    raw = _load_config_file(config_file)
    unknown = set(raw) - {"preset", "rules"}
    if unknown:
        raise click.ClickException(f"Unknown config key(s): {', '.join(sorted(unknown))}")

    config = LintConfig(
        paths=list(paths) or [Path(".")],
        preset=preset or raw.get("preset", "recommended"),
        rules=raw.get("rules", {}),
    )

    try:
        result = run_lint(config)
    except RuleConfigError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        sys.exit(2)

    if output_format == "json":
        click.echo(json.dumps({
            "files_checked": len(result.files_checked),
            "errors": result.error_count,
            "warnings": result.warning_count,
            "diagnostics": [d.to_dict() for d in result.diagnostics],
        }, indent=2))
    else:
        _print_text(result)

    if result.error_count:
        sys.exit(1)


def _print_text(result: LintResult) -> None:
    if not result.diagnostics:
        click.echo(f"No problems found in {len(result.files_checked)} file(s).")
        return

    by_file: dict[str, list] = {}
    for d in result.diagnostics:
        by_file.setdefault(str(d.file_path), []).append(d)

    for file_path, diagnostics in by_file.items():
        click.echo(click.style(file_path, fg="cyan"))
        for d in diagnostics:
            first_line = d.message.splitlines()[0]
            click.echo(
                f"  {click.style(f'{d.line}:{d.column}', dim=True):>16}  "
                f"{click.style(d.severity.value, fg=_SEVERITY_COLORS[d.severity]):<16}  "
                f"{first_line}  "
                f"{click.style(d.rule, dim=True)}"
            )
        click.echo()

    click.echo(
        f"{len(result.diagnostics)} problem(s) "
        f"({result.error_count} error(s), {result.warning_count} warning(s))"
    )


@cli.command()
def rules():
    """List available rules and their preset severities."""
    for name, rule_cls in RULES.items():
        levels = ", ".join(
            f"{preset}={PRESETS[preset].get(name, Severity.OFF).value}"
            for preset in sorted(PRESETS)
        )
        click.echo(f"{click.style(name, fg='cyan')}  {rule_cls.description}  ({levels})")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP lint service."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP service. "
            "Install with: pip install 'relay-lint[web]'"
        )

    from relay_lint.web import create_app

    click.echo(f"Starting relay-lint service at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
