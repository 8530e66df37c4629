"""Lint orchestrator: discover files -> parse -> run rules -> collect diagnostics."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import Callable

from relay_lint.models import Diagnostic, LintConfig, LintResult
from relay_lint.options import parse_settings
from relay_lint.rules import BaseRule, build_rules
from relay_lint.source import LINTABLE_EXTENSIONS, SourceFile

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def _sort_key(diagnostic: Diagnostic) -> tuple:
    return (str(diagnostic.file_path or ""), diagnostic.line, diagnostic.column, diagnostic.rule)


def run_rules(source: SourceFile, rules: list[BaseRule]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule.check(source))
    diagnostics.sort(key=_sort_key)
    return diagnostics


def lint_source(
    text: str,
    filename: str | Path = "input.js",
    rules: list[BaseRule] | None = None,
) -> list[Diagnostic]:
    """Lint source text. ``filename`` only selects the grammar and labels results."""
    if rules is None:
        rules = build_rules()
    return run_rules(SourceFile(text, filename), rules)


def lint_file(path: Path, rules: list[BaseRule] | None = None) -> list[Diagnostic]:
    if rules is None:
        rules = build_rules()
    return run_rules(SourceFile.from_path(path), rules)


def discover_files(paths: list[Path], skip_dirs: list[str]) -> list[Path]:
    """Expand directories into lintable files, honouring skip patterns."""
    files: list[Path] = []
    for path in paths:
        if path.is_file():
            if path.suffix in LINTABLE_EXTENSIONS:
                files.append(path)
            else:
                logger.warning("Skipping %s: unsupported file type", path)
            continue
        for candidate in sorted(path.rglob("*")):
            if candidate.is_dir() or candidate.suffix not in LINTABLE_EXTENSIONS:
                continue
            if _should_skip(candidate.relative_to(path), skip_dirs):
                continue
            files.append(candidate)
    return files


def _should_skip(path: Path, skip_dirs: list[str]) -> bool:
    for part in path.parts[:-1]:
        for pattern in skip_dirs:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False


def run_lint(config: LintConfig, progress: ProgressCallback | None = None) -> LintResult:
    """Lint every file under ``config.paths``.

    Rules are built, and their options validated, before any file is read.
    """
    settings = parse_settings({"preset": config.preset, "rules": config.rules})
    rules = build_rules(settings)

    files = discover_files(config.paths, config.skip_dirs)
    result = LintResult()
    for i, path in enumerate(files):
        if progress:
            progress("Linting", i, len(files))
        try:
            diagnostics = lint_file(path, rules)
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            result.files_skipped.append(path)
            continue
        result.files_checked.append(path)
        result.diagnostics.extend(diagnostics)

    if progress:
        progress("Linting", len(files), len(files))

    result.diagnostics.sort(key=_sort_key)
    logger.debug(
        "Checked %d file(s): %d error(s), %d warning(s)",
        len(result.files_checked), result.error_count, result.warning_count,
    )
    return result
