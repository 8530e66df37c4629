"""Data models for the relay-lint pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class Severity(enum.Enum):
    OFF = "off"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class SourceLocation:
    """1-based line and column in a host file."""
    line: int
    column: int


@dataclass
class QueriedField:
    """A field selected by an embedded GraphQL document."""
    name: str
    start: int  # character offsets inside the template body
    end: int
    is_edges_parent: bool = False


@dataclass
class Diagnostic:
    """A single finding reported by a rule."""
    rule: str
    message: str
    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None
    severity: Severity = Severity.WARN
    file_path: Path | None = None

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "message": self.message,
            "file": str(self.file_path) if self.file_path else None,
            "line": self.line,
            "column": self.column,
            "end_line": self.end_line,
            "end_column": self.end_column,
            "severity": self.severity.value,
        }


@dataclass
class LintResult:
    """Result from a lint run."""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_checked: list[Path] = field(default_factory=list)
    files_skipped: list[Path] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARN)


@dataclass
class LintConfig:
    """Configuration for a lint run."""
    paths: list[Path] = field(default_factory=lambda: [Path(".")])
    preset: str = "recommended"
    rules: dict = field(default_factory=dict)
    skip_dirs: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "__pycache__", "__generated__",
        "build", "dist", ".next", ".venv", "venv", "env",
        "coverage", "flow-typed",
    ])
