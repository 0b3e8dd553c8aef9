"""Diagnostic records and the report that collects them."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from storelint.constants import Severity
from storelint.parsing.nodes import Span


class Diagnostic(BaseModel):
    """A finding on one node. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    message: str
    span: Span
    node_kind: str
    file_path: Path | None = None
    severity: Severity = Severity.ERROR

    @property
    def line(self) -> int:
        return self.span.start_line

    @property
    def column(self) -> int:
        return self.span.start_column


class DiagnosticSink(Protocol):
    """Anything that accepts diagnostics as they are produced."""

    def report(self, diagnostic: Diagnostic) -> None: ...


class LintReport(BaseModel):
    """Aggregated diagnostics from one lint run."""

    diagnostics: list[Diagnostic] = Field(
        default_factory=lambda: list[Diagnostic]()
    )
    files_checked: int = 0

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def is_clean(self) -> bool:
        """True if no diagnostics were reported."""
        return not self.diagnostics
