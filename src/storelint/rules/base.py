"""Visitor interface shared by all rules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from storelint.constants import Severity
from storelint.diagnostics import Diagnostic, DiagnosticSink
from storelint.parsing.nodes import CallExpression, CatchClause, Span


@dataclass
class RuleContext:
    """Per-file state handed to every visitor call."""

    sink: DiagnosticSink
    file_path: Path | None = None

    def report(
        self,
        rule_id: str,
        span: Span,
        node_kind: str,
        message: str,
        severity: Severity = Severity.ERROR,
    ) -> None:
        self.sink.report(
            Diagnostic(
                rule_id=rule_id,
                message=message,
                span=span,
                node_kind=node_kind,
                file_path=self.file_path,
                severity=severity,
            )
        )


class RuleVisitor(Protocol):
    """One method per node kind the traversal driver dispatches."""

    rule_id: str

    def visit_call_expression(
        self, node: CallExpression, ctx: RuleContext
    ) -> None: ...

    def visit_catch_clause(self, node: CatchClause, ctx: RuleContext) -> None: ...


class Rule:
    """Base class with no-op visitors; subclasses override what they need."""

    rule_id: str = ""

    def visit_call_expression(
        self, node: CallExpression, ctx: RuleContext
    ) -> None:
        return None

    def visit_catch_clause(self, node: CatchClause, ctx: RuleContext) -> None:
        return None
