"""Render a lint report as text or as a JSON envelope."""

from __future__ import annotations

import json
from typing import Any

from storelint import __version__
from storelint.diagnostics import Diagnostic, LintReport


def format_text(report: LintReport) -> str:
    """One ``path:line:col  severity  message  rule`` line per diagnostic."""
    lines = [_diagnostic_line(d) for d in report.diagnostics]
    total = len(report.diagnostics)
    if total:
        noun = "problem" if total == 1 else "problems"
        lines.append("")
        lines.append(
            f"{total} {noun} in {report.files_checked} file(s) checked"
        )
    return "\n".join(lines)


def format_json(report: LintReport) -> str:
    """Export the report as structured JSON."""
    payload: dict[str, Any] = {
        "tool": "storelint",
        "version": __version__,
        "files_checked": report.files_checked,
        "diagnostic_count": len(report.diagnostics),
        "diagnostics": [_diagnostic_to_dict(d) for d in report.diagnostics],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _diagnostic_line(d: Diagnostic) -> str:
    where = str(d.file_path) if d.file_path is not None else "<source>"
    return f"{where}:{d.line}:{d.column}  {d.severity}  {d.message}  {d.rule_id}"


def _diagnostic_to_dict(d: Diagnostic) -> dict[str, Any]:
    """Convert a Diagnostic to a JSON-serializable dict."""
    return {
        "file_path": str(d.file_path) if d.file_path is not None else None,
        "rule_id": d.rule_id,
        "severity": str(d.severity),
        "message": d.message,
        "node_kind": d.node_kind,
        "line": d.span.start_line,
        "column": d.span.start_column,
        "end_line": d.span.end_line,
        "end_column": d.span.end_column,
    }
