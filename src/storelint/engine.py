"""Traversal driver — walks a tree and dispatches typed nodes to rules."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import tree_sitter

from storelint.constants import PARSE_ERROR_RULE_ID, NodeKind
from storelint.diagnostics import Diagnostic, DiagnosticSink, LintReport
from storelint.discovery import SourceModule, load_source
from storelint.errors import SourceParseError
from storelint.parsing.nodes import Span, lower_call, lower_catch
from storelint.parsing.parser import parse
from storelint.rules.base import RuleContext, RuleVisitor

logger = logging.getLogger(__name__)


def lint_source(
    source: SourceModule | str,
    rules: Sequence[RuleVisitor],
) -> list[Diagnostic]:
    """Lint one source and return its diagnostics in document order.

    A source that does not parse yields a single ``parse-error``
    diagnostic instead of rule findings.
    """
    collected = LintReport()
    path = source.path if isinstance(source, SourceModule) else None
    text = source.text if isinstance(source, SourceModule) else source
    ctx = RuleContext(sink=collected, file_path=path)

    try:
        tree = parse(text, path)
    except SourceParseError as exc:
        logger.debug("Skipping %s: %s", path or "<source>", exc)
        _report_unparsable(ctx, exc)
        return collected.diagnostics

    walk(tree, rules, ctx)
    return collected.diagnostics


def lint_files(
    paths: Iterable[Path],
    rules: Sequence[RuleVisitor],
    report: LintReport | None = None,
) -> LintReport:
    """Lint every path into *report* (a new one when omitted).

    Unreadable and unparsable files are reported and skipped. A
    :class:`~storelint.errors.StoreResolutionError` raised by a rule under
    the fail-closed policy propagates and ends the run.
    """
    if report is None:
        report = LintReport()
    for path in paths:
        try:
            source = load_source(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read %s: %s", path, exc)
            RuleContext(sink=report, file_path=path).report(
                PARSE_ERROR_RULE_ID,
                Span(1, 1, 1, 1, 0, 0),
                "file",
                f"Cannot read file: {exc}",
            )
            continue
        report.extend(lint_source(source, rules))
        report.files_checked += 1
    return report


def walk(
    tree: tree_sitter.Tree,
    rules: Sequence[RuleVisitor],
    ctx: RuleContext,
) -> None:
    """Depth-first, document-order walk invoking each rule's visitor."""
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == NodeKind.CALL_EXPRESSION:
            call = lower_call(node)
            for rule in rules:
                rule.visit_call_expression(call, ctx)
        elif node.type == NodeKind.CATCH_CLAUSE:
            clause = lower_catch(node)
            for rule in rules:
                rule.visit_catch_clause(clause, ctx)
        stack.extend(reversed(node.children))


def _report_unparsable(ctx: RuleContext, exc: SourceParseError) -> None:
    line = exc.line or 1
    column = exc.column or 1
    ctx.report(
        PARSE_ERROR_RULE_ID,
        Span(line, column, line, column, 0, 0),
        "ERROR",
        f"Parsing error: {exc}",
    )
