"""``disallow-empty-catch`` — a catch block must contain a statement."""

from __future__ import annotations

from storelint.constants import EMPTY_CATCH_MESSAGE, NodeKind, RuleId
from storelint.parsing.nodes import CatchClause
from storelint.rules.base import Rule, RuleContext


class EmptyCatchRule(Rule):
    rule_id = RuleId.DISALLOW_EMPTY_CATCH

    def visit_catch_clause(self, node: CatchClause, ctx: RuleContext) -> None:
        if node.is_empty:
            ctx.report(
                self.rule_id,
                node.body_span,
                NodeKind.STATEMENT_BLOCK,
                EMPTY_CATCH_MESSAGE,
            )
