"""Lint rules and the registry that exposes them to the driver."""

from storelint.rules.base import Rule, RuleContext, RuleVisitor
from storelint.rules.disallow_module import DisallowModuleRule
from storelint.rules.empty_catch import EmptyCatchRule
from storelint.rules.registry import RULES, create_rules

__all__ = [
    "RULES",
    "DisallowModuleRule",
    "EmptyCatchRule",
    "Rule",
    "RuleContext",
    "RuleVisitor",
    "create_rules",
]
