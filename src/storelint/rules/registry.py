"""Rule id → rule factory, the surface the traversal host consumes."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from pydantic import ValidationError

from storelint.config import DisallowModuleOptions, Settings
from storelint.constants import RuleId
from storelint.errors import RuleConfigError
from storelint.resolver import ModuleNameResolver
from storelint.rules.base import Rule
from storelint.rules.disallow_module import DisallowModuleRule
from storelint.rules.empty_catch import EmptyCatchRule

RuleFactory = Callable[[Settings, ModuleNameResolver], Rule]


def _empty_catch(_settings: Settings, _resolver: ModuleNameResolver) -> Rule:
    return EmptyCatchRule()


def _disallow_module(settings: Settings, resolver: ModuleNameResolver) -> Rule:
    try:
        options = DisallowModuleOptions.from_settings(settings)
    except ValidationError as exc:
        raise RuleConfigError(
            f"Invalid options for {RuleId.DISALLOW_SOME_MODULE}: {exc}"
        ) from exc
    return DisallowModuleRule(options, resolver)


RULES: dict[str, RuleFactory] = {
    RuleId.DISALLOW_EMPTY_CATCH: _empty_catch,
    RuleId.DISALLOW_SOME_MODULE: _disallow_module,
}


def create_rules(
    settings: Settings,
    resolver: ModuleNameResolver | None = None,
    rule_ids: Iterable[str] | None = None,
) -> list[Rule]:
    """Instantiate the enabled rules, sharing one resolver between them."""
    if resolver is None:
        resolver = ModuleNameResolver(settings.failure_policy)
    ids = list(rule_ids) if rule_ids is not None else list(settings.enabled_rules)

    rules: list[Rule] = []
    for rule_id in ids:
        factory = RULES.get(rule_id)
        if factory is None:
            raise RuleConfigError(f"Unknown rule id: {rule_id}")
        rules.append(factory(settings, resolver))
    return rules
