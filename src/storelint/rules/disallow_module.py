"""``disallow-some-module`` — keep forbidden Vuex modules out of components.

Two call shapes are checked::

    mapGetters("aModule", [...])          // first argument: string literal
    mapActions({ load: "aModule/load" })  // first argument: object literal

For ``mapActions`` every property is checked on its own, so one call
can produce several diagnostics. Anything that does not fully match a
shape (no arguments, spreads, identifiers, template literals, values
without a ``/``) is skipped without a diagnostic.
"""

from __future__ import annotations

import logging

from storelint.config import DisallowModuleOptions
from storelint.constants import (
    DISALLOWED_MODULE_MESSAGE,
    MODULE_PATH_SEPARATOR,
    CallKind,
    RuleId,
)
from storelint.parsing.nodes import (
    CallExpression,
    ObjectLiteral,
    Property,
    StringLiteral,
)
from storelint.resolver import ModuleNameResolver
from storelint.rules.base import Rule, RuleContext

logger = logging.getLogger(__name__)


class DisallowModuleRule(Rule):
    """Reports ``mapGetters``/``mapActions`` uses of forbidden modules.

    The deny-list is ``options.forbidden_modules`` when given, otherwise
    every module the resolver finds in ``options.store_file_path``. It is
    built the first time a ``mapGetters``/``mapActions`` call is checked,
    so the store file is only read when a lint target uses one.
    """

    rule_id = RuleId.DISALLOW_SOME_MODULE

    def __init__(
        self,
        options: DisallowModuleOptions,
        resolver: ModuleNameResolver | None = None,
    ) -> None:
        self._options = options
        if resolver is None and options.store_file_path is not None:
            resolver = ModuleNameResolver()
        self._resolver = resolver
        self._deny_list: tuple[str, ...] | None = None
        self._forbidden: frozenset[str] = frozenset()

        if not options.forbidden_modules and options.store_file_path is None:
            logger.warning(
                "%s has neither forbidden modules nor a store file; "
                "it will not report anything",
                self.rule_id,
            )

    @property
    def options(self) -> DisallowModuleOptions:
        return self._options

    def deny_list(self) -> tuple[str, ...]:
        """Forbidden module names in configured (or declaration) order."""
        if self._deny_list is None:
            deny_list = self._build_deny_list()
            self._forbidden = frozenset(deny_list)
            self._deny_list = deny_list
        return self._deny_list

    def is_forbidden(self, module: str) -> bool:
        self.deny_list()
        return module in self._forbidden

    def visit_call_expression(
        self, node: CallExpression, ctx: RuleContext
    ) -> None:
        name = node.callee_name
        if name == CallKind.GETTERS:
            self._check_getters(node, ctx)
        elif name == CallKind.ACTIONS:
            self._check_actions(node, ctx)

    def _check_getters(self, node: CallExpression, ctx: RuleContext) -> None:
        arg = node.first_argument
        if not isinstance(arg, StringLiteral):
            return
        if self.is_forbidden(arg.value):
            ctx.report(
                self.rule_id,
                arg.span,
                arg.kind,
                DISALLOWED_MODULE_MESSAGE.format(
                    call=CallKind.GETTERS, module=arg.value
                ),
            )

    def _check_actions(self, node: CallExpression, ctx: RuleContext) -> None:
        arg = node.first_argument
        if not isinstance(arg, ObjectLiteral):
            return
        for prop in arg.properties:
            if not isinstance(prop, Property):
                continue
            value = prop.value
            if not isinstance(value, StringLiteral):
                continue
            module, sep, _ = value.value.partition(MODULE_PATH_SEPARATOR)
            if not sep:
                continue
            if self.is_forbidden(module):
                ctx.report(
                    self.rule_id,
                    value.span,
                    value.kind,
                    DISALLOWED_MODULE_MESSAGE.format(
                        call=CallKind.ACTIONS, module=module
                    ),
                )

    def _build_deny_list(self) -> tuple[str, ...]:
        configured = self._options.forbidden_modules
        store_path = self._options.store_file_path
        if store_path is None or self._resolver is None:
            return configured

        known = self._resolver.resolve(store_path)
        if self._options.derives_from_store:
            return known

        # Configured list wins; flag names the store no longer exports
        if known:
            stale = [m for m in configured if m not in known]
            if stale:
                logger.warning(
                    "Forbidden module(s) not found in %s: %s",
                    store_path,
                    ", ".join(stale),
                )
        return configured
