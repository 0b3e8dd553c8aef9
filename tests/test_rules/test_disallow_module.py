"""Tests for the disallow-some-module rule."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from storelint.config import DisallowModuleOptions
from storelint.constants import FailurePolicy, RuleId
from storelint.errors import StoreResolutionError
from storelint.resolver import ModuleNameResolver
from storelint.rules.disallow_module import DisallowModuleRule
from tests.conftest import STORE_DIR, lint

# ── mapGetters ───────────────────────────────────────────────


class TestGettersCall:
    def test_forbidden_module_reported(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        diags = lint('mapGetters("aModule");', deny_a_module)

        assert len(diags) == 1
        assert diags[0].message == "mapGetters: not allowed to use aModule"
        assert diags[0].rule_id == RuleId.DISALLOW_SOME_MODULE

    def test_diagnostic_references_first_argument(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        diags = lint('mapGetters("aModule", ["count"]);', deny_a_module)

        assert diags[0].node_kind == "string"
        assert diags[0].line == 1
        assert diags[0].column == 12

    def test_other_module_not_reported(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        assert lint('mapGetters("other");', deny_a_module) == []

    def test_namespaced_path_is_not_split(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        """mapGetters compares the whole literal, not its first segment."""
        assert lint('mapGetters("aModule/nested");', deny_a_module) == []

    def test_inside_component_spread(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        source = (
            "export default {\n"
            "  computed: {\n"
            '    ...mapGetters("aModule", ["loadAModuleNumber"]),\n'
            "  },\n"
            "};\n"
        )
        diags = lint(source, deny_a_module)
        assert len(diags) == 1
        assert diags[0].line == 3

    @pytest.mark.parametrize(
        "source",
        [
            "mapGetters();",
            "mapGetters(aModule);",
            'mapGetters(["aModule"]);',
            "mapGetters(`aModule`);",
            "mapGetters(...names);",
            'mapGetters(prefix + "aModule");',
            'this.mapGetters("aModule");',
            'helpers.mapGetters("aModule");',
            'mapState("aModule");',
        ],
    )
    def test_non_matching_shapes_are_silent(
        self, deny_a_module: DisallowModuleRule, source: str
    ) -> None:
        assert lint(source, deny_a_module) == []


# ── mapActions ───────────────────────────────────────────────


class TestActionsCall:
    def test_forbidden_action_reported(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        diags = lint(
            'mapActions({ load: "aModule/loadAModule" });', deny_a_module
        )

        assert len(diags) == 1
        assert diags[0].message == "mapActions: not allowed to use aModule"

    def test_diagnostic_references_property_value(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        diags = lint(
            'mapActions({ load: "aModule/loadAModule" });', deny_a_module
        )
        # the string literal after "load: "
        assert diags[0].node_kind == "string"
        assert diags[0].column == 20

    def test_other_module_not_reported(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        assert (
            lint('mapActions({ load: "other/loadOther" });', deny_a_module)
            == []
        )

    def test_only_offending_property_reported(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        diags = lint(
            'mapActions({ a: "aModule/x", b: "other/y" });', deny_a_module
        )
        assert len(diags) == 1
        assert diags[0].column == 17

    def test_one_diagnostic_per_offending_property(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        source = (
            "mapActions({\n"
            '  load: "aModule/load",\n'
            '  other: "bModule/other",\n'
            '  save: "aModule/save",\n'
            "});\n"
        )
        diags = lint(source, deny_a_module)
        assert [d.line for d in diags] == [2, 4]

    def test_split_on_first_separator_only(
        self, deny_a_module: DisallowModuleRule
    ) -> None:
        diags = lint('mapActions({ x: "aModule/sub/x" });', deny_a_module)
        assert len(diags) == 1

    @pytest.mark.parametrize(
        "source",
        [
            "mapActions();",
            "mapActions({});",
            "mapActions(actions);",
            'mapActions("aModule", ["load"]);',
            "mapActions({ load: loadAction });",
            "mapActions({ load: `aModule/load` });",
            'mapActions({ load: "aModule" });',
            "mapActions({ ...shared });",
            "mapActions({ load() {} });",
            "mapActions({ aModule });",
            'mapActions([ "aModule/load" ]);',
        ],
    )
    def test_degenerate_inputs_are_silent(
        self, deny_a_module: DisallowModuleRule, source: str
    ) -> None:
        assert lint(source, deny_a_module) == []


def test_matcher_is_idempotent(deny_a_module: DisallowModuleRule) -> None:
    source = (
        'mapGetters("aModule");\n'
        'mapActions({ a: "aModule/x", b: "aModule/y" });\n'
    )
    first = lint(source, deny_a_module)
    second = lint(source, deny_a_module)

    assert first == second
    assert len(first) == 3


# ── Deny-list sources ────────────────────────────────────────


class TestDenyList:
    def test_configured_list_preserves_order(self) -> None:
        rule = DisallowModuleRule(
            DisallowModuleOptions(forbidden_modules=("zModule", "aModule"))
        )
        assert rule.deny_list() == ("zModule", "aModule")

    def test_derived_from_store_file(self) -> None:
        rule = DisallowModuleRule(
            DisallowModuleOptions(
                store_file_path=STORE_DIR / "default_export.js"
            )
        )
        assert rule.deny_list() == ("aModule", "bModule")
        assert len(lint('mapGetters("bModule");', rule)) == 1

    def test_store_not_read_until_first_visit(
        self, write_store: Callable[..., Path]
    ) -> None:
        path = write_store("export default { aModule: {} }")
        resolver = ModuleNameResolver()
        rule = DisallowModuleRule(
            DisallowModuleOptions(store_file_path=path), resolver
        )
        assert resolver.resolved is None

        lint('mapGetters("aModule");', rule)
        assert resolver.resolved == ("aModule",)

    def test_shared_resolver_is_used(self) -> None:
        resolver = ModuleNameResolver()
        resolver.resolve(STORE_DIR / "named_export.js")
        rule = DisallowModuleRule(
            DisallowModuleOptions(
                store_file_path=STORE_DIR / "default_export.js"
            ),
            resolver,
        )
        # cached result from the first path wins
        assert rule.deny_list() == ("aModule", "bModule", "cModule")

    def test_broken_store_fails_open(self) -> None:
        rule = DisallowModuleRule(
            DisallowModuleOptions(store_file_path=STORE_DIR / "broken.js")
        )
        assert lint('mapGetters("aModule");', rule) == []

    def test_broken_store_fails_closed(self) -> None:
        rule = DisallowModuleRule(
            DisallowModuleOptions(store_file_path=STORE_DIR / "broken.js"),
            ModuleNameResolver(FailurePolicy.CLOSED),
        )
        with pytest.raises(StoreResolutionError):
            lint('mapGetters("aModule");', rule)

    def test_configured_list_wins_over_store(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        rule = DisallowModuleRule(
            DisallowModuleOptions(
                store_file_path=STORE_DIR / "default_export.js",
                forbidden_modules=("aModule", "goneModule"),
            )
        )
        with caplog.at_level(
            logging.WARNING, logger="storelint.rules.disallow_module"
        ):
            deny = rule.deny_list()

        assert deny == ("aModule", "goneModule")
        assert "goneModule" in caplog.text
        assert lint('mapGetters("bModule");', rule) == []

    def test_unconfigured_rule_warns_and_reports_nothing(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(
            logging.WARNING, logger="storelint.rules.disallow_module"
        ):
            rule = DisallowModuleRule(DisallowModuleOptions())

        assert "will not report anything" in caplog.text
        assert lint('mapGetters("aModule");', rule) == []
