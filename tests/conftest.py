"""Shared test fixtures — fixture paths and store-file writers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from storelint.config import DisallowModuleOptions
from storelint.diagnostics import Diagnostic
from storelint.engine import lint_source
from storelint.rules.base import RuleVisitor
from storelint.rules.disallow_module import DisallowModuleRule

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"
STORE_DIR = FIXTURE_DIR / "store"
PROJECT_DIR = FIXTURE_DIR / "project"


@pytest.fixture
def write_store(tmp_path: Path) -> Callable[[str], Path]:
    """Write a store-definition file into tmp_path and return its path."""

    def _write(content: str, name: str = "store.js") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def deny_a_module() -> DisallowModuleRule:
    """disallow-some-module with the deny-list ``["aModule"]``."""
    return DisallowModuleRule(
        DisallowModuleOptions(forbidden_modules=("aModule",))
    )


def lint(text: str, *rules: RuleVisitor) -> list[Diagnostic]:
    """Lint a JavaScript snippet with the given rules."""
    return lint_source(text, list(rules))
