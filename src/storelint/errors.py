"""Exception hierarchy for the rule engine.

Only configuration problems and fail-closed resolution errors ever
leave the core. Shape mismatches inside rule bodies are not errors at
all: the rule simply does not report.
"""

from __future__ import annotations

from pathlib import Path


class StorelintError(Exception):
    """Base class for all storelint errors."""


class SourceParseError(StorelintError):
    """tree-sitter produced a tree containing syntax errors."""

    def __init__(
        self,
        path: Path | str | None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.line = line
        self.column = column
        where = str(path) if path is not None else "<source>"
        if line is not None:
            where = f"{where}:{line}:{column or 0}"
        super().__init__(f"Syntax error in {where}")


class StoreResolutionError(StorelintError):
    """The store-definition file could not be read or parsed.

    Raised only when the resolver runs with ``FailurePolicy.CLOSED``.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot resolve store modules from {path}: {reason}")


class RuleConfigError(StorelintError):
    """Rule options are invalid or a rule id is unknown."""
