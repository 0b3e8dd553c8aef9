"""Shared constants — rule ids, node kinds, message templates.

StrEnum members are str-compatible, so they can be used directly as
dict keys, JSON values and CLI choices.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class RuleId(StrEnum):
    """Identifiers exposed to the host for each registered rule."""

    DISALLOW_EMPTY_CATCH = "disallow-empty-catch"
    DISALLOW_SOME_MODULE = "disallow-some-module"


class NodeKind(StrEnum):
    """Node kinds the traversal driver dispatches on."""

    CALL_EXPRESSION = "call_expression"
    CATCH_CLAUSE = "catch_clause"
    STRING_LITERAL = "string"
    OBJECT_LITERAL = "object"
    PROPERTY = "pair"
    IDENTIFIER = "identifier"
    STATEMENT_BLOCK = "statement_block"


class CallKind(StrEnum):
    """Call-site shapes matched by ``disallow-some-module``.

    The value is the callee identifier the shape requires.
    """

    GETTERS = "mapGetters"
    ACTIONS = "mapActions"


class FailurePolicy(StrEnum):
    """What the resolver does when the store file cannot be used."""

    OPEN = "open"  # log, return empty set, lint run continues
    CLOSED = "closed"  # raise StoreResolutionError


class ResolutionOutcome(StrEnum):
    """Result category of a single store-file resolution attempt."""

    RESOLVED = "resolved"
    EMPTY = "empty"
    PARSE_ERROR = "parse_error"
    READ_ERROR = "read_error"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


# ── Messages ─────────────────────────────────────────────

EMPTY_CATCH_MESSAGE = "Empty catch block is not allowed."
DISALLOWED_MODULE_MESSAGE = "{call}: not allowed to use {module}"
NO_STORE_MODULES_MESSAGE = "No store module found. Please check your store file."

# Separator between module namespace and action name in mapActions values
MODULE_PATH_SEPARATOR = "/"

# Rule id used for files the parser could not handle
PARSE_ERROR_RULE_ID = "parse-error"

# ── File discovery ───────────────────────────────────────

SOURCE_EXTENSIONS: frozenset[str] = frozenset({
    ".js",
    ".mjs",
    ".cjs",
    ".jsx",
    ".vue",
})

VUE_EXTENSION = ".vue"

# Exit codes for ``storelint lint``
EXIT_CLEAN = 0
EXIT_DIAGNOSTICS = 1
EXIT_FAILURE = 2
