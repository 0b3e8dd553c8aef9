"""CLI entry point — ``storelint lint`` and ``storelint rules``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from storelint import __version__
from storelint.config import Settings
from storelint.constants import (
    EXIT_CLEAN,
    EXIT_DIAGNOSTICS,
    EXIT_FAILURE,
    FailurePolicy,
    OutputFormat,
    RuleId,
)
from storelint.discovery import discover_sources
from storelint.engine import lint_files
from storelint.errors import RuleConfigError, StoreResolutionError
from storelint.logging_config import setup_logging
from storelint.reporting import format_json, format_text
from storelint.resolver import ModuleNameResolver
from storelint.rules.registry import RULES, create_rules

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"storelint {__version__}")
        return

    if args.command == "lint":
        sys.exit(_run_lint(args))
    elif args.command == "rules":
        _run_rules()
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="storelint",
        description=(
            "Lint Vue/Vuex sources for forbidden store modules "
            "and empty catch blocks."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    lint = sub.add_parser(
        "lint",
        help="Lint files or directories",
    )
    lint.add_argument(
        "paths",
        nargs="+",
        help="Files or directories to lint",
    )
    lint.add_argument(
        "--store",
        default=None,
        help=(
            "Store-definition file whose exported modules are resolved "
            "(default: STORELINT_STORE_FILE_PATH)"
        ),
    )
    lint.add_argument(
        "--forbid",
        action="append",
        default=None,
        metavar="MODULE",
        help=(
            "Forbidden store module; repeat or comma-separate "
            "(default: every module in --store)"
        ),
    )
    lint.add_argument(
        "--rule",
        "-r",
        action="append",
        default=None,
        choices=[r.value for r in RuleId],
        help="Rule to enable; repeat for several (default: all)",
    )
    lint.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Output format (default: text)",
    )
    lint.add_argument(
        "--fail-closed",
        action="store_true",
        help="Fail the run when the store file cannot be parsed",
    )
    lint.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    sub.add_parser(
        "rules",
        help="List available rules",
    )

    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment settings with CLI flags layered on top."""
    overrides: dict[str, Any] = {}
    if args.store is not None:
        overrides["store_file_path"] = Path(args.store)
    if args.forbid:
        overrides["forbidden_modules"] = ",".join(args.forbid)
    if args.rule:
        overrides["enabled_rules"] = list(dict.fromkeys(args.rule))
    if args.fail_closed:
        overrides["failure_policy"] = FailurePolicy.CLOSED
    return Settings(**overrides)


def _run_lint(args: argparse.Namespace) -> int:
    """Execute the lint command and return the exit code."""
    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    missing = [p for p in args.paths if not Path(p).exists()]
    if missing:
        print(
            f"Error: no such file or directory: {', '.join(missing)}",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    resolver = ModuleNameResolver(settings.failure_policy)
    try:
        rules = create_rules(settings, resolver)
    except RuleConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    targets = discover_sources(args.paths, settings.skip_directories)
    logger.debug("Linting %d file(s)", len(targets))

    try:
        report = lint_files(targets, rules)
    except StoreResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if args.format == OutputFormat.JSON:
        print(format_json(report))
    else:
        output = format_text(report)
        if output:
            print(output)

    return EXIT_CLEAN if report.is_clean else EXIT_DIAGNOSTICS


def _run_rules() -> None:
    """Print registered rule ids."""
    for rule_id in RULES:
        print(rule_id)
