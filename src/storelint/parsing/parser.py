"""tree-sitter JavaScript parsing with a per-process parser cache."""

from __future__ import annotations

import importlib
from functools import lru_cache
from pathlib import Path

import tree_sitter

from storelint.config import GRAMMAR_MODULES
from storelint.errors import SourceParseError, StorelintError

DEFAULT_LANGUAGE = "javascript"


def parse(
    source_text: str,
    path: Path | str | None = None,
    language: str = DEFAULT_LANGUAGE,
) -> tree_sitter.Tree:
    """Parse *source_text* and return the tree-sitter tree.

    tree-sitter never throws on bad input; it recovers and marks the
    damaged region with ``ERROR`` or missing nodes. Any such node makes
    this a parse failure and raises :class:`SourceParseError` carrying
    the position of the first one.
    """
    tree = get_parser(language).parse(source_text.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        bad = _first_error_node(root)
        if bad is None:
            raise SourceParseError(path)
        raise SourceParseError(
            path,
            line=bad.start_point[0] + 1,
            column=bad.start_point[1] + 1,
        )
    return tree


def _first_error_node(root: tree_sitter.Node) -> tree_sitter.Node | None:
    """Return the first ERROR or missing node in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


@lru_cache(maxsize=None)
def get_parser(language: str = DEFAULT_LANGUAGE) -> tree_sitter.Parser:
    """Parser for *language*, built on first use and reused afterwards."""
    module_name = GRAMMAR_MODULES.get(language)
    if module_name is None:
        raise StorelintError(f"No tree-sitter grammar registered for {language}")
    try:
        grammar = importlib.import_module(module_name)
    except ImportError as exc:
        raise StorelintError(
            f"tree-sitter grammar package {module_name!r} is not installed"
        ) from exc
    return tree_sitter.Parser(tree_sitter.Language(grammar.language()))
