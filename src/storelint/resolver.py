"""Resolve Vuex module names from a store-definition source file.

The store file is parsed once per resolver. Module names are the keys
of the object literals it exports::

    export const modules = { aModule, bModule }   // named export
    export default { aModule: {}, bModule: {} }   // default export

The first attempt, successful or not, is cached for the lifetime of the
resolver; later calls return the cached result even when given another
path. Create one resolver per lint run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import tree_sitter

from storelint.constants import (
    NO_STORE_MODULES_MESSAGE,
    FailurePolicy,
    ResolutionOutcome,
)
from storelint.errors import SourceParseError, StoreResolutionError
from storelint.parsing.nodes import ObjectLiteral, lower_expression
from storelint.parsing.parser import parse

logger = logging.getLogger(__name__)

# Ordered, duplicate-free module names in declaration order
ModuleNameSet = tuple[str, ...]

_VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})


class ModuleNameResolver:
    """Owns the one-shot module-name resolution for a lint run."""

    def __init__(
        self, failure_policy: FailurePolicy = FailurePolicy.OPEN
    ) -> None:
        self._failure_policy = failure_policy
        # Names, or the fail-closed error; None until the first attempt
        self._cached: ModuleNameSet | StoreResolutionError | None = None
        self._store_path: Path | None = None
        self._outcome: ResolutionOutcome | None = None

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    @property
    def resolved(self) -> ModuleNameSet | None:
        """Cached module names, ``None`` until the first attempt."""
        if isinstance(self._cached, StoreResolutionError):
            return None
        return self._cached

    @property
    def outcome(self) -> ResolutionOutcome | None:
        return self._outcome

    def resolve(self, store_file_path: Path | str) -> ModuleNameSet:
        """Return the module names exported by *store_file_path*.

        Fail-open (default): read and parse failures are logged and an
        empty set is returned. Fail-closed: they raise
        :class:`StoreResolutionError`, and so does every later call.
        """
        path = Path(store_file_path)
        cached = self._cached
        if cached is None:
            self._store_path = path
            try:
                cached = self._resolve_uncached(path)
            except StoreResolutionError as exc:
                cached = exc
            self._cached = cached
        elif path != self._store_path:
            logger.debug(
                "Store modules already resolved from %s; ignoring %s",
                self._store_path,
                path,
            )

        if isinstance(cached, StoreResolutionError):
            raise cached
        return cached

    def _resolve_uncached(self, path: Path) -> ModuleNameSet:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return self._fail(path, ResolutionOutcome.READ_ERROR, exc)

        try:
            tree = parse(text, path)
        except SourceParseError as exc:
            return self._fail(path, ResolutionOutcome.PARSE_ERROR, exc)

        names = extract_module_names(tree.root_node)
        if not names:
            self._outcome = ResolutionOutcome.EMPTY
            logger.warning("%s (%s)", NO_STORE_MODULES_MESSAGE, path)
        else:
            self._outcome = ResolutionOutcome.RESOLVED
            logger.debug(
                "Resolved %d store module(s) from %s: %s",
                len(names),
                path,
                ", ".join(names),
            )
        return names

    def _fail(
        self,
        path: Path,
        outcome: ResolutionOutcome,
        exc: Exception,
    ) -> ModuleNameSet:
        self._outcome = outcome
        logger.error("Store file %s could not be used (%s): %s", path, outcome, exc)
        if self._failure_policy is FailurePolicy.CLOSED:
            raise StoreResolutionError(path, str(exc)) from exc
        return ()


def extract_module_names(root: tree_sitter.Node) -> ModuleNameSet:
    """Collect exported object-literal keys from a program's top level."""
    names: list[str] = []
    for statement in root.named_children:
        if statement.type != "export_statement":
            continue
        for obj in _exported_objects(statement):
            for key in obj.keys():
                if key not in names:
                    names.append(key)
    return tuple(names)


def _exported_objects(statement: tree_sitter.Node) -> list[ObjectLiteral]:
    # export default { ... }
    value = statement.child_by_field_name("value")
    if value is not None:
        lowered = lower_expression(value)
        return [lowered] if isinstance(lowered, ObjectLiteral) else []

    # export const NAME = { ... }
    declaration = statement.child_by_field_name("declaration")
    if declaration is None or declaration.type not in _VARIABLE_DECLARATIONS:
        return []
    declarators = [
        d for d in declaration.named_children if d.type == "variable_declarator"
    ]
    if len(declarators) != 1:
        return []
    name = declarators[0].child_by_field_name("name")
    init = declarators[0].child_by_field_name("value")
    if name is None or name.type != "identifier" or init is None:
        return []
    lowered = lower_expression(init)
    return [lowered] if isinstance(lowered, ObjectLiteral) else []
