"""Find lint targets on disk and load them as source modules."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

import pathspec
from pydantic import BaseModel, ConfigDict

from storelint.constants import SOURCE_EXTENSIONS, VUE_EXTENSION

logger = logging.getLogger(__name__)

_SCRIPT_BLOCK = re.compile(
    r"<script\b(?P<attrs>[^>]*)>(?P<body>.*?)</script\s*>",
    re.DOTALL | re.IGNORECASE,
)
_LANG_ATTR = re.compile(r"""\blang\s*=\s*["']?(?P<lang>[\w-]+)""")
_JS_LANGS = frozenset({"js", "javascript", "jsx"})


class SourceModule(BaseModel):
    """A file path and the JavaScript text to lint."""

    model_config = ConfigDict(frozen=True)

    path: Path
    text: str


def discover_sources(
    paths: Iterable[Path | str],
    skip_directories: Iterable[str] = (),
) -> list[Path]:
    """Expand files and directories into a sorted list of lint targets.

    Files named explicitly are always kept. Directories are walked for
    :data:`SOURCE_EXTENSIONS`, skipping hidden directories, anything in
    *skip_directories* and paths matched by the directory's ``.gitignore``.
    """
    skip_dirs = set(skip_directories)
    found: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            found.add(path)
        elif path.is_dir():
            found.update(_iter_directory(path, skip_dirs))
    return sorted(found)


def load_source(path: Path) -> SourceModule:
    """Read *path*; for ``.vue`` files keep only JavaScript ``<script>`` blocks.

    Everything outside the script blocks is blanked (newlines kept), so
    line and column numbers still point into the original file.
    """
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == VUE_EXTENSION:
        text = extract_vue_script(text)
    return SourceModule(path=path, text=text)


def extract_vue_script(text: str) -> str:
    """Blank every character that is not inside a JavaScript script block."""
    keep: list[tuple[int, int]] = []
    for match in _SCRIPT_BLOCK.finditer(text):
        lang = _LANG_ATTR.search(match.group("attrs"))
        if lang is not None and lang.group("lang").lower() not in _JS_LANGS:
            continue
        keep.append(match.span("body"))

    out: list[str] = []
    pos = 0
    for start, end in keep:
        out.append(_blank(text[pos:start]))
        out.append(text[start:end])
        pos = end
    out.append(_blank(text[pos:]))
    return "".join(out)


def _blank(segment: str) -> str:
    return "".join(c if c == "\n" else " " for c in segment)


def _iter_directory(root: Path, skip_dirs: set[str]) -> Iterator[Path]:
    """Yield lint targets below *root*.

    Hidden and skipped directories are pruned, as are paths the root
    ``.gitignore`` matches. Symlinks leading outside *root*, or back into
    a directory already walked, are not followed.
    """
    ignored = _gitignore(root)
    real_root = root.resolve()
    seen: set[Path] = set()
    pending = [root]
    while pending:
        directory = pending.pop()
        real = directory.resolve()
        if real in seen or not real.is_relative_to(real_root):
            continue
        seen.add(real)

        for entry in directory.iterdir():
            rel = entry.relative_to(root).as_posix()
            if entry.is_dir():
                if entry.name.startswith(".") or entry.name in skip_dirs:
                    continue
                if not ignored.match_file(rel + "/"):
                    pending.append(entry)
            elif _is_source(entry) and not ignored.match_file(rel):
                if entry.resolve().is_relative_to(real_root):
                    yield entry


def _is_source(path: Path) -> bool:
    return path.suffix.lower() in SOURCE_EXTENSIONS and path.is_file()


def _gitignore(root: Path) -> pathspec.GitIgnoreSpec:
    path = root / ".gitignore"
    lines: list[str] = []
    if path.is_file():
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable %s: %s", path, exc)
    return pathspec.GitIgnoreSpec.from_lines(lines)
