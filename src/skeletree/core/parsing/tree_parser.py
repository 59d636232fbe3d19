from __future__ import annotations

"""
Tree Text Parser.

Turns the ASCII/Unicode tree drawn inside a fenced code block into a flat,
ordered list of typed path entries. Parsing is tolerant: malformed
indentation still yields a best-effort depth instead of an error.
"""

import logging
import os
import re
from typing import Iterable, List, Optional, Set, Tuple

from skeletree.domain.constants import (
    BRANCH_HEAD_GLYPHS,
    CODE_FENCE,
    CONNECTOR_GLYPHS,
    DEFAULT_FILE_CONTENTS,
    DIRECTORY_INDICATORS,
    HORIZONTAL_GLYPHS,
    KNOWN_FILE_EXTENSIONS,
    UNIT_WIDTH,
)
from skeletree.domain.errors import ParseError
from skeletree.domain.structure_models import EntryType, PathEntry

logger = logging.getLogger(__name__)

_INLINE_CONTENT_RX = re.compile(r"\s*\[(.+?)\]$")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_structure(text: str) -> List[PathEntry]:
    """
    Parse a structure document into path entries.

    Only lines inside the first fenced code block are considered; later
    blocks are ignored. An unterminated fence keeps the rest of the document
    in scope. A document without fences yields an empty list. Whitespace
    shared by every tree line (a block indented inside a list item, for
    example) is a left margin and does not count towards depth.

    Args:
        text: Raw document content.

    Returns:
        List[PathEntry]: Unique entries sorted by path, so every directory
                         precedes its descendants.
    """
    block = _extract_block_lines(text)
    margin = _common_margin(line for _, line in block)

    path_stack: List[str] = []
    entries: List[PathEntry] = []

    for line_number, line in block:
        try:
            entry = _parse_line(line[len(margin):], path_stack)
        except Exception as e:
            raise ParseError(str(e), line_number=line_number, line=line) from e

        if entry is not None:
            entries.append(entry)

    return _clean_entries(entries)


def parse_line_prefix(line: str) -> Tuple[int, str]:
    """
    Split a tree line into its depth and the raw text that follows.

    The prefix is read left to right in fixed-width units. A vertical
    connector with its padding, a run of up to four spaces, a tab, or a
    branch glyph each count as one level. The name starts after the first
    branch glyph or at the first character that is not part of a unit.

    Args:
        line: A single line from inside the code block.

    Returns:
        Tuple[int, str]: (depth, stripped remainder).
    """
    depth = 0
    pos = 0
    n = len(line)

    while pos < n:
        ch = line[pos]

        if ch in CONNECTOR_GLYPHS or ch in BRANCH_HEAD_GLYPHS:
            run_end = pos + 1
            while run_end < n and line[run_end] in HORIZONTAL_GLYPHS:
                run_end += 1

            if run_end > pos + 1:
                # Branch glyph: the entry name follows
                depth += 1
                pos = run_end
                break

            if ch not in CONNECTOR_GLYPHS:
                break

            depth += 1
            pos = _skip_spaces(line, pos + 1, pos + UNIT_WIDTH)
            continue

        if ch == "\t":
            depth += 1
            pos += 1
            continue

        if ch == " ":
            depth += 1
            pos = _skip_spaces(line, pos, pos + UNIT_WIDTH)
            continue

        break

    return depth, line[pos:].strip()


def is_directory_name(name: str) -> bool:
    """
    Decide whether a bare tree name denotes a directory.

    Trailing separators always mean a directory. Otherwise hidden names and
    known file extensions are files, and anything else is a directory only
    when it carries no extension at all.
    """
    if name.endswith(DIRECTORY_INDICATORS):
        return True

    if name.startswith("."):
        return False

    extension = _extension(name)
    if extension.lower() in KNOWN_FILE_EXTENSIONS:
        return False

    return "." not in name


def default_content_for(name: str) -> Optional[str]:
    """Return the starter content for a filename, keyed by its extension."""
    return DEFAULT_FILE_CONTENTS.get(_extension(name).lower())

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _extract_block_lines(text: str) -> List[Tuple[int, str]]:
    """Return (1-based line number, line) for non-blank lines of the first fenced block."""
    in_code_block = False
    block: List[Tuple[int, str]] = []

    for index, line in enumerate(text.splitlines()):
        if line.lstrip(" \t").startswith(CODE_FENCE):
            if in_code_block:
                return block
            in_code_block = True
            continue

        if in_code_block and line.strip():
            block.append((index + 1, line))

    if in_code_block:
        logger.debug("Unterminated code block: consumed content up to end of document.")
    return block


def _common_margin(lines: Iterable[str]) -> str:
    """Longest run of leading whitespace shared by all lines."""
    indents = [line[: len(line) - len(line.lstrip(" \t"))] for line in lines]
    return os.path.commonprefix(indents) if indents else ""


def _parse_line(line: str, path_stack: List[str]) -> Optional[PathEntry]:
    """Build the entry for one line and update the shared path stack."""
    depth, raw_name = parse_line_prefix(line)
    if not raw_name:
        return None

    inline_content: Optional[str] = None
    match = _INLINE_CONTENT_RX.search(raw_name)
    if match:
        inline_content = match.group(1)
        raw_name = raw_name[: match.start()].rstrip()
        if not raw_name:
            return None

    is_dir = is_directory_name(raw_name)
    name = raw_name.rstrip("/\\") if is_dir else raw_name
    if not name:
        return None

    if depth > len(path_stack):
        logger.debug(f"Depth {depth} skips a level for '{name}'; attaching to deepest parent.")
        depth = len(path_stack)

    del path_stack[depth:]
    path_stack.append(name)

    if is_dir:
        content = None
    elif inline_content is not None:
        content = inline_content
    else:
        content = default_content_for(name)

    return PathEntry(
        path="/".join(path_stack),
        type=EntryType.DIRECTORY if is_dir else EntryType.FILE,
        name=name,
        depth=depth,
        content=content,
    )


def _clean_entries(entries: List[PathEntry]) -> List[PathEntry]:
    """Drop empty and duplicate paths, then sort by path."""
    seen: Set[str] = set()
    validated: List[PathEntry] = []

    for entry in entries:
        if not entry.path or entry.path == ".":
            continue
        if entry.path in seen:
            logger.debug(f"Duplicate path ignored: {entry.path}")
            continue
        seen.add(entry.path)
        validated.append(entry)

    validated.sort(key=lambda e: e.path)
    return validated


def _skip_spaces(line: str, start: int, limit: int) -> int:
    pos = start
    while pos < len(line) and pos < limit and line[pos] == " ":
        pos += 1
    return pos


def _extension(name: str) -> str:
    stem, dot, ext = name.rpartition(".")
    return ext if dot and stem else ""
