from __future__ import annotations

"""
Exclusion Rules for Directory Scanning.

Implements the ordered matching rules used to leave paths out of a
generated structure: exact path, exact basename, directory prefix and
shell-style glob.
"""

import fnmatch
from typing import Iterable, List

from skeletree.domain.constants import DEFAULT_EXCLUDE_PATTERNS

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_exclude_patterns() -> List[str]:
    """
    Get the exclusion patterns applied when the caller provides none.

    Returns:
        List[str]: Dependency folders, VCS metadata and temporary files.
    """
    return list(DEFAULT_EXCLUDE_PATTERNS)


def merge_patterns(base: Iterable[str], extra: Iterable[str]) -> List[str]:
    """Concatenate two pattern lists, dropping blanks and repeats."""
    merged: List[str] = []
    for p in list(base) + list(extra):
        p = p.strip()
        if p and p not in merged:
            merged.append(p)
    return merged

# -----------------------------------------------------------------------------
# PATTERN MATCHING
# -----------------------------------------------------------------------------

def should_exclude(path: str, patterns: Iterable[str]) -> bool:
    """
    Decide whether a store path is excluded by any pattern.

    Rules are evaluated per pattern in order, the first hit wins:
    1. exact match against the full path;
    2. exact match against the basename;
    3. the path lies below the pattern treated as a directory;
    4. fnmatch glob against the full path or the basename.

    Args:
        path: Store-relative path with '/' separators.
        patterns: Exclusion patterns.

    Returns:
        bool: True if the path must be skipped.
    """
    basename = path.rstrip("/").rsplit("/", 1)[-1]

    for pattern in patterns:
        if path == pattern:
            return True
        if basename == pattern:
            return True
        if path.startswith(pattern + "/"):
            return True
        if fnmatch.fnmatchcase(path, pattern) or fnmatch.fnmatchcase(basename, pattern):
            return True

    return False
