from __future__ import annotations

"""
Structure Validation Service.

Runs structural and portability checks over parsed entries without touching
any storage. Problems are reported as human-readable strings; the service
itself never raises.
"""

import logging
from typing import List, Sequence, Set, Union

from skeletree.core.parsing.tree_parser import parse_structure
from skeletree.domain.constants import INVALID_PATH_CHARACTERS, RESERVED_FILENAMES
from skeletree.domain.structure_models import PathEntry

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_structure(source: Union[str, Sequence[PathEntry]]) -> List[str]:
    """
    Validate a structure document or an already parsed entry list.

    Args:
        source: Raw document text, or entries produced by the parser.

    Returns:
        List[str]: One message per problem found; empty when valid.
    """
    if isinstance(source, str):
        try:
            entries: Sequence[PathEntry] = parse_structure(source)
        except Exception as e:
            logger.warning(f"Structure could not be parsed: {e}")
            return [f"Parse error: {e}"]
    else:
        entries = source

    errors: List[str] = []
    seen: Set[str] = set()

    for entry in entries:
        path = entry.path
        if not path:
            errors.append("Empty path found in structure")
            continue

        if path in seen:
            errors.append(f"Duplicate path: {path}")
        seen.add(path)

        if any(ch in INVALID_PATH_CHARACTERS for ch in path):
            errors.append(f"Invalid characters in path: {path}")

        basename = path.rsplit("/", 1)[-1]
        if basename.upper() in RESERVED_FILENAMES:
            errors.append(f"Reserved filename: {path}")

        if _escapes_root(path):
            errors.append(f"Path escapes target directory: {path}")

    if errors:
        logger.debug(f"Validation found {len(errors)} problem(s).")
    return errors

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _escapes_root(path: str) -> bool:
    normalized = path.replace("\\", "/")
    if normalized.startswith("/"):
        return True
    return ".." in normalized.split("/")
