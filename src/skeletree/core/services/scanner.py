from __future__ import annotations

"""
Directory Scanning Service.

Walks a file store listing and assembles the hierarchical DirectoryNode
tree consumed by the renderer, honoring exclusion patterns and a maximum
depth bound.
"""

import logging
from typing import Iterable, List, Optional

from skeletree.core.services.filters import default_exclude_patterns, should_exclude
from skeletree.domain.constants import DEFAULT_MAX_DEPTH, DEFAULT_ROOT_NAME
from skeletree.domain.structure_models import DirectoryNode, FileNode, NodeKind
from skeletree.infra.fs import FileStore, StoreEntry

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def scan_structure(
        store: FileStore,
        root_path: str = "",
        max_depth: int = DEFAULT_MAX_DEPTH,
        exclude_patterns: Optional[Iterable[str]] = None,
        root_name: str = "",
) -> DirectoryNode:
    """
    Build an in-memory tree of everything below 'root_path'.

    An entry's depth is the number of '/' in its path relative to
    'root_path'; entries deeper than 'max_depth' are skipped. Excluded
    directories hide their whole subtree. Directories implied by deeper
    files but never listed themselves are synthesized.

    Args:
        store: Source file store.
        root_path: Store-relative directory to scan, '' for the store root.
        max_depth: Deepest relative depth to keep.
        exclude_patterns: Exclusion patterns; defaults apply when None.
        root_name: Display name for the root node.

    Returns:
        DirectoryNode: Root of the scanned tree.
    """
    patterns: List[str] = (
        list(exclude_patterns) if exclude_patterns is not None else default_exclude_patterns()
    )
    root_path = root_path.strip("/")
    name = root_name or root_path.rsplit("/", 1)[-1] or DEFAULT_ROOT_NAME
    root = DirectoryNode(name=name, path=root_path)

    kept = 0

    for item in store.list_all(root_path):
        rel_path = _relative_to(item.path, root_path)
        if not rel_path:
            continue

        if _is_excluded(rel_path, patterns):
            continue

        depth = rel_path.count("/")
        if depth > max_depth:
            continue

        add_node(root, rel_path, item)
        kept += 1

    logger.debug(f"Scanned '{root_path or '.'}': {kept} entries kept.")
    return root


def add_node(root: DirectoryNode, rel_path: str, item: StoreEntry) -> None:
    """
    Insert one listed entry into the tree, creating intermediate directories.

    Args:
        root: Tree root.
        rel_path: Entry path relative to the root.
        item: The listed store entry.
    """
    parts = rel_path.split("/")
    current = root

    for i, part in enumerate(parts[:-1]):
        existing = current.find_child(part)
        if existing is None:
            new_dir = DirectoryNode(name=part, path="/".join(parts[: i + 1]))
            current.add_child(new_dir)
            current = new_dir
        elif existing.kind is NodeKind.DIRECTORY:
            current = existing
        else:
            logger.warning(f"'{existing.path}' is a file; cannot place '{rel_path}' under it.")
            return

    final_name = parts[-1]
    if item.is_file:
        current.add_child(FileNode(name=final_name, path=rel_path, size=item.size))
    elif current.find_child(final_name) is None:
        current.add_child(DirectoryNode(name=final_name, path=rel_path))

# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_excluded(rel_path: str, patterns: List[str]) -> bool:
    """True if the path or any of its ancestor directories is excluded."""
    parts = rel_path.split("/")
    return any(should_exclude("/".join(parts[:i]), patterns) for i in range(1, len(parts) + 1))


def _relative_to(path: str, root_path: str) -> str:
    path = path.strip("/")
    if not root_path:
        return path
    if path == root_path:
        return ""
    prefix = root_path + "/"
    return path[len(prefix):] if path.startswith(prefix) else path
