from __future__ import annotations

"""
Tree Renderer.

Converts a DirectoryNode tree into the same box-drawing text the parser
reads, and wraps it in the Markdown document written by 'generate'.
"""

from datetime import datetime
from typing import List, Optional

from skeletree.domain.constants import (
    BLANK_CONTINUATION,
    BRANCH_LAST,
    BRANCH_MIDDLE,
    CODE_FENCE,
    CONTINUATION,
)
from skeletree.domain.structure_models import DirectoryNode, NodeKind, StructureNode

DOCUMENT_TITLE = "# Project Structure"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree_lines(root: StructureNode) -> List[str]:
    """
    Render a structure tree into text lines.

    The root is printed bare. Every descendant gets one 4-column unit per
    ancestor below the root, chosen by whether that ancestor was the last of
    its siblings, followed by its own branch glyph.

    Args:
        root: Root node of the tree.

    Returns:
        List[str]: One line per node; directories end with '/'.
    """
    if root.kind is NodeKind.FILE:
        return [root.name]

    lines: List[str] = [f"{root.name}/"]
    render_tree_structure(root, lines, prefix="")
    return lines


def render_tree_structure(node: DirectoryNode, lines: List[str], prefix: str = "") -> None:
    """
    Recursively append the children of 'node' to 'lines'.

    Args:
        node: Directory whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Continuation units inherited from the ancestors.
    """
    if not node.has_children():
        return

    entries = node.children()
    total = len(entries)

    for i, child in enumerate(entries):
        is_last = (i == total - 1)
        connector = BRANCH_LAST if is_last else BRANCH_MIDDLE

        if child.kind is NodeKind.DIRECTORY:
            lines.append(f"{prefix}{connector}{child.name}/")
            new_prefix = prefix + (BLANK_CONTINUATION if is_last else CONTINUATION)
            render_tree_structure(child, lines, prefix=new_prefix)
        else:
            lines.append(f"{prefix}{connector}{child.name}")


def render_markdown(root: StructureNode, generated_at: Optional[datetime] = None) -> str:
    """
    Render the full structure document.

    Args:
        root: Root node of the tree.
        generated_at: Timestamp for the footer; defaults to now.

    Returns:
        str: Title, fenced tree and generation footer.
    """
    stamp = (generated_at or datetime.now()).strftime(TIMESTAMP_FORMAT)
    body = "\n".join(render_tree_lines(root))

    return (
        f"{DOCUMENT_TITLE}\n\n"
        f"{CODE_FENCE}\n"
        f"{body}\n"
        f"{CODE_FENCE}\n\n"
        f"Generated on: {stamp}\n"
    )
