from __future__ import annotations

"""
Directory Structure Data Models.

Provides the flat entry type produced by the parser and the hierarchical
node types used by the scanner and renderer. Nodes form a closed tagged
variant discriminated by 'kind'; directories exclusively own their children.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

# -----------------------------------------------------------------------------
# FLAT PARSER OUTPUT
# -----------------------------------------------------------------------------


class EntryType(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class PathEntry:
    """
    A single typed path produced by the tree parser.

    Attributes:
        path: Forward-slash joined path without leading/trailing slash.
        type: Directory or file.
        name: Basename with separators and inline content stripped.
        depth: Number of ancestor segments in 'path'.
        content: Initial file content, None when unknown or for directories.
    """
    path: str
    type: EntryType
    name: str
    depth: int
    content: Optional[str] = None

    @property
    def is_directory(self) -> bool:
        return self.type is EntryType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.type is EntryType.FILE

# -----------------------------------------------------------------------------
# HIERARCHICAL NODES
# -----------------------------------------------------------------------------


class NodeKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass
class FileNode:
    """
    Leaf entry of a structure tree.

    Attributes:
        name: Filename.
        path: Path relative to the scanned root.
        content: Text content, None when not materialized.
        size: Size in bytes when known.
    """
    name: str
    path: str
    content: Optional[str] = None
    size: Optional[int] = None
    kind: NodeKind = field(default=NodeKind.FILE, init=False)

    @property
    def extension(self) -> str:
        stem, dot, ext = self.name.rpartition(".")
        return ext if dot and stem else ""

    @property
    def stem(self) -> str:
        ext = self.extension
        return self.name[: -(len(ext) + 1)] if ext else self.name


@dataclass
class DirectoryNode:
    """
    Directory entry owning a set of uniquely named children.

    Display order is never stored: 'children()' sorts on every read so the
    result always reflects the current child set.
    """
    name: str
    path: str
    _children: Dict[str, "StructureNode"] = field(default_factory=dict, repr=False)
    kind: NodeKind = field(default=NodeKind.DIRECTORY, init=False)

    def add_child(self, child: StructureNode) -> None:
        """Attach a child, replacing any previous child with the same name."""
        self._children[child.name] = child

    def find_child(self, name: str) -> Optional[StructureNode]:
        return self._children.get(name)

    def has_children(self) -> bool:
        return bool(self._children)

    def children(self) -> List[StructureNode]:
        """
        Return children in display order.

        Directories come first, then files; each group is sorted
        case-insensitively by name.
        """
        return sorted(
            self._children.values(),
            key=lambda c: (c.kind is not NodeKind.DIRECTORY, c.name.lower(), c.name),
        )

    def directory_count(self) -> int:
        """Count every directory below this node, recursively."""
        count = 0
        for child in self._children.values():
            if child.kind is NodeKind.DIRECTORY:
                count += 1 + child.directory_count()
        return count

    def file_count(self) -> int:
        """Count every file below this node, recursively."""
        count = 0
        for child in self._children.values():
            if child.kind is NodeKind.FILE:
                count += 1
            else:
                count += child.file_count()
        return count


StructureNode = Union[DirectoryNode, FileNode]
