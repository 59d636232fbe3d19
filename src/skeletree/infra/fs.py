from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Defines the file store capability consumed by the builder and scanner, a
local implementation rooted at a directory, and cross-platform path helpers
for application data. Store paths are always relative and '/'-separated.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Protocol

from skeletree.domain.errors import FileStoreError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Skeletree"
UNIX_APP_DIR_NAME = ".skeletree"

# -----------------------------------------------------------------------------
# FILE STORE CAPABILITY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class StoreEntry:
    """
    A single listed store item.

    Attributes:
        path: Store-relative path with '/' separators.
        is_file: True for files, False for directories.
        size: Size in bytes for files, None for directories.
    """
    path: str
    is_file: bool
    size: Optional[int] = None


class FileStore(Protocol):
    """Minimal storage operations required by the core."""

    def exists(self, path: str) -> bool: ...

    def is_directory(self, path: str) -> bool: ...

    def list_all(self, root_path: str = "") -> List[StoreEntry]: ...

    def create_directory(self, path: str) -> None: ...

    def write(self, path: str, content: str) -> None: ...

    def read(self, path: str) -> str: ...


class LocalFileStore:
    """
    File store backed by the local filesystem below a root directory.

    Errors raised by the operating system during writes propagate as
    OSError; reading a missing file raises FileStoreError.
    """

    def __init__(self, root: Optional[str] = None):
        self.root = os.path.abspath(root or os.getcwd())

    @property
    def root_name(self) -> str:
        return os.path.basename(self.root.rstrip(os.sep))

    def resolve(self, path: str) -> str:
        """Map a store-relative path to an absolute filesystem path."""
        parts = [p for p in path.replace("\\", "/").split("/") if p]
        return os.path.join(self.root, *parts)

    def exists(self, path: str) -> bool:
        return os.path.exists(self.resolve(path))

    def is_directory(self, path: str) -> bool:
        return os.path.isdir(self.resolve(path))

    def list_all(self, root_path: str = "") -> List[StoreEntry]:
        """
        List every directory and file below 'root_path', recursively.

        Args:
            root_path: Store-relative directory to list, '' for the store root.

        Returns:
            List[StoreEntry]: Entries with store-relative paths, sorted by path.
        """
        base = self.resolve(root_path)
        if not os.path.isdir(base):
            raise FileStoreError(root_path or ".", "is not a directory")

        entries: List[StoreEntry] = []
        for current, dirs, files in os.walk(base):
            dirs.sort()
            files.sort()
            for d in dirs:
                entries.append(StoreEntry(path=self._relative(os.path.join(current, d)), is_file=False))
            for f in files:
                full = os.path.join(current, f)
                try:
                    size: Optional[int] = os.path.getsize(full)
                except OSError:
                    size = None
                entries.append(StoreEntry(path=self._relative(full), is_file=True, size=size))

        entries.sort(key=lambda e: e.path)
        return entries

    def create_directory(self, path: str) -> None:
        full = self.resolve(path)
        try:
            os.mkdir(full)
        except FileExistsError:
            if not os.path.isdir(full):
                raise
        logger.debug(f"Directory ready: {path}")

    def write(self, path: str, content: str) -> None:
        with open(self.resolve(path), "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.debug(f"File written: {path} ({len(content)} chars)")

    def read(self, path: str) -> str:
        full = self.resolve(path)
        if not os.path.isfile(full):
            raise FileStoreError(path)
        try:
            with open(full, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileStoreError(path, f"is not readable: {e}") from e

    def _relative(self, full_path: str) -> str:
        return os.path.relpath(full_path, self.root).replace(os.sep, "/")

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/Skeletree
    - Linux/Mac: ~/.skeletree

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.debug(f"Could not create user data dir '{path}': {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)
