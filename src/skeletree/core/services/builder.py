from __future__ import annotations

"""
Structure Builder Service.

Materializes parsed entries into a file store. Directories are ensured
ancestor-first with an iterative walk; files are always (re)written, so a
repeated build refreshes their content. There is no rollback: a failure
leaves earlier creations in place.
"""

import logging
from typing import List, Sequence

from skeletree.domain.errors import CreationError
from skeletree.domain.pipeline_models import BuildReport
from skeletree.domain.structure_models import PathEntry
from skeletree.infra.fs import FileStore

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_structure(
        entries: Sequence[PathEntry],
        store: FileStore,
        dry_run: bool = False,
) -> BuildReport:
    """
    Create every entry in the store, in the given order.

    Args:
        entries: Parser output (directories precede their descendants).
        store: Destination file store.
        dry_run: If True, only report what would be created.

    Returns:
        BuildReport: Directories and files created, or that would be created.

    Raises:
        CreationError: If the store rejects a directory or file operation.
    """
    directories: List[str] = []
    files: List[str] = []

    for entry in entries:
        if entry.is_directory:
            if not dry_run:
                ensure_directory(store, entry.path)
            directories.append(entry.path)
        else:
            if not dry_run:
                _write_file(store, entry.path, entry.content or "")
            files.append(entry.path)

    action = "Would create" if dry_run else "Created"
    logger.info(f"{action} {len(directories)} directories and {len(files)} files.")

    return BuildReport(created_directories=directories, created_files=files, dry_run=dry_run)


def ensure_directory(store: FileStore, path: str) -> None:
    """
    Make sure 'path' and all of its ancestors exist in the store.

    Ancestors are materialized from the root down. A directory that already
    exists, including one created concurrently by someone else, counts as
    success.

    Raises:
        CreationError: If a missing directory cannot be created, or a file
                       already occupies its path.
    """
    segments = [s for s in path.split("/") if s]
    for i in range(1, len(segments) + 1):
        current = "/".join(segments[:i])
        if store.is_directory(current):
            continue
        if store.exists(current):
            logger.error(f"Cannot create directory '{current}': a file is in the way.")
            raise CreationError.directory(current, NotADirectoryError(f"'{current}' is a file"))

        try:
            store.create_directory(current)
        except Exception as e:
            if _is_existing_directory(store, current):
                continue
            logger.error(f"Cannot create directory '{current}': {e}")
            raise CreationError.directory(current, e) from e

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _write_file(store: FileStore, path: str, content: str) -> None:
    parent = path.rpartition("/")[0]
    if parent:
        ensure_directory(store, parent)

    try:
        store.write(path, content)
    except Exception as e:
        logger.error(f"Cannot write file '{path}': {e}")
        raise CreationError.file(path, e) from e


def _is_existing_directory(store: FileStore, path: str) -> bool:
    try:
        return store.is_directory(path)
    except Exception:
        return False
