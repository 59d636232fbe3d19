from __future__ import annotations

"""
Integration tests for the Local File Store.

Verifies path resolution, recursive listing, directory creation and
read/write behaviour against the real filesystem.
"""

from pathlib import Path

import pytest

from skeletree.domain.errors import FileStoreError
from skeletree.infra.fs import LocalFileStore, normalize_path


def test_list_all_is_recursive_and_sorted(project_dir: Path) -> None:
    store = LocalFileStore(str(project_dir))

    entries = store.list_all()
    paths = [e.path for e in entries]

    assert paths == sorted(paths)
    assert "src/Service/UserService.php" in paths
    by_path = {e.path: e for e in entries}
    assert by_path["src"].is_file is False
    assert by_path["src"].size is None
    assert by_path["README.md"].is_file is True
    assert by_path["README.md"].size == len("# Project\n")


def test_list_all_of_subdirectory(project_dir: Path) -> None:
    paths = [e.path for e in LocalFileStore(str(project_dir)).list_all("src/Service")]

    assert paths == ["src/Service/UserService.php"]


def test_list_all_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FileStoreError):
        LocalFileStore(str(tmp_path)).list_all("missing")


def test_create_directory_and_write(tmp_path: Path) -> None:
    store = LocalFileStore(str(tmp_path))

    store.create_directory("docs")
    store.create_directory("docs")
    store.write("docs/a.md", "line1\nline2\n")

    assert store.is_directory("docs")
    assert store.exists("docs/a.md")
    assert not store.is_directory("docs/a.md")
    assert (tmp_path / "docs" / "a.md").read_bytes() == b"line1\nline2\n"
    assert store.read("docs/a.md") == "line1\nline2\n"


def test_create_directory_over_file_fails(tmp_path: Path) -> None:
    (tmp_path / "taken").write_text("x", encoding="utf-8")

    with pytest.raises(OSError):
        LocalFileStore(str(tmp_path)).create_directory("taken")


def test_create_directory_without_parent_fails(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        LocalFileStore(str(tmp_path)).create_directory("a/b")


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileStoreError) as exc_info:
        LocalFileStore(str(tmp_path)).read("nope.md")

    assert exc_info.value.path == "nope.md"
    assert exc_info.value.message == "Path 'nope.md' not found"


def test_resolve_and_root_name(tmp_path: Path) -> None:
    store = LocalFileStore(str(tmp_path / "proj"))

    assert store.root_name == "proj"
    assert store.resolve("a\\b/c") == str(tmp_path / "proj" / "a" / "b" / "c")


def test_normalize_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SKELETREE_TEST_DIR", str(tmp_path))

    assert normalize_path("$SKELETREE_TEST_DIR/x", "/fallback") == str(tmp_path / "x")
    assert normalize_path("   ", str(tmp_path)) == str(tmp_path)
