from __future__ import annotations

"""
Integration tests for the Workflow Engine.

Exercises both flows end to end on the real filesystem: building a tree
from a document or template, and snapshotting a directory back into a
document that parses to the same structure.
"""

from datetime import datetime
from pathlib import Path

import pytest

from skeletree.core.analysis.tree_renderer import render_tree_lines
from skeletree.core.parsing.tree_parser import parse_structure
from skeletree.core.pipeline.engine import (
    create_from_file,
    create_from_template,
    run_create,
    run_generate,
    save_document,
)
from skeletree.core.services.builder import build_structure
from skeletree.core.services.scanner import scan_structure
from skeletree.core.services.templates import BUNDLED_TEMPLATES_DIR
from skeletree.domain.errors import FileStoreError, TemplateError
from skeletree.infra.fs import LocalFileStore

# -----------------------------------------------------------------------------
# CREATE FLOW
# -----------------------------------------------------------------------------

def test_run_create_builds_tree(tmp_path: Path, sample_markdown: str) -> None:
    result = run_create(sample_markdown, str(tmp_path))

    assert result.ok, result.error
    assert result.report is not None
    assert result.report.total == 9
    assert result.target_dir == str(tmp_path)
    assert (tmp_path / "project" / "tests" / "Unit" / "AppTest.php").is_file()


def test_run_create_dry_run(tmp_path: Path, sample_markdown: str) -> None:
    result = run_create(sample_markdown, str(tmp_path), dry_run=True)

    assert result.ok
    assert result.report.dry_run is True
    assert list(tmp_path.iterdir()) == []


def test_run_create_validate_only(tmp_path: Path, sample_markdown: str) -> None:
    result = run_create(sample_markdown, str(tmp_path), validate_only=True)

    assert result.ok
    assert result.validate_only is True
    assert result.report is None
    assert list(tmp_path.iterdir()) == []


def test_run_create_reports_validation_errors(tmp_path: Path) -> None:
    text = "```\nproject/\n├── bad?.txt\n└── NUL\n```\n"

    result = run_create(text, str(tmp_path))

    assert not result.ok
    assert result.error == "Structure validation failed"
    assert len(result.validation_errors) == 2
    assert list(tmp_path.iterdir()) == []


def test_run_create_without_block_fails(tmp_path: Path) -> None:
    result = run_create("No tree here.", str(tmp_path), source="notes.md")

    assert not result.ok
    assert "code block" in result.error
    assert result.source == "notes.md"


def test_create_from_file(tmp_path: Path, sample_markdown: str) -> None:
    doc = tmp_path / "STRUCTURE.md"
    doc.write_text(sample_markdown, encoding="utf-8")
    target = tmp_path / "out"
    target.mkdir()

    result = create_from_file(str(doc), str(target))

    assert result.ok
    assert result.source == str(doc)
    assert (target / "project" / "src" / "Service" / "UserService.php").is_file()


def test_create_from_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileStoreError):
        create_from_file(str(tmp_path / "missing.md"), str(tmp_path))


def test_create_from_bundled_template(tmp_path: Path) -> None:
    result = create_from_template(
        "python-package",
        {"PROJECT_NAME": "demo", "PACKAGE": "demo_pkg", "TESTS": "1"},
        str(tmp_path),
        search_dirs=[BUNDLED_TEMPLATES_DIR],
    )

    assert result.ok, result.validation_errors
    assert result.source == "python-package"
    assert (tmp_path / "demo" / "src" / "demo_pkg" / "__init__.py").is_file()
    assert (tmp_path / "demo" / "tests" / "test_main.py").is_file()
    assert (tmp_path / "demo" / "README.md").read_text(encoding="utf-8").startswith("# Title")


def test_create_from_unknown_template(tmp_path: Path) -> None:
    with pytest.raises(TemplateError):
        create_from_template("does-not-exist", {}, str(tmp_path), search_dirs=[str(tmp_path)])

# -----------------------------------------------------------------------------
# GENERATE FLOW
# -----------------------------------------------------------------------------

def test_run_generate_saves_document(project_dir: Path) -> None:
    stamp = datetime(2024, 5, 6, 7, 8, 9)

    result = run_generate(str(project_dir), generated_at=stamp)

    assert result.ok
    assert result.output_path == str(project_dir / "STRUCTURE.md")
    assert result.directory_count == 2
    assert result.file_count == 4
    saved = (project_dir / "STRUCTURE.md").read_text(encoding="utf-8")
    assert saved == result.markdown
    assert "├── src/" in saved
    assert "vendor" not in saved
    assert saved.endswith("Generated on: 2024-05-06 07:08:09\n")


def test_run_generate_without_saving(project_dir: Path) -> None:
    result = run_generate(str(project_dir), save=False, exclude_patterns=[])

    assert result.ok
    assert result.output_path == ""
    assert not (project_dir / "STRUCTURE.md").exists()
    assert "vendor/" in result.markdown


def test_run_generate_missing_directory(tmp_path: Path) -> None:
    result = run_generate(str(tmp_path / "missing"))

    assert not result.ok
    assert "does not exist" in result.error


def test_save_document_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "doc.md"

    save_document(str(target), "content")

    assert target.read_text(encoding="utf-8") == "content"

# -----------------------------------------------------------------------------
# ROUND TRIP
# -----------------------------------------------------------------------------

def test_render_of_scan_of_build_matches_document(tmp_path: Path) -> None:
    """Parsing, building, scanning and rendering returns the original tree text."""
    tree = [
        "project/",
        "├── src/",
        "│   ├── Service/",
        "│   │   └── UserService.php",
        "│   └── App.php",
        "├── tests/",
        "│   └── Unit/",
        "│       └── AppTest.php",
        "└── README.md",
    ]
    entries = parse_structure("```\n" + "\n".join(tree) + "\n```\n")
    build_structure(entries, LocalFileStore(str(tmp_path)))

    root = scan_structure(LocalFileStore(str(tmp_path)), root_path="project", exclude_patterns=[])

    assert render_tree_lines(root) == tree


def test_generated_document_parses_back(project_dir: Path) -> None:
    result = run_generate(str(project_dir), save=False)

    paths = {e.path for e in parse_structure(result.markdown)}

    assert paths == {
        "project",
        "project/README.md",
        "project/composer.json",
        "project/src",
        "project/src/App.php",
        "project/src/Service",
        "project/src/Service/UserService.php",
    }
