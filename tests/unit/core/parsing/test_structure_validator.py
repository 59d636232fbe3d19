from __future__ import annotations

"""
Unit tests for the Structure Validation Service.

Verifies that portability problems are reported as messages and that
the validator accepts both raw documents and parsed entries.
"""

from skeletree.core.parsing.validator import validate_structure
from skeletree.domain.structure_models import EntryType, PathEntry


def _entry(path: str, kind: EntryType = EntryType.FILE) -> PathEntry:
    return PathEntry(path=path, type=kind, name=path.rsplit("/", 1)[-1], depth=path.count("/"))


def test_valid_structure_has_no_errors(sample_markdown: str) -> None:
    assert validate_structure(sample_markdown) == []


def test_document_without_block_is_valid() -> None:
    assert validate_structure("just prose") == []


def test_invalid_characters_and_reserved_names() -> None:
    """TC-01: Both the invalid-character and reserved-name rules fire."""
    text = (
        "```\n"
        "project/\n"
        "├── invalid<file>.php\n"
        "└── CON\n"
        "```\n"
    )

    errors = validate_structure(text)

    assert any("Invalid characters in path" in e and "invalid<file>.php" in e for e in errors)
    assert any(e.startswith("Reserved filename") and e.endswith("project/CON") for e in errors)


def test_reserved_names_are_case_insensitive() -> None:
    errors = validate_structure([_entry("app/lpt1"), _entry("app/com3")])

    assert errors == ["Reserved filename: app/lpt1", "Reserved filename: app/com3"]


def test_reserved_name_with_extension_is_allowed() -> None:
    assert validate_structure([_entry("app/con.txt")]) == []


def test_duplicate_and_empty_paths() -> None:
    entries = [
        _entry("app", EntryType.DIRECTORY),
        _entry("app/a.txt"),
        _entry("app/a.txt"),
        PathEntry(path="", type=EntryType.FILE, name="", depth=0),
    ]

    errors = validate_structure(entries)

    assert "Duplicate path: app/a.txt" in errors
    assert "Empty path found in structure" in errors


def test_paths_escaping_the_target_are_rejected() -> None:
    entries = [_entry("app/../../etc/passwd"), _entry("/abs/file.txt")]

    errors = validate_structure(entries)

    assert "Path escapes target directory: app/../../etc/passwd" in errors
    assert "Path escapes target directory: /abs/file.txt" in errors


def test_dots_inside_names_are_not_escapes() -> None:
    assert validate_structure([_entry("app/..hidden"), _entry("app/v1..2.txt")]) == []
