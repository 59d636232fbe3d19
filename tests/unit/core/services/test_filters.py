from __future__ import annotations

"""
Unit tests for the Exclusion Rules.

Verifies every matching rule (exact path, basename, directory prefix,
glob) and the helpers that build pattern lists.
"""

import pytest

from skeletree.core.services.filters import default_exclude_patterns, merge_patterns, should_exclude


@pytest.mark.parametrize(
    "path, patterns, expected",
    [
        ("vendor", ["vendor"], True),
        ("src/vendor", ["vendor"], True),
        ("vendor/autoload.php", ["vendor"], True),
        ("vendors", ["vendor"], False),
        ("composer.json", ["*.json"], True),
        ("config/app.json", ["*.json"], True),
        ("cache/data.bin", ["cache/*"], True),
        ("src/cache/data.bin", ["cache/*"], False),
        (".git", [".git"], True),
        (".gitignore", [".git"], False),
        ("src/App.php", [], False),
        ("Readme.MD", ["*.md"], False),
    ],
)
def test_should_exclude(path: str, patterns: list, expected: bool) -> None:
    assert should_exclude(path, patterns) is expected


def test_default_patterns_are_a_fresh_copy() -> None:
    first = default_exclude_patterns()
    first.append("extra")

    assert "extra" not in default_exclude_patterns()
    assert "node_modules" in default_exclude_patterns()


def test_merge_patterns_drops_blanks_and_repeats() -> None:
    merged = merge_patterns(["vendor", "*.log"], [" dist ", "", "vendor"])

    assert merged == ["vendor", "*.log", "dist"]
