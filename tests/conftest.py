from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared structure documents and on-disk project fixtures.
"""

import os
import sys
from pathlib import Path

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_markdown() -> str:
    """
    Return a structure document with nesting under a last-child directory.

    The 'tests/' branch is the last child of the root, so its descendants are
    indented with blank units instead of vertical connectors.
    """
    return (
        "# Project\n"
        "\n"
        "Some prose that must be ignored.\n"
        "\n"
        "```\n"
        "project/\n"
        "├── src/\n"
        "│   ├── Service/\n"
        "│   │   └── UserService.php\n"
        "│   └── App.php\n"
        "├── README.md\n"
        "└── tests/\n"
        "    └── Unit/\n"
        "        └── AppTest.php\n"
        "```\n"
        "\n"
        "Trailing text.\n"
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Create a small project on disk for scanning tests.

    Structure:
    /project
      /src
        App.php
        /Service
          UserService.php
      /vendor
        autoload.php
      /.git
        config
      composer.json
      README.md
      debug.log
    """
    root = tmp_path / "project"
    root.mkdir()

    (root / "src" / "Service").mkdir(parents=True)
    (root / "src" / "App.php").write_text("<?php\n", encoding="utf-8")
    (root / "src" / "Service" / "UserService.php").write_text("<?php\n", encoding="utf-8")

    (root / "vendor").mkdir()
    (root / "vendor" / "autoload.php").write_text("<?php\n", encoding="utf-8")

    (root / ".git").mkdir()
    (root / ".git" / "config").write_text("[core]\n", encoding="utf-8")

    (root / "composer.json").write_text("{}", encoding="utf-8")
    (root / "README.md").write_text("# Project\n", encoding="utf-8")
    (root / "debug.log").write_text("noise\n", encoding="utf-8")

    return root
