from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the tree-drawing glyph sets, default file contents, filename
heuristics and platform restrictions shared by the parser, validator,
scanner and renderer.
"""

from typing import Dict, FrozenSet, List

CURRENT_CONFIG_VERSION = "1.0.0"
DEFAULT_OUTPUT_FILE = "STRUCTURE.md"
DEFAULT_MAX_DEPTH = 10
DEFAULT_ROOT_NAME = "root"

# -----------------------------------------------------------------------------
# TREE DRAWING GLYPHS
# -----------------------------------------------------------------------------

CODE_FENCE = "```"
UNIT_WIDTH = 4

# Vertical connectors continuing an ancestor level
CONNECTOR_GLYPHS: FrozenSet[str] = frozenset({"│", "┃", "|"})

# Heads of a branch glyph; only a branch when followed by a horizontal run
BRANCH_HEAD_GLYPHS: FrozenSet[str] = frozenset({"├", "└", "┣", "┗", "+", "`"})
HORIZONTAL_GLYPHS: FrozenSet[str] = frozenset({"─", "━", "-"})

BRANCH_MIDDLE = "├── "
BRANCH_LAST = "└── "
CONTINUATION = "│   "
BLANK_CONTINUATION = "    "

DIRECTORY_INDICATORS = ("/", "\\")

# -----------------------------------------------------------------------------
# FILENAME HEURISTICS
# -----------------------------------------------------------------------------

KNOWN_FILE_EXTENSIONS: FrozenSet[str] = frozenset({
    "php", "js", "css", "html", "md", "txt", "json", "xml",
    "yml", "yaml", "ini", "conf", "log", "lock", "dist", "min",
})

DEFAULT_FILE_CONTENTS: Dict[str, str] = {
    "php": "<?php\n\ndeclare(strict_types=1);\n",
    "js": "'use strict';\n",
    "css": "/* Stylesheet */\n",
    "html": (
        "<!DOCTYPE html>\n<html>\n<head>\n\t<title>Page Title</title>\n"
        "</head>\n<body>\n\n</body>\n</html>\n"
    ),
    "md": "# Title\n\nContent here.\n",
    "json": "{\n\t\n}\n",
    "yml": "# Configuration\n",
    "yaml": "# Configuration\n",
    "txt": "",
}

# -----------------------------------------------------------------------------
# PLATFORM RESTRICTIONS
# -----------------------------------------------------------------------------

INVALID_PATH_CHARACTERS = '<>:"|?*'

RESERVED_FILENAMES: FrozenSet[str] = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

# -----------------------------------------------------------------------------
# SCANNER DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    "vendor",
    "node_modules",
    ".git",
    ".DS_Store",
    "*.tmp",
    "*.log",
]
