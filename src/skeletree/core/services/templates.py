from __future__ import annotations

"""
Template Catalog and Pre-Processor.

Locates named structure templates and expands their '{{NAME}}' variables
and '{{if NAME}}...{{/if}}' conditional blocks into plain structure text
ready for the parser.
"""

import logging
import os
import re
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from skeletree.domain.errors import TemplateError

logger = logging.getLogger(__name__)

TEMPLATE_EXTENSION = ".md"
LOCAL_TEMPLATES_DIR = "templates"
BUNDLED_TEMPLATES_DIR = os.path.abspath(
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..", "templates")
)

_CONDITIONAL_RX = re.compile(r"\{\{if\s+(\w+)\}\}(.*?)\{\{/if\}\}", re.DOTALL)
_FALSY_VALUES = ("", "0")

# -----------------------------------------------------------------------------
# TEXT PROCESSING
# -----------------------------------------------------------------------------

def process_template(template: str, variables: Mapping[str, str]) -> str:
    """
    Expand variables and conditional blocks in a template.

    Every '{{NAME}}' is replaced with its value first. Each
    '{{if NAME}}...{{/if}}' block is then replaced by its inner text when the
    variable is set to a non-empty value other than '0', else removed.
    Unknown variables are falsy.

    Args:
        template: Raw template text.
        variables: Variable values by name.

    Returns:
        str: Processed structure text.
    """
    processed = template
    for key, value in variables.items():
        processed = processed.replace("{{" + key + "}}", str(value))

    def _expand(match: re.Match) -> str:
        value = variables.get(match.group(1))
        if value is None or str(value) in _FALSY_VALUES:
            return ""
        return match.group(2)

    return _CONDITIONAL_RX.sub(_expand, processed)


def parse_variables(assignments: Iterable[str]) -> Dict[str, str]:
    """
    Convert 'key=value' strings into a variable mapping.

    Entries without '=' are ignored; keys and values are trimmed.
    """
    variables: Dict[str, str] = {}
    for raw in assignments:
        if "=" not in raw:
            logger.warning(f"Ignoring template variable without '=': {raw}")
            continue
        key, value = raw.split("=", 1)
        key = key.strip()
        if key:
            variables[key] = value.strip()
    return variables

# -----------------------------------------------------------------------------
# CATALOG
# -----------------------------------------------------------------------------

def template_search_dirs(user_templates_dir: Optional[str] = None) -> List[str]:
    """
    Return template directories in lookup order.

    The project-local './templates' comes first, then the user directory
    from the configuration, then the templates bundled with the package.
    """
    dirs = [os.path.abspath(LOCAL_TEMPLATES_DIR)]
    if user_templates_dir:
        dirs.append(os.path.abspath(os.path.expanduser(user_templates_dir)))
    dirs.append(BUNDLED_TEMPLATES_DIR)
    return dirs


def resolve_template(name: str, search_dirs: Optional[List[str]] = None) -> Tuple[str, str]:
    """
    Find a template by name and read it.

    Args:
        name: Template name without the '.md' extension.
        search_dirs: Directories to search; defaults to 'template_search_dirs()'.

    Returns:
        Tuple[str, str]: (absolute template path, template text).

    Raises:
        TemplateError: If the name is invalid, missing or unreadable.
    """
    if not name or "/" in name or "\\" in name or name.startswith("."):
        raise TemplateError(name, "invalid template name")

    for directory in search_dirs if search_dirs is not None else template_search_dirs():
        path = os.path.join(directory, name + TEMPLATE_EXTENSION)
        if not os.path.isfile(path):
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(name, f"cannot read '{path}': {e}") from e
        logger.debug(f"Template '{name}' resolved to {path}")
        return path, content

    raise TemplateError(name)


def list_templates(search_dirs: Optional[List[str]] = None) -> List[str]:
    """List the unique template names available across the search directories."""
    names = set()
    for directory in search_dirs if search_dirs is not None else template_search_dirs():
        if not os.path.isdir(directory):
            continue
        for entry in os.listdir(directory):
            if entry.endswith(TEMPLATE_EXTENSION) and not entry.startswith("."):
                names.add(entry[: -len(TEMPLATE_EXTENSION)])
    return sorted(names)
