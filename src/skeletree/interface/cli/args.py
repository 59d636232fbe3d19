from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema for the 'create', 'generate', 'templates'
and 'config' commands, and translates parsed namespaces into configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from skeletree.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the Skeletree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="skeletree",
        description=i18n.t("app.description", default="Convert between tree text and directories."),
    )

    # --- Diagnostics (global) ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help=i18n.t("cli.args.log_file", default="Also write logs to this file."),
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help=i18n.t("cli.args.use_defaults", default="Ignore the saved configuration."),
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    _add_create_parser(sub)
    _add_generate_parser(sub)

    sub.add_parser(
        "templates",
        help=i18n.t("cli.commands.templates", default="List available templates."),
    )

    config_p = sub.add_parser(
        "config",
        help=i18n.t("cli.commands.config", default="Show or change the saved configuration."),
    )
    config_p.add_argument(
        "--set",
        dest="settings",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help=i18n.t("cli.args.set", default="Persist a setting. Repeatable."),
    )
    config_p.add_argument(
        "--reset",
        action="store_true",
        help=i18n.t("cli.args.reset", default="Restore the default configuration."),
    )

    return p


def _add_create_parser(sub: Any) -> None:
    c = sub.add_parser(
        "create",
        help=i18n.t("cli.commands.create", default="Create directories from a STRUCTURE.md file or template."),
    )
    c.add_argument(
        "structure",
        help=i18n.t("cli.args.structure", default="Path to the structure file, or a template name."),
    )
    c.add_argument(
        "-t", "--target",
        dest="target_dir",
        default=None,
        help=i18n.t("cli.args.target", default="Directory where the structure is created."),
    )
    c.add_argument(
        "--template",
        action="store_true",
        help=i18n.t("cli.args.template", default="Treat STRUCTURE as a template name."),
    )
    c.add_argument(
        "-v", "--variables",
        dest="variables",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help=i18n.t("cli.args.variables", default="Template variable. Repeatable."),
    )
    c.add_argument(
        "--dry-run",
        action="store_true",
        help=i18n.t("cli.args.dry_run", default="Show what would be created without writing."),
    )
    c.add_argument(
        "-f", "--force",
        action="store_true",
        help=i18n.t("cli.args.force", default="Create the target directory if it does not exist."),
    )
    c.add_argument(
        "--validate-only",
        action="store_true",
        help=i18n.t("cli.args.validate_only", default="Only validate the structure."),
    )
    c.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json", default="Print the result as JSON."),
    )


def _add_generate_parser(sub: Any) -> None:
    g = sub.add_parser(
        "generate",
        help=i18n.t("cli.commands.generate", default="Generate a STRUCTURE.md file from a directory."),
    )
    g.add_argument(
        "path",
        nargs="?",
        default=".",
        help=i18n.t("cli.args.path", default="Directory to scan (default: current directory)."),
    )
    g.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help=i18n.t("cli.args.output", default="Output file name, relative to the scanned directory."),
    )
    g.add_argument(
        "-e", "--exclude",
        dest="exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help=i18n.t("cli.args.exclude", default="Additional exclude pattern. Repeatable."),
    )
    g.add_argument(
        "--no-default-excludes",
        action="store_true",
        help=i18n.t("cli.args.no_default_excludes", default="Do not apply the configured exclude patterns."),
    )
    g.add_argument(
        "-d", "--max-depth",
        dest="max_depth",
        type=int,
        default=None,
        help=i18n.t("cli.args.max_depth", default="Maximum directory depth to scan."),
    )
    g.add_argument(
        "-p", "--show-preview",
        dest="show_preview",
        action="store_true",
        help=i18n.t("cli.args.show_preview", default="Preview the structure and confirm before saving."),
    )
    g.add_argument(
        "-y", "--yes",
        dest="assume_yes",
        action="store_true",
        help=i18n.t("cli.args.yes", default="Answer yes to the preview confirmation."),
    )
    g.add_argument(
        "--stdout",
        action="store_true",
        help=i18n.t("cli.args.stdout", default="Print the document instead of saving it."),
    )
    g.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help=i18n.t("cli.args.json", default="Print the result as JSON."),
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only values the user actually provided are returned, so the merge keeps
    saved settings for everything else.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.debug:
        overrides["log_level"] = "DEBUG"

    if getattr(args, "target_dir", None):
        overrides["target_dir"] = args.target_dir
    if getattr(args, "output_file", None):
        overrides["output_file"] = args.output_file
    if getattr(args, "max_depth", None) is not None:
        overrides["max_depth"] = args.max_depth
    if getattr(args, "no_default_excludes", False):
        overrides["exclude_patterns"] = []

    return overrides


def split_csv(value: Optional[str]) -> List[str]:
    """Convert a comma-separated string into a list of trimmed items."""
    if not value:
        return []
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
