from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading
and merging with command-line overrides, dispatch to the workflow engine,
and result rendering for humans or as JSON.
"""

import argparse
import json
import os
import sys
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional

from skeletree.core.pipeline.engine import (
    create_from_file,
    create_from_template,
    run_generate,
    save_document,
)
from skeletree.core.pipeline.validator import validate_config
from skeletree.core.services.filters import merge_patterns
from skeletree.core.services.templates import list_templates, parse_variables, template_search_dirs
from skeletree.domain.config import get_default_config, load_config, save_config
from skeletree.domain.errors import CreationError, FileStoreError, TemplateError
from skeletree.domain.pipeline_models import CreateResult, GenerateResult
from skeletree.infra.logging import LoggingConfig, configure_logging, get_default_log_path, get_logger
from skeletree.interface.cli import args as cli_args
from skeletree.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (defaults vs persistent state) and overrides
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = dict(base_conf)
    raw_conf.update(cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional file)
    log_file = args.log_file or (get_default_log_path() if conf["save_log"] else None)
    configure_logging(LoggingConfig(level=conf["log_level"], console=True, log_file=log_file))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    handlers = {
        "create": _cmd_create,
        "generate": _cmd_generate,
        "templates": _cmd_templates,
        "config": _cmd_config,
    }

    try:
        return handlers[args.command](args, conf)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted", default="Operation interrupted by user.")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_create(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    target_dir = conf["target_dir"]

    if not os.path.isdir(target_dir):
        if not args.force:
            _print_error(i18n.t(
                "cli.errors.target_missing",
                default="Target directory '{path}' does not exist. Use --force to create it.",
                path=target_dir,
            ))
            return EXIT_FAILURE
        try:
            os.makedirs(target_dir, exist_ok=True)
        except OSError as e:
            _print_error(i18n.t(
                "cli.errors.target_create",
                default="Failed to create target directory '{path}': {error}",
                path=target_dir,
                error=e,
            ))
            return EXIT_FAILURE

    variables = parse_variables(args.variables)
    logger.debug(f"Target directory: {os.path.abspath(target_dir)}; variables: {variables}")

    try:
        if args.template:
            result = create_from_template(
                args.structure,
                variables,
                target_dir,
                dry_run=args.dry_run,
                validate_only=args.validate_only,
                search_dirs=template_search_dirs(conf["templates_dir"]),
            )
        else:
            if not os.path.isfile(args.structure):
                _print_error(i18n.t(
                    "cli.errors.structure_missing",
                    default="Structure file '{path}' not found.",
                    path=args.structure,
                ))
                return EXIT_BAD_INPUT
            result = create_from_file(
                args.structure,
                target_dir,
                dry_run=args.dry_run,
                validate_only=args.validate_only,
            )
    except (TemplateError, FileStoreError) as e:
        _print_error(e.message)
        return EXIT_FAILURE
    except CreationError as e:
        logger.error(f"Creation aborted at '{e.path}': {e.cause}")
        _print_error(i18n.t(
            "cli.errors.creation_failed",
            default="Structure creation failed: {error}",
            error=e.message,
        ))
        return EXIT_FAILURE

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_create_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE


def _cmd_generate(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    if not os.path.isdir(args.path):
        _print_error(i18n.t(
            "cli.errors.path_not_exist",
            default="Directory '{path}' does not exist.",
            path=args.path,
        ))
        return EXIT_BAD_INPUT

    extra: List[str] = []
    for raw in args.exclude:
        extra.extend(cli_args.split_csv(raw))
    patterns = merge_patterns(conf["exclude_patterns"], extra)
    logger.debug(f"Exclude patterns: {', '.join(patterns)}")

    deferred = args.stdout or args.show_preview
    result = run_generate(
        args.path,
        output_file=conf["output_file"],
        exclude_patterns=patterns,
        max_depth=conf["max_depth"],
        save=not deferred,
    )
    if not result.ok:
        _print_error(result.error)
        return EXIT_FAILURE

    if args.stdout:
        print(result.markdown, end="")
        return EXIT_OK

    if args.show_preview:
        print(result.markdown)
        if not (args.assume_yes or _confirm(i18n.t(
                "cli.prompts.save", default="Do you want to save this structure?"))):
            print(i18n.t("cli.status.cancelled", default="Operation cancelled."))
            return EXIT_OK

        output_path = os.path.join(result.input_dir, conf["output_file"])
        try:
            save_document(output_path, result.markdown)
        except CreationError as e:
            _print_error(e.message)
            return EXIT_FAILURE
        result = replace(result, output_path=output_path)

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_generate_summary(result)
    return EXIT_OK


def _cmd_templates(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    names = list_templates(template_search_dirs(conf["templates_dir"]))
    if not names:
        print(i18n.t("cli.status.no_templates", default="No templates found."))
        return EXIT_OK

    print(i18n.t("cli.status.templates", default="Available templates:"))
    for name in names:
        print(f"  - {name}")
    return EXIT_OK


def _cmd_config(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    # Persist against the saved state, never the per-run overrides
    conf = load_config()

    if args.reset:
        conf = get_default_config()
        save_config(conf)
    elif args.settings:
        updates: Dict[str, Any] = dict(parse_variables(args.settings))
        unknown = [k for k in updates if k not in conf]
        if unknown:
            _print_error(i18n.t(
                "cli.errors.unknown_setting",
                default="Unknown setting(s): {keys}",
                keys=", ".join(unknown),
            ))
            return EXIT_FAILURE
        merged = dict(conf)
        merged.update(updates)
        conf, warnings = validate_config(merged, strict=False)
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")
        save_config(conf)

    print(json.dumps(conf, ensure_ascii=False, indent=2))
    return EXIT_OK

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_create_summary(result: CreateResult) -> None:
    """
    Format and print a create result to the standard output.

    Args:
        result: The create result to render.
    """
    if not result.ok:
        _print_error(result.error)
        for err in result.validation_errors:
            print(f"  - {err}", file=sys.stderr)
        return

    if result.validate_only:
        print(i18n.t("cli.status.validation_passed", default="Structure validation passed!"))
        return

    report = result.report
    if report is None:
        return

    if report.dry_run:
        dirs_label = i18n.t("cli.status.would_create_dirs", default="Would create directories:")
        files_label = i18n.t("cli.status.would_create_files", default="Would create files:")
    else:
        dirs_label = i18n.t("cli.status.created_dirs", default="Created directories:")
        files_label = i18n.t("cli.status.created_files", default="Created files:")

    if report.created_directories:
        print(dirs_label)
        for d in report.created_directories:
            print(f"  [dir]  {d}")
    if report.created_files:
        print(files_label)
        for f in report.created_files:
            print(f"  [file] {f}")

    print(f"Directories: {len(report.created_directories)}")
    print(f"Files: {len(report.created_files)}")
    print(f"Total items: {report.total}")

    if report.dry_run:
        print(i18n.t("cli.status.dry_run_note", default="This was a dry run. Nothing was written."))
    else:
        print(i18n.t("cli.status.created", default="Structure created in {path}", path=result.target_dir))


def _print_generate_summary(result: GenerateResult) -> None:
    """Print directory/file counts and the output location of a generate run."""
    print(f"Total directories: {result.directory_count}")
    print(f"Total files: {result.file_count}")
    if result.output_path:
        print(i18n.t("cli.status.saved", default="Structure saved to '{path}'", path=result.output_path))


def _print_error(msg: str) -> None:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)


def _confirm(question: str, default: bool = True) -> bool:
    """Ask a yes/no question on the terminal; EOF selects the default."""
    suffix = " [Y/n] " if default else " [y/N] "
    try:
        answer = input(question + suffix).strip().lower()
    except EOFError:
        return default
    if not answer:
        return default
    return answer in ("y", "yes")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
