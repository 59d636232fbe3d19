from __future__ import annotations

"""
Workflow Engine.

Orchestrates the two end-to-end flows exposed to the interface layer:
'create' (document -> parse -> validate -> build) and 'generate'
(directory -> scan -> render -> save). Expected failures are returned as
result objects; creation and template errors propagate to the caller.
"""

import logging
import os
from datetime import datetime
from typing import Iterable, List, Mapping, Optional

from skeletree.core.analysis.tree_renderer import render_markdown
from skeletree.core.parsing.tree_parser import parse_structure
from skeletree.core.parsing.validator import validate_structure
from skeletree.core.services.builder import build_structure, ensure_directory
from skeletree.core.services.scanner import scan_structure
from skeletree.core.services.templates import process_template, resolve_template
from skeletree.domain.constants import DEFAULT_MAX_DEPTH, DEFAULT_OUTPUT_FILE
from skeletree.domain.errors import CreationError, ParseError
from skeletree.domain.pipeline_models import (
    CreateResult,
    GenerateResult,
    create_error_result,
    create_success_result,
)
from skeletree.infra.fs import LocalFileStore

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CREATE FLOW
# -----------------------------------------------------------------------------

def run_create(
        content: str,
        target_dir: str,
        dry_run: bool = False,
        validate_only: bool = False,
        source: str = "",
) -> CreateResult:
    """
    Validate a structure document and materialize it below 'target_dir'.

    Args:
        content: Structure document text (templates already expanded).
        target_dir: Directory the structure is created in.
        dry_run: Report what would be created without writing.
        validate_only: Stop after validation.
        source: File path or template name, for reporting.

    Returns:
        CreateResult: Outcome, including individual validation errors.

    Raises:
        CreationError: If the filesystem rejects a creation.
    """
    target_abs = os.path.abspath(target_dir)

    try:
        entries = parse_structure(content)
    except ParseError as e:
        logger.error(f"Parse failure: {e}")
        return create_error_result(f"Parse error: {e}", target_abs, source)

    errors = validate_structure(entries)
    if errors:
        for err in errors:
            logger.warning(f"Validation: {err}")
        return create_error_result("Structure validation failed", target_abs, source, errors)

    if not entries:
        return create_error_result(
            "No structure found. The tree must be inside a ``` code block.", target_abs, source
        )

    if validate_only:
        return create_success_result(target_abs, None, source, validate_only=True)

    logger.info(f"Building {len(entries)} entries into {target_abs} (dry_run={dry_run})")
    report = build_structure(entries, LocalFileStore(target_abs), dry_run=dry_run)
    return create_success_result(target_abs, report, source)


def create_from_file(
        structure_file: str,
        target_dir: str,
        dry_run: bool = False,
        validate_only: bool = False,
) -> CreateResult:
    """
    Read a structure document from disk and run the create flow.

    Raises:
        FileStoreError: If the document does not exist or is unreadable.
        CreationError: If the filesystem rejects a creation.
    """
    path = os.path.abspath(structure_file)
    store = LocalFileStore(os.path.dirname(path))
    content = store.read(os.path.basename(path))
    return run_create(content, target_dir, dry_run=dry_run, validate_only=validate_only, source=path)


def create_from_template(
        template_name: str,
        variables: Mapping[str, str],
        target_dir: str,
        dry_run: bool = False,
        validate_only: bool = False,
        search_dirs: Optional[List[str]] = None,
) -> CreateResult:
    """
    Expand a named template and run the create flow on the result.

    Raises:
        TemplateError: If the template cannot be found or read.
        CreationError: If the filesystem rejects a creation.
    """
    _, template = resolve_template(template_name, search_dirs)
    content = process_template(template, variables)
    return run_create(
        content, target_dir, dry_run=dry_run, validate_only=validate_only, source=template_name
    )

# -----------------------------------------------------------------------------
# GENERATE FLOW
# -----------------------------------------------------------------------------

def run_generate(
        input_dir: str,
        output_file: str = DEFAULT_OUTPUT_FILE,
        exclude_patterns: Optional[Iterable[str]] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        save: bool = True,
        generated_at: Optional[datetime] = None,
) -> GenerateResult:
    """
    Scan a directory and render it as a structure document.

    Args:
        input_dir: Directory to snapshot.
        output_file: Document path; relative paths resolve inside 'input_dir'.
        exclude_patterns: Exclusion patterns; defaults apply when None.
        max_depth: Deepest relative depth to include.
        save: Whether to write the document.
        generated_at: Footer timestamp override.

    Returns:
        GenerateResult: Rendered document, counts and output location.
    """
    input_abs = os.path.abspath(input_dir)
    if not os.path.isdir(input_abs):
        return GenerateResult(ok=False, error=f"Directory '{input_dir}' does not exist.", input_dir=input_abs)

    store = LocalFileStore(input_abs)
    root = scan_structure(
        store,
        max_depth=max_depth,
        exclude_patterns=exclude_patterns,
        root_name=store.root_name,
    )
    markdown = render_markdown(root, generated_at=generated_at)

    output_path = ""
    if save:
        output_path = os.path.join(input_abs, output_file)
        try:
            save_document(output_path, markdown)
        except CreationError as e:
            return GenerateResult(
                ok=False,
                error=e.message,
                input_dir=input_abs,
                markdown=markdown,
                directory_count=root.directory_count(),
                file_count=root.file_count(),
            )
        logger.info(f"Structure saved to {output_path}")

    return GenerateResult(
        ok=True,
        error="",
        input_dir=input_abs,
        markdown=markdown,
        directory_count=root.directory_count(),
        file_count=root.file_count(),
        output_path=output_path,
    )


def save_document(path: str, content: str) -> None:
    """
    Write a document to an absolute path, creating missing parents.

    Raises:
        CreationError: If the file cannot be written.
    """
    abs_path = os.path.abspath(path)
    anchor = os.path.splitdrive(abs_path)[0] + os.sep
    store = LocalFileStore(anchor)
    rel_path = os.path.relpath(abs_path, anchor).replace(os.sep, "/")

    parent = rel_path.rpartition("/")[0]
    if parent:
        ensure_directory(store, parent)
    try:
        store.write(rel_path, content)
    except OSError as e:
        raise CreationError.file(abs_path, e) from e
