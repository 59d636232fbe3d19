from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structures and factory functions used to communicate
execution outcomes between the workflow engine and the interface layer.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildReport:
    """
    Paths created (or that would be created) by a build.

    Attributes:
        created_directories: Directory paths in processing order.
        created_files: File paths in processing order.
        dry_run: Whether the build only simulated the operations.
    """
    created_directories: List[str] = field(default_factory=list)
    created_files: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total(self) -> int:
        return len(self.created_directories) + len(self.created_files)


@dataclass(frozen=True)
class CreateResult:
    """
    Outcome of materializing a structure document.

    Attributes:
        ok: Flag indicating success.
        error: Descriptive message in case of failure.
        target_dir: Absolute directory the structure was built into.
        source: File path or template name the content came from.
        validation_errors: Structural problems found before building.
        report: Build report, None when the build did not run.
        validate_only: Whether the run stopped after validation.
    """
    ok: bool
    error: str
    target_dir: str
    source: str = ""
    validation_errors: List[str] = field(default_factory=list)
    report: Optional[BuildReport] = None
    validate_only: bool = False


@dataclass(frozen=True)
class GenerateResult:
    """
    Outcome of snapshotting a directory into a structure document.

    Attributes:
        ok: Flag indicating success.
        error: Descriptive message in case of failure.
        input_dir: Absolute directory that was scanned.
        markdown: Rendered document.
        directory_count: Directories present in the rendered tree.
        file_count: Files present in the rendered tree.
        output_path: Absolute path of the persisted document, empty if unsaved.
    """
    ok: bool
    error: str
    input_dir: str
    markdown: str = ""
    directory_count: int = 0
    file_count: int = 0
    output_path: str = ""

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        target_dir: str,
        source: str = "",
        validation_errors: Optional[List[str]] = None,
) -> CreateResult:
    """
    Create a failed creation result.

    Args:
        error: Detailed error description.
        target_dir: Directory the build targeted.
        source: File path or template name.
        validation_errors: Individual structural problems, if any.

    Returns:
        CreateResult: An immutable error result.
    """
    return CreateResult(
        ok=False,
        error=error,
        target_dir=target_dir,
        source=source,
        validation_errors=validation_errors or [],
    )


def create_success_result(
        target_dir: str,
        report: Optional[BuildReport],
        source: str = "",
        validate_only: bool = False,
) -> CreateResult:
    """
    Create a successful creation result.

    Args:
        target_dir: Directory the build targeted.
        report: Build report, None for validate-only runs.
        source: File path or template name.
        validate_only: Whether only validation was requested.

    Returns:
        CreateResult: An immutable success result.
    """
    return CreateResult(
        ok=True,
        error="",
        target_dir=target_dir,
        source=source,
        report=report,
        validate_only=validate_only,
    )
