from __future__ import annotations

"""
Error Taxonomy.

Structured exception types raised by the parsing, building, templating
and storage layers. Each type carries the typed fields relevant to its
failure instead of a free-form context mapping.
"""

from typing import Optional


class SkeletreeError(Exception):
    """Base class for every error raised by the application."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(SkeletreeError):
    """
    Raised when structural input cannot be interpreted.

    Attributes:
        line_number: 1-based line of the offending input, 0 if unknown.
        line: Raw content of the offending line.
    """

    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        if line_number > 0:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class CreationError(SkeletreeError):
    """
    Raised when the file store rejects a directory or file creation.

    Attributes:
        path: Store-relative path that failed.
        cause: Underlying exception reported by the store.
        kind: Either 'directory' or 'file'.
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None, kind: str = "file"):
        message = f"Failed to create {kind} '{path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause
        self.kind = kind

    @classmethod
    def directory(cls, path: str, cause: Optional[BaseException] = None) -> CreationError:
        return cls(path, cause, kind="directory")

    @classmethod
    def file(cls, path: str, cause: Optional[BaseException] = None) -> CreationError:
        return cls(path, cause, kind="file")


class TemplateError(SkeletreeError):
    """
    Raised when a named template cannot be located or read.

    Attributes:
        template_name: Name requested by the caller.
        reason: Short description of the failure.
    """

    def __init__(self, template_name: str, reason: str = ""):
        message = f"Template '{template_name}' not found"
        if reason:
            message = f"Template '{template_name}' could not be loaded: {reason}"
        super().__init__(message)
        self.template_name = template_name
        self.reason = reason


class FileStoreError(SkeletreeError):
    """
    Raised by a file store for missing or unreadable paths.

    Attributes:
        path: Store-relative path involved.
        reason: Short description of the failure.
    """

    def __init__(self, path: str, reason: str = "not found"):
        super().__init__(f"Path '{path}' {reason}")
        self.path = path
        self.reason = reason
