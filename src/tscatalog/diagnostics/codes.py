"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing messages, contexts)
        2000-2999: Substitution errors (%1 / %n argument handling)
        3000-3999: Syntax errors (XML and document structure)
        4000-4999: Tool errors (merge)
    """

    # Lookup errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    INVALID_LOOKUP_KEY = 1002

    # Substitution errors (2000-2999)
    ARGUMENT_MISSING = 2001
    ARGUMENT_UNUSED = 2002
    NUMERUS_WITHOUT_COUNT = 2003

    # Syntax errors (3000-3999)
    XML_MALFORMED = 3001
    INVALID_ROOT = 3002
    ENTITY_DECLARATION_FORBIDDEN = 3003
    SOURCE_TOO_LARGE = 3004

    # Tool errors (4000-4999)
    MERGE_LANGUAGE_MISMATCH = 4001


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Position in a .ts document for error reporting.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If line or column is less than 1 (both are 1-indexed).
        """
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools (editors, CI annotations).

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Document position (None for runtime errors)
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        context: Translation context involved (lookup errors)
        source: Source text involved (lookup errors)
        file_location: .ts file path the error refers to
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    help_url: str | None = None
    context: str | None = None
    source: str | None = None
    file_location: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output with
        control-character escaping (log injection prevention).

        Example output:
            error[MESSAGE_NOT_FOUND]: Message 'Cancel' not found in context 'NetworkPage'
              = context: NetworkPage
              = help: Run lupdate and translate the new entry

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
