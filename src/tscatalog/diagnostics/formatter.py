"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from .validation import ValidationError, ValidationResult, ValidationWarning

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

# Control characters are rendered visibly so that translations cannot inject
# terminal escape sequences into CI logs.
_CONTROL_ESCAPES = {code: f"\\x{code:02x}" for code in range(0x20) if code not in (0x09, 0x0A)}
_CONTROL_ESCAPES[0x7F] = "\\x7f"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Centralizes formatting of Diagnostic objects and validation results into
    human-readable or machine-readable output.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate content to prevent information leakage
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.message_not_found("NetworkPage", "Cancel")
        >>> print(formatter.format(diagnostic))
        error[MESSAGE_NOT_FOUND]: No translation for 'Cancel' in context 'NetworkPage'
          = context: NetworkPage
          = help: Run lupdate and translate the new entry, or check the context name
          = note: see https://doc.qt.io/qt-6/i18n-source-translation.html

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        MESSAGE_NOT_FOUND: No translation for 'Cancel' in context 'NetworkPage'
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics.

        Args:
            diagnostics: Iterable of diagnostics to format

        Returns:
            Formatted string with all diagnostics separated by blank lines
        """
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_validation_result(
        self, result: "ValidationResult", *, file_name: str | None = None
    ) -> str:
        """Format a ValidationResult with all errors, warnings, and annotations.

        Args:
            result: ValidationResult to format
            file_name: Optional document name used as a prefix (SIMPLE) or
                field (JSON)

        Returns:
            Formatted string with summary and details
        """
        if self.output_format == OutputFormat.JSON:
            return self._format_result_json(result, file_name)

        prefix = f"{file_name}: " if file_name else ""
        if self.output_format == OutputFormat.SIMPLE:
            lines = [
                f"{prefix}{self._format_validation_entry(error)}" for error in result.errors
            ]
            lines.extend(
                f"{prefix}[{a.code}]{self._position_suffix(a.position)}: "
                f"{self._clean(a.message)}"
                for a in result.annotations
            )
            lines.extend(
                f"{prefix}{self._format_validation_entry(warning)}"
                for warning in result.warnings
            )
            return "\n".join(lines)

        parts: list[str] = []

        # Summary line
        if result.is_valid:
            parts.append(f"{prefix}Validation passed ({result.warning_count} warning(s))")
        else:
            parts.append(
                f"{prefix}Validation failed: {result.error_count} error(s), "
                f"{result.warning_count} warning(s)"
            )

        if result.errors:
            parts.append("\nErrors:")
            parts.extend(f"  {self._format_validation_entry(e)}" for e in result.errors)

        if result.annotations:
            parts.append("\nAnnotations:")
            parts.extend(
                f"  [{a.code}]{self._position_suffix(a.position)}: {self._clean(a.message)}"
                for a in result.annotations
            )

        if result.warnings:
            parts.append("\nWarnings:")
            parts.extend(f"  {self._format_validation_entry(w)}" for w in result.warnings)

        return "\n".join(parts)

    @staticmethod
    def _position_suffix(position: object) -> str:
        """Render ' at line L, column C' for objects with line/column."""
        if position is None:
            return ""
        line = getattr(position, "line", None)
        column = getattr(position, "column", None)
        if line is not None and column is not None:
            return f" at line {line}, column {column}"
        if line is not None:
            return f" at line {line}"
        return ""

    def _format_validation_entry(
        self, entry: "ValidationError | ValidationWarning"
    ) -> str:
        """Format a ValidationError or ValidationWarning on one line."""
        location = self._position_suffix(entry)
        return f"[{entry.code}]{location}: {self._clean(entry.message)}"

    def _format_result_json(self, result: "ValidationResult", file_name: str | None) -> str:
        """Format a ValidationResult as one JSON document."""
        data = {
            "file": file_name,
            "valid": result.is_valid,
            "errors": [
                {
                    "code": e.code,
                    "message": self._maybe_sanitize(e.message),
                    "line": e.line,
                    "column": e.column,
                }
                for e in result.errors
            ],
            "annotations": [
                {
                    "code": a.code,
                    "message": self._maybe_sanitize(a.message),
                    "line": a.position.line if a.position else None,
                    "column": a.position.column if a.position else None,
                }
                for a in result.annotations
            ],
            "warnings": [
                {
                    "code": w.code,
                    "message": self._maybe_sanitize(w.message),
                    "context": w.context,
                    "line": w.line,
                    "column": w.column,
                }
                for w in result.warnings
            ],
        }
        return json.dumps(data, ensure_ascii=False)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in Rust compiler style.

        Example output:
            error[XML_MALFORMED]: Malformed XML: not well-formed (invalid token)
              --> line 5, column 10
              = help: Check for unescaped '&' or '<' characters in translations
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        # Apply color if enabled
        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = self._clean(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        if diagnostic.span:
            location = f"line {diagnostic.span.line}, column {diagnostic.span.column}"
            if diagnostic.file_location:
                location = f"{diagnostic.file_location}:{location}"
            parts.append(f"  --> {location}")
        elif diagnostic.file_location:
            parts.append(f"  --> {diagnostic.file_location}")

        if diagnostic.context:
            parts.append(f"  = context: {self._clean(diagnostic.context)}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._clean(diagnostic.hint)}")

        if diagnostic.help_url:
            parts.append(f"  = note: see {diagnostic.help_url}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            MESSAGE_NOT_FOUND: No translation for 'Cancel' in context 'NetworkPage'
        """
        return f"{diagnostic.code.name}: {self._clean(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "MESSAGE_NOT_FOUND", "message": "...", "severity": "error"}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        # Add optional fields if present
        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column

        if diagnostic.file_location:
            data["file_location"] = diagnostic.file_location

        if diagnostic.context:
            data["context"] = diagnostic.context

        if diagnostic.source:
            data["source"] = self._maybe_sanitize(diagnostic.source)

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        if diagnostic.help_url:
            data["help_url"] = diagnostic.help_url

        return json.dumps(data, ensure_ascii=False)

    def _clean(self, text: str) -> str:
        """Escape control characters, then truncate if sanitizing."""
        return self._maybe_sanitize(text.translate(_CONTROL_ESCAPES))

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
