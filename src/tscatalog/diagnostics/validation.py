"""Unified validation result for .ts catalog validation.

Consolidates all validation feedback from different stages:
- Parser-level: Structural annotations collected while parsing
- Document-level: Structured validation errors (unparseable documents)
- Message-level: Structured validation warnings (translation quality checks)

Python 3.13+.
"""

from dataclasses import dataclass

from tscatalog.syntax.ast import Annotation, MessageKey

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
]


# Maximum content length before truncation when sanitizing
_SANITIZE_MAX_CONTENT_LENGTH: int = 100


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Structured error from catalog validation.

    Attributes:
        code: Error code (e.g., "critical-parse-error")
        message: Human-readable error message
        content: Offending document excerpt (may be empty)
        line: Line number where error occurred (1-indexed, optional)
        column: Column number where error occurred (1-indexed, optional)
    """

    code: str
    message: str
    content: str = ""
    line: int | None = None
    column: int | None = None

    def format(self, *, sanitize: bool = False, redact_content: bool = False) -> str:
        """Format error as human-readable string.

        Args:
            sanitize: If True, truncate content to 100 characters.
            redact_content: If True (and sanitize=True), completely redact
                           content instead of truncating.

        Returns:
            Formatted error string with optional content sanitization.
        """
        if sanitize:
            if redact_content:
                content_display = "[content redacted]"
            elif len(self.content) > _SANITIZE_MAX_CONTENT_LENGTH:
                content_display = self.content[:_SANITIZE_MAX_CONTENT_LENGTH] + "..."
            else:
                content_display = self.content
        else:
            content_display = self.content

        location = ""
        if self.line is not None:
            location = f" at line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"

        return f"[{self.code}]{location}: {self.message} (content: {content_display!r})"


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Structured translation-quality warning.

    Attributes:
        code: Warning code (e.g., "placeholder-mismatch", "unfinished")
        message: Human-readable warning message
        context: Translation context of the offending message
        line: Line of the <message> element (1-indexed, optional)
        column: Column of the <message> element (1-indexed, optional)
        key: Lookup key of the offending message (optional)
    """

    code: str
    message: str
    context: str | None = None
    line: int | None = None
    column: int | None = None
    key: MessageKey | None = None

    def format(self) -> str:
        """Format warning as a single human-readable line."""
        location = f" at line {self.line}" if self.line is not None else ""
        return f"[{self.code}]{location}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Unified validation result for all validation levels.

    Immutable result object for thread-safe validation feedback.

    Attributes:
        errors: Document-level validation errors
        warnings: Translation quality warnings
        annotations: Parser-level structural annotations

    Example:
        >>> result = ValidationResult.valid()
        >>> result.is_valid
        True
        >>> result.error_count
        0
    """

    errors: tuple[ValidationError, ...]
    warnings: tuple[ValidationWarning, ...]
    annotations: tuple[Annotation, ...]

    @property
    def is_valid(self) -> bool:
        """Check if validation passed (no errors or annotations).

        Warnings do not affect validity - they're informational.

        Returns:
            True if no errors or annotations found
        """
        return len(self.errors) == 0 and len(self.annotations) == 0

    @property
    def error_count(self) -> int:
        """Get total number of errors (document + parser).

        Returns:
            Count of errors and annotations combined
        """
        return len(self.errors) + len(self.annotations)

    @property
    def warning_count(self) -> int:
        """Get number of translation quality warnings.

        Returns:
            Count of warnings
        """
        return len(self.warnings)

    def warnings_by_code(self, code: str) -> tuple[ValidationWarning, ...]:
        """Get all warnings carrying the given code."""
        return tuple(w for w in self.warnings if w.code == code)

    @staticmethod
    def valid() -> "ValidationResult":
        """Create a valid result with no errors, warnings, or annotations.

        Returns:
            ValidationResult with empty tuples for all fields
        """
        return ValidationResult(errors=(), warnings=(), annotations=())

    @staticmethod
    def invalid(
        errors: tuple[ValidationError, ...] = (),
        warnings: tuple[ValidationWarning, ...] = (),
        annotations: tuple[Annotation, ...] = (),
    ) -> "ValidationResult":
        """Create an invalid result with errors and/or annotations.

        Args:
            errors: Tuple of validation errors (default: empty)
            warnings: Tuple of validation warnings (default: empty)
            annotations: Tuple of parser annotations (default: empty)

        Returns:
            ValidationResult with provided errors/warnings/annotations
        """
        return ValidationResult(errors=errors, warnings=warnings, annotations=annotations)

    def format(self, *, sanitize: bool = False, include_warnings: bool = True) -> str:
        """Format validation result as human-readable string.

        Args:
            sanitize: If True, truncate error content and annotation messages.
            include_warnings: If True (default), include warnings in output.

        Returns:
            Formatted string with errors, annotations, and optionally warnings.
        """
        lines: list[str] = []

        if self.errors:
            lines.append(f"Errors ({len(self.errors)}):")
            lines.extend(f"  {error.format(sanitize=sanitize)}" for error in self.errors)

        if self.annotations:
            lines.append(f"Annotations ({len(self.annotations)}):")
            for annotation in self.annotations:
                content = annotation.message
                if sanitize and len(content) > _SANITIZE_MAX_CONTENT_LENGTH:
                    content = content[:_SANITIZE_MAX_CONTENT_LENGTH] + "..."
                lines.append(f"  [{annotation.code}]: {content}")

        if include_warnings and self.warnings:
            lines.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                context = f" ({warning.context})" if warning.context else ""
                lines.append(f"  [{warning.code}]: {warning.message}{context}")

        if not lines:
            return "Validation passed: no errors or warnings"

        return "\n".join(lines)
