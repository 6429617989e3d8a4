"""Diagnostic system for tscatalog errors.

Provides structured error diagnostics with codes, positions, hints, and help URLs.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    TSCatalogError,
    TSError,
    TSLookupError,
    TSSubstitutionError,
    TSSyntaxError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationError, ValidationResult, ValidationWarning

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "OutputFormat",
    "SourceSpan",
    "TSCatalogError",
    "TSError",
    "TSLookupError",
    "TSSubstitutionError",
    "TSSyntaxError",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
]
