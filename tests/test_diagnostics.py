"""Tests for diagnostics, error templates, validation results and the formatter."""

from __future__ import annotations

import json

import pytest

from tscatalog.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
    SourceSpan,
    TSError,
    TSLookupError,
    TSSyntaxError,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from tscatalog.syntax import Annotation, SourcePosition


class TestDiagnosticCodes:
    """Code ranges per category."""

    def test_ranges(self) -> None:
        """Lookup 1xxx, substitution 2xxx, syntax 3xxx, tools 4xxx."""
        assert DiagnosticCode.MESSAGE_NOT_FOUND.value == 1001
        assert DiagnosticCode.ARGUMENT_MISSING.value == 2001
        assert DiagnosticCode.XML_MALFORMED.value == 3001
        assert DiagnosticCode.MERGE_LANGUAGE_MISMATCH.value == 4001

    def test_codes_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in DiagnosticCode]

        assert len(values) == len(set(values))

    def test_span_is_one_indexed(self) -> None:
        """Line and column start at 1."""
        with pytest.raises(ValueError, match=r"SourceSpan.line must be >= 1"):
            SourceSpan(line=0, column=1)
        with pytest.raises(ValueError, match=r"SourceSpan.column must be >= 1"):
            SourceSpan(line=1, column=0)


class TestErrorTemplates:
    """Message texts produced by ErrorTemplate."""

    def test_message_not_found(self) -> None:
        """Context and source are named."""
        diagnostic = ErrorTemplate.message_not_found("NetworkPage", "Cancel")

        assert diagnostic.message == "No translation for 'Cancel' in context 'NetworkPage'"
        assert diagnostic.context == "NetworkPage"
        assert diagnostic.source == "Cancel"

    def test_message_not_found_with_comment(self) -> None:
        """The disambiguation is shown in parentheses."""
        diagnostic = ErrorTemplate.message_not_found("Dialog", "Close", "button")

        assert diagnostic.message == "No translation for 'Close' (button) in context 'Dialog'"

    def test_argument_messages(self) -> None:
        """Argument mismatch texts."""
        assert ErrorTemplate.argument_missing("%2", 1).message == (
            "No argument for marker %2 (1 argument(s) provided)"
        )
        assert ErrorTemplate.argument_unused(1, 3).message == (
            "2 argument(s) unused: text has 1 marker group(s)"
        )

    def test_xml_malformed_clamps_position(self) -> None:
        """Positions below 1 are clamped."""
        diagnostic = ErrorTemplate.xml_malformed("no element found", 0, 0)

        assert diagnostic.span == SourceSpan(1, 1)


class TestErrors:
    """Exception hierarchy."""

    def test_diagnostic_attached(self) -> None:
        """Diagnostic objects are kept and formatted as the message."""
        diagnostic = ErrorTemplate.invalid_lookup_key()
        error = TSLookupError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error) == diagnostic.format_error()
        assert isinstance(error, TSError)

    def test_plain_message(self) -> None:
        """String messages carry no diagnostic."""
        error = TSSyntaxError("broken")

        assert error.diagnostic is None
        assert str(error) == "broken"


class TestFormatter:
    """DiagnosticFormatter output formats."""

    def test_rust_format(self) -> None:
        """Rust-style report with context, help and note lines."""
        diagnostic = ErrorTemplate.message_not_found("NetworkPage", "Cancel")

        assert DiagnosticFormatter().format(diagnostic) == (
            "error[MESSAGE_NOT_FOUND]: No translation for 'Cancel' in context 'NetworkPage'\n"
            "  = context: NetworkPage\n"
            "  = help: Run lupdate and translate the new entry, or check the context name\n"
            "  = note: see https://doc.qt.io/qt-6/i18n-source-translation.html"
        )

    def test_rust_format_with_span_and_file(self) -> None:
        """Span and file are rendered as a --> line."""
        diagnostic = Diagnostic(
            code=DiagnosticCode.XML_MALFORMED,
            message="Malformed XML: mismatched tag",
            span=SourceSpan(5, 10),
            file_location="ts/de.ts",
        )

        assert "  --> ts/de.ts:line 5, column 10" in DiagnosticFormatter().format(diagnostic)

    def test_simple_format(self) -> None:
        """Single line with code name."""
        diagnostic = ErrorTemplate.message_not_found("NetworkPage", "Cancel")
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(diagnostic) == (
            "MESSAGE_NOT_FOUND: No translation for 'Cancel' in context 'NetworkPage'"
        )

    def test_json_format(self) -> None:
        """JSON carries code name and value."""
        diagnostic = ErrorTemplate.source_too_large(20, 10)
        data = json.loads(DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic))

        assert data["code"] == "SOURCE_TOO_LARGE"
        assert data["code_value"] == 3004
        assert data["severity"] == "error"

    def test_control_characters_escaped(self) -> None:
        """Terminal escape sequences in messages are neutralized."""
        diagnostic = Diagnostic(code=DiagnosticCode.XML_MALFORMED, message="bad \x1b[31mred")

        assert "\\x1b[31mred" in DiagnosticFormatter().format(diagnostic)

    def test_sanitize_truncates(self) -> None:
        """Long messages are cut when sanitizing."""
        diagnostic = Diagnostic(code=DiagnosticCode.XML_MALFORMED, message="x" * 50)
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )

        assert formatter.format(diagnostic) == "XML_MALFORMED: " + "x" * 10 + "..."

    def test_format_all(self) -> None:
        """Diagnostics are separated by blank lines."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        text = formatter.format_all(
            [ErrorTemplate.invalid_lookup_key(), ErrorTemplate.source_too_large(2, 1)]
        )

        assert text.count("\n\n") == 1


class TestValidationResult:
    """ValidationResult and its formatting."""

    def _result(self) -> ValidationResult:
        return ValidationResult(
            errors=(),
            warnings=(
                ValidationWarning("unfinished", "Translation of 'Quit' is unfinished", "Main", 7),
                ValidationWarning("placeholder-mismatch", "Translation uses none", "Main", 9),
            ),
            annotations=(
                Annotation("unknown-element", "Unexpected <x>", SourcePosition(3, 5)),
            ),
        )

    def test_counts(self) -> None:
        """Annotations count as errors, warnings do not invalidate."""
        result = self._result()

        assert not result.is_valid
        assert result.error_count == 1
        assert result.warning_count == 2
        assert [w.line for w in result.warnings_by_code("unfinished")] == [7]

    def test_valid_factory(self) -> None:
        """valid() has nothing to report."""
        result = ValidationResult.valid()

        assert result.is_valid
        assert result.format() == "Validation passed: no errors or warnings"

    def test_warnings_only_is_valid(self) -> None:
        """Warnings alone keep the result valid."""
        result = ValidationResult.invalid(warnings=self._result().warnings)

        assert result.is_valid

    def test_format_sections(self) -> None:
        """Plain format lists annotations and warnings."""
        text = self._result().format()

        assert "Annotations (1):" in text
        assert "  [unfinished]: Translation of 'Quit' is unfinished (Main)" in text
        assert "Warnings" not in self._result().format(include_warnings=False)

    def test_error_format(self) -> None:
        """ValidationError renders position and content."""
        error = ValidationError("critical-parse-error", "Malformed XML", "x" * 150, 2, 4)

        assert error.format().startswith("[critical-parse-error] at line 2, column 4: ")
        assert error.format(sanitize=True).endswith("...')")
        assert "[content redacted]" in error.format(sanitize=True, redact_content=True)

    def test_formatter_rust_summary(self) -> None:
        """Rust-style report starts with a summary line."""
        text = DiagnosticFormatter().format_validation_result(self._result(), file_name="de.ts")

        lines = text.splitlines()
        assert lines[0] == "de.ts: Validation failed: 1 error(s), 2 warning(s)"
        assert "  [unknown-element] at line 3, column 5: Unexpected <x>" in lines
        assert "  [unfinished] at line 7: Translation of 'Quit' is unfinished" in lines

    def test_formatter_simple_lines(self) -> None:
        """Simple format prints one prefixed line per finding."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        text = formatter.format_validation_result(self._result(), file_name="de.ts")

        assert text.splitlines() == [
            "de.ts: [unknown-element] at line 3, column 5: Unexpected <x>",
            "de.ts: [unfinished] at line 7: Translation of 'Quit' is unfinished",
            "de.ts: [placeholder-mismatch] at line 9: Translation uses none",
        ]

    def test_formatter_json(self) -> None:
        """JSON report contains every finding."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format_validation_result(self._result(), file_name="de.ts"))

        assert data["file"] == "de.ts"
        assert data["valid"] is False
        assert data["annotations"][0]["line"] == 3
        assert [w["code"] for w in data["warnings"]] == ["unfinished", "placeholder-mismatch"]
