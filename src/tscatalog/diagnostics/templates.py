"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


def _describe_key(context: str, source: str, comment: str | None) -> str:
    """Render a lookup key the way Qt Linguist shows it."""
    if comment:
        return f"'{source}' ({comment}) in context '{context}'"
    return f"'{source}' in context '{context}'"


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    # Base documentation URL
    _DOCS_BASE = "https://doc.qt.io/qt-6"

    @staticmethod
    def message_not_found(context: str, source: str, comment: str | None = None) -> Diagnostic:
        """No translation registered for a lookup key.

        Args:
            context: Translation context (UI class or component name)
            source: Source text used as lookup key
            comment: Disambiguation comment (optional)

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        msg = f"No translation for {_describe_key(context, source, comment)}"
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=msg,
            hint="Run lupdate and translate the new entry, or check the context name",
            help_url=f"{ErrorTemplate._DOCS_BASE}/i18n-source-translation.html",
            context=context,
            source=source,
        )

    @staticmethod
    def invalid_lookup_key() -> Diagnostic:
        """Lookup attempted with an empty or non-string source text.

        Returns:
            Diagnostic for INVALID_LOOKUP_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOOKUP_KEY,
            message="Invalid lookup key: source text must be a non-empty string",
        )

    @staticmethod
    def argument_missing(marker: str, provided: int) -> Diagnostic:
        """Argument marker left without a value.

        Args:
            marker: The unreplaced marker (e.g., "%2")
            provided: Number of arguments supplied

        Returns:
            Diagnostic for ARGUMENT_MISSING
        """
        msg = f"No argument for marker {marker} ({provided} argument(s) provided)"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_MISSING,
            message=msg,
            hint="Pass one argument per distinct %N marker",
            help_url=f"{ErrorTemplate._DOCS_BASE}/qstring.html#arg",
        )

    @staticmethod
    def argument_unused(used: int, provided: int) -> Diagnostic:
        """More arguments supplied than markers present.

        Args:
            used: Number of arguments consumed by markers
            provided: Number of arguments supplied

        Returns:
            Diagnostic for ARGUMENT_UNUSED
        """
        msg = f"{provided - used} argument(s) unused: text has {used} marker group(s)"
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_UNUSED,
            message=msg,
            hint="Check that the translation keeps every %N marker of the source",
            help_url=f"{ErrorTemplate._DOCS_BASE}/qstring.html#arg",
        )

    @staticmethod
    def numerus_without_count(context: str, source: str) -> Diagnostic:
        """Numerus message looked up without a count.

        Args:
            context: Translation context
            source: Source text

        Returns:
            Diagnostic for NUMERUS_WITHOUT_COUNT
        """
        msg = f"Numerus message {_describe_key(context, source, None)} requires a count"
        return Diagnostic(
            code=DiagnosticCode.NUMERUS_WITHOUT_COUNT,
            message=msg,
            hint="Pass n=<count>; the first numerus form was used",
            help_url=f"{ErrorTemplate._DOCS_BASE}/i18n-source-translation.html",
            context=context,
            source=source,
        )

    @staticmethod
    def xml_malformed(reason: str, line: int, column: int) -> Diagnostic:
        """Document is not well-formed XML.

        Args:
            reason: Expat error description
            line: Line of the error (1-indexed)
            column: Column of the error (1-indexed)

        Returns:
            Diagnostic for XML_MALFORMED
        """
        msg = f"Malformed XML: {reason}"
        return Diagnostic(
            code=DiagnosticCode.XML_MALFORMED,
            message=msg,
            span=SourceSpan(line=max(line, 1), column=max(column, 1)),
            hint="Check for unescaped '&' or '<' characters in translations",
            help_url=f"{ErrorTemplate._DOCS_BASE}/linguist-ts-file-format.html",
        )

    @staticmethod
    def invalid_root(tag: str, line: int, column: int) -> Diagnostic:
        """Root element is not <TS>.

        Args:
            tag: The root element found
            line: Line of the root element
            column: Column of the root element

        Returns:
            Diagnostic for INVALID_ROOT
        """
        msg = f"Expected root element <TS>, found <{tag}>"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ROOT,
            message=msg,
            span=SourceSpan(line=line, column=column),
            hint="Only Qt Linguist .ts documents are supported",
            help_url=f"{ErrorTemplate._DOCS_BASE}/linguist-ts-file-format.html",
        )

    @staticmethod
    def entity_declaration_forbidden(name: str, line: int, column: int) -> Diagnostic:
        """Document declares an XML entity.

        Args:
            name: Entity name
            line: Line of the declaration
            column: Column of the declaration

        Returns:
            Diagnostic for ENTITY_DECLARATION_FORBIDDEN
        """
        msg = f"Entity declarations are not allowed (found '{name}')"
        return Diagnostic(
            code=DiagnosticCode.ENTITY_DECLARATION_FORBIDDEN,
            message=msg,
            span=SourceSpan(line=max(line, 1), column=max(column, 1)),
            hint="lupdate never writes entity declarations; the file was tampered with",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Document exceeds the configured size limit.

        Args:
            size: Document size in bytes
            limit: Configured maximum in bytes

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Document is {size} bytes, limit is {limit} bytes"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Raise max_source_size for trusted input",
        )

    @staticmethod
    def merge_language_mismatch(existing: str, template: str) -> Diagnostic:
        """Merge inputs target different languages.

        Args:
            existing: Language of the existing translation catalog
            template: Language of the template catalog

        Returns:
            Diagnostic for MERGE_LANGUAGE_MISMATCH
        """
        msg = f"Cannot merge catalog for '{template}' into catalog for '{existing}'"
        return Diagnostic(
            code=DiagnosticCode.MERGE_LANGUAGE_MISMATCH,
            message=msg,
            hint="Templates usually carry no language attribute; regenerate it with lupdate",
            help_url=f"{ErrorTemplate._DOCS_BASE}/linguist-lupdate.html",
        )

