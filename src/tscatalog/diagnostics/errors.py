"""tscatalog exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error information.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class TSError(Exception):
    """Base exception for all tscatalog errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TSError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class TSSyntaxError(TSError):
    """The .ts document cannot be parsed.

    Raised for malformed XML, a foreign root element, forbidden entity
    declarations or oversized input. Structural problems inside an otherwise
    well-formed document are reported as annotations instead.
    """


class TSLookupError(TSError):
    """No translation exists for the requested key.

    Never raised by lookups; collected in the error tuple returned next to
    the fallback (source) text.
    """


class TSSubstitutionError(TSError):
    """Argument substitution mismatch.

    Examples:
    - Fewer arguments than %N markers
    - More arguments than %N markers
    - Numerus message translated without a count

    Fallback: markers without an argument are left in place.
    """


class TSCatalogError(TSError):
    """Catalog operation cannot be performed.

    Raised by tools (merge, pseudo-localization) when their inputs are
    incompatible, for example merging catalogs of different languages.
    """
