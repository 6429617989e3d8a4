"""Enumerations for tscatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class TranslationType(StrEnum):
    """State of a <translation> element.

    StrEnum provides automatic string conversion: str(TranslationType.OBSOLETE) == "obsolete"
    """

    FINISHED = "finished"
    """No type attribute: translation reviewed and shipped."""

    UNFINISHED = "unfinished"
    """type="unfinished": new or changed source, awaiting a translator."""

    OBSOLETE = "obsolete"
    """type="obsolete": source removed while the translation was finished."""

    VANISHED = "vanished"
    """type="vanished": source removed while the translation was unfinished."""


class LocationStyle(StrEnum):
    """How <location> elements are written by the serializer."""

    ABSOLUTE = "absolute"
    """filename and absolute line on every location."""

    RELATIVE = "relative"
    """filename only when it changes, line as +N/-N delta."""

    NONE = "none"
    """No location elements."""


class PlaceholderKind(StrEnum):
    """Kind of substitution marker found in a UI string."""

    QT_ARG = "qt_arg"
    """QString::arg() marker: %1 .. %99, %L1."""

    NUMERUS = "numerus"
    """Plural count marker: %n, %Ln."""

    PRINTF = "printf"
    """C printf conversion: %s, %d, %.0f."""


class LoadStatus(StrEnum):
    """Outcome of loading one catalog for one locale."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


__all__ = [
    "LoadStatus",
    "LocationStyle",
    "PlaceholderKind",
    "TranslationType",
]
