"""Marker substitution for translated strings.

Implements what Qt does after a translation is found:

- ``%n`` is replaced by the count of a numerus message, ``%Ln`` by the
  count formatted with the locale's digit grouping;
- ``%1`` .. ``%99`` are replaced QString::arg() style: the lowest marker
  number present takes the first argument, the next lowest the second, and
  so on. ``%L1`` formats numeric arguments for the locale.

Substitution never raises. Mismatched argument counts are returned as
:class:`~tscatalog.diagnostics.errors.TSSubstitutionError` objects together
with best-effort text in which unmatched markers stay visible.

Python 3.13+. Uses Babel for locale-aware number formatting.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import TypeAlias

from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError

from tscatalog.diagnostics import ErrorTemplate, TSSubstitutionError
from tscatalog.enums import PlaceholderKind
from tscatalog.introspection import placeholder_spans
from tscatalog.locale_utils import get_babel_locale

__all__ = [
    "ArgValue",
    "format_arg",
    "substitute_args",
    "substitute_count",
]

logger = logging.getLogger(__name__)

ArgValue: TypeAlias = str | int | float | Decimal


def format_arg(value: ArgValue, locale: str, *, localized: bool) -> str:
    """Render one argument the way QString::arg() does.

    Args:
        value: Argument value
        locale: Locale used for localized markers
        localized: True for %L markers (digit grouping, decimal separator)

    Returns:
        Text inserted for the marker

    Example:
        >>> format_arg(1234567, "de_DE", localized=True)
        '1.234.567'
        >>> format_arg(1234567, "de_DE", localized=False)
        '1234567'
    """
    if not localized or isinstance(value, (str, bool)):
        return str(value)
    try:
        return babel_numbers.format_decimal(value, locale=get_babel_locale(locale))
    except (UnknownLocaleError, ValueError):
        logger.debug("Locale %r unavailable for %%L formatting; using plain digits", locale)
        return str(value)


def substitute_count(text: str, n: int | float | Decimal, locale: str) -> str:
    """Replace %n and %Ln markers with a count.

    Example:
        >>> substitute_count("%Ln Dateien", 1500, "de_DE")
        '1.500 Dateien'
    """
    parts: list[str] = []
    position = 0
    for start, end, placeholder in placeholder_spans(text):
        if placeholder.kind != PlaceholderKind.NUMERUS:
            continue
        parts.append(text[position:start])
        parts.append(format_arg(n, locale, localized=placeholder.token == "%Ln"))
        position = end
    parts.append(text[position:])
    return "".join(parts)


def substitute_args(
    text: str, args: Sequence[ArgValue], locale: str
) -> tuple[str, tuple[TSSubstitutionError, ...]]:
    """Replace %1 .. %99 markers QString::arg() style.

    Marker numbers need not be contiguous: in ``"%2 of %5"`` the first
    argument replaces ``%2`` and the second ``%5``.

    Args:
        text: Translated string
        args: Argument values in marker order
        locale: Locale for %L markers

    Returns:
        Tuple of (substituted text, errors)

    Example:
        >>> substitute_args("Connected to %1 (%2)", ["Berlin", "WireGuard"], "de_DE")
        ('Connected to Berlin (WireGuard)', ())
    """
    spans = [
        (start, end, placeholder)
        for start, end, placeholder in placeholder_spans(text)
        if placeholder.kind == PlaceholderKind.QT_ARG and placeholder.number is not None
    ]
    numbers = sorted({placeholder.number for _, _, placeholder in spans if placeholder.number})
    assignment = dict(zip(numbers, args, strict=False))

    errors: list[TSSubstitutionError] = []
    for number in numbers[len(args) :]:
        errors.append(
            TSSubstitutionError(ErrorTemplate.argument_missing(f"%{number}", len(args)))
        )
    if len(args) > len(numbers):
        errors.append(
            TSSubstitutionError(ErrorTemplate.argument_unused(len(numbers), len(args)))
        )

    parts: list[str] = []
    position = 0
    for start, end, placeholder in spans:
        if placeholder.number not in assignment:
            continue
        parts.append(text[position:start])
        parts.append(
            format_arg(
                assignment[placeholder.number],
                locale,
                localized=placeholder.token.startswith("%L"),
            )
        )
        position = end
    parts.append(text[position:])
    return "".join(parts), tuple(errors)
