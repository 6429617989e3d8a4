"""CLDR plural rules mapped to Qt numerus forms.

Qt stores one translated string per numerus form of the target language.
The forms follow CLDR category order (zero, one, two, few, many, other)
restricted to the categories whole numbers can reach: German has two forms
(one, other), Russian three (one, few, many), Arabic six, Japanese one.
Categories only reachable by fractions or compact exponents (Russian
"other", French "many") are served by the last form.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

import functools
from decimal import Decimal

from babel.core import UnknownLocaleError

from tscatalog.constants import DEFAULT_NUMERUS_FORMS
from tscatalog.locale_utils import get_babel_locale

__all__ = [
    "PLURAL_CATEGORY_ORDER",
    "numerus_categories",
    "numerus_form_count",
    "numerus_form_index",
    "select_plural_category",
]

PLURAL_CATEGORY_ORDER: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")

# Every CLDR integer rule distinguishes its categories below 200
# (e.g. Arabic "other" starts at 100, Welsh "many" at 6).
_INTEGER_SAMPLE_LIMIT: int = 200

_FALLBACK_CATEGORIES: tuple[str, ...] = ("one", "other")


def select_plural_category(n: int | float | Decimal, locale: str) -> str:
    """Select the CLDR plural category of a number.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "de_DE", "ru-RU")

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "de_DE")
        'one'
        >>> select_plural_category(5, "ru_RU")
        'many'
        >>> select_plural_category(1, "xx_INVALID")
        'one'
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError):
        return "one" if abs(n) == 1 else "other"
    return locale_obj.plural_form(n)


@functools.lru_cache(maxsize=128)
def numerus_categories(locale: str) -> tuple[str, ...]:
    """Plural categories that have their own numerus form, in form order.

    Args:
        locale: Locale code

    Returns:
        Categories reachable by whole numbers, in CLDR order. Unknown
        locales get ("one", "other").

    Example:
        >>> numerus_categories("ru_RU")
        ('one', 'few', 'many')
    """
    try:
        rule = get_babel_locale(locale).plural_form
    except (UnknownLocaleError, ValueError):
        return _FALLBACK_CATEGORIES
    reached = {rule(n) for n in range(_INTEGER_SAMPLE_LIMIT)}
    return tuple(category for category in PLURAL_CATEGORY_ORDER if category in reached)


def numerus_form_count(locale: str | None) -> int:
    """Number of numerus forms a translation into ``locale`` needs.

    Example:
        >>> numerus_form_count("de_DE"), numerus_form_count("ja_JP")
        (2, 1)
    """
    if not locale:
        return DEFAULT_NUMERUS_FORMS
    return len(numerus_categories(locale))


def numerus_form_index(n: int | float | Decimal, locale: str, form_count: int) -> int:
    """Index of the numerus form to display for count ``n``.

    Args:
        n: Count the message is translated for
        locale: Locale code
        form_count: Number of forms the translation actually has

    Returns:
        Form index in [0, form_count); forms missing from the translation
        fall back to the last available one.

    Example:
        >>> numerus_form_index(3, "ru_RU", 3)
        1
        >>> numerus_form_index(3, "ru_RU", 1)
        0
    """
    if form_count <= 1:
        return 0
    categories = numerus_categories(locale)
    category = select_plural_category(n, locale)
    index = categories.index(category) if category in categories else len(categories) - 1
    return min(index, form_count - 1)
