"""Locale code handling.

.ts documents name their language in POSIX form (``de_DE``), callers often
pass BCP-47 tags (``de-DE``) and environment variables add encodings and
modifiers (``de_DE.UTF-8@euro``). Everything is normalized to the POSIX form
Babel expects at the API boundary.

Python 3.13+. Depends on Babel for CLDR data.
"""

import functools
import logging
import os

from babel import Locale

from tscatalog.constants import DEFAULT_LOCALE

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)

# Pseudo-locales that carry no language information.
_NON_LANGUAGE_LOCALES: frozenset[str] = frozenset({"", "C", "POSIX"})


def normalize_locale(locale_code: str) -> str:
    """Convert a locale code to the POSIX form used by .ts files and Babel.

    Hyphens become underscores; encoding (``.UTF-8``) and modifier
    (``@euro``) suffixes are dropped.

    Example:
        >>> normalize_locale("de-DE")
        'de_DE'
        >>> normalize_locale("de_DE.UTF-8@euro")
        'de_DE'
    """
    code = locale_code.split(".", 1)[0].split("@", 1)[0]
    return code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> get_babel_locale("de-DE").territory
        'DE'
    """
    return Locale.parse(normalize_locale(locale_code))


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect the user's locale from the OS and environment variables.

    Detection order:
    1. locale.getlocale() (OS-level locale)
    2. LC_ALL, LC_MESSAGES, LANG environment variables

    Args:
        raise_on_failure: If True, raise RuntimeError when no locale is set.
            If False (default), return DEFAULT_LOCALE.

    Returns:
        Detected locale code in POSIX format

    Raises:
        RuntimeError: If raise_on_failure is True and no locale is set.
    """
    import locale as locale_module  # noqa: PLC0415

    candidates: list[str | None] = []
    try:
        candidates.append(locale_module.getlocale()[0])
    except ValueError:
        logger.debug("locale.getlocale() failed; falling back to environment")
    candidates.extend(os.environ.get(var) for var in ("LC_ALL", "LC_MESSAGES", "LANG"))

    for candidate in candidates:
        if candidate is None:
            continue
        code = normalize_locale(candidate)
        if code not in _NON_LANGUAGE_LOCALES:
            return code

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)
    return DEFAULT_LOCALE
