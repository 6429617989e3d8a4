"""TSTranslator - single-locale translation lookup.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import logging
import threading
from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError

from tscatalog.constants import DEFAULT_LOCALE, LOG_TRUNCATE_DEBUG, LOG_TRUNCATE_WARNING
from tscatalog.diagnostics import (
    ErrorTemplate,
    TSError,
    TSLookupError,
    TSSubstitutionError,
    TSSyntaxError,
)
from tscatalog.enums import TranslationType
from tscatalog.locale_utils import get_babel_locale, get_system_locale, normalize_locale
from tscatalog.runtime.formatting import ArgValue, substitute_args, substitute_count
from tscatalog.runtime.plural_rules import numerus_form_index
from tscatalog.syntax import Annotation, Catalog, Message, MessageKey, TSParser

if TYPE_CHECKING:
    from tscatalog.diagnostics import ValidationResult

__all__ = ["TSTranslator"]

logger = logging.getLogger(__name__)


class TSTranslator:
    """Translations of one .ts locale, looked up the way Qt does.

    Main public API for runtime lookup. Returns (result, errors) tuples:
    a missing translation yields the source text plus a TSLookupError,
    never an exception.

    Lookup semantics (QTranslator):
        - Key is (context, source text, disambiguation comment).
        - A lookup with a disambiguation that has no exact match retries
          with an empty disambiguation.
        - Obsolete and vanished messages are never registered; unfinished
          ones only when include_unfinished is True.
        - Later catalogs override earlier ones key by key.

    Thread Safety:
        By default, translators are NOT thread-safe for concurrent
        add_catalog() and translate(). Use thread_safe=True to synchronize
        all methods with an internal RLock, or finish loading before sharing
        the translator across threads.

    Examples:
        >>> translator = TSTranslator("de_DE")
        >>> translator.add_catalog(document)
        ()
        >>> translator.translate("NetworkPage", "NetworkPage --- Split Tunnel")
        ('Tunnel teilen', ())
        >>> translator.translate("Tray", "%n file(s)", n=3)
        ('3 Dateien', ())
    """

    __slots__ = (
        "_include_unfinished",
        "_locale",
        "_lock",
        "_messages",
        "_parser",
        "_thread_safe",
    )

    @staticmethod
    def _validate_locale_format(locale: str) -> None:
        """Reject empty locale codes and codes with characters Babel never accepts.

        Raises:
            ValueError: If locale code is empty or has invalid format
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if not locale.replace("_", "").replace("-", "").isalnum():
            msg = f"Invalid locale code format: '{locale}'"
            raise ValueError(msg)

    def __init__(
        self,
        locale: str,
        /,
        *,
        include_unfinished: bool = True,
        thread_safe: bool = False,
        max_source_size: int | None = None,
    ) -> None:
        """Initialize translator for locale.

        Args:
            locale: Locale code (de_DE, de-DE, ru_RU) [positional-only]
            include_unfinished: Serve unfinished translations (default: True,
                matching lrelease's default of compiling them in)
            thread_safe: Synchronize all methods with an internal RLock
            max_source_size: Maximum .ts document size in bytes (default: 10 MB)

        Raises:
            ValueError: If locale code is empty or has invalid format
        """
        TSTranslator._validate_locale_format(locale)

        self._locale = normalize_locale(locale)
        self._include_unfinished = include_unfinished
        self._messages: dict[MessageKey, Message] = {}
        self._parser = TSParser(max_source_size=max_source_size)
        self._thread_safe = thread_safe
        self._lock: threading.RLock | None = threading.RLock() if thread_safe else None

        logger.info(
            "TSTranslator initialized for locale: %s (include_unfinished=%s, thread_safe=%s)",
            self._locale,
            include_unfinished,
            thread_safe,
        )

    @property
    def locale(self) -> str:
        """Locale code of this translator in POSIX form (e.g., "de_DE")."""
        return self._locale

    @property
    def include_unfinished(self) -> bool:
        """Whether unfinished translations are served."""
        return self._include_unfinished

    @property
    def is_thread_safe(self) -> bool:
        """Whether all methods are synchronized."""
        return self._thread_safe

    @property
    def message_count(self) -> int:
        """Number of registered translations."""
        return len(self._messages)

    @classmethod
    def for_system_locale(
        cls,
        *,
        include_unfinished: bool = True,
        thread_safe: bool = False,
        max_source_size: int | None = None,
    ) -> "TSTranslator":
        """Create a translator for the locale of the running system.

        Raises:
            RuntimeError: If system locale cannot be determined
        """
        return cls(
            get_system_locale(raise_on_failure=True),
            include_unfinished=include_unfinished,
            thread_safe=thread_safe,
            max_source_size=max_source_size,
        )

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(TSTranslator("de_DE"))
            "TSTranslator(locale='de_DE', messages=0, contexts=0)"
        """
        return (
            f"TSTranslator(locale={self._locale!r}, "
            f"messages={len(self._messages)}, "
            f"contexts={len(self.contexts())})"
        )

    def __enter__(self) -> "TSTranslator":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Drop all registered translations. Does not suppress exceptions."""
        self._messages.clear()
        logger.debug("TSTranslator context exited for locale: %s", self._locale)

    def get_babel_locale(self) -> str:
        """Babel locale identifier used for plural rules and %L formatting.

        Unknown locales report DEFAULT_LOCALE, whose number formatting is
        used for them, while plural selection falls back to one/other.

        Example:
            >>> TSTranslator("de-DE").get_babel_locale()
            'de_DE'
        """
        try:
            return str(get_babel_locale(self._locale))
        except (UnknownLocaleError, ValueError):
            return DEFAULT_LOCALE

    def add_catalog(
        self, source: str | bytes | Catalog, /, *, source_path: str | None = None
    ) -> tuple[Annotation, ...]:
        """Register the translations of a .ts document.

        Args:
            source: Document content or parsed Catalog [positional-only]
            source_path: Path used in log messages (e.g., "ts/de.ts")

        Returns:
            Annotations for structural problems found while parsing

        Raises:
            TSSyntaxError: If the document cannot be parsed
        """
        if self._lock is not None:
            with self._lock:
                return self._add_catalog_impl(source, source_path)
        return self._add_catalog_impl(source, source_path)

    def _add_catalog_impl(
        self, source: str | bytes | Catalog, source_path: str | None
    ) -> tuple[Annotation, ...]:
        source_desc = source_path or "<string>"
        if isinstance(source, Catalog):
            catalog = source
        else:
            try:
                catalog = self._parser.parse(source)
            except TSSyntaxError as e:
                logger.error("Failed to parse catalog %s: %s", source_desc, e)
                raise

        for annotation in catalog.annotations:
            logger.warning(
                "Structural problem in %s: [%s] %s",
                source_desc,
                annotation.code,
                repr(annotation.message[:LOG_TRUNCATE_WARNING]),
            )

        registered = skipped = 0
        for context, message in catalog.iter_messages():
            if not self._is_servable(message):
                skipped += 1
                continue
            self._messages[message.key(context)] = message
            registered += 1

        if catalog.language and normalize_locale(catalog.language) != self._locale:
            logger.warning(
                "Catalog %s targets %s, translator locale is %s",
                source_desc,
                catalog.language,
                self._locale,
            )

        logger.info(
            "Added catalog %s: %d translation(s) registered, %d skipped, %d annotation(s)",
            source_desc,
            registered,
            skipped,
            len(catalog.annotations),
        )
        return catalog.annotations

    def _is_servable(self, message: Message) -> bool:
        translation = message.translation
        if message.is_obsolete or translation.is_empty:
            return False
        return translation.type == TranslationType.FINISHED or self._include_unfinished

    def _find(self, context: str, source: str, disambiguation: str | None) -> Message | None:
        message = self._messages.get(MessageKey(context, source, disambiguation or ""))
        if message is None and disambiguation:
            message = self._messages.get(MessageKey(context, source, ""))
        return message

    def _select_form(self, message: Message, n: int | float | Decimal | None) -> str:
        forms = message.translation.forms
        if not message.numerus or not forms:
            return message.translation.text
        if n is None:
            return forms[0]
        return forms[numerus_form_index(n, self._locale, len(forms))]

    def lookup(
        self,
        context: str,
        source: str,
        disambiguation: str | None = None,
        n: int | float | Decimal | None = None,
    ) -> str | None:
        """Raw translated text, without marker substitution.

        Args:
            context: Translation context
            source: Source text
            disambiguation: Disambiguation comment (optional)
            n: Count selecting the numerus form (first form when omitted)

        Returns:
            Translated text, or None if no translation is registered
        """
        if self._lock is not None:
            with self._lock:
                message = self._find(context, source, disambiguation)
                return None if message is None else self._select_form(message, n)
        message = self._find(context, source, disambiguation)
        return None if message is None else self._select_form(message, n)

    def translate(
        self,
        context: str,
        source: str,
        /,
        disambiguation: str | None = None,
        *,
        n: int | float | Decimal | None = None,
        args: Sequence[ArgValue] = (),
    ) -> tuple[str, tuple[TSError, ...]]:
        """Translate a string with error reporting.

        Args:
            context: Translation context [positional-only]
            source: Source text [positional-only]
            disambiguation: Disambiguation comment (optional)
            n: Count for numerus messages; replaces %n and %Ln
            args: Values for %1 .. %99. When empty, %N markers are left for
                the caller to substitute.

        Returns:
            Tuple of (text, errors)
            - text: Translation, or the source text when none exists
            - errors: Lookup and substitution problems (immutable)

        Examples:
            >>> translator.translate("Tray", "Connected to %1", args=["Berlin"])
            ('Verbunden mit Berlin', ())
            >>> text, errors = translator.translate("Tray", "Not translated")
            >>> text, type(errors[0]).__name__
            ('Not translated', 'TSLookupError')
        """
        if self._lock is not None:
            with self._lock:
                return self._translate_impl(context, source, disambiguation, n, args)
        return self._translate_impl(context, source, disambiguation, n, args)

    def _translate_impl(
        self,
        context: str,
        source: str,
        disambiguation: str | None,
        n: int | float | Decimal | None,
        args: Sequence[ArgValue],
    ) -> tuple[str, tuple[TSError, ...]]:
        if not isinstance(source, str) or not source or not isinstance(context, str):
            logger.warning("Invalid lookup key: empty or non-string source text")
            text = source if isinstance(source, str) else ""
            return text, (TSLookupError(ErrorTemplate.invalid_lookup_key()),)

        errors: list[TSError] = []
        message = self._find(context, source, disambiguation)
        if message is None:
            logger.warning(
                "No translation for %s in context %s",
                repr(source[:LOG_TRUNCATE_WARNING]),
                repr(context[:LOG_TRUNCATE_WARNING]),
            )
            errors.append(
                TSLookupError(ErrorTemplate.message_not_found(context, source, disambiguation))
            )
            text = source
        else:
            if message.numerus and n is None:
                errors.append(
                    TSSubstitutionError(ErrorTemplate.numerus_without_count(context, source))
                )
            text = self._select_form(message, n)

        if n is not None:
            text = substitute_count(text, n, self._locale)
        if args:
            text, arg_errors = substitute_args(text, args, self._locale)
            errors.extend(arg_errors)

        if errors:
            for err in errors:
                logger.debug("  - %s: %s", type(err).__name__, err)
        else:
            logger.debug("Translated %s: %s", repr(source[:LOG_TRUNCATE_DEBUG]), text[:50])
        return text, tuple(errors)

    def has_message(self, context: str, source: str, disambiguation: str | None = None) -> bool:
        """True if a translation would be served for the key."""
        return self.get_message(context, source, disambiguation) is not None

    def get_message(
        self, context: str, source: str, disambiguation: str | None = None
    ) -> Message | None:
        """Registered message answering the key, if any."""
        if self._lock is not None:
            with self._lock:
                return self._find(context, source, disambiguation)
        return self._find(context, source, disambiguation)

    def contexts(self) -> tuple[str, ...]:
        """Context names with at least one registered translation, in registration order."""
        return tuple(dict.fromkeys(key.context for key in self._messages))

    def validate_catalog(self, source: str | bytes | Catalog) -> "ValidationResult":
        """Validate a catalog against this translator's locale without registering it.

        See Also:
            tscatalog.validation.validate_catalog: Standalone validation function
        """
        from tscatalog.validation import validate_catalog  # noqa: PLC0415 - circular

        return validate_catalog(source, locale=self._locale, parser=self._parser)
