"""Multi-locale orchestration with fallback chains.

TSLocalization owns one TSTranslator per locale and answers each lookup from
the first locale in the chain that has a translation, the way an
application installs several QTranslators (most specific first).

Initialization Behavior:
    Catalogs are loaded eagerly at construction. Missing files, unreadable
    files and malformed documents are recorded in CatalogLoadResult objects
    (NOT_FOUND, ERROR) instead of being raised:

        l10n = TSLocalization(["de_AT", "de_DE"], ["app.ts"], loader)
        if l10n.get_load_summary().has_errors:
            ...

Thread Safety:
    All methods are safe to call concurrently. Lookups share an RWLock,
    add_catalog() takes it exclusively.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

from tscatalog.diagnostics import TSSyntaxError
from tscatalog.enums import LoadStatus
from tscatalog.locale_utils import normalize_locale
from tscatalog.localization.loading import (
    CatalogLoader,
    CatalogLoadResult,
    FallbackInfo,
    LoadSummary,
)
from tscatalog.localization.types import LocaleCode, ResourceId, TSSource
from tscatalog.runtime import RWLock, TSTranslator

if TYPE_CHECKING:
    from tscatalog.diagnostics import TSError, ValidationResult
    from tscatalog.runtime import ArgValue
    from tscatalog.syntax import Annotation, Catalog, Message

__all__ = ["TSLocalization"]

logger = logging.getLogger(__name__)


class TSLocalization:
    """Translation lookup across a locale fallback chain.

    Wraps one TSTranslator per locale; it is not a TSTranslator subclass.

    Example - catalogs on disk:
        >>> loader = PathCatalogLoader("translations/app_{locale}.ts")
        >>> l10n = TSLocalization(["de_AT", "de_DE"], [""], loader)
        >>> text, errors = l10n.translate("TrayMenu", "TrayMenu --- Connect")

    Example - catalogs provided directly:
        >>> l10n = TSLocalization(["de_DE", "en_US"])
        >>> l10n.add_catalog("de_DE", document)

    Attributes:
        locales: Locale codes in fallback priority order
    """

    __slots__ = (
        "_load_results",
        "_loader",
        "_locales",
        "_lock",
        "_on_fallback",
        "_resource_ids",
        "_translators",
    )

    def __init__(
        self,
        locales: Iterable[LocaleCode],
        resource_ids: Iterable[ResourceId] | None = None,
        loader: CatalogLoader | None = None,
        *,
        include_unfinished: bool = True,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize the fallback chain and load catalogs.

        Args:
            locales: Locale codes in fallback order (e.g., ["de_AT", "de_DE"]);
                BCP-47 tags such as "de-AT" are stored in POSIX form
            resource_ids: Catalog identifiers to load for every locale
            loader: Loader fetching catalogs (required with resource_ids)
            include_unfinished: Serve unfinished translations
            on_fallback: Called with a FallbackInfo whenever a non-primary
                locale answers a lookup

        Raises:
            ValueError: If locales is empty or a locale code is malformed
            ValueError: If resource_ids provided but no loader
        """
        locale_list = list(locales)
        if not locale_list:
            msg = "At least one locale is required"
            raise ValueError(msg)

        if resource_ids and loader is None:
            msg = "loader required when resource_ids provided"
            raise ValueError(msg)

        # Normalized before dict.fromkeys() so de-DE and de_DE are one locale
        self._locales: tuple[LocaleCode, ...] = tuple(
            dict.fromkeys(normalize_locale(locale) for locale in locale_list)
        )
        self._resource_ids: tuple[ResourceId, ...] = tuple(resource_ids) if resource_ids else ()
        self._loader = loader
        self._on_fallback = on_fallback
        self._lock = RWLock()
        self._load_results: list[CatalogLoadResult] = []

        # Raises ValueError for malformed codes before anything is loaded
        self._translators: dict[LocaleCode, TSTranslator] = {
            locale: TSTranslator(locale, include_unfinished=include_unfinished)
            for locale in self._locales
        }

        if loader is not None:
            for locale in self._locales:
                for resource_id in self._resource_ids:
                    self._load_results.append(self._load_single(locale, resource_id, loader))
            summary = self.get_load_summary()
            logger.info(
                "Loaded %d of %d catalog(s) for %s (%d not found, %d error(s))",
                summary.successful,
                summary.total_attempted,
                ", ".join(self._locales),
                summary.not_found,
                summary.errors,
            )

    def _load_single(
        self, locale: LocaleCode, resource_id: ResourceId, loader: CatalogLoader
    ) -> CatalogLoadResult:
        """Load one catalog into the locale's translator and record the outcome."""
        source_path = loader.describe_path(locale, resource_id)
        try:
            document = loader.load(locale, resource_id)
            annotations = self._translators[locale].add_catalog(
                document, source_path=source_path
            )
        except FileNotFoundError:
            logger.debug("Catalog not found: %s", source_path)
            return CatalogLoadResult(
                locale=locale,
                resource_id=resource_id,
                status=LoadStatus.NOT_FOUND,
                source_path=source_path,
            )
        except (OSError, ValueError, TSSyntaxError) as e:
            return CatalogLoadResult(
                locale=locale,
                resource_id=resource_id,
                status=LoadStatus.ERROR,
                error=e,
                source_path=source_path,
            )
        return CatalogLoadResult(
            locale=locale,
            resource_id=resource_id,
            status=LoadStatus.SUCCESS,
            source_path=source_path,
            annotations=annotations,
        )

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locale codes in fallback priority order."""
        return self._locales

    def get_load_summary(self) -> LoadSummary:
        """Summary of the catalog loads performed by the constructor.

        Catalogs added later through add_catalog() are not included.
        """
        return LoadSummary(results=tuple(self._load_results))

    def get_translators(self) -> dict[LocaleCode, TSTranslator]:
        """Per-locale translators in fallback order (a new dict each call)."""
        with self._lock.read():
            return dict(self._translators)

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(TSLocalization(["de_AT", "de_DE"]))
            "TSLocalization(locales=('de_AT', 'de_DE'), messages=0)"
        """
        total = sum(t.message_count for t in self._translators.values())
        return f"TSLocalization(locales={self._locales!r}, messages={total})"

    def add_catalog(
        self,
        locale: LocaleCode,
        source: TSSource | Catalog,
        /,
        *,
        source_path: str | None = None,
    ) -> tuple[Annotation, ...]:
        """Register a catalog for one locale of the chain.

        Returns:
            Annotations reported by the parser

        Raises:
            ValueError: If locale is not in the fallback chain
            TSSyntaxError: If the document cannot be parsed
        """
        with self._lock.write():
            translator = self._translators.get(normalize_locale(locale))
            if translator is None:
                msg = f"Locale '{locale}' not in fallback chain {self._locales}"
                raise ValueError(msg)
            return translator.add_catalog(source, source_path=source_path)

    def _resolve(
        self, context: str, source: str, disambiguation: str | None
    ) -> TSTranslator | None:
        """First translator in the chain that has the message. Caller holds the read lock."""
        for translator in self._translators.values():
            if translator.has_message(context, source, disambiguation):
                return translator
        return None

    def _notify_fallback(self, translator: TSTranslator, context: str, source: str) -> None:
        primary = self._locales[0]
        if self._on_fallback is not None and translator is not self._translators[primary]:
            self._on_fallback(
                FallbackInfo(
                    requested_locale=primary,
                    resolved_locale=translator.locale,
                    context=context,
                    source=source,
                )
            )

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
        """Translate through the fallback chain.

        Returns:
            Tuple of (text, errors). When no locale has the message, the
            source text (with %n and arguments substituted) and a
            TSLookupError are returned.

        Example:
            >>> l10n = TSLocalization(["de_AT", "de_DE"])
            >>> l10n.add_catalog("de_DE", document)
            >>> l10n.translate("NetworkPage", "NetworkPage --- Split Tunnel")
            ('Tunnel teilen', ())
        """
        with self._lock.read():
            translator = self._resolve(context, source, disambiguation)
            answering = translator or self._translators[self._locales[0]]
            result = answering.translate(context, source, disambiguation, n=n, args=args)
        # Outside the lock: the callback may add catalogs.
        if translator is not None:
            self._notify_fallback(translator, context, source)
        return result

    def lookup(
        self,
        context: str,
        source: str,
        disambiguation: str | None = None,
        n: int | float | Decimal | None = None,
    ) -> str | None:
        """Raw translated text from the first locale that has it."""
        with self._lock.read():
            translator = self._resolve(context, source, disambiguation)
            if translator is None:
                return None
            text = translator.lookup(context, source, disambiguation, n)
        self._notify_fallback(translator, context, source)
        return text

    def has_message(self, context: str, source: str, disambiguation: str | None = None) -> bool:
        """True if any locale of the chain has a translation."""
        with self._lock.read():
            return self._resolve(context, source, disambiguation) is not None

    def get_message(
        self, context: str, source: str, disambiguation: str | None = None
    ) -> Message | None:
        """Message answering the key, from the first locale that has it."""
        with self._lock.read():
            translator = self._resolve(context, source, disambiguation)
            return None if translator is None else translator.get_message(
                context, source, disambiguation
            )

    def validate_catalog(
        self, source: TSSource | Catalog, *, locale: LocaleCode | None = None
    ) -> ValidationResult:
        """Validate a catalog for one locale of the chain (default: primary)."""
        target = normalize_locale(locale) if locale else self._locales[0]
        translator = self._translators.get(target)
        if translator is None:
            msg = f"Locale '{target}' not in fallback chain {self._locales}"
            raise ValueError(msg)
        return translator.validate_catalog(source)
