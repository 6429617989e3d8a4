"""Catalog loading infrastructure for TSLocalization.

Defines the loader protocol, a filesystem loader confined to a root
directory, and the immutable records describing each load attempt.

Components:
    CatalogLoader - Protocol for fetching .ts documents (structural typing)
    PathCatalogLoader - Disk loader with a {locale} path template
    FallbackInfo - Record of a lookup answered by a non-primary locale
    CatalogLoadResult - Outcome of loading one catalog for one locale
    LoadSummary - Aggregate of all load results from construction

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from tscatalog.enums import LoadStatus
from tscatalog.localization.types import LocaleCode, ResourceId, TSSource

if TYPE_CHECKING:
    from tscatalog.syntax import Annotation

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "CatalogLoader",
    # Concrete loader
    "PathCatalogLoader",
    # Fallback observability
    "FallbackInfo",
    # Load result types
    "CatalogLoadResult",
    "LoadSummary",
]


class CatalogLoader(Protocol):
    """Protocol for fetching .ts documents per locale.

    Structural typing: any object with a matching load() works, for example
    a loader reading catalogs from package data or a database.

    Example:
        >>> class PackageLoader:
        ...     def load(self, locale: str, resource_id: str) -> bytes:
        ...         return files("myapp.i18n").joinpath(f"{locale}.ts").read_bytes()
        ...     def describe_path(self, locale: str, resource_id: str) -> str:
        ...         return f"myapp.i18n/{locale}.ts"
        >>> l10n = TSLocalization(["de_DE", "en_US"], ["app"], PackageLoader())
    """

    def load(self, locale: LocaleCode, resource_id: ResourceId) -> TSSource:
        """Fetch the document for a locale.

        Raises:
            FileNotFoundError: If the catalog does not exist for this locale
            OSError: If the catalog cannot be read
        """

    def describe_path(self, locale: LocaleCode, resource_id: ResourceId) -> str:
        """Human-readable location used in load results and log lines."""
        return f"{locale}/{resource_id}"


@dataclass(frozen=True, slots=True)
class PathCatalogLoader:
    """Loads .ts files from a path template.

    The ``{locale}`` placeholder may name a directory
    (``"i18n/{locale}"`` + ``"app.ts"``) or be part of the file name
    (``"translations/app_{locale}.ts"``, in which case resource_id may be
    empty, as Qt projects usually ship one catalog per locale).

    Security:
        Locale codes containing path separators or ".." are rejected, as are
        absolute or parent-relative resource IDs. Every resolved path must
        stay below root_dir.

    Attributes:
        base_path: Path template with {locale} placeholder
        root_dir: Directory all catalogs must resolve into. Defaults to the
                  static prefix of base_path before {locale}.

    Example:
        >>> loader = PathCatalogLoader("translations/app_{locale}.ts")
        >>> document = loader.load("de_DE", "")
        # Reads: translations/app_de_DE.ts
    """

    base_path: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the template and resolve the root directory.

        Raises:
            ValueError: If base_path does not contain {locale} placeholder
        """
        # Without the placeholder every locale would silently read the same file.
        if "{locale}" not in self.base_path:
            msg = f"base_path must contain '{{locale}}' placeholder, got: '{self.base_path}'"
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            prefix = self.base_path.split("{locale}")[0]
            # "translations/app_{locale}.ts" -> "translations"
            static_dir = prefix if prefix.endswith(("/", "\\")) else str(Path(prefix).parent)
            static_dir = static_dir.rstrip("/\\")
            resolved = Path(static_dir).resolve() if static_dir else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    @staticmethod
    def _validate_resource_id(resource_id: ResourceId) -> None:
        if resource_id.strip() != resource_id:
            msg = f"Resource ID contains leading/trailing whitespace: {resource_id!r}"
            raise ValueError(msg)
        if Path(resource_id).is_absolute() or resource_id.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)
        if ".." in resource_id:
            msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)

    def _path_for(self, locale: LocaleCode, resource_id: ResourceId) -> Path:
        # replace() rather than format(): other braces in the template stay literal
        locale_path = Path(self.base_path.replace("{locale}", locale))
        return locale_path / resource_id if resource_id else locale_path

    def describe_path(self, locale: LocaleCode, resource_id: ResourceId) -> str:
        """Locale-substituted path of the catalog."""
        return self._path_for(locale, resource_id).as_posix()

    def load(self, locale: LocaleCode, resource_id: ResourceId) -> TSSource:
        """Read a catalog from disk.

        Returns bytes: the document's XML declaration names its encoding.

        Raises:
            ValueError: If locale or resource_id would escape root_dir
            FileNotFoundError: If file doesn't exist
            OSError: If file cannot be read
        """
        self._validate_locale(locale)
        self._validate_resource_id(resource_id)

        full_path = self._path_for(locale, resource_id).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = (
                "Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}', resource_id='{resource_id}'"
            )
            raise ValueError(msg)

        return full_path.read_bytes()


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """A translation served by a fallback locale.

    Passed to TSLocalization's on_fallback callback.

    Attributes:
        requested_locale: First locale of the chain
        resolved_locale: Locale whose catalog answered
        context: Context of the looked-up message
        source: Source text of the looked-up message

    Example:
        >>> def report(info: FallbackInfo) -> None:
        ...     print(f"{info.context}/{info.source}: {info.resolved_locale}")
        >>> l10n = TSLocalization(["de_AT", "de_DE"], on_fallback=report)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    context: str
    source: str


@dataclass(frozen=True, slots=True)
class CatalogLoadResult:
    """Outcome of loading one catalog for one locale.

    Attributes:
        locale: Locale code
        resource_id: Catalog identifier
        status: SUCCESS, NOT_FOUND or ERROR
        error: Exception if status is ERROR
        source_path: Human-readable location of the catalog
        annotations: Structural problems reported by the parser
    """

    locale: LocaleCode
    resource_id: ResourceId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    annotations: tuple[Annotation, ...] = ()

    @property
    def is_success(self) -> bool:
        """Check if the catalog was loaded and registered."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the catalog does not exist (normal for partial locales)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if loading failed with an I/O, path or XML error."""
        return self.status == LoadStatus.ERROR

    @property
    def has_annotations(self) -> bool:
        """Check if the parser reported structural problems."""
        return bool(self.annotations)


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Aggregate of the load results recorded by TSLocalization's constructor.

    Example:
        >>> summary = l10n.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[CatalogLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors}, "
            f"annotations={self.annotation_count})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of catalogs loaded."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of catalogs missing."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of failed loads."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def annotation_count(self) -> int:
        """Structural problems across all loaded catalogs."""
        return sum(len(r.annotations) for r in self.results)

    def get_errors(self) -> tuple[CatalogLoadResult, ...]:
        """Results with status ERROR."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[CatalogLoadResult, ...]:
        """Results with status NOT_FOUND."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[CatalogLoadResult, ...]:
        """Results with status SUCCESS."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_locale(self, locale: LocaleCode) -> tuple[CatalogLoadResult, ...]:
        """Results for one locale."""
        return tuple(r for r in self.results if r.locale == locale)

    def get_all_annotations(self) -> tuple[Annotation, ...]:
        """Annotations of all results, flattened in load order."""
        return tuple(a for r in self.results for a in r.annotations)

    @property
    def has_errors(self) -> bool:
        """Check if any catalog failed to load."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """No errors and no missing catalogs; annotations are allowed."""
        return self.errors == 0 and self.not_found == 0

    @property
    def all_clean(self) -> bool:
        """Like all_successful, additionally without any annotation."""
        return self.all_successful and self.annotation_count == 0
