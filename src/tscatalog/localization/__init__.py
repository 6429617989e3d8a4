"""Multi-locale localization package.

Provides the full localization stack: type aliases, catalog loading
infrastructure, and the multi-locale orchestrator.

Submodules:
    types        - PEP 695 type aliases (LocaleCode, ResourceId, TSSource)
    loading      - CatalogLoader protocol, PathCatalogLoader, FallbackInfo,
                   CatalogLoadResult, LoadSummary
    orchestrator - TSLocalization (fallback chain)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from tscatalog.enums import LoadStatus
from tscatalog.localization.loading import (
    CatalogLoader,
    CatalogLoadResult,
    FallbackInfo,
    LoadSummary,
    PathCatalogLoader,
)
from tscatalog.localization.orchestrator import TSLocalization
from tscatalog.localization.types import LocaleCode, ResourceId, TSSource

__all__ = [
    # Main orchestrator
    "TSLocalization",
    # Loader protocol and implementations
    "CatalogLoader",
    "PathCatalogLoader",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "CatalogLoadResult",
    # Fallback observability
    "FallbackInfo",
    # Type aliases
    "LocaleCode",
    "ResourceId",
    "TSSource",
]
