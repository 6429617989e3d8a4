"""Validation utilities for .ts catalogs.

Standalone translation-quality checks, separated from the translator for
better modularity and testability.

Python 3.13+.
"""

from tscatalog.validation.catalog import (
    ALL_CHECKS,
    DEFAULT_CHECKS,
    ValidationConfig,
    validate_catalog,
)

__all__ = [
    "ALL_CHECKS",
    "DEFAULT_CHECKS",
    "ValidationConfig",
    "validate_catalog",
]
