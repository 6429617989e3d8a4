"""Type aliases for the localization domain.

Semantic aliases used by the localization package and by user code
annotating TSLocalization call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "LocaleCode",
    "ResourceId",
    "TSSource",
]

LocaleCode: TypeAlias = str
"""POSIX or BCP-47 locale code (e.g., 'de_DE', 'de-DE', 'ru')."""

ResourceId: TypeAlias = str
"""Catalog file identifier (e.g., 'app.ts', 'installer.ts')."""

TSSource: TypeAlias = str | bytes
"""Raw .ts document content."""
