"""Catalog maintenance tools.

Provides lupdate-style merging of a translation catalog with a freshly
extracted template, and pseudo-localization for i18n testing.

Python 3.13+.
"""

from .merge import MergeResult, merge_catalogs
from .pseudo import PseudoConfig, pseudolocalize, pseudolocalize_text

__all__ = [
    "MergeResult",
    "PseudoConfig",
    "merge_catalogs",
    "pseudolocalize",
    "pseudolocalize_text",
]
