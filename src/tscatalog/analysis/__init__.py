"""Catalog analysis utilities.

Provides completion statistics per context and per catalog.

Python 3.13+.
"""

from .statistics import CatalogStatistics, ContextStatistics, compute_statistics

__all__ = [
    "CatalogStatistics",
    "ContextStatistics",
    "compute_statistics",
]
