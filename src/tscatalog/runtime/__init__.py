"""Runtime translation package.

Provides lookup, numerus form selection, marker substitution and the
TSTranslator API. Depends on syntax package for parsing.

Python 3.13+.
"""

from .formatting import ArgValue, format_arg, substitute_args, substitute_count
from .plural_rules import (
    numerus_categories,
    numerus_form_count,
    numerus_form_index,
    select_plural_category,
)
from .rwlock import RWLock
from .translator import TSTranslator

__all__ = [
    "ArgValue",
    "RWLock",
    "TSTranslator",
    "format_arg",
    "numerus_categories",
    "numerus_form_count",
    "numerus_form_index",
    "select_plural_category",
    "substitute_args",
    "substitute_count",
]
