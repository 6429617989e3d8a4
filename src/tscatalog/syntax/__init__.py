"""Qt Linguist .ts syntax package.

Provides the catalog model, the parser and the lupdate-compatible serializer.
Separate from runtime to enable tooling (linters, formatters, merge tools).

Python 3.13+.
"""

from .ast import (
    Annotation,
    Catalog,
    Context,
    Location,
    Message,
    MessageKey,
    SourcePosition,
    Translation,
)
from .parser import TSParser, parse
from .serializer import escape, serialize

__all__ = [
    "Annotation",
    "Catalog",
    "Context",
    "Location",
    "Message",
    "MessageKey",
    "SourcePosition",
    "TSParser",
    "Translation",
    "escape",
    "parse",
    "serialize",
]
