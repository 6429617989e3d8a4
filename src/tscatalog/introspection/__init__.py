"""Introspection of UI strings and catalog messages.

Extracts substitution markers, rich-text tags, accelerators, ending
punctuation and source-prefix keys. Used by validation, the runtime
substitution layer and the pseudo-localization tool.

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from .message import (
    MessageIntrospection,
    TextIntrospection,
    clear_introspection_cache,
    introspect_message,
    introspect_text,
)
from .text import (
    Placeholder,
    SourcePrefix,
    count_accelerators,
    ending_punctuation,
    extract_markup_tags,
    extract_placeholders,
    normalize_punctuation,
    placeholder_spans,
    protected_spans,
    split_source_prefix,
)

__all__ = [
    # Types
    "MessageIntrospection",
    "Placeholder",
    "SourcePrefix",
    "TextIntrospection",
    # Text functions
    "count_accelerators",
    "ending_punctuation",
    "extract_markup_tags",
    "extract_placeholders",
    "normalize_punctuation",
    "placeholder_spans",
    "protected_spans",
    "split_source_prefix",
    # Message functions
    "clear_introspection_cache",
    "introspect_message",
    "introspect_text",
]
