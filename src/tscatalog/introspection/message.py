"""Message introspection for translation-quality checks.

Bundles the text-level extractions of :mod:`tscatalog.introspection.text` for
a message's source text and every translated form, so validation passes can
compare them without re-scanning strings.

Python 3.13+. Zero external dependencies.
"""

import weakref
from dataclasses import dataclass

from tscatalog.enums import PlaceholderKind
from tscatalog.syntax.ast import Message

from .text import (
    Placeholder,
    SourcePrefix,
    count_accelerators,
    ending_punctuation,
    extract_markup_tags,
    extract_placeholders,
    split_source_prefix,
)

__all__ = [
    "MessageIntrospection",
    "TextIntrospection",
    "clear_introspection_cache",
    "introspect_message",
    "introspect_text",
]

# Messages are immutable, so results stay valid for the lifetime of the key.
# Concurrent writes can at worst compute a result twice.
_introspection_cache: weakref.WeakKeyDictionary[Message, "MessageIntrospection"] = (
    weakref.WeakKeyDictionary()
)


def clear_introspection_cache() -> None:
    """Clear the introspection cache."""
    _introspection_cache.clear()


@dataclass(frozen=True, slots=True)
class TextIntrospection:
    """Extracted features of one string."""

    text: str
    """The analysed string."""

    placeholders: tuple[Placeholder, ...]
    """Substitution markers in order of appearance."""

    markup: tuple[str, ...]
    """Sorted rich-text tag tokens."""

    accelerators: int
    """Number of ``&x`` mnemonics."""

    punctuation: str
    """Trailing punctuation run."""

    def arg_numbers(self) -> frozenset[int]:
        """Distinct QString::arg() marker numbers (%1 -> 1)."""
        return frozenset(
            p.number
            for p in self.placeholders
            if p.kind == PlaceholderKind.QT_ARG and p.number is not None
        )

    def printf_tokens(self) -> tuple[str, ...]:
        """printf conversions in order of appearance."""
        return tuple(p.token for p in self.placeholders if p.kind == PlaceholderKind.PRINTF)

    def has_numerus_marker(self) -> bool:
        """True if the string contains %n or %Ln."""
        return any(p.kind == PlaceholderKind.NUMERUS for p in self.placeholders)


@dataclass(frozen=True, slots=True)
class MessageIntrospection:
    """Complete introspection result for a message."""

    source: TextIntrospection
    """Features of the source text."""

    translations: tuple[TextIntrospection, ...]
    """Features of the translation, one entry per numerus form."""

    prefix: SourcePrefix | None
    """Context-prefix key parsed from the source text, if any."""


def introspect_text(text: str) -> TextIntrospection:
    """Extract all features of one string."""
    return TextIntrospection(
        text=text,
        placeholders=extract_placeholders(text),
        markup=extract_markup_tags(text),
        accelerators=count_accelerators(text),
        punctuation=ending_punctuation(text),
    )


def introspect_message(message: Message, *, use_cache: bool = True) -> MessageIntrospection:
    """Introspect a message's source text and translations.

    Args:
        message: Message to introspect
        use_cache: If True (default), reuse results for the same message

    Returns:
        MessageIntrospection for source, translations and source prefix

    Raises:
        TypeError: If message is not a Message node

    Example:
        >>> from tscatalog.syntax.ast import Message, Translation
        >>> info = introspect_message(Message("%1 item(s)", Translation("%1 Element(e)")))
        >>> info.source.arg_numbers() == info.translations[0].arg_numbers()
        True
    """
    if not isinstance(message, Message):
        msg = f"Expected Message, got {type(message).__name__}"  # type: ignore[unreachable]
        raise TypeError(msg)

    if use_cache:
        cached = _introspection_cache.get(message)
        if cached is not None:
            return cached

    result = MessageIntrospection(
        source=introspect_text(message.source),
        translations=tuple(introspect_text(text) for text in message.translation.texts),
        prefix=split_source_prefix(message.source),
    )

    if use_cache:
        _introspection_cache[message] = result
    return result
