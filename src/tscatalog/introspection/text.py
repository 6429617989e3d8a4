"""Text-level introspection of UI strings.

Extracts the parts of a source or translated string that must survive
translation unchanged: substitution markers, rich-text tags, keyboard
accelerators, ending punctuation and the source-prefix key convention.

Marker grammar (checked in this order at every ``%``):
    - ``%%``: literal percent sign, not a marker
    - ``%n`` / ``%Ln``: numerus count
    - printf conversions with flags or precision (``%.0f``, ``%-5s``)
    - ``%1`` .. ``%99`` / ``%L1``: QString::arg() markers
    - bare printf conversions (``%s``, ``%d``, ``%ls``)

A width without flags or precision (``%1s``) is read as a QString::arg()
marker followed by text, which is how Qt itself substitutes it.

Python 3.13+. Zero external dependencies.
"""

import re
from dataclasses import dataclass

from tscatalog.constants import (
    MAX_PLACEHOLDER_NUMBER,
    SOURCE_COMMENT_SEPARATOR,
    SOURCE_PREFIX_SEPARATOR,
)
from tscatalog.enums import PlaceholderKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Types
    "Placeholder",
    "SourcePrefix",
    # Extraction
    "extract_placeholders",
    "placeholder_spans",
    "protected_spans",
    "extract_markup_tags",
    "count_accelerators",
    "ending_punctuation",
    "normalize_punctuation",
    "split_source_prefix",
]

_PRINTF_LENGTH = r"(?:hh|h|ll|l|L|j|z|t)?"
_PRINTF_CONVERSION = r"[cdieEfFgGosuxXp]"

# Digits after the leading 1-9 of an argument marker
_ARG_EXTRA_DIGITS = len(str(MAX_PLACEHOLDER_NUMBER)) - 1

_MARKER_PATTERN = re.compile(
    r"%(?:"
    r"(?P<percent>%)"
    r"|(?P<numerus>L?n)"
    rf"|(?P<printf_full>[-+#0]*\d*\.\d+{_PRINTF_LENGTH}{_PRINTF_CONVERSION}"
    rf"|[-+#0]+\d*{_PRINTF_LENGTH}{_PRINTF_CONVERSION})"
    rf"|(?P<arg>L?(?P<number>[1-9]\d{{0,{_ARG_EXTRA_DIGITS}}}))"
    rf"|(?P<printf>{_PRINTF_LENGTH}{_PRINTF_CONVERSION})"
    r")"
)

_TAG_PATTERN = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9]*)\b[^<>]*?(/?)\s*>")

# Character and named entity references written literally in rich text.
_ENTITY_PATTERN = re.compile(r"&(?:#\d+|#x[0-9A-Fa-f]+|[A-Za-z]+);")

_ENDING_PUNCTUATION: frozenset[str] = frozenset(".:?!;…。：？！")

_PUNCTUATION_EQUIVALENTS: dict[str, str] = {
    "…": "...",
    "。": ".",
    "：": ":",
    "？": "?",
    "！": "!",
}


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Substitution marker inside a UI string.

    Attributes:
        kind: Marker family
        token: Marker as written (e.g., "%1", "%Ln", "%.0f")
        number: Argument number for QString::arg() markers, otherwise None
    """

    kind: PlaceholderKind
    token: str
    number: int | None = None


@dataclass(frozen=True, slots=True)
class SourcePrefix:
    """Parsed ``Context --- text`` / ``Context -- comment --- text`` key.

    Attributes:
        context: Context named by the prefix
        comment: Disambiguation named by the prefix (None when absent)
        text: Display text after the prefix
    """

    context: str
    comment: str | None
    text: str


def placeholder_spans(text: str) -> tuple[tuple[int, int, Placeholder], ...]:
    """Locate substitution markers.

    Args:
        text: Source or translated string

    Returns:
        (start, end, placeholder) triples in order of appearance
    """
    spans: list[tuple[int, int, Placeholder]] = []
    for match in _MARKER_PATTERN.finditer(text):
        if match.group("percent"):
            continue
        if match.group("numerus"):
            placeholder = Placeholder(PlaceholderKind.NUMERUS, match.group(0))
        elif match.group("arg"):
            placeholder = Placeholder(
                PlaceholderKind.QT_ARG, match.group(0), int(match.group("number"))
            )
        else:
            placeholder = Placeholder(PlaceholderKind.PRINTF, match.group(0))
        spans.append((match.start(), match.end(), placeholder))
    return tuple(spans)


def extract_placeholders(text: str) -> tuple[Placeholder, ...]:
    """Extract substitution markers in order of appearance.

    Args:
        text: Source or translated string

    Returns:
        Markers in order of appearance (``%%`` excluded)

    Example:
        >>> [p.token for p in extract_placeholders("%1 of %n files (100%%), %.0f s")]
        ['%1', '%n', '%.0f']
    """
    return tuple(placeholder for _, _, placeholder in placeholder_spans(text))


def extract_markup_tags(text: str) -> tuple[str, ...]:
    """Extract rich-text tag tokens, sorted.

    Tag names are lower-cased and attributes dropped, so ``<a href="x">``
    and ``<A href="y">`` compare equal.

    Example:
        >>> extract_markup_tags("<b>Warning:</b> reboot<br/>")
        ('/b', 'b', 'br/')
    """
    tokens = [
        f"{closing}{name.lower()}{self_closing}"
        for closing, name, self_closing in _TAG_PATTERN.findall(text)
    ]
    return tuple(sorted(tokens))


def count_accelerators(text: str) -> int:
    """Count ``&x`` keyboard mnemonics.

    ``&&`` is a literal ampersand, ``&`` before whitespace or at the end is
    plain text, and entity references such as ``&nbsp;`` are not mnemonics.

    Example:
        >>> count_accelerators("&File")
        1
        >>> count_accelerators("Save && Quit")
        0
    """
    text = _ENTITY_PATTERN.sub("", text)
    count = 0
    index = 0
    length = len(text)
    while index < length:
        if text[index] == "&" and index + 1 < length:
            following = text[index + 1]
            if following == "&":
                index += 2
                continue
            if not following.isspace():
                count += 1
        index += 1
    return count


def ending_punctuation(text: str) -> str:
    """Trailing punctuation run, ignoring trailing whitespace.

    Example:
        >>> ending_punctuation("Set Custom DNS...")
        '...'
        >>> ending_punctuation("Name Servers")
        ''
    """
    stripped = text.rstrip()
    end = len(stripped)
    start = end
    while start > 0 and stripped[start - 1] in _ENDING_PUNCTUATION:
        start -= 1
    return stripped[start:end]


def normalize_punctuation(run: str) -> str:
    """Map typographic and full-width punctuation to ASCII for comparison.

    Example:
        >>> normalize_punctuation("…") == normalize_punctuation("...")
        True
    """
    return "".join(_PUNCTUATION_EQUIVALENTS.get(char, char) for char in run)


def split_source_prefix(source: str) -> SourcePrefix | None:
    """Split a source text following the context-prefix key convention.

    Some projects make source texts unique by prefixing them with the
    context name and an optional disambiguation:
    ``"NetworkPage --- Split Tunnel"`` or
    ``"OverlayDialog -- dialog button --- OK"``.

    Args:
        source: Source text

    Returns:
        SourcePrefix, or None if the text carries no prefix

    Example:
        >>> split_source_prefix("OverlayDialog -- dialog button --- OK")
        SourcePrefix(context='OverlayDialog', comment='dialog button', text='OK')
    """
    head, separator, text = source.partition(SOURCE_PREFIX_SEPARATOR)
    if not separator or not head.strip():
        return None

    context, comment_separator, comment = head.partition(SOURCE_COMMENT_SEPARATOR)
    if not comment_separator:
        return SourcePrefix(context=head.strip(), comment=None, text=text)
    return SourcePrefix(context=context.strip(), comment=comment.strip(), text=text)


# Accelerators: "&&" (literal ampersand) or "&" plus the mnemonic character.
_ACCELERATOR_PATTERN = re.compile(r"&&|&\S")


def protected_spans(text: str) -> tuple[tuple[int, int], ...]:
    """Spans a translation must reproduce verbatim.

    Covers substitution markers (``%%`` included), rich-text tags, entity
    references and accelerators. Spans are sorted and never overlap; a
    span starting inside an earlier one is dropped.

    Example:
        >>> text = "<b>%1</b> &Save"
        >>> [text[start:end] for start, end in protected_spans(text)]
        ['<b>', '%1', '</b>', '&S']
    """
    candidates = [(match.start(), match.end()) for match in _MARKER_PATTERN.finditer(text)]
    for pattern in (_TAG_PATTERN, _ENTITY_PATTERN, _ACCELERATOR_PATTERN):
        candidates.extend((match.start(), match.end()) for match in pattern.finditer(text))

    spans: list[tuple[int, int]] = []
    # Longest span wins when two start at the same index ("&nbsp;" over "&n").
    for start, end in sorted(candidates, key=lambda span: (span[0], -span[1])):
        if spans and start < spans[-1][1]:
            continue
        spans.append((start, end))
    return tuple(spans)
