"""Pseudo-localization of translation catalogs.

Generates a synthetic translation that keeps every string readable while
exposing i18n defects: untranslated strings stand out because they lack
the accents, truncation shows as a missing closing bracket, and
concatenated fragments show as several bracket pairs.

Substitution markers, rich-text tags, entity references and accelerators
are copied verbatim, so the result passes marker and markup checks.

Python 3.13+.
"""

import logging
import math
from dataclasses import dataclass, replace

from tscatalog.constants import DEFAULT_PSEUDO_EXPANSION
from tscatalog.enums import TranslationType
from tscatalog.introspection import ending_punctuation, protected_spans, split_source_prefix
from tscatalog.runtime.plural_rules import numerus_form_count
from tscatalog.syntax import Catalog, Message, Translation

__all__ = ["PseudoConfig", "pseudolocalize", "pseudolocalize_text"]

logger = logging.getLogger(__name__)

_ACCENTED = str.maketrans(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "àƀçđéƒĝĥîĵķĺɱñöþǫŕšţûṽŵẋýžÀƁÇĐÉƑĜĤÎĴĶĹṀÑÖÞǪŔŠŢÛṼŴẊÝŽ",
)

_PADDING = "~"


@dataclass(frozen=True, slots=True)
class PseudoConfig:
    """Pseudo-localization settings.

    Attributes:
        expansion: Padding added, as a share of the text length
        brackets: Opening and closing markers around each string
        accents: Replace ASCII letters with accented look-alikes
        strip_source_prefix: Drop a ``Context --- `` key prefix first
    """

    expansion: float = DEFAULT_PSEUDO_EXPANSION
    brackets: tuple[str, str] = ("[", "]")
    accents: bool = True
    strip_source_prefix: bool = False

    def __post_init__(self) -> None:
        """Reject negative expansion and malformed brackets."""
        if self.expansion < 0:
            msg = f"expansion must be non-negative, got {self.expansion}"
            raise ValueError(msg)
        if len(self.brackets) != 2:
            msg = f"brackets must be an (opening, closing) pair, got {self.brackets!r}"
            raise ValueError(msg)


def pseudolocalize_text(text: str, config: PseudoConfig | None = None) -> str:
    """Pseudo-translate one string.

    Leading and trailing whitespace and the ending punctuation run stay
    outside the brackets, so punctuation checks compare the same endings.
    A string that is nothing but punctuation is bracketed whole.

    Example:
        >>> pseudolocalize_text("Connected to %1")
        '[Çöññéçţéđ ţö %1~~~~~]'
        >>> pseudolocalize_text("Set Custom DNS...", PseudoConfig(expansion=0))
        '[Šéţ Çûšţöɱ ĐÑŠ]...'
    """
    if config is None:
        config = PseudoConfig()
    core = text.strip()
    if not core:
        return text
    lead = text[: len(text) - len(text.lstrip())]
    trail = text[len(text.rstrip()) :]

    spans = protected_spans(core)
    body_end = len(core) - len(ending_punctuation(core))
    for start, end in spans:
        # ";" closing an entity reference belongs to the entity
        if start < body_end < end:
            body_end = end
    if body_end == 0:
        body_end = len(core)

    parts: list[str] = []
    position = 0
    for start, end in spans:
        if end > body_end:
            break
        parts.append(_transform(core[position:start], config))
        parts.append(core[start:end])
        position = end
    parts.append(_transform(core[position:body_end], config))

    padding = _PADDING * math.ceil(len(core) * config.expansion)
    opening, closing = config.brackets
    return f"{lead}{opening}{''.join(parts)}{padding}{closing}{core[body_end:]}{trail}"


def _transform(fragment: str, config: PseudoConfig) -> str:
    return fragment.translate(_ACCENTED) if config.accents else fragment


def _source_text(message: Message, config: PseudoConfig) -> str:
    if config.strip_source_prefix:
        prefix = split_source_prefix(message.source)
        if prefix is not None:
            return prefix.text
    return message.source


def _pseudo_message(message: Message, config: PseudoConfig, form_count: int) -> Message:
    text = pseudolocalize_text(_source_text(message, config), config)
    if message.numerus:
        translation = Translation(forms=(text,) * form_count, type=TranslationType.FINISHED)
    else:
        translation = Translation(text=text, type=TranslationType.FINISHED)
    return replace(message, translation=translation)


def pseudolocalize(
    catalog: Catalog, *, config: PseudoConfig | None = None, language: str | None = None
) -> Catalog:
    """Give every live message a finished pseudo-translation.

    Args:
        catalog: Catalog or template to transform
        config: Transformation settings (default: PseudoConfig())
        language: Language attribute of the result (default: the catalog's);
            decides the number of numerus forms

    Returns:
        New catalog; obsolete and vanished entries are copied unchanged
    """
    if config is None:
        config = PseudoConfig()
    target_language = language or catalog.language
    form_count = numerus_form_count(target_language)

    contexts = tuple(
        replace(
            context,
            messages=tuple(
                message if message.is_obsolete else _pseudo_message(message, config, form_count)
                for message in context.messages
            ),
        )
        for context in catalog.contexts
    )
    logger.info(
        "Pseudo-localized %d message(s) for %s", catalog.message_count, target_language or "-"
    )
    return replace(catalog, contexts=contexts, language=target_language, annotations=())
