"""Merge an existing translation catalog with a freshly extracted template.

Follows lupdate's update rules. For every template message, in this order:

1. Exact key match: the translation is kept; locations, developer
   comments, id and numerus flag come from the template. Obsolete entries
   come back as finished, vanished ones as unfinished.
2. Same source text with a changed disambiguation comment: translation
   reused, marked unfinished, ``oldcomment`` records the previous comment.
3. Fuzzy match: the most similar unmatched source text of the same context
   (difflib ratio at or above the threshold) lends its translation, marked
   unfinished, ``oldsource`` records the previous text.
4. Same-text heuristic: an identical source text translated and finished
   in any context provides an unfinished copy.
5. Otherwise the message is new, unfinished and empty.

Existing messages matched by none of these become obsolete (finished) or
vanished (unfinished) and lose their locations. Unmatched messages without
any translated text are dropped.

Python 3.13+.
"""

import logging
from dataclasses import dataclass, replace
from difflib import SequenceMatcher

from tscatalog.constants import DEFAULT_FUZZY_THRESHOLD
from tscatalog.diagnostics import ErrorTemplate, TSCatalogError
from tscatalog.enums import TranslationType
from tscatalog.locale_utils import normalize_locale
from tscatalog.runtime.plural_rules import numerus_form_count
from tscatalog.syntax import Catalog, Context, Message, MessageKey, Translation

__all__ = ["MergeResult", "merge_catalogs"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Merged catalog and what happened to its messages.

    Attributes:
        catalog: Merged catalog
        same: Template messages whose translation was found by key
        new: Template messages without any reusable translation
        fuzzy: Translations reused from a changed source text or comment
        same_text: Translations copied from identical source texts elsewhere
        obsoleted: Existing messages kept as obsolete or vanished
        dropped: Existing messages removed
    """

    catalog: Catalog
    same: int = 0
    new: int = 0
    fuzzy: int = 0
    same_text: int = 0
    obsoleted: int = 0
    dropped: int = 0

    def summary(self) -> str:
        """One-line report in the style of lupdate's console output."""
        found = self.same + self.new + self.fuzzy + self.same_text
        return (
            f"Found {found} source text(s) ({self.new} new and {self.same} already existing); "
            f"{self.fuzzy} fuzzy, {self.same_text} same-text, "
            f"{self.obsoleted} obsolete, {self.dropped} dropped"
        )


def _revive(translation_type: TranslationType) -> TranslationType:
    match translation_type:
        case TranslationType.OBSOLETE:
            return TranslationType.FINISHED
        case TranslationType.VANISHED:
            return TranslationType.UNFINISHED
        case _:
            return translation_type


def _retire(translation_type: TranslationType) -> TranslationType:
    match translation_type:
        case TranslationType.FINISHED:
            return TranslationType.OBSOLETE
        case TranslationType.UNFINISHED:
            return TranslationType.VANISHED
        case _:
            return translation_type


def _reshape(
    translation: Translation, numerus: bool, form_count: int, translation_type: TranslationType
) -> Translation:
    """Fit a reused translation to the template message's singular/plural shape."""
    if numerus and not translation.forms:
        forms = (translation.text, *([""] * (form_count - 1)))
        return Translation(forms=forms, type=TranslationType.UNFINISHED)
    if not numerus and translation.forms:
        return Translation(text=translation.forms[0], type=TranslationType.UNFINISHED)
    return replace(translation, type=translation_type)


class _Merger:
    """State of one merge run."""

    def __init__(
        self,
        existing: Catalog,
        *,
        fuzzy: bool,
        same_text: bool,
        fuzzy_threshold: float,
    ) -> None:
        self.existing = existing
        self.use_fuzzy = fuzzy
        self.use_same_text = same_text
        self.threshold = fuzzy_threshold
        self.form_count = numerus_form_count(existing.language)
        self.counts = {"same": 0, "new": 0, "fuzzy": 0, "same_text": 0}

        # Existing messages in document order, indexed several ways.
        self.entries: list[tuple[str, Message]] = list(existing.iter_messages())
        self.used: set[int] = set()
        self.by_key: dict[MessageKey, int] = {}
        self.by_context: dict[str, list[int]] = {}
        self.finished_by_source: dict[str, int] = {}
        for index, (context, message) in enumerate(self.entries):
            self.by_key.setdefault(message.key(context), index)
            self.by_context.setdefault(context, []).append(index)
            if message.translation.type == TranslationType.FINISHED and not (
                message.translation.is_empty
            ):
                self.finished_by_source.setdefault(message.source, index)

    def _carry(self, template: Message, old: Message, translation: Translation) -> Message:
        """Template message with the translator-owned fields of an existing one."""
        return replace(
            template,
            translation=translation,
            translatorcomment=old.translatorcomment,
            extras=old.extras or template.extras,
        )

    def _exact(self, context: str, template: Message) -> Message | None:
        index = self.by_key.get(template.key(context))
        if index is None or index in self.used:
            return None
        self.used.add(index)
        old = self.entries[index][1]
        translation = _reshape(
            old.translation,
            template.numerus,
            self.form_count,
            _revive(old.translation.type),
        )
        merged = self._carry(template, old, translation)
        return replace(merged, oldsource=old.oldsource, oldcomment=old.oldcomment)

    def _comment_changed(self, context: str, template: Message) -> Message | None:
        for index in self.by_context.get(context, ()):
            old = self.entries[index][1]
            if index in self.used or old.source != template.source or old.translation.is_empty:
                continue
            self.used.add(index)
            translation = _reshape(
                old.translation, template.numerus, self.form_count, TranslationType.UNFINISHED
            )
            return replace(
                self._carry(template, old, translation), oldcomment=old.comment or None
            )
        return None

    def _similar(self, context: str, template: Message) -> Message | None:
        best_index: int | None = None
        best_ratio = self.threshold
        matcher = SequenceMatcher(None, b=template.source)
        for index in self.by_context.get(context, ()):
            old = self.entries[index][1]
            if index in self.used or old.translation.is_empty:
                continue
            matcher.set_seq1(old.source)
            if matcher.real_quick_ratio() < best_ratio or matcher.quick_ratio() < best_ratio:
                continue
            ratio = matcher.ratio()
            if ratio > best_ratio or (best_index is None and ratio >= best_ratio):
                best_index, best_ratio = index, ratio
        if best_index is None:
            return None
        self.used.add(best_index)
        old = self.entries[best_index][1]
        logger.debug(
            "Fuzzy match %.2f: %r -> %r", best_ratio, old.source[:50], template.source[:50]
        )
        translation = _reshape(
            old.translation, template.numerus, self.form_count, TranslationType.UNFINISHED
        )
        return replace(self._carry(template, old, translation), oldsource=old.source)

    def _same_text(self, template: Message) -> Message | None:
        index = self.finished_by_source.get(template.source)
        if index is None:
            return None
        old = self.entries[index][1]
        translation = _reshape(
            old.translation, template.numerus, self.form_count, TranslationType.UNFINISHED
        )
        return replace(template, translation=translation)

    def _new(self, template: Message) -> Message:
        if template.numerus:
            translation = Translation(
                forms=("",) * self.form_count, type=TranslationType.UNFINISHED
            )
        else:
            translation = Translation(type=TranslationType.UNFINISHED)
        return replace(template, translation=translation, translatorcomment=None)

    def merge_message(self, context: str, template: Message) -> Message:
        merged = self._exact(context, template)
        if merged is not None:
            self.counts["same"] += 1
            return merged
        if self.use_fuzzy:
            merged = self._comment_changed(context, template) or self._similar(context, template)
            if merged is not None:
                self.counts["fuzzy"] += 1
                return merged
        if self.use_same_text:
            merged = self._same_text(template)
            if merged is not None:
                self.counts["same_text"] += 1
                return merged
        self.counts["new"] += 1
        return self._new(template)

    def leftovers(self) -> list[tuple[str, Message]]:
        """Unmatched existing messages in document order."""
        return [entry for index, entry in enumerate(self.entries) if index not in self.used]


def _check_languages(existing: Catalog, template: Catalog) -> None:
    if (
        existing.language
        and template.language
        and normalize_locale(existing.language) != normalize_locale(template.language)
    ):
        raise TSCatalogError(
            ErrorTemplate.merge_language_mismatch(existing.language, template.language)
        )


def merge_catalogs(
    existing: Catalog,
    template: Catalog,
    *,
    keep_obsolete: bool = True,
    fuzzy: bool = True,
    same_text: bool = True,
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> MergeResult:
    """Update a translation catalog to a new set of source strings.

    Args:
        existing: Current translation catalog
        template: Freshly extracted catalog (usually without translations)
        keep_obsolete: Keep unmatched messages as obsolete/vanished
        fuzzy: Reuse translations of changed source texts and comments
        same_text: Copy translations of identical source texts across contexts
        fuzzy_threshold: Minimum similarity ratio in (0, 1] for fuzzy reuse

    Returns:
        MergeResult with the merged catalog and per-outcome counts

    Raises:
        TSCatalogError: If both catalogs declare different languages
        ValueError: If fuzzy_threshold is outside (0, 1]

    Example:
        >>> result = merge_catalogs(parse_ts(de_ts), parse_ts(template_ts))
        >>> result.summary()
        'Found 412 source text(s) (3 new and 405 already existing); ...'
    """
    if not 0 < fuzzy_threshold <= 1:
        msg = f"fuzzy_threshold must be in (0, 1], got {fuzzy_threshold}"
        raise ValueError(msg)
    _check_languages(existing, template)

    merger = _Merger(existing, fuzzy=fuzzy, same_text=same_text, fuzzy_threshold=fuzzy_threshold)

    # Context name -> merged messages; template order first.
    merged: dict[str, list[Message]] = {}
    comments: dict[str, str | None] = {}
    for context in template.contexts:
        bucket = merged.setdefault(context.name, [])
        comments.setdefault(context.name, context.comment)
        for message in context.messages:
            if message.is_obsolete:
                continue
            bucket.append(merger.merge_message(context.name, message))

    obsoleted = dropped = 0
    for context_name, message in merger.leftovers():
        if not keep_obsolete or message.translation.is_empty:
            dropped += 1
            continue
        retired = replace(
            message,
            translation=replace(
                message.translation, type=_retire(message.translation.type)
            ),
            locations=(),
        )
        merged.setdefault(context_name, []).append(retired)
        if context_name not in comments:
            source_context = existing.get_context(context_name)
            comments[context_name] = source_context.comment if source_context else None
        obsoleted += 1

    catalog = Catalog(
        contexts=tuple(
            Context(name=name, messages=tuple(messages), comment=comments.get(name))
            for name, messages in merged.items()
            if messages
        ),
        language=existing.language or template.language,
        source_language=template.source_language or existing.source_language,
        version=existing.version,
    )
    result = MergeResult(
        catalog=catalog,
        same=merger.counts["same"],
        new=merger.counts["new"],
        fuzzy=merger.counts["fuzzy"],
        same_text=merger.counts["same_text"],
        obsoleted=obsoleted,
        dropped=dropped,
    )
    logger.info("Merged catalog: %s", result.summary())
    return result
