"""Completion statistics for translation catalogs.

Counts are taken per context and summed for the catalog. Every live
message falls into exactly one of finished, unfinished and empty, so
``finished + unfinished + empty == total``. Obsolete and vanished entries
are counted separately and never affect completion.

Python 3.13+.
"""

from dataclasses import dataclass

from tscatalog.enums import TranslationType
from tscatalog.syntax import Catalog, Context

__all__ = ["CatalogStatistics", "ContextStatistics", "compute_statistics"]


@dataclass(frozen=True, slots=True)
class ContextStatistics:
    """Message counts of one context.

    Attributes:
        name: Context name
        total: Live messages
        finished: Live messages with a finished, non-empty translation
        unfinished: Live messages marked unfinished
        empty: Live messages marked finished whose translation is empty
        obsolete: Obsolete and vanished entries
        source_words: Whitespace-separated words in live source texts
    """

    name: str
    total: int = 0
    finished: int = 0
    unfinished: int = 0
    empty: int = 0
    obsolete: int = 0
    source_words: int = 0

    @property
    def completion(self) -> float:
        """Finished share of live messages (1.0 when there are none)."""
        return self.finished / self.total if self.total else 1.0


@dataclass(frozen=True, slots=True)
class CatalogStatistics:
    """Message counts of a catalog, per context and in total.

    Example:
        >>> stats = compute_statistics(parse_ts(document))
        >>> f"{stats.completion:.0%}"
        '97%'
    """

    language: str | None
    contexts: tuple[ContextStatistics, ...]

    @property
    def total(self) -> int:
        """Live messages."""
        return sum(c.total for c in self.contexts)

    @property
    def finished(self) -> int:
        """Live messages with a finished, non-empty translation."""
        return sum(c.finished for c in self.contexts)

    @property
    def unfinished(self) -> int:
        """Live messages marked unfinished."""
        return sum(c.unfinished for c in self.contexts)

    @property
    def empty(self) -> int:
        """Finished messages without text."""
        return sum(c.empty for c in self.contexts)

    @property
    def obsolete(self) -> int:
        """Obsolete and vanished entries."""
        return sum(c.obsolete for c in self.contexts)

    @property
    def source_words(self) -> int:
        """Words in live source texts."""
        return sum(c.source_words for c in self.contexts)

    @property
    def completion(self) -> float:
        """Finished share of live messages (1.0 for an empty catalog)."""
        total = self.total
        return self.finished / total if total else 1.0

    def as_dict(self) -> dict[str, object]:
        """JSON-compatible representation."""
        return {
            "language": self.language,
            "total": self.total,
            "finished": self.finished,
            "unfinished": self.unfinished,
            "empty": self.empty,
            "obsolete": self.obsolete,
            "source_words": self.source_words,
            "completion": round(self.completion, 4),
            "contexts": [
                {
                    "name": c.name,
                    "total": c.total,
                    "finished": c.finished,
                    "unfinished": c.unfinished,
                    "empty": c.empty,
                    "obsolete": c.obsolete,
                    "source_words": c.source_words,
                    "completion": round(c.completion, 4),
                }
                for c in self.contexts
            ],
        }


def _context_statistics(context: Context) -> ContextStatistics:
    total = finished = unfinished = empty = obsolete = words = 0
    for message in context.messages:
        if message.is_obsolete:
            obsolete += 1
            continue
        total += 1
        words += len(message.source.split())
        if message.translation.type == TranslationType.UNFINISHED:
            unfinished += 1
        elif message.translation.is_empty:
            empty += 1
        else:
            finished += 1
    return ContextStatistics(
        name=context.name,
        total=total,
        finished=finished,
        unfinished=unfinished,
        empty=empty,
        obsolete=obsolete,
        source_words=words,
    )


def compute_statistics(catalog: Catalog) -> CatalogStatistics:
    """Count finished, unfinished, empty and obsolete messages per context."""
    return CatalogStatistics(
        language=catalog.language,
        contexts=tuple(_context_statistics(context) for context in catalog.contexts),
    )
