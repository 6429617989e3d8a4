"""Qt Linguist catalog model.

Immutable node definitions for the contents of a .ts document: the catalog,
its contexts, their messages and the message translations.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from tscatalog.enums import TranslationType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "SourcePosition",
    "Annotation",
    "MessageKey",
    # Catalog structure
    "Catalog",
    "Context",
    "Message",
    "Location",
    "Translation",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class SourcePosition:
    """Start of an element in the .ts document.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate position invariants."""
        if self.line < 1:
            msg = f"SourcePosition.line must be >= 1, got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourcePosition.column must be >= 1, got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Annotation:
    """Structural problem found while parsing a well-formed document.

    Attributes:
        code: Problem code (e.g., "unknown-element", "missing-source")
        message: Human-readable description
        position: Where the problem starts (optional)

    Example:
        Annotation(
            code="missing-source",
            message="<message> without <source> dropped",
            position=SourcePosition(line=12, column=5),
        )
    """

    code: str
    message: str
    position: SourcePosition | None = None


@dataclass(frozen=True, slots=True, order=True)
class MessageKey:
    """Lookup key of a message.

    Two messages with the same source text in one context are distinct if and
    only if their disambiguation comments differ.

    Attributes:
        context: Context name
        source: Source text
        comment: Disambiguation comment ("" when absent)
    """

    context: str
    source: str
    comment: str = ""


# ============================================================================
# CATALOG STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Location:
    """Reference from a message to the UI source that uses it.

    Stored resolved: relative lines written by lupdate are converted to
    absolute line numbers and the inherited filename is filled in.

    Attributes:
        filename: Path of the referencing file, relative to the .ts file
        line: Line number in that file
    """

    filename: str | None = None
    line: int | None = None


@dataclass(frozen=True, slots=True)
class Translation:
    """Translated text of a message.

    Attributes:
        text: Translation of a singular message
        forms: Numerus forms of a plural message, in Qt form order
        type: Review state; FINISHED mirrors a <translation> without type attribute
    """

    text: str = ""
    forms: tuple[str, ...] = ()
    type: TranslationType = TranslationType.FINISHED

    @property
    def is_empty(self) -> bool:
        """True if neither text nor any numerus form carries content."""
        return not self.text and not any(self.forms)

    @property
    def texts(self) -> tuple[str, ...]:
        """All translated strings: the numerus forms, or the single text."""
        return self.forms if self.forms else (self.text,)


@dataclass(frozen=True, slots=True, weakref_slot=True)
class Message:
    """One translatable string.

    Attributes:
        source: Source text (lookup key)
        translation: Translated text and its state
        comment: Disambiguation comment ("" when absent)
        extracomment: Developer note for translators
        translatorcomment: Translator's own note
        oldsource: Previous source text (fuzzy match by lupdate)
        oldcomment: Previous disambiguation comment
        id: Text ID for id-based translation
        numerus: True for plural (%n) messages
        locations: Where the string is used
        extras: <extra-NAME> elements as (NAME, value) pairs
        position: Position of the <message> element
    """

    source: str
    translation: Translation = field(default_factory=Translation)
    comment: str = ""
    extracomment: str | None = None
    translatorcomment: str | None = None
    oldsource: str | None = None
    oldcomment: str | None = None
    id: str | None = None
    numerus: bool = False
    locations: tuple[Location, ...] = ()
    extras: tuple[tuple[str, str], ...] = ()
    position: SourcePosition | None = field(default=None, compare=False)

    @property
    def is_obsolete(self) -> bool:
        """True for messages whose source string no longer exists."""
        return self.translation.type in (TranslationType.OBSOLETE, TranslationType.VANISHED)

    @property
    def is_finished(self) -> bool:
        """True for reviewed translations."""
        return self.translation.type == TranslationType.FINISHED

    def key(self, context: str) -> MessageKey:
        """Lookup key of this message inside the given context."""
        return MessageKey(context, self.source, self.comment)


@dataclass(frozen=True, slots=True)
class Context:
    """Group of messages belonging to one UI class or component.

    Attributes:
        name: Context name
        messages: Messages in document order
        comment: Context-level comment (rare)
        position: Position of the <context> element
    """

    name: str
    messages: tuple[Message, ...] = ()
    comment: str | None = None
    position: SourcePosition | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class Catalog:
    """Parsed .ts document.

    Attributes:
        contexts: Contexts in document order
        language: Target language (e.g., "de_DE"); None for templates
        source_language: Language of the source texts (optional)
        version: TS format version
        annotations: Structural problems found while parsing
    """

    contexts: tuple[Context, ...] = ()
    language: str | None = None
    source_language: str | None = None
    version: str = "2.1"
    annotations: tuple[Annotation, ...] = field(default=(), compare=False)

    def iter_messages(self) -> Iterator[tuple[str, Message]]:
        """Yield (context name, message) pairs in document order."""
        for context in self.contexts:
            for message in context.messages:
                yield context.name, message

    @property
    def message_count(self) -> int:
        """Number of live (not obsolete or vanished) messages."""
        return sum(1 for _, message in self.iter_messages() if not message.is_obsolete)

    @property
    def total_count(self) -> int:
        """Number of messages including obsolete ones."""
        return sum(len(context.messages) for context in self.contexts)

    def get_context(self, name: str) -> Context | None:
        """Return the first context with the given name, if any."""
        for context in self.contexts:
            if context.name == name:
                return context
        return None

    def find(self, context: str, source: str, comment: str = "") -> Message | None:
        """Return the first message matching the exact lookup key.

        Contexts may appear several times in hand-edited documents; all
        occurrences are searched.
        """
        for context_name, message in self.iter_messages():
            if (
                context_name == context
                and message.source == source
                and message.comment == comment
            ):
                return message
        return None
