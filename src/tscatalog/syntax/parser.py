"""Qt Linguist .ts document parser.

Builds the immutable catalog model from a .ts document using the expat binding
of the standard library, which reports line and column of every element.

Architecture:
    Parsing happens in two passes. The expat callbacks build a lightweight
    element tree (:class:`_Element`) that keeps character data, ``<byte>``
    escapes and start positions. The tree is then walked into
    :class:`~tscatalog.syntax.ast.Catalog` nodes, collecting structural
    problems as :class:`~tscatalog.syntax.ast.Annotation` objects.

Failure policy:
    - Documents that are not well-formed XML, declare entities, exceed the
      size limit, hold lone surrogates or use a root element other than
      ``<TS>`` raise
      :class:`~tscatalog.diagnostics.errors.TSSyntaxError`.
    - Everything else (unknown elements, messages without ``<source>``,
      contexts without ``<name>``, invalid attribute values) is annotated and
      parsing continues (robustness principle).

Security:
    Entity declarations are rejected before they can be expanded and
    parameter entities are never parsed, so entity expansion attacks cannot
    reach the tree builder. Input size is bounded by ``max_source_size``.

Python 3.13+.
"""

import logging
from dataclasses import dataclass, field
from xml.parsers import expat

from tscatalog.constants import MAX_SOURCE_SIZE, TS_FORMAT_VERSION
from tscatalog.diagnostics.errors import TSSyntaxError
from tscatalog.diagnostics.templates import ErrorTemplate
from tscatalog.enums import TranslationType

from .ast import (
    Annotation,
    Catalog,
    Context,
    Location,
    Message,
    SourcePosition,
    Translation,
)

__all__ = ["TSParser", "parse"]

logger = logging.getLogger(__name__)

# Message children that carry plain text.
_MESSAGE_TEXT_FIELDS: frozenset[str] = frozenset(
    {"oldsource", "oldcomment", "extracomment", "translatorcomment"}
)

# Elements lupdate writes that carry no information kept in the model.
_IGNORED_ELEMENTS: frozenset[str] = frozenset({"dependencies", "userdata", "defaultcodec"})

_TRANSLATION_TYPES: dict[str, TranslationType] = {
    "unfinished": TranslationType.UNFINISHED,
    "obsolete": TranslationType.OBSOLETE,
    "vanished": TranslationType.VANISHED,
}


def _encoded_size(source: str) -> int:
    """UTF-8 size of a str document.

    Raises:
        TSSyntaxError: If the text holds a lone surrogate
    """
    try:
        return len(source.encode("utf-8"))
    except UnicodeEncodeError as e:
        line_start = source.rfind("\n", 0, e.start) + 1
        diagnostic = ErrorTemplate.xml_malformed(
            f"unpaired surrogate U+{ord(source[e.start]):04X}",
            source.count("\n", 0, e.start) + 1,
            e.start - line_start + 1,
        )
        raise TSSyntaxError(diagnostic) from e


@dataclass(slots=True)
class _Element:
    """Element recorded by the expat callbacks."""

    tag: str
    attrs: dict[str, str]
    position: SourcePosition
    children: list["_Element | str"] = field(default_factory=list)

    def elements(self) -> list["_Element"]:
        return [child for child in self.children if isinstance(child, _Element)]


class _TreeBuilder:
    """Collects expat events into an :class:`_Element` tree."""

    __slots__ = ("_parser", "_stack", "root")

    def __init__(self, parser: expat.XMLParserType) -> None:
        self._parser = parser
        self._stack: list[_Element] = []
        self.root: _Element | None = None

    def _position(self) -> SourcePosition:
        # expat columns are 0-indexed
        return SourcePosition(
            line=self._parser.CurrentLineNumber,
            column=self._parser.CurrentColumnNumber + 1,
        )

    def start(self, tag: str, attrs: dict[str, str]) -> None:
        position = self._position()
        element = _Element(tag=tag, attrs=attrs, position=position)
        if self._stack:
            self._stack[-1].children.append(element)
        else:
            if tag != "TS":
                raise TSSyntaxError(
                    ErrorTemplate.invalid_root(tag, position.line, position.column)
                )
            self.root = element
        self._stack.append(element)

    def end(self, _tag: str) -> None:
        self._stack.pop()

    def data(self, text: str) -> None:
        if self._stack:
            self._stack[-1].children.append(text)

    def entity_declaration(self, name: str, *_args: object) -> None:
        raise TSSyntaxError(
            ErrorTemplate.entity_declaration_forbidden(
                name,
                self._parser.CurrentLineNumber,
                self._parser.CurrentColumnNumber + 1,
            )
        )


class TSParser:
    """Parser for Qt Linguist .ts documents.

    Thread-safe: instances hold configuration only, all parse state is local
    to each :meth:`parse` call.

    Attributes:
        max_source_size: Maximum allowed document size in bytes (default: 10 MB)

    Example:
        >>> catalog = TSParser().parse(
        ...     '<TS version="2.1" language="de_DE"><context><name>Main</name>'
        ...     "<message><source>Quit</source><translation>Beenden</translation>"
        ...     "</message></context></TS>"
        ... )
        >>> catalog.find("Main", "Quit").translation.text
        'Beenden'
    """

    __slots__ = ("_max_source_size",)

    def __init__(self, *, max_source_size: int | None = None) -> None:
        """Initialize parser with an optional size limit.

        Args:
            max_source_size: Maximum document size in bytes (default: 10 MB).
                            Set to 0 to disable the limit (trusted input only).
        """
        if max_source_size is not None and max_source_size < 0:
            msg = f"max_source_size must be >= 0, got {max_source_size}"
            raise ValueError(msg)
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )

    @property
    def max_source_size(self) -> int:
        """Maximum allowed document size in bytes."""
        return self._max_source_size

    def parse(self, source: str | bytes) -> Catalog:
        """Parse a .ts document into a Catalog.

        Args:
            source: Document content. Bytes are decoded according to the XML
                declaration (UTF-8 by default).

        Returns:
            Catalog with contexts in document order and the annotations
            collected for structural problems.

        Raises:
            TSSyntaxError: Malformed XML, entity declarations, a root element
                other than <TS>, input larger than max_source_size, or text
                with lone surrogates that has no UTF-8 encoding.
        """
        size = len(source) if isinstance(source, bytes) else _encoded_size(source)
        if self._max_source_size > 0 and size > self._max_source_size:
            raise TSSyntaxError(ErrorTemplate.source_too_large(size, self._max_source_size))

        root = self._build_tree(source)
        catalog = _CatalogBuilder().build(root)
        logger.debug(
            "Parsed catalog: %d context(s), %d message(s), %d annotation(s)",
            len(catalog.contexts),
            catalog.total_count,
            len(catalog.annotations),
        )
        return catalog

    @staticmethod
    def _build_tree(source: str | bytes) -> _Element:
        parser = expat.ParserCreate()
        parser.SetParamEntityParsing(expat.XML_PARAM_ENTITY_PARSING_NEVER)
        parser.buffer_text = True
        builder = _TreeBuilder(parser)
        parser.StartElementHandler = builder.start
        parser.EndElementHandler = builder.end
        parser.CharacterDataHandler = builder.data
        parser.EntityDeclHandler = builder.entity_declaration

        try:
            parser.Parse(source, True)
        except expat.ExpatError as e:
            diagnostic = ErrorTemplate.xml_malformed(
                expat.ErrorString(e.code), e.lineno, e.offset + 1
            )
            raise TSSyntaxError(diagnostic) from e

        if builder.root is None:  # pragma: no cover - expat rejects empty documents
            raise TSSyntaxError(ErrorTemplate.xml_malformed("no element found", 1, 1))
        return builder.root


class _CatalogBuilder:
    """Walks an element tree into catalog nodes.

    Location state spans the whole document: lupdate's relative style
    writes line deltas against the previous line seen for the same file,
    and omits the filename while it stays the same.
    """

    __slots__ = ("_annotations", "_current_file", "_current_line")

    def __init__(self) -> None:
        self._annotations: list[Annotation] = []
        self._current_file = ""
        self._current_line: dict[str, int] = {}

    def _annotate(self, code: str, message: str, position: SourcePosition) -> None:
        self._annotations.append(Annotation(code=code, message=message, position=position))

    def _unknown(self, element: _Element, parent: str) -> None:
        self._annotate(
            "unknown-element",
            f"Unexpected <{element.tag}> inside <{parent}> ignored",
            element.position,
        )

    def _text(self, element: _Element) -> str:
        """Character data of an element with <byte> escapes decoded."""
        variants = [
            child
            for child in element.children
            if isinstance(child, _Element) and child.tag == "lengthvariant"
        ]
        if variants:
            # Only the first (longest) length variant is kept
            return self._text(variants[0])

        parts: list[str] = []
        for child in element.children:
            if isinstance(child, str):
                parts.append(child)
            elif child.tag == "byte":
                parts.append(self._byte(child))
            else:
                self._unknown(child, element.tag)
        return "".join(parts)

    def _byte(self, element: _Element) -> str:
        value = element.attrs.get("value", "")
        try:
            code = int(value[1:], 16) if value[:1] in ("x", "X") else int(value, 10)
            return chr(code)
        except (ValueError, OverflowError):
            self._annotate(
                "invalid-byte-value",
                f"<byte value={value!r}> is not a character code",
                element.position,
            )
            return ""

    def build(self, root: _Element) -> Catalog:
        contexts: list[Context] = []
        for element in root.elements():
            if element.tag == "context":
                context = self._context(element)
                if context is not None:
                    contexts.append(context)
            elif element.tag not in _IGNORED_ELEMENTS:
                self._unknown(element, "TS")

        return Catalog(
            contexts=tuple(contexts),
            language=root.attrs.get("language") or None,
            source_language=root.attrs.get("sourcelanguage") or None,
            version=root.attrs.get("version", TS_FORMAT_VERSION),
            annotations=tuple(self._annotations),
        )

    def _context(self, element: _Element) -> Context | None:
        name: str | None = None
        comment: str | None = None
        messages: list[Message] = []
        for child in element.elements():
            match child.tag:
                case "name":
                    name = self._text(child)
                case "comment":
                    comment = self._text(child)
                case "message":
                    message = self._message(child)
                    if message is not None:
                        messages.append(message)
                case _:
                    self._unknown(child, "context")

        if name is None:
            self._annotate(
                "missing-context-name",
                f"<context> without <name> dropped ({len(messages)} message(s))",
                element.position,
            )
            return None
        return Context(
            name=name,
            messages=tuple(messages),
            comment=comment,
            position=element.position,
        )

    def _message(self, element: _Element) -> Message | None:
        numerus = element.attrs.get("numerus") == "yes"
        source: str | None = None
        comment = ""
        fields: dict[str, str] = {}
        translation = Translation(type=TranslationType.UNFINISHED)
        locations: list[Location] = []
        extras: list[tuple[str, str]] = []
        message_file = self._current_file

        for child in element.elements():
            tag = child.tag
            if tag == "location":
                location, message_file = self._location(child, message_file, not locations)
                if location is not None:
                    locations.append(location)
            elif tag == "source":
                source = self._text(child)
            elif tag == "comment":
                comment = self._text(child)
            elif tag in _MESSAGE_TEXT_FIELDS:
                fields[tag] = self._text(child)
            elif tag == "translation":
                translation = self._translation(child, numerus=numerus)
            elif tag.startswith("extra-"):
                extras.append((tag.removeprefix("extra-"), self._text(child)))
            elif tag not in _IGNORED_ELEMENTS:
                self._unknown(child, "message")

        if source is None:
            self._annotate(
                "missing-source",
                "<message> without <source> dropped",
                element.position,
            )
            return None

        return Message(
            source=source,
            translation=translation,
            comment=comment,
            extracomment=fields.get("extracomment"),
            translatorcomment=fields.get("translatorcomment"),
            oldsource=fields.get("oldsource"),
            oldcomment=fields.get("oldcomment"),
            id=element.attrs.get("id"),
            numerus=numerus,
            locations=tuple(locations),
            extras=tuple(extras),
            position=element.position,
        )

    def _location(
        self, element: _Element, message_file: str, first: bool
    ) -> tuple[Location | None, str]:
        """Resolve one <location>, returning it and the file later ones inherit."""
        filename = element.attrs.get("filename", "")
        if filename:
            if first:
                self._current_file = filename
            message_file = filename
        else:
            filename = message_file

        raw_line = element.attrs.get("line", "")
        if not raw_line:
            return Location(filename=filename or None, line=None), message_file

        try:
            line = int(raw_line)
        except ValueError:
            self._annotate(
                "invalid-location-line",
                f"<location line={raw_line!r}> is not a line number",
                element.position,
            )
            return None, message_file

        if raw_line[0] in "+-":
            line = self._current_line.get(filename, 0) + line
        # Absolute lines also move the anchor for later relative ones
        self._current_line[filename] = line
        return Location(filename=filename or None, line=line), message_file

    def _translation(self, element: _Element, *, numerus: bool) -> Translation:
        raw_type = element.attrs.get("type")
        if raw_type is None:
            translation_type = TranslationType.FINISHED
        elif raw_type in _TRANSLATION_TYPES:
            translation_type = _TRANSLATION_TYPES[raw_type]
        else:
            self._annotate(
                "invalid-translation-type",
                f"Unknown translation type {raw_type!r} treated as unfinished",
                element.position,
            )
            translation_type = TranslationType.UNFINISHED

        if not numerus:
            return Translation(text=self._text(element), type=translation_type)

        forms: list[str] = []
        for child in element.elements():
            if child.tag == "numerusform":
                forms.append(self._text(child))
            else:
                self._unknown(child, "translation")
        return Translation(forms=tuple(forms), type=translation_type)


_DEFAULT_PARSER = TSParser()


def parse(source: str | bytes) -> Catalog:
    """Parse a .ts document with the default size limit.

    Args:
        source: Document content

    Returns:
        Parsed Catalog

    Raises:
        TSSyntaxError: If the document cannot be parsed
    """
    return _DEFAULT_PARSER.parse(source)
