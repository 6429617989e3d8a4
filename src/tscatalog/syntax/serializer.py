"""Serialize a catalog back to a .ts document.

Writes the layout of lupdate so that catalogs round-trip through version
control without spurious diffs:

- XML declaration and ``<!DOCTYPE TS>`` header;
- ``<context>`` at column 0, each further nesting level indented by four
  spaces;
- message children in lupdate order (location, source, oldsource, comment,
  oldcomment, extracomment, translatorcomment, translation, extra-*);
- lupdate's escaping: ``& < > " '`` as entities, control characters as
  ``<byte value="xHH"/>``, non-ASCII whitespace as numeric references.

Python 3.13+.
"""

from tscatalog.constants import TS_DOCTYPE, TS_INDENT, TS_XML_DECLARATION
from tscatalog.enums import LocationStyle, TranslationType

from .ast import Catalog, Context, Location, Message

__all__ = ["escape", "serialize"]

_ENTITIES: dict[str, str] = {
    '"': "&quot;",
    "&": "&amp;",
    ">": "&gt;",
    "<": "&lt;",
    "'": "&apos;",
}

_I1 = TS_INDENT
_I2 = TS_INDENT * 2
_I3 = TS_INDENT * 3


def escape(text: str) -> str:
    """Escape text exactly like lupdate.

    Args:
        text: Raw text

    Returns:
        Text safe for element content and attribute values

    Example:
        >>> escape('Tom & "Jerry"')
        'Tom &amp; &quot;Jerry&quot;'
        >>> escape("a\\rb")
        'a<byte value="xd"/>b'
    """
    parts: list[str] = []
    for char in text:
        if char in _ENTITIES:
            parts.append(_ENTITIES[char])
            continue
        code = ord(char)
        if code < 0x20 and char not in "\n\t":
            parts.append(f'<byte value="x{code:x}"/>')
        elif code > 0x7F and char.isspace():
            parts.append(f"&#x{code:x};")
        else:
            parts.append(char)
    return "".join(parts)


class _LocationWriter:
    """Renders <location> elements, tracking relative-style state.

    State spans the whole document, mirroring how relative locations are
    resolved when the file is read back.
    """

    __slots__ = ("_current_file", "_current_line", "_style")

    def __init__(self, style: LocationStyle) -> None:
        self._style = style
        self._current_file = ""
        self._current_line: dict[str, int] = {}

    def render(self, locations: tuple[Location, ...]) -> list[str]:
        if self._style == LocationStyle.NONE:
            return []

        lines: list[str] = []
        message_file = self._current_file
        for index, location in enumerate(locations):
            filename = location.filename or ""
            line = ""
            if self._style == LocationStyle.RELATIVE:
                if location.line is not None:
                    delta = location.line - self._current_line.get(filename, 0)
                    line = f"+{delta}" if delta >= 0 else str(delta)
                    self._current_line[filename] = location.line
                if filename != message_file:
                    if index == 0:
                        self._current_file = filename
                    message_file = filename
                else:
                    filename = ""
            elif location.line is not None:
                line = str(location.line)

            attrs = ""
            if filename:
                attrs += f' filename="{escape(filename)}"'
            if line:
                attrs += f' line="{line}"'
            lines.append(f"{_I2}<location{attrs}/>")
        return lines


def _translation_lines(message: Message) -> list[str]:
    translation = message.translation
    attr = ""
    if translation.type != TranslationType.FINISHED:
        attr = f' type="{translation.type}"'

    if not message.numerus:
        return [f"{_I2}<translation{attr}>{escape(translation.text)}</translation>"]

    lines = [f"{_I2}<translation{attr}>"]
    lines.extend(f"{_I3}<numerusform>{escape(form)}</numerusform>" for form in translation.forms)
    lines.append(f"{_I2}</translation>")
    return lines


def _message_lines(message: Message, locations: _LocationWriter) -> list[str]:
    attrs = ""
    if message.id:
        attrs += f' id="{escape(message.id)}"'
    if message.numerus:
        attrs += ' numerus="yes"'

    lines = [f"{_I1}<message{attrs}>"]
    if not message.is_obsolete:
        lines.extend(locations.render(message.locations))
    lines.append(f"{_I2}<source>{escape(message.source)}</source>")

    optional = (
        ("oldsource", message.oldsource),
        ("comment", message.comment),
        ("oldcomment", message.oldcomment),
        ("extracomment", message.extracomment),
        ("translatorcomment", message.translatorcomment),
    )
    lines.extend(f"{_I2}<{tag}>{escape(value)}</{tag}>" for tag, value in optional if value)
    lines.extend(_translation_lines(message))
    lines.extend(
        f"{_I2}<extra-{name}>{escape(value)}</extra-{name}>" for name, value in message.extras
    )
    lines.append(f"{_I1}</message>")
    return lines


def _context_lines(context: Context, locations: _LocationWriter) -> list[str]:
    lines = ["<context>", f"{_I1}<name>{escape(context.name)}</name>"]
    if context.comment:
        lines.append(f"{_I1}<comment>{escape(context.comment)}</comment>")
    for message in context.messages:
        lines.extend(_message_lines(message, locations))
    lines.append("</context>")
    return lines


def serialize(catalog: Catalog, *, location_style: LocationStyle = LocationStyle.ABSOLUTE) -> str:
    """Serialize a catalog to .ts document text.

    Args:
        catalog: Catalog to serialize
        location_style: How <location> elements are written

    Returns:
        Document text ending with a newline

    Example:
        >>> from tscatalog.syntax.ast import Catalog, Context, Message, Translation
        >>> catalog = Catalog(
        ...     contexts=(Context("Main", (Message("Quit", Translation("Beenden")),)),),
        ...     language="de_DE",
        ... )
        >>> print(serialize(catalog), end="")
        <?xml version="1.0" encoding="utf-8"?>
        <!DOCTYPE TS>
        <TS version="2.1" language="de_DE">
        <context>
            <name>Main</name>
            <message>
                <source>Quit</source>
                <translation>Beenden</translation>
            </message>
        </context>
        </TS>
    """
    header = f'<TS version="{escape(catalog.version)}"'
    if catalog.language:
        header += f' language="{escape(catalog.language)}"'
    if catalog.source_language:
        header += f' sourcelanguage="{escape(catalog.source_language)}"'
    header += ">"

    lines = [TS_XML_DECLARATION, TS_DOCTYPE, header]
    locations = _LocationWriter(location_style)
    for context in catalog.contexts:
        lines.extend(_context_lines(context, locations))
    lines.append("</TS>")
    return "\n".join(lines) + "\n"
