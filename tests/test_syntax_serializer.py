"""Tests for the lupdate-compatible serializer."""

from __future__ import annotations

from hypothesis import event, given, settings

from tscatalog.enums import LocationStyle, TranslationType
from tscatalog.syntax import (
    Catalog,
    Context,
    Location,
    Message,
    Translation,
    escape,
    parse,
    serialize,
)

from tests.strategies import catalogs


def _single(message: Message, language: str | None = "de_DE") -> Catalog:
    return Catalog(contexts=(Context("Main", (message,)),), language=language)


class TestEscape:
    """lupdate's escaping rules."""

    def test_entities(self) -> None:
        """Markup characters and quotes become entities."""
        assert escape("<b>Tom & \"Jerry\"</b> 'x'") == (
            "&lt;b&gt;Tom &amp; &quot;Jerry&quot;&lt;/b&gt; &apos;x&apos;"
        )

    def test_control_characters_as_byte_elements(self) -> None:
        """Control characters other than tab and newline become <byte>."""
        assert escape("a\rb\x01") == 'a<byte value="xd"/>b<byte value="x1"/>'

    def test_tab_and_newline_kept(self) -> None:
        """Tab and newline are written literally."""
        assert escape("a\tb\nc") == "a\tb\nc"

    def test_non_ascii_whitespace_as_reference(self) -> None:
        """Non-breaking space is written as a character reference."""
        assert escape("10\xa0MB") == "10&#xa0;MB"

    def test_non_ascii_letters_kept(self) -> None:
        """Other non-ASCII text is written as is."""
        assert escape("Größe") == "Größe"


class TestLayout:
    """Document layout."""

    def test_header_and_indentation(self) -> None:
        """Declaration, doctype and four-space indentation."""
        text = serialize(_single(Message("Quit", Translation("Beenden"))))

        assert text == (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            "<!DOCTYPE TS>\n"
            '<TS version="2.1" language="de_DE">\n'
            "<context>\n"
            "    <name>Main</name>\n"
            "    <message>\n"
            "        <source>Quit</source>\n"
            "        <translation>Beenden</translation>\n"
            "    </message>\n"
            "</context>\n"
            "</TS>\n"
        )

    def test_template_without_language(self) -> None:
        """Templates carry no language attribute."""
        text = serialize(Catalog(source_language="en_US"))

        assert '<TS version="2.1" sourcelanguage="en_US">' in text

    def test_unfinished_translation(self) -> None:
        """Non-finished states are written as type attribute."""
        text = serialize(_single(Message("Quit", Translation(type=TranslationType.UNFINISHED))))

        assert '        <translation type="unfinished"></translation>\n' in text

    def test_numerus_message(self) -> None:
        """Numerus forms are nested one level deeper."""
        message = Message(
            "%n file(s)", Translation(forms=("%n Datei", "%n Dateien")), numerus=True
        )

        text = serialize(_single(message))

        assert '    <message numerus="yes">\n' in text
        assert (
            "        <translation>\n"
            "            <numerusform>%n Datei</numerusform>\n"
            "            <numerusform>%n Dateien</numerusform>\n"
            "        </translation>\n"
        ) in text

    def test_child_order(self) -> None:
        """Optional children follow lupdate's order."""
        message = Message(
            "Quit",
            Translation("Beenden"),
            comment="menu",
            extracomment="tray",
            translatorcomment="short",
            oldsource="Exit",
            oldcomment="old",
            id="quit",
            locations=(Location("main.cpp", 10),),
            extras=(("po-flags", "c-format"),),
        )

        lines = serialize(_single(message)).splitlines()
        start = lines.index('    <message id="quit">')

        assert [line.strip().split(">")[0] for line in lines[start + 1 : start + 11]] == [
            '<location filename="main.cpp" line="10"/',
            "<source",
            "<oldsource",
            "<comment",
            "<oldcomment",
            "<extracomment",
            "<translatorcomment",
            "<translation",
            "<extra-po-flags",
            "</message",
        ]

    def test_obsolete_messages_without_locations(self) -> None:
        """Obsolete entries never write locations."""
        message = Message(
            "Quit",
            Translation("Beenden", type=TranslationType.OBSOLETE),
            locations=(Location("main.cpp", 10),),
        )

        text = serialize(_single(message))

        assert "<location" not in text
        assert '<translation type="obsolete">Beenden</translation>' in text


class TestLocationStyles:
    """LocationStyle options."""

    def _catalog(self) -> Catalog:
        return _single(
            Message(
                "Quit",
                Translation("Beenden"),
                locations=(Location("main.cpp", 10), Location("main.cpp", 25)),
            )
        )

    def test_absolute(self) -> None:
        """Every location names file and line."""
        text = serialize(self._catalog())

        assert '<location filename="main.cpp" line="10"/>' in text
        assert '<location filename="main.cpp" line="25"/>' in text

    def test_relative(self) -> None:
        """Filename once, then line deltas."""
        text = serialize(self._catalog(), location_style=LocationStyle.RELATIVE)

        assert '<location filename="main.cpp" line="+10"/>' in text
        assert '<location line="+15"/>' in text

    def test_none(self) -> None:
        """No location elements at all."""
        text = serialize(self._catalog(), location_style=LocationStyle.NONE)

        assert "<location" not in text

    def test_relative_reads_back_absolute(self) -> None:
        """Relative output resolves to the original absolute lines."""
        catalog = Catalog(
            contexts=(
                Context(
                    "Main",
                    (
                        Message("A", locations=(Location("a.cpp", 50),)),
                        Message("B", locations=(Location("b.cpp", 5), Location("a.cpp", 20))),
                        Message("C", locations=(Location("a.cpp", 30),)),
                    ),
                ),
            )
        )

        text = serialize(catalog, location_style=LocationStyle.RELATIVE)

        assert parse(text) == catalog

    def test_german_catalog_reproduced(self, german_document: str) -> None:
        """A relative-style lupdate document resolves and re-serializes stably."""
        catalog = parse(german_document)

        absolute = serialize(catalog)

        assert '<location filename="../src/ui/NetworkPage.qml" line="307"/>' in absolute
        assert parse(absolute) == catalog


class TestRoundTrip:
    """serialize() output parses back to the same catalog."""

    def test_escaped_text_round_trips(self) -> None:
        """Escaped characters are restored by the parser."""
        message = Message("Tom & Jerry <b>\r\n", Translation("10\xa0MB \"x\" 'y'"))
        catalog = _single(message)

        assert parse(serialize(catalog)) == catalog

    @settings(deadline=None)
    @given(catalogs())
    def test_catalog_round_trip(self, catalog: Catalog) -> None:
        """PROPERTY: parse(serialize(c)) == c."""
        event(f"contexts={len(catalog.contexts)}")
        event(f"messages={catalog.total_count}")

        assert parse(serialize(catalog)) == catalog

    @settings(deadline=None)
    @given(catalogs())
    def test_serialization_is_stable(self, catalog: Catalog) -> None:
        """PROPERTY: serializing a parsed document reproduces it byte for byte."""
        text = serialize(catalog, location_style=LocationStyle.RELATIVE)
        event(f"length={'long' if len(text) > 1000 else 'short'}")

        assert serialize(parse(text), location_style=LocationStyle.RELATIVE) == text
