"""Hypothesis strategies for catalogs and UI strings.

Provides strategies for property-based testing of the parser, serializer,
introspection and the catalog tools.
"""

from __future__ import annotations

import string

from hypothesis import strategies as st
from hypothesis.strategies import composite

from tscatalog.enums import TranslationType
from tscatalog.syntax import Catalog, Context, Location, Message, Translation

# Characters that need escaping in .ts documents, plus some non-ASCII text.
_SPECIAL = "&<>\"'\t\r\x01  äöüßЖ…"

LOCALES = ("de_DE", "en_US", "ru_RU", "ja_JP", "ar_EG", "pl_PL")


@composite
def ui_words(draw: st.DrawFn) -> str:
    """Plain words without markers or markup."""
    return draw(st.text(alphabet=string.ascii_letters, min_size=1, max_size=12))


@composite
def ui_texts(draw: st.DrawFn) -> str:
    """UI strings mixing words, markers, markup and accelerators."""
    pieces = draw(
        st.lists(
            st.one_of(
                ui_words(),
                st.sampled_from(
                    [" ", "%1", "%2", "%n", "%L1", "%%", "<b>", "</b>", "&&", "&", "...", ": "]
                ),
            ),
            min_size=1,
            max_size=8,
        )
    )
    return "".join(pieces)


@composite
def xml_texts(draw: st.DrawFn, *, min_size: int = 0) -> str:
    """Strings exercising the serializer's escaping."""
    return draw(
        st.text(
            alphabet=string.ascii_letters + string.digits + " .,%\n" + _SPECIAL,
            min_size=min_size,
            max_size=30,
        )
    )


def optional_texts() -> st.SearchStrategy[str | None]:
    """None or a non-empty string (empty optional elements are not written)."""
    return st.one_of(st.none(), xml_texts(min_size=1))


@composite
def translation_types(draw: st.DrawFn) -> TranslationType:
    return draw(st.sampled_from(list(TranslationType)))


@composite
def messages(draw: st.DrawFn) -> Message:
    """Messages whose every field survives serialization."""
    numerus = draw(st.booleans())
    translation_type = draw(translation_types())
    if numerus:
        translation = Translation(
            forms=tuple(draw(st.lists(xml_texts(), max_size=3))), type=translation_type
        )
    else:
        translation = Translation(text=draw(xml_texts()), type=translation_type)
    locations = tuple(
        Location(filename=draw(st.sampled_from(["main.cpp", "ui/Page.qml"])), line=line)
        for line in draw(st.lists(st.integers(min_value=1, max_value=5000), max_size=3))
    )
    return Message(
        source=draw(xml_texts(min_size=1)),
        translation=translation,
        comment=draw(st.one_of(st.just(""), xml_texts(min_size=1))),
        extracomment=draw(optional_texts()),
        translatorcomment=draw(optional_texts()),
        oldsource=draw(optional_texts()),
        id=draw(st.one_of(st.none(), st.from_regex(r"[a-z][a-z0-9_]{0,10}", fullmatch=True))),
        numerus=numerus,
        # Obsolete entries are written without locations.
        locations=() if translation.type in _RETIRED else locations,
        extras=tuple(
            draw(
                st.lists(
                    st.tuples(st.sampled_from(["po-flags", "note"]), xml_texts(min_size=1)),
                    max_size=2,
                )
            )
        ),
    )


_RETIRED = (TranslationType.OBSOLETE, TranslationType.VANISHED)


@composite
def contexts(draw: st.DrawFn) -> Context:
    name = draw(st.from_regex(r"[A-Z][A-Za-z]{0,15}", fullmatch=True))
    return Context(
        name=name,
        messages=tuple(draw(st.lists(messages(), min_size=1, max_size=4))),
        comment=draw(optional_texts()),
    )


@composite
def catalogs(draw: st.DrawFn) -> Catalog:
    """Catalogs that serialize and parse back to an equal catalog."""
    return Catalog(
        contexts=tuple(draw(st.lists(contexts(), max_size=4))),
        language=draw(st.one_of(st.none(), st.sampled_from(LOCALES))),
        source_language=draw(st.one_of(st.none(), st.just("en_US"))),
    )


@composite
def simple_messages(draw: st.DrawFn) -> Message:
    """Finished singular messages with marker-bearing texts."""
    source = draw(ui_texts())
    return Message(source=source, translation=Translation(text=draw(ui_texts())))
