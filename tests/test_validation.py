"""Tests for catalog validation checks."""

from __future__ import annotations

import logging

import pytest
from hypothesis import event, given

from tscatalog.enums import TranslationType
from tscatalog.syntax import Catalog, Context, Message, Translation
from tscatalog.validation import ALL_CHECKS, DEFAULT_CHECKS, ValidationConfig, validate_catalog

from tests.strategies import simple_messages


def _catalog(*messages: Message, context: str = "Main", language: str = "de_DE") -> Catalog:
    return Catalog(contexts=(Context(context, messages),), language=language)


def _codes(catalog: Catalog, **kwargs: object) -> list[str]:
    result = validate_catalog(catalog, **kwargs)  # type: ignore[arg-type]
    return [warning.code for warning in result.warnings]


class TestValidationConfig:
    """Check selection."""

    def test_defaults_exclude_opt_in_checks(self) -> None:
        """Source-prefix and obsolete checks are opt-in."""
        assert "source-prefix-mismatch" not in DEFAULT_CHECKS
        assert "obsolete-message" not in DEFAULT_CHECKS
        assert DEFAULT_CHECKS < ALL_CHECKS

    def test_unknown_check_rejected(self) -> None:
        """Typos in check codes are reported."""
        with pytest.raises(ValueError, match="Unknown validation check"):
            ValidationConfig(checks=frozenset({"spelling"}))

    def test_without(self) -> None:
        """without() disables checks and opt-in flags."""
        config = ValidationConfig(source_prefix=True).without(
            "unfinished", "source-prefix-mismatch"
        )

        assert not config.is_enabled("unfinished")
        assert not config.is_enabled("source-prefix-mismatch")
        assert config.is_enabled("placeholder-mismatch")


class TestDocumentLevel:
    """Parsing stage."""

    def test_german_catalog(self, german_document: str) -> None:
        """Only the unfinished entry is reported."""
        result = validate_catalog(german_document)

        assert result.is_valid
        assert [w.code for w in result.warnings] == ["unfinished"]
        warning = result.warnings[0]
        assert warning.context == "NetworkPage"
        assert warning.key is not None
        assert warning.key.source == "NetworkPage --- Name Servers"
        assert warning.line is not None

    def test_parse_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unparseable documents give a critical error instead of raising."""
        with caplog.at_level(logging.ERROR, logger="tscatalog.validation.catalog"):
            result = validate_catalog("<TS><context></TS>")

        assert not result.is_valid
        error = result.errors[0]
        assert error.code == "critical-parse-error"
        assert error.message.startswith("Malformed XML")
        assert error.line == 1
        assert "Critical validation error" in caplog.text

    def test_annotations_invalidate(self) -> None:
        """Structural problems make the result invalid."""
        result = validate_catalog("<TS><context><name>Main</name><widget/></context></TS>")

        assert not result.is_valid
        assert [a.code for a in result.annotations] == ["unknown-element"]


class TestMessageChecks:
    """Per-message checks."""

    def test_clean_message(self) -> None:
        """Matching markers, tags and punctuation give no warnings."""
        message = Message("<b>%1</b> of %2 &files...", Translation("<b>%1</b> von %2 &Dateien..."))

        assert _codes(_catalog(message)) == []

    def test_duplicate_key(self) -> None:
        """The second live message with the same key is reported."""
        catalog = _catalog(Message("Quit", Translation("A")), Message("Quit", Translation("B")))

        assert _codes(catalog) == ["duplicate-key"]

    def test_duplicate_with_obsolete_is_fine(self) -> None:
        """Obsolete entries do not take part in duplicate detection."""
        catalog = _catalog(
            Message("Quit", Translation("A", type=TranslationType.OBSOLETE)),
            Message("Quit", Translation("B")),
        )

        assert _codes(catalog) == []

    def test_empty_source(self) -> None:
        """Messages without source text are reported."""
        assert _codes(_catalog(Message("", Translation("x")))) == ["empty-source"]

    def test_unfinished_skips_comparison(self) -> None:
        """Unfinished translations are reported once, not compared."""
        message = Message("%1 files", Translation("Dateien", type=TranslationType.UNFINISHED))

        assert _codes(_catalog(message)) == ["unfinished"]

    def test_empty_finished_translation(self) -> None:
        """Finished translations without text are reported."""
        assert _codes(_catalog(Message("Quit", Translation("")))) == ["empty-translation"]

    def test_placeholder_mismatch(self) -> None:
        """Missing %N markers are reported with both sets."""
        result = validate_catalog(_catalog(Message("%1 of %2", Translation("%1 von"))))

        assert [w.code for w in result.warnings] == ["placeholder-mismatch"]
        assert result.warnings[0].message == "Translation uses %1, source uses %1, %2"

    def test_reordered_placeholders_are_fine(self) -> None:
        """Marker order may change."""
        assert _codes(_catalog(Message("%1 of %2", Translation("%2: %1")))) == []

    def test_printf_mismatch(self) -> None:
        """printf conversions must match in order."""
        assert _codes(_catalog(Message("%s: %d", Translation("%d: %s")))) == ["printf-mismatch"]

    def test_markup_mismatch(self) -> None:
        """Missing tags are reported."""
        assert _codes(_catalog(Message("<b>Warning</b>", Translation("Warnung")))) == [
            "markup-mismatch"
        ]

    def test_accelerator_mismatch(self) -> None:
        """Lost mnemonics are reported."""
        assert _codes(_catalog(Message("&File", Translation("Datei")))) == [
            "accelerator-mismatch"
        ]

    def test_punctuation_mismatch(self) -> None:
        """Ending punctuation must match."""
        assert _codes(_catalog(Message("Server:", Translation("Server")))) == [
            "punctuation-mismatch"
        ]

    def test_typographic_ellipsis_accepted(self) -> None:
        """… and ... are equivalent."""
        assert _codes(_catalog(Message("Open...", Translation("Öffnen…")))) == []

    def test_whitespace_mismatch(self) -> None:
        """Leading and trailing whitespace must match."""
        assert _codes(_catalog(Message("Name ", Translation("Name")))) == ["whitespace-mismatch"]

    def test_disabled_check(self) -> None:
        """Disabled checks are not reported."""
        config = ValidationConfig().without("punctuation-mismatch")

        assert _codes(_catalog(Message("Server:", Translation("Server"))), config=config) == []


class TestNumerusChecks:
    """Numerus-specific checks."""

    def _numerus(self, *forms: str) -> Message:
        return Message("%n file(s)", Translation(forms=forms), numerus=True)

    def test_form_count_from_catalog_language(self) -> None:
        """Russian needs three forms."""
        catalog = _catalog(self._numerus("%n файл", "%n файлов"), language="ru_RU")

        result = validate_catalog(catalog)

        assert [w.code for w in result.warnings] == ["numerus-form-count"]
        assert result.warnings[0].message == (
            "Translation has 2 numerus form(s), ru_RU needs 3"
        )

    def test_locale_argument_overrides_language(self) -> None:
        """locale= takes precedence over the catalog language."""
        catalog = _catalog(self._numerus("%n Datei", "%n Dateien"), language="ru_RU")

        assert _codes(catalog, locale="de_DE") == []

    def test_singular_form_may_spell_count(self) -> None:
        """%n may be missing from some forms but not all."""
        assert _codes(_catalog(self._numerus("eine Datei", "%n Dateien"))) == []

    def test_no_form_with_count(self) -> None:
        """A numerus translation without any %n is reported."""
        assert _codes(_catalog(self._numerus("eine Datei", "Dateien"))) == [
            "placeholder-mismatch"
        ]


class TestOptInChecks:
    """source-prefix-mismatch and obsolete-message."""

    def test_source_prefix_context(self) -> None:
        """Prefix must name the message's context."""
        catalog = _catalog(Message("Other --- Quit", Translation("Beenden")))

        assert _codes(catalog) == []
        assert _codes(catalog, config=ValidationConfig(source_prefix=True)) == [
            "source-prefix-mismatch"
        ]

    def test_source_prefix_comment(self) -> None:
        """Prefix comment must match the disambiguation."""
        catalog = _catalog(
            Message("Main -- button --- OK", Translation("OK"), comment="menu")
        )

        assert _codes(catalog, config=ValidationConfig(source_prefix=True)) == [
            "source-prefix-mismatch"
        ]

    def test_german_prefixes_match(self, german_document: str) -> None:
        """The German catalog follows the convention."""
        result = validate_catalog(german_document, config=ValidationConfig(source_prefix=True))

        assert result.warnings_by_code("source-prefix-mismatch") == ()

    def test_obsolete(self, german_document: str) -> None:
        """Obsolete entries are reported on request."""
        result = validate_catalog(german_document, config=ValidationConfig(obsolete=True))

        warnings = result.warnings_by_code("obsolete-message")
        assert [w.message for w in warnings] == [
            "Obsolete entry 'AccountPage --- Renew' can be removed"
        ]


class TestValidationProperties:
    """Property tests."""

    @given(simple_messages())
    def test_identical_translation_is_clean(self, message: Message) -> None:
        """PROPERTY: a translation equal to its source passes every comparison."""
        copy = Message(message.source, Translation(message.source))
        codes = _codes(_catalog(copy))
        event(f"markers={'%' in message.source}")

        assert codes == []
