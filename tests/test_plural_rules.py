"""Tests for CLDR plural categories mapped to Qt numerus forms."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import event, given, settings
from hypothesis import strategies as st

from tscatalog.runtime import (
    numerus_categories,
    numerus_form_count,
    numerus_form_index,
    select_plural_category,
)

from tests.strategies import LOCALES


class TestCategories:
    """Categories reachable by whole numbers."""

    @pytest.mark.parametrize(
        ("locale", "expected"),
        [
            ("de_DE", ("one", "other")),
            ("en_US", ("one", "other")),
            ("ru_RU", ("one", "few", "many")),
            ("pl_PL", ("one", "few", "many")),
            ("ja_JP", ("other",)),
            ("ar_EG", ("zero", "one", "two", "few", "many", "other")),
        ],
    )
    def test_categories(self, locale: str, expected: tuple[str, ...]) -> None:
        """Form order follows CLDR category order."""
        assert numerus_categories(locale) == expected

    def test_unknown_locale(self) -> None:
        """Unknown locales get singular and plural."""
        assert numerus_categories("xx_INVALID") == ("one", "other")

    def test_form_count(self) -> None:
        """Form count is the number of categories."""
        assert numerus_form_count("de_DE") == 2
        assert numerus_form_count("ru-RU") == 3
        assert numerus_form_count("ja_JP") == 1
        assert numerus_form_count(None) == 2


class TestSelection:
    """Category and form selection."""

    @pytest.mark.parametrize(
        ("n", "locale", "expected"),
        [
            (1, "de_DE", "one"),
            (0, "de_DE", "other"),
            (21, "ru_RU", "one"),
            (3, "ru_RU", "few"),
            (5, "ru_RU", "many"),
            (1.5, "ru_RU", "other"),
            (Decimal(2), "pl_PL", "few"),
            (1, "xx_INVALID", "one"),
            (7, "xx_INVALID", "other"),
        ],
    )
    def test_select_plural_category(
        self, n: int | float | Decimal, locale: str, expected: str
    ) -> None:
        """Babel's CLDR rules decide the category."""
        assert select_plural_category(n, locale) == expected

    @pytest.mark.parametrize(
        ("n", "expected"),
        [(1, 0), (2, 1), (4, 1), (5, 2), (11, 2), (21, 0), (1.5, 2)],
    )
    def test_russian_form_index(self, n: int | float, expected: int) -> None:
        """Fractions ('other') use the last form."""
        assert numerus_form_index(n, "ru_RU", 3) == expected

    def test_missing_forms_use_last(self) -> None:
        """Translations with fewer forms than needed clamp to the last."""
        assert numerus_form_index(5, "ru_RU", 2) == 1
        assert numerus_form_index(5, "ru_RU", 1) == 0

    def test_german(self) -> None:
        """Singular for 1, plural otherwise."""
        assert [numerus_form_index(n, "de_DE", 2) for n in (0, 1, 2)] == [1, 0, 1]

    @settings(deadline=None)
    @given(st.sampled_from(LOCALES), st.integers(min_value=0, max_value=10**6))
    def test_index_in_range(self, locale: str, n: int) -> None:
        """PROPERTY: the index always addresses an existing form."""
        count = numerus_form_count(locale)
        index = numerus_form_index(n, locale, count)
        event(f"locale={locale}")

        assert 0 <= index < count
