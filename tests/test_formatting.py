"""Tests for %n and %1 marker substitution."""

from __future__ import annotations

from decimal import Decimal

from hypothesis import event, given
from hypothesis import strategies as st

from tscatalog.diagnostics import DiagnosticCode, TSSubstitutionError
from tscatalog.runtime import format_arg, substitute_args, substitute_count


class TestFormatArg:
    """Rendering of single arguments."""

    def test_plain(self) -> None:
        """Unlocalized markers use str()."""
        assert format_arg(1234567, "de_DE", localized=False) == "1234567"

    def test_localized_grouping(self) -> None:
        """%L markers use the locale's grouping."""
        assert format_arg(1234567, "de_DE", localized=True) == "1.234.567"
        assert format_arg(1234567, "en_US", localized=True) == "1,234,567"

    def test_localized_decimal(self) -> None:
        """Decimal separator follows the locale."""
        assert format_arg(Decimal("1.5"), "de_DE", localized=True) == "1,5"

    def test_strings_never_localized(self) -> None:
        """Text arguments are inserted verbatim."""
        assert format_arg("Berlin", "de_DE", localized=True) == "Berlin"

    def test_unknown_locale_falls_back(self) -> None:
        """Unknown locales use plain digits."""
        assert format_arg(1500, "xx_INVALID", localized=True) == "1500"


class TestSubstituteCount:
    """%n and %Ln."""

    def test_plain_count(self) -> None:
        """%n becomes the count."""
        assert substitute_count("%n Dateien", 3, "de_DE") == "3 Dateien"

    def test_localized_count(self) -> None:
        """%Ln is grouped."""
        assert substitute_count("%Ln Dateien", 1500, "de_DE") == "1.500 Dateien"

    def test_other_markers_untouched(self) -> None:
        """%1 and %% stay in place."""
        assert substitute_count("%n of %1 (100%%)", 2, "de_DE") == "2 of %1 (100%%)"


class TestSubstituteArgs:
    """QString::arg() semantics."""

    def test_in_order(self) -> None:
        """Arguments fill markers in number order."""
        assert substitute_args("Connected to %1 (%2)", ["Berlin", "WireGuard"], "de_DE") == (
            "Connected to Berlin (WireGuard)",
            (),
        )

    def test_reordered_markers(self) -> None:
        """The lowest marker takes the first argument regardless of position."""
        text, errors = substitute_args("Mit %2 Port %1 verbunden.", ["WireGuard", 51820], "de_DE")

        assert text == "Mit 51820 Port WireGuard verbunden."
        assert errors == ()

    def test_gaps_in_numbering(self) -> None:
        """Marker numbers need not be contiguous."""
        text, errors = substitute_args("%2 of %5", ["a", "b"], "de_DE")

        assert text == "a of b"
        assert errors == ()

    def test_repeated_marker(self) -> None:
        """A marker used twice gets the same argument."""
        text, _ = substitute_args("%1 and %1", ["x"], "de_DE")

        assert text == "x and x"

    def test_missing_argument(self) -> None:
        """Markers without argument stay visible and are reported."""
        text, errors = substitute_args("%1 of %2", ["a"], "de_DE")

        assert text == "a of %2"
        assert len(errors) == 1
        assert isinstance(errors[0], TSSubstitutionError)
        assert errors[0].diagnostic is not None
        assert errors[0].diagnostic.code == DiagnosticCode.ARGUMENT_MISSING
        assert errors[0].diagnostic.message == "No argument for marker %2 (1 argument(s) provided)"

    def test_unused_argument(self) -> None:
        """Surplus arguments are reported."""
        text, errors = substitute_args("%1", ["a", "b"], "de_DE")

        assert text == "a"
        assert errors[0].diagnostic is not None
        assert errors[0].diagnostic.code == DiagnosticCode.ARGUMENT_UNUSED

    def test_localized_marker(self) -> None:
        """%L1 formats numbers for the locale."""
        text, _ = substitute_args("%L1 MB", [1048576], "de_DE")

        assert text == "1.048.576 MB"

    def test_printf_and_percent_untouched(self) -> None:
        """printf conversions and %% are not QString::arg() markers."""
        text, errors = substitute_args("%1: %s (100%%)", ["x"], "de_DE")

        assert text == "x: %s (100%%)"
        assert errors == ()

    @given(st.lists(st.text(alphabet="abcxyz ", max_size=5), min_size=1, max_size=9))
    def test_all_markers_replaced(self, values: list[str]) -> None:
        """PROPERTY: with one argument per marker no marker remains."""
        text = " ".join(f"[%{index}]" for index in range(1, len(values) + 1))
        event(f"args={len(values)}")

        result, errors = substitute_args(text, values, "de_DE")

        assert errors == ()
        assert result == " ".join(f"[{value}]" for value in values)
