"""Tests for the locale-aware formatting, parsing and listing pass-throughs.

Python 3.13+.
"""

import unicodedata
from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from towerlex.diagnostics import UnknownStyleError
from towerlex.runtime.localization import (
    localize,
    normalize_text,
    parse,
    sorted_localized_countries,
    sorted_localized_languages,
    sorted_timezones,
)


class TestLocalizeNumbers:
    """Test localize with numeric values."""

    def test_grouping(self) -> None:
        """Decimal separators and grouping follow the locale."""
        assert localize("en-US", 1000.1) == "1,000.1"
        assert localize("de-DE", 1000.1) == "1.000,1"

    def test_styles(self) -> None:
        """Integer, percent and currency styles are supported."""
        assert localize("en", 41.6, "integer") == "42"
        assert localize("en", 0.5, "percent") == "50%"
        assert localize("en-US", Decimal("3"), "currency") == "$3.00"

    def test_none(self) -> None:
        """None localizes to None."""
        assert localize("en", None) is None

    def test_unknown_style(self) -> None:
        """Date styles are not valid for numbers."""
        with pytest.raises(UnknownStyleError):
            localize("en", 1, "date-long")

    def test_unsupported_type(self) -> None:
        """Arbitrary objects cannot be localized."""
        with pytest.raises(TypeError):
            localize("en", object())


class TestLocalizeDates:
    """Test localize with dates and datetimes."""

    def test_default_date(self) -> None:
        """Dates default to the medium style."""
        assert localize("en", date(2024, 1, 5)) == "Jan 5, 2024"

    def test_date_lengths(self) -> None:
        """date-<length> selects the CLDR length."""
        assert localize("en", date(2024, 1, 5), "date-long") == "January 5, 2024"
        assert localize("en", date(2024, 1, 5), "date-short") == "1/5/24"

    def test_datetime_same_lengths(self) -> None:
        """dt-<length> formats date and time together."""
        text = localize("en", datetime(2024, 1, 5, 9, 30), "dt-short")
        assert text is not None
        assert "1/5/24" in text
        assert "9:30" in text

    def test_datetime_mixed_lengths(self) -> None:
        """dt-<date>-<time> combines different lengths."""
        text = localize("en", datetime(2024, 1, 5, 9, 30), "dt-long-short")
        assert text is not None
        assert "January 5, 2024" in text
        assert "9:30" in text

    def test_time_needs_datetime(self) -> None:
        """Time styles reject plain dates."""
        with pytest.raises(TypeError):
            localize("en", date(2024, 1, 5), "time-short")

    @pytest.mark.parametrize("style", ["date-tiny", "week", "dt-short-long-full", "percent"])
    def test_unknown_styles(self, style: str) -> None:
        """Malformed date styles raise UnknownStyleError."""
        with pytest.raises(UnknownStyleError):
            localize("en", date(2024, 1, 5), style)


class TestParse:
    """Test parse."""

    def test_number(self) -> None:
        """Locale separators are understood."""
        assert parse("de-DE", "1.000,01") == Decimal("1000.01")
        assert parse("en", " 1,000.5 ") == Decimal("1000.5")

    def test_integer(self) -> None:
        """The integer style truncates to int."""
        assert parse("en", "1,234", "integer") == 1234

    def test_percent(self) -> None:
        """Percentages are scaled to fractions."""
        assert parse("en", "25%", "percent") == Decimal("0.25")

    def test_invalid_text(self) -> None:
        """Unparsable text raises ValueError."""
        with pytest.raises(ValueError, match="Cannot parse"):
            parse("en", "twelve")

    def test_unknown_style(self) -> None:
        """Currency parsing is not supported."""
        with pytest.raises(UnknownStyleError):
            parse("en", "$3.00", "currency")

    @given(value=st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_survive_localize(self, value: int) -> None:
        """PROPERTY: localized integers parse back to themselves."""
        text = localize("de-DE", value)
        assert text is not None
        assert parse("de-DE", text, "integer") == value


class TestNormalizeText:
    """Test normalize_text."""

    def test_composes(self) -> None:
        """Decomposed sequences are composed."""
        assert normalize_text("e\u0301") == "\u00e9"

    @given(text=st.text())
    def test_result_is_nfc(self, text: str) -> None:
        """PROPERTY: output is always NFC."""
        assert unicodedata.is_normalized("NFC", normalize_text(text))


class TestSortedNames:
    """Test localized country and language listings."""

    def test_countries(self) -> None:
        """Names are localized and codes follow their names."""
        names, codes = sorted_localized_countries("pl", ["GB", "DE", "PL"])
        assert names == ["Niemcy", "Polska", "Wielka Brytania"]
        assert codes == ["DE", "PL", "GB"]

    def test_all_countries(self) -> None:
        """Without codes every two-letter territory is listed."""
        names, codes = sorted_localized_countries("en")
        assert "US" in codes
        assert len(names) == len(codes)
        assert all(len(code) == 2 for code in codes)

    def test_countries_sorted_case_insensitively(self) -> None:
        """Ordering ignores case and accents."""
        names, _ = sorted_localized_countries("fr", ["EG", "FR", "ES"])
        assert names == sorted(names, key=lambda n: unicodedata.normalize("NFKD", n).casefold())

    def test_languages(self) -> None:
        """Foreign languages show their own name in parentheses."""
        names, codes = sorted_localized_languages("pl", ["de", "pl"])
        assert codes == ["de", "pl"]
        assert names == ["niemiecki (Deutsch)", "polski"]


class TestSortedTimezones:
    """Test the timezone listing."""

    WINTER = datetime(2024, 1, 15, 12, tzinfo=UTC)
    SUMMER = datetime(2024, 7, 15, 12, tzinfo=UTC)

    def test_ordered_by_offset(self) -> None:
        """Zones are ordered by their offset at the given instant."""
        names, ids = sorted_timezones(
            self.WINTER, ["Asia/Colombo", "Europe/London", "America/New_York"]
        )
        assert ids == ["America/New_York", "Europe/London", "Asia/Colombo"]
        assert names == [
            "(GMT -05:00) New York",
            "(GMT +00:00) London",
            "(GMT +05:30) Colombo",
        ]

    def test_daylight_saving(self) -> None:
        """Offsets are those in effect at the instant."""
        names, _ = sorted_timezones(self.SUMMER, ["Europe/London"])
        assert names == ["(GMT +01:00) London"]

    def test_negative_half_hour(self) -> None:
        """Negative fractional offsets keep their minutes."""
        names, _ = sorted_timezones(self.WINTER, ["America/St_Johns"])
        assert names == ["(GMT -03:30) St Johns"]

    def test_default_zones(self) -> None:
        """Without IDs every continent and ocean zone is listed."""
        names, ids = sorted_timezones(self.WINTER)
        assert "Europe/Berlin" in ids
        assert "Etc/UTC" not in ids
        assert len(names) == len(ids)

    def test_naive_instant_rejected(self) -> None:
        """The instant must carry a timezone."""
        with pytest.raises(ValueError, match="timezone-aware"):
            sorted_timezones(datetime(2024, 1, 15, 12))

    def test_unknown_zone(self) -> None:
        """Unknown IDs are lookup errors."""
        with pytest.raises(LookupError):
            sorted_timezones(self.WINTER, ["Mars/Olympus_Mons"])
