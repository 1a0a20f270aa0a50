"""Locale-aware formatting and parsing pass-throughs.

Thin wrappers over Babel's CLDR data for the non-translation half of
internationalization: numbers, dates, parsing, localized country and
language names, and timezone listings. No formatting rules are implemented
here.

Styles:
    Numbers: "number" (default), "integer", "percent", "currency"
    Dates/datetimes: "<kind>-<length>" where kind is date (default), time
        or dt, and length is default, short, medium, long or full.
        "dt-<date length>-<time length>" sets both lengths.

Thread-safe. Uses Babel for CLDR-compliant formatting.

Python 3.13+.
"""

from __future__ import annotations

import re
import unicodedata
import zoneinfo
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal, InvalidOperation

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from towerlex.diagnostics import UnknownStyleError
from towerlex.locale_utils import LocaleLike, get_babel_locale, locale_key
from towerlex.runtime.formatting import format_value

__all__ = [
    "localize",
    "normalize_text",
    "parse",
    "sorted_localized_countries",
    "sorted_localized_languages",
    "sorted_timezones",
]

_LENGTHS = {
    "default": "medium",
    "short": "short",
    "medium": "medium",
    "long": "long",
    "full": "full",
}


def _date_style(style: str) -> tuple[str, str, str]:
    """Parse "dt-long-short" into (kind, date length, time length)."""
    kind, *lengths = style.split("-")
    if kind not in ("date", "time", "dt") or len(lengths) > 2:
        raise UnknownStyleError(style)
    try:
        first = _LENGTHS[lengths[0]] if lengths else "medium"
        second = _LENGTHS[lengths[1]] if len(lengths) > 1 else first
    except KeyError:
        raise UnknownStyleError(style) from None
    return kind, first, second


def localize(locale: LocaleLike, value: object, style: str | None = None) -> str | None:
    """Format a number or date for a locale.

    Args:
        locale: Locale to format for
        value: int, float, Decimal, date or datetime (None returns None)
        style: Style token (see module docstring); None for the type default

    Returns:
        Formatted text, or None for a None value

    Raises:
        UnknownStyleError: If the style is not valid for the value's type
        TypeError: If the value type cannot be localized

    Example:
        >>> localize("en-US", 1000.1)
        '1,000.1'
        >>> localize("de-DE", 1000.1)
        '1.000,1'
    """
    if value is None:
        return None
    tag = locale_key(locale)

    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        style = style or "number"
        if style == "number":
            return format_value(value, tag, "number")
        if style in ("integer", "percent", "currency"):
            return format_value(value, tag, "number", style)
        raise UnknownStyleError(style)

    if isinstance(value, date):
        kind, date_len, time_len = _date_style(style or "date")
        babel_locale = get_babel_locale(tag)
        if kind == "date":
            return babel_dates.format_date(value, format=date_len, locale=babel_locale)
        if not isinstance(value, datetime):
            msg = f"Style {style!r} needs a datetime, got {type(value).__name__}"
            raise TypeError(msg)
        if kind == "time":
            return babel_dates.format_time(value, format=date_len, locale=babel_locale)
        if date_len == time_len:
            return babel_dates.format_datetime(value, format=date_len, locale=babel_locale)
        # Babel has no mixed-length datetime format; compose date and time
        pattern = babel_dates.get_datetime_format(date_len, locale=babel_locale)
        return (
            pattern.replace("'", "")
            .replace("{0}", babel_dates.format_time(value, format=time_len, locale=babel_locale))
            .replace("{1}", babel_dates.format_date(value, format=date_len, locale=babel_locale))
        )

    msg = f"Cannot localize value of type {type(value).__name__}"
    raise TypeError(msg)


def parse(locale: LocaleLike, text: str, style: str = "number") -> Decimal | int:
    """Parse locale-formatted number text.

    Args:
        locale: Locale the text is formatted for
        text: Text to parse (e.g., "1.000,5" for de)
        style: "number", "integer", or "percent"

    Returns:
        Decimal for number and percent styles, int for integer

    Raises:
        UnknownStyleError: If the style is not supported
        ValueError: If the text cannot be parsed

    Example:
        >>> parse("de-DE", "1.000,01")
        Decimal('1000.01')
        >>> parse("en", "25%", "percent")
        Decimal('0.25')
    """
    babel_locale = get_babel_locale(locale_key(locale))
    try:
        match style:
            case "number":
                return babel_numbers.parse_decimal(text.strip(), locale=babel_locale)
            case "integer":
                return int(babel_numbers.parse_decimal(text.strip(), locale=babel_locale))
            case "percent":
                symbol = babel_numbers.get_percent_symbol(babel_locale)
                stripped = text.replace(symbol, "").replace("%", "").strip()
                return babel_numbers.parse_decimal(stripped, locale=babel_locale) / 100
            case _:
                raise UnknownStyleError(style)
    except (babel_numbers.NumberFormatError, InvalidOperation) as e:
        msg = f"Cannot parse {text!r} as {style} for locale {locale_key(locale)}"
        raise ValueError(msg) from e


def normalize_text(text: str) -> str:
    """Unicode NFC normalization, for storage and comparison hygiene."""
    return unicodedata.normalize("NFC", text)


def _sort_key(name: str) -> str:
    return unicodedata.normalize("NFKD", name).casefold()


def _sorted_pairs(pairs: Iterable[tuple[str, str]]) -> tuple[list[str], list[str]]:
    ordered = sorted(pairs, key=lambda pair: _sort_key(pair[0]))
    return [name for name, _ in ordered], [code for _, code in ordered]


def sorted_localized_countries(
    locale: LocaleLike, codes: Iterable[str] | None = None
) -> tuple[list[str], list[str]]:
    """Country names in a locale's language, with their ISO codes.

    Args:
        locale: Display locale
        codes: ISO 3166 codes to include (default: all CLDR territories
            with two-letter codes)

    Returns:
        (names, codes), both ordered by localized name

    Example:
        >>> sorted_localized_countries("pl", ["GB", "DE", "PL"])
        (['Niemcy', 'Polska', 'Wielka Brytania'], ['DE', 'PL', 'GB'])
    """
    territories = get_babel_locale(locale_key(locale)).territories
    if codes is None:
        codes = [code for code in territories if len(code) == 2 and code.isalpha()]
    return _sorted_pairs((territories.get(code, code), code) for code in codes)


def sorted_localized_languages(
    locale: LocaleLike, codes: Iterable[str] | None = None
) -> tuple[list[str], list[str]]:
    """Language names in a locale's language, with their ISO 639 codes.

    Each name other than the display locale's own language is followed by
    the language's name for itself, e.g. "niemiecki (Deutsch)".

    Args:
        locale: Display locale
        codes: ISO 639 codes to include (default: all CLDR languages)

    Returns:
        (names, codes), both ordered by localized name
    """
    display = get_babel_locale(locale_key(locale))
    languages = display.languages
    if codes is None:
        codes = [code for code in languages if "_" not in code]

    def name_for(code: str) -> str:
        name = languages.get(code, code)
        if code == display.language:
            return name
        own = get_babel_locale(code)
        own_name = own.languages.get(code) if own.language == code else None
        return f"{name} ({own_name})" if own_name else name

    return _sorted_pairs((name_for(code), code) for code in codes)


_MAJOR_TIMEZONE = re.compile(r"^(?:Africa|America|Asia|Atlantic|Australia|Europe|Indian|Pacific)/")


def _gmt_label(zone_id: str, offset: timedelta) -> str:
    """Display name such as "(GMT +05:30) Colombo"."""
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    city = zone_id.rsplit("/", 1)[-1].replace("_", " ")
    return f"(GMT {sign}{hours:02d}:{mins:02d}) {city}"


def sorted_timezones(
    at: datetime | None = None, zone_ids: Iterable[str] | None = None
) -> tuple[list[str], list[str]]:
    """Timezone display names and IDs, ordered by UTC offset.

    Names do not depend on a locale. Offsets are those in effect at the
    given instant, so the order follows daylight-saving changes.

    Args:
        at: Timezone-aware instant (default: now)
        zone_ids: IANA zone IDs to include (default: every zone under a
            continent or ocean region, e.g. Europe/... or Indian/...)

    Returns:
        (names, zone_ids), both ordered by offset; ties keep ID order

    Raises:
        ValueError: If at is a naive datetime
        LookupError: If a zone ID is unknown

    Example:
        >>> at = datetime(2024, 1, 15, 12, tzinfo=UTC)
        >>> sorted_timezones(at, ["Asia/Colombo", "Europe/London"])
        (['(GMT +00:00) London', '(GMT +05:30) Colombo'], ['Europe/London', 'Asia/Colombo'])
    """
    instant = at if at is not None else datetime.now(UTC)
    if instant.tzinfo is None:
        msg = "at must be a timezone-aware datetime"
        raise ValueError(msg)
    if zone_ids is None:
        zone_ids = sorted(z for z in zoneinfo.available_timezones() if _MAJOR_TIMEZONE.match(z))

    entries: list[tuple[timedelta, str, str]] = []
    for zone_id in zone_ids:
        offset = instant.astimezone(babel_dates.get_timezone(zone_id)).utcoffset() or timedelta(0)
        entries.append((offset, _gmt_label(zone_id, offset), zone_id))
    entries.sort(key=lambda entry: entry[0])
    return [name for _, name, _ in entries], [zone_id for _, _, zone_id in entries]
