"""Default message formatter.

format_message() is the formatter collaborator used by Translator when the
configuration does not supply one. It substitutes positional placeholders
in a translated pattern, MessageFormat style:

    {0}                  argument 0, locale-formatted by type
    {0,number}           decimal number        {0,number,integer|percent|currency}
    {0,date}             medium date           {0,date,short|medium|long|full}
    {0,time}             medium time           {0,time,short|medium|long|full}
    {0,datetime}         medium date and time  {0,datetime,short|medium|long|full}

Plain placeholders format int/float/Decimal as decimals and date/datetime
values with the short CLDR style; everything else is rendered with str().
Placeholders whose index has no argument are left unchanged. There is no
quote processing.

Thread-safe. Uses Babel for CLDR-compliant formatting.

Python 3.13+.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal

from babel import dates as babel_dates
from babel import numbers as babel_numbers

from towerlex.diagnostics import UnknownStyleError
from towerlex.locale_utils import get_babel_locale

__all__ = ["format_message", "format_value"]

_PLACEHOLDER = re.compile(r"\{\s*(\d+)\s*(?:,\s*([A-Za-z]+)\s*)?(?:,\s*([A-Za-z]+)\s*)?\}")

_DATE_STYLES = frozenset({"short", "medium", "long", "full"})


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _currency_for(locale_tag: str) -> str:
    babel_locale = get_babel_locale(locale_tag)
    if babel_locale.territory:
        currencies = babel_numbers.get_territory_currencies(babel_locale.territory)
        if currencies:
            return currencies[0]
    return "USD"


def _format_number(value: object, style: str | None, locale_tag: str) -> str:
    babel_locale = get_babel_locale(locale_tag)
    if not _is_number(value):
        return str(value)
    match style:
        case None:
            return babel_numbers.format_decimal(value, locale=babel_locale)
        case "integer":
            rounded = round(value)  # type: ignore[call-overload]
            return babel_numbers.format_decimal(rounded, locale=babel_locale)
        case "percent":
            return babel_numbers.format_percent(value, locale=babel_locale)
        case "currency":
            return babel_numbers.format_currency(
                value, _currency_for(locale_tag), locale=babel_locale
            )
        case _:
            raise UnknownStyleError(style)


def _format_temporal(value: object, kind: str, style: str | None, locale_tag: str) -> str:
    style = style or "medium"
    if style not in _DATE_STYLES:
        raise UnknownStyleError(style)
    babel_locale = get_babel_locale(locale_tag)
    match kind, value:
        case "date", date():
            return babel_dates.format_date(value, format=style, locale=babel_locale)
        case "time", datetime() | time():
            return babel_dates.format_time(value, format=style, locale=babel_locale)
        case "datetime", datetime():
            return babel_dates.format_datetime(value, format=style, locale=babel_locale)
        case _:
            return str(value)


def format_value(
    value: object,
    locale_tag: str,
    kind: str | None = None,
    style: str | None = None,
) -> str:
    """Format one placeholder argument.

    Args:
        value: Argument value
        locale_tag: Locale tag used for CLDR formatting
        kind: Placeholder type (number, date, time, datetime) or None
        style: Placeholder style or None

    Returns:
        Formatted text

    Raises:
        UnknownStyleError: If kind or style is not supported
    """
    match kind:
        case None:
            if style is not None:
                raise UnknownStyleError(style)
            if _is_number(value):
                return _format_number(value, None, locale_tag)
            if isinstance(value, datetime):
                return _format_temporal(value, "datetime", "short", locale_tag)
            if isinstance(value, date):
                return _format_temporal(value, "date", "short", locale_tag)
            return str(value)
        case "number":
            return _format_number(value, style, locale_tag)
        case "date" | "time" | "datetime":
            return _format_temporal(value, kind, style, locale_tag)
        case _:
            raise UnknownStyleError(kind)


def format_message(locale_tag: str, pattern: str, *args: object) -> str:
    """Substitute positional arguments into a translated pattern.

    Args:
        locale_tag: Preferred locale of the resolve call
        pattern: Translated text containing {n[,type[,style]]} placeholders
        *args: Positional arguments

    Returns:
        Formatted text

    Raises:
        UnknownStyleError: If a placeholder names an unsupported type or style

    Example:
        >>> format_message("en", "Hello {0}, you have {1,number} points", "Steve", 1234)
        'Hello Steve, you have 1,234 points'
        >>> format_message("en", "{0} of {1}", "one")
        'one of {1}'
    """

    def substitute(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(args):
            return match.group(0)
        kind = match.group(2).lower() if match.group(2) else None
        style = match.group(3).lower() if match.group(3) else None
        return format_value(args[index], locale_tag, kind, style)

    return _PLACEHOLDER.sub(substitute, pattern)
