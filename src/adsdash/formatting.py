"""Display helpers for amounts and dates."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "SGD": "SGD ",
    "IDR": "IDR ",
}

# ISO 4217 currencies without minor units
_ZERO_DECIMAL = {"JPY", "KRW", "VND", "CLP", "ISK"}

Number = Union[int, float, Decimal]


def format_currency(value: Optional[Number], currency: str = "USD") -> str:
    """Format like en-US ``Intl.NumberFormat`` currency style.

    ``None`` is treated as zero; at most two fraction digits. Non-finite
    amounts render as NaN or infinity after the symbol.
    """

    code = (currency or "USD").strip().upper()
    try:
        amount = Decimal(str(value if value is not None else 0))
    except InvalidOperation:
        amount = Decimal(0)
    symbol = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    if amount.is_nan():
        return f"{symbol}NaN"
    if amount.is_infinite():
        return f"{'-' if amount.is_signed() else ''}{symbol}\u221e"
    places = 0 if code in _ZERO_DECIMAL else 2
    quantum = Decimal(1).scaleb(-places)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    body = f"{abs(rounded):,.{places}f}"
    return f"{sign}{symbol}{body}"


def _parse_iso(value: str) -> Optional[date]:
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def format_date(value: Union[str, date, None]) -> str:
    """Medium en-US date (``Jan 5, 2024``); ``-`` when empty.

    Text that does not parse as an ISO date is returned unchanged.
    """

    if value is None or value == "":
        return "-"
    if isinstance(value, datetime):
        parsed: Optional[date] = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        parsed = _parse_iso(value)
    if parsed is None:
        return str(value)
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def today_iso() -> str:
    return date.today().isoformat()


__all__ = ["format_currency", "format_date", "today_iso"]
