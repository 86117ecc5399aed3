"""Formatting helpers for currency, percentages, and month names."""

import calendar
from decimal import ROUND_HALF_UP, Context, Decimal

CENT = Decimal("0.01")
# Enough digits to hold any finite float to the cent.
_MONEY_CONTEXT = Context(prec=400)


def round_cents(value: float) -> Decimal:
    """Round half away from zero to whole cents."""
    return Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP, context=_MONEY_CONTEXT)


def format_money(value: float, symbol: str = "$") -> str:
    """Format ``value`` like ``$1,234.57`` or ``-$3.10``."""
    cents = round_cents(value)
    sign = "-" if cents < 0 else ""
    return f"{sign}{symbol}{cents.copy_abs():,.2f}"


def format_percent(value: float) -> str:
    """Format a value already expressed in percent."""
    return f"{value:.2f}%"


def month_name(month: int) -> str:
    """Return the English name of a calendar month (1 = January)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}.")
    return calendar.month_name[month]
