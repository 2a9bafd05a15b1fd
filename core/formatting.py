"""Formatting helpers for Ledgerlite's transactions table."""

from __future__ import annotations

import math
from typing import Iterable

import pandas as pd

__all__ = [
    "CURRENCY_SYMBOL",
    "DATE_FORMAT",
    "format_cell",
    "format_currency",
    "format_date",
    "showing_label",
]

CURRENCY_SYMBOL = "€"
DATE_FORMAT = "%d/%m/%Y"

# fr-FR groups thousands with a narrow no-break space and puts a no-break
# space before the currency symbol.
_GROUP_SEPARATOR = "\u202f"
_SYMBOL_SEPARATOR = "\u00a0"


def format_currency(value: float | str) -> str:
    """Render ``value`` as euros in French notation, e.g. ``1 234,50 €``.

    Anything that is not a finite number is returned as ``str(value)``.
    """

    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if not math.isfinite(number):
        return str(value)

    sign = "-" if number < 0 else ""
    integer, decimals = f"{abs(number):,.2f}".split(".")
    integer = integer.replace(",", _GROUP_SEPARATOR)
    return f"{sign}{integer},{decimals}{_SYMBOL_SEPARATOR}{CURRENCY_SYMBOL}"


def format_date(value: str) -> str:
    """Render an ISO date as ``DD/MM/YYYY``; other input is returned unchanged."""

    timestamp = pd.to_datetime(value, errors="coerce", format="ISO8601")
    if pd.isna(timestamp):
        return value
    return timestamp.strftime(DATE_FORMAT)


def format_cell(
    key: str,
    value: str,
    *,
    amount_columns: Iterable[str] = ("amount",),
    date_columns: Iterable[str] = ("date",),
) -> str:
    if key in amount_columns:
        return format_currency(value)
    if key in date_columns:
        return format_date(value)
    return value


def showing_label(shown: int, total: int) -> str:
    noun = "transaction" if total == 1 else "transactions"
    return f"Showing {shown} of {total} {noun}"
