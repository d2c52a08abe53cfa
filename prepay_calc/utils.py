"""Utility functions for the prepay-or-invest calculator.

This module provides helpers for turning user input into ``Decimal`` values,
including the Indian shorthand suffixes commonly used for loan amounts
(``"50l"`` for fifty lakh, ``"1.2cr"`` for 1.2 crore), and for clamping values
into a valid range.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException, getcontext
from typing import Any, Optional

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

AMOUNT_SUFFIXES = (
    ("cr", Decimal("10000000")),
    ("k", Decimal("1000")),
    ("l", Decimal("100000")),
    ("m", Decimal("1000000")),
)


def decimal_from_str(value: Any) -> Decimal:
    """Convert a numeric string (or number) into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``ValueError`` if conversion fails or the result is
    not finite (``"nan"``, ``"snan"``, ``"inf"``).
    """
    try:
        cleaned = str(value).strip().replace(",", "")
        number = Decimal(cleaned)
    except (DecimalException, TypeError) as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not number.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return number


def parse_amount(value: Any) -> Decimal:
    """Parse an amount with optional ``k``/``l``/``m``/``cr`` suffixes.

    Accepts plain numbers ("2500000") and shorthand such as "25l" (25 lakh,
    i.e. 2_500_000), "2.5m" or "1cr".
    """
    text = str(value).strip().lower().replace(",", "")
    factor = Decimal(1)
    for suffix, multiplier in AMOUNT_SUFFIXES:
        if text.endswith(suffix):
            factor = multiplier
            text = text[: -len(suffix)]
            break
    try:
        return decimal_from_str(text) * factor
    except DecimalException as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_percent(value: Any) -> Decimal:
    """Parse a percentage string such as "8.5" or "8.5%" into ``Decimal``."""
    text = str(value).strip()
    if text.endswith("%"):
        text = text[:-1]
    return decimal_from_str(text)


def clamp(value: Decimal, lower: Decimal, upper: Optional[Decimal] = None) -> Decimal:
    """Return ``value`` bounded to ``[lower, upper]`` (``upper`` optional)."""
    if value < lower:
        return lower
    if upper is not None and value > upper:
        return upper
    return value
