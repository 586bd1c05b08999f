#!/usr/bin/env python3
"""
Currency Conversion Utilities

Actual Budget stores every amount as an integer number of cents. User input
arrives as decimal strings ("12.50", "-3") and output is printed as decimal
numbers. Conversions go through Decimal so no float rounding leaks in.

Currency Systems:
- Storage uses integer cents: 100 = 1.00
- Input and output use decimal amounts: 12.34
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import ValidationError


def parse_amount(amount_str: str) -> Decimal:
    """
    Parse a user-supplied amount string.

    Args:
        amount_str: String like '12.34', '-5' or ' 1,234.56 '

    Returns:
        Decimal amount

    Raises:
        ValidationError: If the string is not a finite number
    """
    clean_str = str(amount_str).replace(",", "").strip()
    try:
        amount = Decimal(clean_str)
    except InvalidOperation:
        raise ValidationError(f"Invalid amount: {amount_str}") from None
    if not amount.is_finite():
        raise ValidationError(f"Invalid amount: {amount_str}")
    return amount


def amount_to_integer(amount: Decimal | int | str) -> int:
    """
    Convert a decimal amount to integer cents, rounding half away from zero.

    Example:
        amount_to_integer("12.345") -> 1235
        amount_to_integer(Decimal("-0.5")) -> -50
    """
    if isinstance(amount, str):
        amount = parse_amount(amount)
    cents = (Decimal(amount) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(cents)


def integer_to_amount(cents: int) -> float:
    """
    Convert integer cents to a decimal amount for JSON output.

    Example:
        integer_to_amount(-4599) -> -45.99
    """
    return float(Decimal(int(cents)) / 100)


def integer_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to an exact Decimal amount."""
    return Decimal(int(cents)) / 100
