#!/usr/bin/env python3
"""
Date Parsing Helpers

Flag values for dates and budget months are validated here before any
session is opened.
"""

from datetime import date, datetime

from .errors import ValidationError

EARLIEST_DATE = date(2000, 1, 1)


def parse_iso_date(date_str: str, flag: str = "date") -> date:
    """
    Parse a YYYY-MM-DD string.

    Args:
        date_str: Date string to parse
        flag: Name used in the error message

    Returns:
        date object

    Raises:
        ValidationError: If the string is not a valid YYYY-MM-DD date
    """
    try:
        return datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {flag}: {date_str} (expected YYYY-MM-DD)") from None


def parse_month(month_str: str) -> date:
    """
    Parse a YYYY-MM string into the first day of that month.

    Raises:
        ValidationError: If the string is not a valid YYYY-MM month
    """
    try:
        return datetime.strptime(month_str.strip(), "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Invalid month: {month_str} (expected YYYY-MM)") from None
