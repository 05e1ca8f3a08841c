"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str, today: Optional[date] = None) -> tuple[int, int]:
    """Parse a billing month into (month, year).

    Supports:
    - "2024-01", "2024-1"
    - "01/2024", "1/2024"
    - "this month", "last month"

    Raises:
        ValueError: If the string is not a recognizable month
    """
    month_str = month_str.strip().lower()
    if today is None:
        today = date.today()

    if month_str == "this month":
        return today.month, today.year
    if month_str == "last month":
        previous = today - relativedelta(months=1)
        return previous.month, previous.year

    match = re.fullmatch(r"(\d{4})-(\d{1,2})", month_str)
    if match:
        year, month = int(match.group(1)), int(match.group(2))
    else:
        match = re.fullmatch(r"(\d{1,2})/(\d{4})", month_str)
        if not match:
            raise ValueError(f"Could not parse month '{month_str}': expected YYYY-MM or MM/YYYY")
        month, year = int(match.group(1)), int(match.group(2))

    if not 1 <= month <= 12:
        raise ValueError(f"Could not parse month '{month_str}': month must be 1-12")
    return month, year
