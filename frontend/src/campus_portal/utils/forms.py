"""
Form Input Parsing
Browsers submit untouched inputs as empty strings; pages read those as "not given"
"""

from datetime import date
from typing import Optional


def optional_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """
    Parse a number input

    Args:
        value: Raw query or form value
        default: Returned for blank or non-numeric input

    Returns:
        The parsed integer, or default
    """
    value = (value or "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def optional_date(value: Optional[str]) -> Optional[date]:
    """Parse a date input (YYYY-MM-DD); blank or malformed gives None"""
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
