"""Date parsing utilities."""

import re
from datetime import date
from dateutil.parser import isoparse

_DAY_FIRST_SEPARATORS = re.compile(r"[/\-.]")


def parse_brazilian_date(date_str: str) -> date:
    """Parse a day-first date string into a date object.

    Supports:
    - "05/03/2026", "05-03-2026", "05.03.2026" (day, month, year)
    - two-digit years, assumed to be in the 2000s ("05-03-26" -> 2026-03-05)
    - ISO dates as a fallback ("2026-03-05", "2026-03-05T10:00:00")

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip()
    if not date_str:
        raise ValueError("Empty date string")

    # "05/03/2026 10:32" carries a time after the date
    parts = _DAY_FIRST_SEPARATORS.split(date_str.split()[0])
    if len(parts) == 3 and all(p.isdigit() for p in parts):
        day, month, year = (int(p) for p in parts)
        if year < 100:
            year += 2000
        try:
            return date(year, month, day)
        except ValueError:
            # ISO dates also split into three numeric parts
            pass

    try:
        return isoparse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_ofx_date(date_str: str) -> date:
    """Parse an OFX ``DTPOSTED`` value (``YYYYMMDD`` optionally followed by time)."""
    date_str = date_str.strip()
    head = date_str[:8]
    if len(head) != 8 or not head.isdigit():
        raise ValueError(f"Could not parse OFX date '{date_str}'")
    try:
        return date(int(head[:4]), int(head[4:6]), int(head[6:8]))
    except ValueError as e:
        raise ValueError(f"Could not parse OFX date '{date_str}': {e}")
