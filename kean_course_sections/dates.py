"""
Parse the meeting-date text the catalog shows for a section,
e.g. '9/3/2024 - 12/16/2024' or '09/03/24 - 12/16/24' (US month/day/year).
"""
from __future__ import annotations

import re
from datetime import date
from typing import List, Optional

from .model import DateRange

# Used by the section extractor to pick the date span out of several
# meeting-time spans; parse_date_range does the strict check.
DATE_RANGE_RE = re.compile(
    r"(\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))\s*-\s*(\d{1,2}/\d{1,2}/(?:\d{4}|\d{2}))"
)


def _to_number(part: str) -> int:
    """Numeric value of one date component; anything non-numeric reads as 0."""
    part = part.strip()
    if not (part.isascii() and part.isdigit()):
        return 0
    return int(part)


def _parse_us_date(token: str) -> Optional[date]:
    """Parse 'M/D/YYYY' or 'M/D/YY'. Returns None instead of raising."""
    parts: List[str] = token.strip().split("/")
    if len(parts) != 3:
        return None
    month, day, year = (_to_number(p) for p in parts)
    # 0 is never a valid day, month or year
    if not month or not day or not year:
        return None
    if year < 100:
        year += 2000
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def parse_date_range(text: str | None) -> Optional[DateRange]:
    """
    Parse '<start> - <end>' into a DateRange.

    Returns None for anything that is not exactly two valid dates separated
    by ' - '. The caller drops such rows from term classification.
    """
    if not text:
        return None
    pieces = text.strip().split(" - ")
    if len(pieces) != 2:
        return None
    start = _parse_us_date(pieces[0])
    end = _parse_us_date(pieces[1])
    if start is None or end is None:
        return None
    return DateRange(start=start, end=end)
