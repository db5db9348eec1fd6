"""
Assign scraped sections to academic terms.

The catalog groups sections under its own term headers, but those are not
reliable, so the term is recomputed from each section's meeting dates: a
section belongs to every configured term whose window fully contains its
date range. A section that straddles two terms (e.g. 12/01 - 01/05) fits
neither and is left out.
"""
from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Sequence

from .dates import parse_date_range
from .model import ClassifiedSection, DateRange, RawSectionRow, TermGroup, TermWindow

logger = logging.getLogger(__name__)

# Kean academic calendar 2024-2025. Must be refreshed every year, either here
# or through a terms file (see load_term_windows).
DEFAULT_TERM_WINDOWS: tuple[TermWindow, ...] = (
    TermWindow("Fall 2024", date(2024, 9, 1), date(2024, 12, 20)),
    TermWindow("Winter 2024", date(2024, 12, 23), date(2025, 1, 10)),
    TermWindow("Spring 2025", date(2025, 1, 13), date(2025, 5, 7)),
    TermWindow("Summer I 2025", date(2025, 5, 20), date(2025, 6, 15)),
    TermWindow("Summer II 2025", date(2025, 7, 2), date(2025, 8, 27)),
    TermWindow("Fall 2025", date(2025, 9, 1), date(2025, 12, 20)),
)


def load_term_windows(path: str | Path) -> List[TermWindow]:
    """
    Read a term table from JSON:

        [{"term": "Fall 2025", "start": "2025-09-01", "end": "2025-12-20"}, ...]

    Order in the file is the order terms appear in results.
    """
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Terms file {p} must contain a JSON list.")
    windows: List[TermWindow] = []
    for i, item in enumerate(data):
        try:
            windows.append(
                TermWindow(
                    term=str(item["term"]),
                    start=date.fromisoformat(item["start"]),
                    end=date.fromisoformat(item["end"]),
                )
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid term entry #{i} in {p}: {e}") from e
    return windows


def _contains(window: TermWindow, date_range: DateRange) -> bool:
    return date_range.start >= window.start and date_range.end <= window.end


def classify(date_range: DateRange, windows: Iterable[TermWindow]) -> List[TermWindow]:
    """All windows that fully contain date_range (containment, not overlap)."""
    return [w for w in windows if _contains(w, date_range)]


def sort_into_terms(
    rows: Iterable[RawSectionRow],
    windows: Sequence[TermWindow] = DEFAULT_TERM_WINDOWS,
) -> List[TermGroup]:
    """
    Bucket rows by term in configured order, dropping empty terms.

    Rows whose date text does not parse are skipped. Windows may overlap, in
    which case a section is listed under each of them.
    """
    groups = [TermGroup(term=w.term) for w in windows]
    for row in rows:
        date_range = parse_date_range(row.date_text)
        if date_range is None:
            logger.debug("Skipping %r: unusable date text %r", row.section_name, row.date_text)
            continue
        for i, w in enumerate(windows):
            if _contains(w, date_range):
                groups[i].sections.append(
                    ClassifiedSection(
                        name=row.section_name,
                        professor=row.professor,
                        seats=row.seats,
                        start_date=date_range.start,
                        end_date=date_range.end,
                    )
                )
    return [g for g in groups if g.sections]
