"""
Pull section rows out of the expanded "terms and sections" panel of a
course search result.

The panel looks roughly like:

    <div data-bind="foreach: TermsAndSections">
      <h4>Fall 2024</h4>
      <ul data-bind="foreach: Sections">
        <li>
          <a class="search-sectiondetailslink">CS*2060*01</a>
          <span title="Show Office Hours">Smith, J</span>
          <span class="search-seatsavailabletext">12 / 30 / 0</span>
          <span class="search-meetingtimestext">M/W 10:30 AM - 11:45 AM</span>
          <span class="search-meetingtimestext">9/3/2024 - 12/16/2024</span>
        </li>
      </ul>
    </div>

Every element inside an <li> may be missing.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup, Tag  # type: ignore[import]

from . import catalog_page as page
from .dates import DATE_RANGE_RE
from .model import NO_DATE_INFO, NO_SEAT_DATA, NO_SECTION_NAME, RawSectionRow


def _meeting_dates(li: Tag) -> str:
    """First meeting-times span that holds a date range, else the sentinel."""
    for span in li.select(page.SECTION_MEETING_TIMES):
        text = page.element_text(span)
        if DATE_RANGE_RE.search(text):
            return text
    return NO_DATE_INFO


def _parse_section_row(li: Tag) -> RawSectionRow:
    # absent element -> None; present but empty -> ""
    office_hours = li.select_one(page.SECTION_PROFESSOR)
    return RawSectionRow(
        section_name=page.element_text(li.select_one(page.SECTION_NAME)) or NO_SECTION_NAME,
        professor=None if office_hours is None else page.element_text(office_hours),
        seats=page.element_text(li.select_one(page.SECTION_SEATS)) or NO_SEAT_DATA,
        date_text=_meeting_dates(li),
    )


def extract_sections(panel_html: str) -> List[RawSectionRow]:
    """
    Flatten every section <li> of every term group, in page order.

    The page's own term headers are ignored; terms are reassigned from the
    meeting dates later (see terms.sort_into_terms).
    """
    soup = BeautifulSoup(panel_html, "html.parser")
    rows: List[RawSectionRow] = []
    for panel in soup.select(page.TERMS_PANEL):
        for li in panel.select(page.SECTION_ROWS):
            rows.append(_parse_section_row(li))
    return rows
