"""
CSS selectors for the Kean self-service course search page
(Ellucian Colleague, rendered client-side with knockout.js bindings).
"""
from __future__ import annotations

from urllib.parse import quote

DEFAULT_SEARCH_URL = "https://selfservice.kean.edu/Student/Courses/Search"

SUBJECT_LIST = 'ul[data-bind="foreach: SubjectsPartialList"]'
RESULT_LIST = "ul#course-resultul"
RESULT_ROWS = "#course-resultul > li"
FIRST_RESULT = "#course-resultul > li:nth-child(1)"

# Relative to a result row
COURSE_TITLE = "span[data-bind]"
COURSE_DESCRIPTION = ".search-coursedescription"
SECTIONS_TOGGLE = "button.esg-collapsible-group__toggle"
TERMS_PANEL = "div[data-bind='foreach: TermsAndSections']"

# Relative to a terms panel
SECTION_ROWS = 'ul[data-bind="foreach: Sections"] li'
SECTION_NAME = "a.search-sectiondetailslink"
SECTION_PROFESSOR = 'span[title="Show Office Hours"]'
SECTION_SEATS = "span.search-seatsavailabletext"
SECTION_MEETING_TIMES = "span.search-meetingtimestext"


def in_first_result(selector: str) -> str:
    return f"{FIRST_RESULT} {selector}"


def search_url(base_url: str, query: str) -> str:
    """
    Build the search URL with the query as ``keyword``.

    '+' and '*' are passed through untouched: the catalog reads '+' as a
    space, and '*' is its own course-code separator (CS*2060).
    """
    sep = "&" if "?" in base_url else "?"
    return f"{base_url}{sep}keyword={quote(query, safe='+*')}"


def element_text(el) -> str:
    """Text of a parsed element with whitespace collapsed; '' when el is None."""
    if el is None:
        return ""
    return " ".join(el.get_text(" ").split())
