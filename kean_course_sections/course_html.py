"""
Pick the course record out of the first search result.

Keyword search on the catalog is fuzzy: searching "CS2" also returns
CS*200 ... CS*299. Only a result whose subject prefix and course number
both equal the query's is accepted.
"""
from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup  # type: ignore[import]

from . import catalog_page as page
from .model import CourseRecord

# 'CS*2060 Intro to Programming' or 'CS 2060 ...'
_TITLE_CODE_RE = re.compile(r"([A-Z]+)[\s*](\d+)", re.I)


def split_course_code(title: str) -> tuple[str, str] | None:
    """
    Split a displayed course title into (PREFIX, number).

    >>> split_course_code("CS*2060 Intro to Programming")
    ('CS', '2060')
    """
    m = _TITLE_CODE_RE.search(title or "")
    if not m:
        return None
    return m.group(1).upper(), m.group(2)


def query_course_code(query: str) -> tuple[str | None, str | None]:
    """
    Prefix and number as the user typed them: '+' removed, upper-cased,
    first run of letters and first run of digits.
    """
    clean = (query or "").replace("+", "").upper()
    prefix = re.search(r"[A-Z]+", clean)
    number = re.search(r"\d+", clean)
    return (prefix.group(0) if prefix else None, number.group(0) if number else None)


def course_matches(title: str, query: str) -> bool:
    code = split_course_code(title)
    if code is None:
        return False
    prefix, number = code
    q_prefix, q_number = query_course_code(query)
    return prefix == q_prefix and number == q_number


def resolve_course(row_html: str, query: str) -> Optional[CourseRecord]:
    """
    Return the CourseRecord for a rendered result row (an <li> of
    #course-resultul), or None if it is not the course the query names.
    """
    soup = BeautifulSoup(row_html, "html.parser")
    name = page.element_text(soup.select_one(page.COURSE_TITLE))
    if not name or not course_matches(name, query):
        return None
    description = page.element_text(soup.select_one(page.COURSE_DESCRIPTION))
    return CourseRecord(name=name, description=description)
