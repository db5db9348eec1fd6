"""
End-to-end course lookup.

    navigate -> search list -> first result -> resolve course
             -> sections toggle -> terms panel -> term headers
             -> extract rows -> parse dates -> sort into terms

Each step that can fail maps to one Outcome:

    navigation error / page load timeout        NAVIGATION_FAILED
    no pooled browser free in time              NAVIGATION_FAILED
    search list missing, zero rows, no title    NOT_FOUND (no results)
    first result is a different course          NOT_FOUND (no exact match)
    no toggle, or panel never renders           SUCCESS with no terms
    anything else                               UNEXPECTED_FAILURE
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup  # type: ignore[import]
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from . import catalog_page as page
from .config import Settings
from .course_html import resolve_course
from .errors import (
    BrowserBusyError,
    CourseNotFoundError,
    NavigationError,
    StageTimeout,
)
from .model import (
    NO_EXACT_MATCH,
    NO_RESULTS,
    CourseRecord,
    Outcome,
    Result,
    TermWindow,
)
from .render_wait import Stage, stage_timeout, wait_for_stage
from .sections_html import extract_sections
from .terms import DEFAULT_TERM_WINDOWS, sort_into_terms

logger = logging.getLogger(__name__)


class _Pipeline:
    """One lookup against one browser tab."""

    def __init__(self, driver, query: str, settings: Settings):
        self.driver = driver
        self.query = query
        self.settings = settings

    def wait(self, stage: Stage) -> None:
        wait_for_stage(
            self.driver,
            stage,
            timeout=stage_timeout(stage, self.settings.stage_timeouts),
            poll_frequency=self.settings.poll_frequency,
        )

    def outer_html(self, selector: str) -> List[str]:
        return [
            el.get_attribute("outerHTML") or ""
            for el in self.driver.find_elements(By.CSS_SELECTOR, selector)
        ]

    def navigate(self) -> None:
        url = page.search_url(self.settings.search_url, self.query)
        logger.info("Searching catalog: %s", url)
        try:
            self.driver.get(url)
        except WebDriverException as e:
            raise NavigationError(f"Failed to load {url}: {e.msg or e}") from e

    def find_course(self) -> CourseRecord:
        try:
            self.wait(Stage.SEARCH_LIST_READY)
        except StageTimeout as e:
            raise CourseNotFoundError(NO_RESULTS) from e

        if not self.driver.find_elements(By.CSS_SELECTOR, page.RESULT_ROWS):
            raise CourseNotFoundError(NO_RESULTS)

        try:
            self.wait(Stage.FIRST_RESULT_RENDERED)
        except StageTimeout as e:
            raise CourseNotFoundError(NO_RESULTS) from e

        rows = self.outer_html(page.FIRST_RESULT)
        course = resolve_course(rows[0], self.query) if rows else None
        if course is None:
            raise CourseNotFoundError(NO_EXACT_MATCH)
        return course

    def open_sections(self) -> bool:
        """Expand the first result's sections. False if it has none to show."""
        try:
            self.wait(Stage.SECTIONS_TOGGLE_VISIBLE)
        except StageTimeout:
            logger.info("No sections toggle for %r", self.query)
            return False

        toggles = self.driver.find_elements(
            By.CSS_SELECTOR, page.in_first_result(page.SECTIONS_TOGGLE)
        )
        if not toggles:
            return False
        try:
            toggles[0].click()
        except WebDriverException as e:
            logger.warning("Could not open sections for %r: %s", self.query, e)
            return False

        try:
            self.wait(Stage.TERMS_PANEL_READY)
            self.wait(Stage.TERM_HEADERS_RENDERED)
        except StageTimeout as e:
            logger.warning("Sections for %r never rendered: %s", self.query, e)
            return False
        return True

    def run(self) -> Result:
        self.navigate()
        course = self.find_course()
        if not self.open_sections():
            return Result(course=course)
        panels = self.outer_html(page.in_first_result(page.TERMS_PANEL))
        rows = extract_sections("".join(panels))
        logger.info("%s: %d section row(s) scraped", course.name, len(rows))
        return Result(
            course=course,
            sorted_courses_and_terms=sort_into_terms(rows, self.settings.term_windows),
        )


def search_course(browser, query: str, settings: Optional[Settings] = None) -> Outcome:
    """
    Look up one course and report what happened.

    ``browser`` must already be started. Its tab for this request is closed
    on every path out of this function.
    """
    settings = settings or Settings()
    try:
        with browser.session(
            page_load_timeout=settings.navigation_timeout,
            acquire_timeout=settings.session_wait_timeout,
        ) as driver:
            result = _Pipeline(driver, query, settings).run()
    except BrowserBusyError as e:
        logger.warning("No browser available for %r: %s", query, e)
        return Outcome.navigation_failed()
    except NavigationError as e:
        logger.warning("Navigation failed for %r: %s", query, e)
        return Outcome.navigation_failed()
    except CourseNotFoundError as e:
        logger.info("Course %r not found: %s", query, e.reason)
        return Outcome.not_found(e.reason)
    except Exception:
        logger.exception("Unexpected error while searching %r", query)
        return Outcome.unexpected_failure()
    return Outcome.success(result)


def result_from_page_html(
    html: str,
    query: str,
    term_windows: Sequence[TermWindow] = DEFAULT_TERM_WINDOWS,
) -> Outcome:
    """
    Run resolution and extraction on a saved search page whose first result
    has already been expanded. No browser needed.
    """
    soup = BeautifulSoup(html, "html.parser")
    first = soup.select_one(page.FIRST_RESULT)
    if first is None:
        return Outcome.not_found(NO_RESULTS)
    course = resolve_course(str(first), query)
    if course is None:
        return Outcome.not_found(NO_EXACT_MATCH)
    panels = "".join(str(p) for p in first.select(page.TERMS_PANEL))
    rows = extract_sections(panels)
    return Outcome.success(
        Result(course=course, sorted_courses_and_terms=sort_into_terms(rows, term_windows))
    )
