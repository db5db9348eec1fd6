"""
Staged waits for the course search page.

The page hydrates in discrete phases. Each phase gets its own readiness
check and timeout so the caller can tell "slow site" from "no such course"
from "course without sections":

    SEARCH_LIST_READY        subject list + result list exist         10s
    FIRST_RESULT_RENDERED    first result title has text              60s
    SECTIONS_TOGGLE_VISIBLE  first result has a sections toggle        5s
    TERMS_PANEL_READY        terms/sections panel exists (post-click) 60s
    TERM_HEADERS_RENDERED    a term header in that panel has text     60s
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from selenium.common.exceptions import StaleElementReferenceException, TimeoutException
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait

from . import catalog_page as page
from .errors import StageTimeout

logger = logging.getLogger(__name__)


def _exists(driver, selector: str) -> bool:
    return len(driver.find_elements(By.CSS_SELECTOR, selector)) > 0


def _text_content(el) -> str:
    # .text only returns visible text; textContent also covers collapsed nodes
    return (el.get_attribute("textContent") or "").strip()


def _search_list_ready(driver) -> bool:
    return _exists(driver, page.SUBJECT_LIST) and _exists(driver, page.RESULT_LIST)


def _first_result_rendered(driver) -> bool:
    titles = driver.find_elements(By.CSS_SELECTOR, page.in_first_result(page.COURSE_TITLE))
    return bool(titles) and bool(_text_content(titles[0]))


def _sections_toggle_visible(driver) -> bool:
    return _exists(driver, page.in_first_result(page.SECTIONS_TOGGLE))


def _terms_panel_ready(driver) -> bool:
    return _exists(driver, page.in_first_result(page.TERMS_PANEL))


def _term_headers_rendered(driver) -> bool:
    headers = driver.find_elements(
        By.CSS_SELECTOR, page.in_first_result(page.TERMS_PANEL) + " > h4"
    )
    return any(_text_content(h) for h in headers)


@dataclass(frozen=True)
class StageSpec:
    description: str
    timeout: float
    ready: Callable[..., bool]


class Stage(enum.Enum):
    SEARCH_LIST_READY = StageSpec("search and subject lists", 10, _search_list_ready)
    FIRST_RESULT_RENDERED = StageSpec("first result title", 60, _first_result_rendered)
    SECTIONS_TOGGLE_VISIBLE = StageSpec("sections toggle", 5, _sections_toggle_visible)
    TERMS_PANEL_READY = StageSpec("terms and sections panel", 60, _terms_panel_ready)
    TERM_HEADERS_RENDERED = StageSpec("term headers", 60, _term_headers_rendered)

    @property
    def spec(self) -> StageSpec:
        return self.value


def stage_timeout(stage: Stage, overrides: Optional[Mapping[Stage, float]] = None) -> float:
    if overrides and stage in overrides:
        return overrides[stage]
    return stage.spec.timeout


def wait_for_stage(
    driver,
    stage: Stage,
    timeout: Optional[float] = None,
    poll_frequency: float = 0.5,
) -> None:
    """
    Block until ``stage`` is ready on the current page.

    Raises StageTimeout if it is not ready within ``timeout`` seconds
    (default: the stage's own budget).
    """
    if timeout is None:
        timeout = stage.spec.timeout
    logger.debug("Waiting up to %gs for %s", timeout, stage.spec.description)
    wait = WebDriverWait(
        driver,
        timeout,
        poll_frequency=poll_frequency,
        ignored_exceptions=(StaleElementReferenceException,),
    )
    try:
        wait.until(stage.spec.ready)
    except TimeoutException as e:
        raise StageTimeout(stage, timeout) from e
    logger.debug("%s ready", stage.name)
