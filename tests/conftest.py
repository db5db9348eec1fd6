"""
Shared fixtures: catalog page HTML builders and a WebDriver stand-in that
answers CSS queries from BeautifulSoup, so the pipeline runs without Chrome.
"""
from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from selenium.common.exceptions import TimeoutException

from kean_course_sections.config import Settings
from kean_course_sections.render_wait import Stage


# ── Page builders ──────────────────────────────────────────────

def section_li(
    name: str | None = "CS*2060*01",
    professor: str | None = "Smith, Jane",
    seats: str | None = "12 / 30 / 0",
    times: tuple[str, ...] = ("M/W 10:30 AM - 11:45 AM", "9/3/2024 - 12/16/2024"),
) -> str:
    parts = ["<li>"]
    if name is not None:
        parts.append(f'<a class="search-sectiondetailslink" href="#">{name}</a>')
    if professor is not None:
        parts.append(f'<span title="Show Office Hours">{professor}</span>')
    if seats is not None:
        parts.append(f'<span class="search-seatsavailabletext">{seats}</span>')
    for t in times:
        parts.append(f'<span class="search-meetingtimestext">{t}</span>')
    parts.append("</li>")
    return "\n".join(parts)


def terms_panel(term: str, sections: list[str]) -> str:
    return (
        '<div data-bind="foreach: TermsAndSections">'
        f"<h4>{term}</h4>"
        '<ul data-bind="foreach: Sections">'
        + "".join(sections)
        + "</ul></div>"
    )


def search_page(
    title: str = "CS*2060 Intro to Programming",
    description: str = "Introduction to programming in C.",
    toggle: bool = True,
    panels: list[str] | None = None,
    extra_results: int = 1,
    results: bool = True,
    lists: bool = True,
) -> str:
    if not lists:
        return "<html><body><div class='loading'>Loading...</div></body></html>"
    rows = []
    if results:
        first = [
            "<li>",
            f'<span data-bind="text: FullTitleDisplay">{title}</span>',
            f'<p class="search-coursedescription">{description}</p>',
        ]
        if toggle:
            first.append('<button class="esg-collapsible-group__toggle">View Available Sections</button>')
        first.extend(panels or [])
        first.append("</li>")
        rows.append("\n".join(first))
        for i in range(extra_results):
            rows.append(
                f'<li><span data-bind="text: FullTitleDisplay">CS*20{70 + i} Other Course</span></li>'
            )
    return (
        "<html><body>"
        '<ul data-bind="foreach: SubjectsPartialList"><li>Computer Science</li></ul>'
        '<ul id="course-resultul">' + "\n".join(rows) + "</ul>"
        "</body></html>"
    )


# ── Fake WebDriver ─────────────────────────────────────────────

class FakeElement:
    def __init__(self, driver: "FakeDriver", tag):
        self._driver = driver
        self._tag = tag

    def get_attribute(self, name: str):
        if name == "textContent":
            return self._tag.get_text()
        if name == "outerHTML":
            return str(self._tag)
        return self._tag.get(name)

    @property
    def text(self) -> str:
        return self._tag.get_text(strip=True)

    def click(self) -> None:
        self._driver.clicks += 1
        if self._driver.click_error is not None:
            raise self._driver.click_error
        if self._driver.expanded_html is not None:
            self._driver.load(self._driver.expanded_html)


class FakeSwitchTo:
    def __init__(self, driver: "FakeDriver"):
        self._driver = driver

    def new_window(self, kind: str) -> None:
        self._driver.tabs_opened += 1
        self._driver._counter += 1
        handle = f"tab-{self._driver._counter}"
        self._driver.handles.append(handle)
        self._driver.current_window_handle = handle

    def window(self, handle: str) -> None:
        self._driver.current_window_handle = handle


class FakeDriver:
    """
    Minimal WebDriver: get() loads ``html``, clicking the toggle swaps in
    ``expanded_html``.
    """

    def __init__(
        self,
        html: str = "",
        expanded_html: str | None = None,
        get_error: Exception | None = None,
        click_error: Exception | None = None,
        find_error: Exception | None = None,
        close_error: Exception | None = None,
    ):
        self.html = html
        self.expanded_html = expanded_html
        self.get_error = get_error
        self.click_error = click_error
        self.find_error = find_error
        self.close_error = close_error
        self.soup = None
        self.visited: list[str] = []
        self.handles = ["home"]
        self.current_window_handle = "home"
        self.switch_to = FakeSwitchTo(self)
        self._counter = 0
        self.tabs_opened = 0
        self.tabs_closed = 0
        self.clicks = 0
        self.page_load_timeout = None
        self.quit_called = False

    def load(self, html: str) -> None:
        self.soup = BeautifulSoup(html, "html.parser")

    def set_page_load_timeout(self, seconds: float) -> None:
        self.page_load_timeout = seconds

    def get(self, url: str) -> None:
        self.visited.append(url)
        if self.get_error is not None:
            raise self.get_error
        self.load(self.html)

    def find_elements(self, by: str, selector: str):
        if self.find_error is not None:
            raise self.find_error
        if self.soup is None:
            return []
        return [FakeElement(self, t) for t in self.soup.select(selector)]

    def close(self) -> None:
        self.tabs_closed += 1
        if self.close_error is not None:
            raise self.close_error
        self.handles.remove(self.current_window_handle)
        self.soup = None

    def quit(self) -> None:
        self.quit_called = True


# ── Fixtures ───────────────────────────────────────────────────

@pytest.fixture
def fake_driver():
    return FakeDriver


@pytest.fixture
def page_html():
    """Namespace of HTML builders."""

    class Pages:
        section = staticmethod(section_li)
        panel = staticmethod(terms_panel)
        search = staticmethod(search_page)

    return Pages


@pytest.fixture
def fast_settings():
    """Settings with every stage timeout at zero and quick polling."""
    return Settings(stage_timeouts={s: 0 for s in Stage}, poll_frequency=0.01)


@pytest.fixture
def navigation_timeout():
    return TimeoutException("timeout: Timed out receiving message from renderer")
