"""Tests for render_wait.py – staged readiness checks."""
import pytest

from kean_course_sections.errors import StageTimeout
from kean_course_sections.render_wait import Stage, stage_timeout, wait_for_stage


def _loaded(fake_driver, html):
    driver = fake_driver(html)
    driver.get("https://example.test/search")
    return driver


def _wait(driver, stage):
    wait_for_stage(driver, stage, timeout=0, poll_frequency=0.01)


class TestStageOrder:
    def test_default_budgets(self):
        assert [s.spec.timeout for s in Stage] == [10, 60, 5, 60, 60]

    def test_override(self):
        assert stage_timeout(Stage.SECTIONS_TOGGLE_VISIBLE) == 5
        assert stage_timeout(Stage.SECTIONS_TOGGLE_VISIBLE, {Stage.SECTIONS_TOGGLE_VISIBLE: 1.5}) == 1.5
        assert stage_timeout(Stage.TERMS_PANEL_READY, {Stage.SECTIONS_TOGGLE_VISIBLE: 1.5}) == 60


class TestSearchListReady:
    def test_ready(self, fake_driver, page_html):
        _wait(_loaded(fake_driver, page_html.search()), Stage.SEARCH_LIST_READY)

    def test_lists_missing(self, fake_driver, page_html):
        driver = _loaded(fake_driver, page_html.search(lists=False))
        with pytest.raises(StageTimeout) as exc:
            _wait(driver, Stage.SEARCH_LIST_READY)
        assert exc.value.stage is Stage.SEARCH_LIST_READY

    def test_subject_list_alone_is_not_enough(self, fake_driver):
        html = '<ul data-bind="foreach: SubjectsPartialList"></ul>'
        with pytest.raises(StageTimeout):
            _wait(_loaded(fake_driver, html), Stage.SEARCH_LIST_READY)


class TestFirstResultRendered:
    def test_ready(self, fake_driver, page_html):
        _wait(_loaded(fake_driver, page_html.search()), Stage.FIRST_RESULT_RENDERED)

    def test_blank_title(self, fake_driver, page_html):
        driver = _loaded(fake_driver, page_html.search(title="   "))
        with pytest.raises(StageTimeout):
            _wait(driver, Stage.FIRST_RESULT_RENDERED)


class TestSectionStages:
    def test_toggle(self, fake_driver, page_html):
        _wait(_loaded(fake_driver, page_html.search()), Stage.SECTIONS_TOGGLE_VISIBLE)
        with pytest.raises(StageTimeout):
            _wait(_loaded(fake_driver, page_html.search(toggle=False)), Stage.SECTIONS_TOGGLE_VISIBLE)

    def test_panel_and_headers(self, fake_driver, page_html):
        html = page_html.search(panels=[page_html.panel("Fall 2024", [page_html.section()])])
        driver = _loaded(fake_driver, html)
        _wait(driver, Stage.TERMS_PANEL_READY)
        _wait(driver, Stage.TERM_HEADERS_RENDERED)

    def test_panel_without_header_text(self, fake_driver, page_html):
        html = page_html.search(panels=[page_html.panel("", [page_html.section()])])
        driver = _loaded(fake_driver, html)
        _wait(driver, Stage.TERMS_PANEL_READY)
        with pytest.raises(StageTimeout):
            _wait(driver, Stage.TERM_HEADERS_RENDERED)

    def test_panel_in_other_result_is_ignored(self, fake_driver, page_html):
        panel = page_html.panel("Fall 2024", [page_html.section()])
        html = page_html.search().replace(
            "CS*2070 Other Course</span>", "CS*2070 Other Course</span>" + panel
        )
        with pytest.raises(StageTimeout):
            _wait(_loaded(fake_driver, html), Stage.TERMS_PANEL_READY)
