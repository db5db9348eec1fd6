"""
Exceptions raised inside the extraction pipeline.

The orchestrator in search.py maps each of these onto an Outcome; none of
them is meant to reach an HTTP client as-is.
"""
from __future__ import annotations


class CourseSearchError(Exception):
    """Base class for expected pipeline failures."""


class NavigationError(CourseSearchError):
    """The catalog page could not be reached or loaded within its budget."""


class StageTimeout(CourseSearchError):
    """A render stage did not become ready before its timeout."""

    def __init__(self, stage, timeout: float):
        self.stage = stage
        self.timeout = timeout
        super().__init__(f"{stage.name} not ready after {timeout:g}s")


class CourseNotFoundError(CourseSearchError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class BrowserBusyError(CourseSearchError):
    """Every pooled browser stayed checked out past the wait budget."""
