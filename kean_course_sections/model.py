"""
Data model shared by the extraction pipeline, the HTTP layer and the exporter.

Everything here is request-scoped: built fresh for one query and thrown away
once the response is written.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

# Placeholders for fields the catalog page did not render
NO_SECTION_NAME = "No Section name provided"
NO_SEAT_DATA = "No Seat Data"
NO_DATE_INFO = "No Date Info"

NO_RESULTS = "no results for query"
NO_EXACT_MATCH = "no exact match for query"


@dataclass(frozen=True)
class CourseRecord:
    name: str
    description: str

    def to_dict(self) -> dict:
        return {"name": self.name, "description": self.description}


@dataclass
class RawSectionRow:
    """One scraped section, before any validation."""

    section_name: str
    professor: Optional[str]
    seats: str
    date_text: str


@dataclass(frozen=True)
class DateRange:
    # start <= end is not guaranteed by the catalog and is not checked
    start: date
    end: date


@dataclass(frozen=True)
class TermWindow:
    term: str
    start: date
    end: date


@dataclass
class ClassifiedSection:
    name: str
    professor: Optional[str]
    seats: str
    start_date: date
    end_date: date

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "professor": self.professor,
            "seats": self.seats,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
        }


@dataclass
class TermGroup:
    term: str
    sections: List[ClassifiedSection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"term": self.term, "sections": [s.to_dict() for s in self.sections]}


@dataclass
class Result:
    course: CourseRecord
    sorted_courses_and_terms: List[TermGroup] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "course": self.course.to_dict(),
            "sortedCoursesAndTerms": [g.to_dict() for g in self.sorted_courses_and_terms],
        }


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    NAVIGATION_FAILED = "navigation_failed"
    UNEXPECTED_FAILURE = "unexpected_failure"


@dataclass
class Outcome:
    """
    What one lookup produced.

    ``result`` is set only for SUCCESS; ``reason`` only for NOT_FOUND
    (one of NO_RESULTS / NO_EXACT_MATCH).
    """

    kind: OutcomeKind
    result: Optional[Result] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, result: Result) -> "Outcome":
        return cls(OutcomeKind.SUCCESS, result=result)

    @classmethod
    def not_found(cls, reason: str) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND, reason=reason)

    @classmethod
    def navigation_failed(cls) -> "Outcome":
        return cls(OutcomeKind.NAVIGATION_FAILED)

    @classmethod
    def unexpected_failure(cls) -> "Outcome":
        return cls(OutcomeKind.UNEXPECTED_FAILURE)
