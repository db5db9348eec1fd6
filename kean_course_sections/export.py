"""
Export a lookup result to ICS, CSV, or JSON.
"""
from __future__ import annotations

import csv
import hashlib
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List

import icalendar

from .model import Result

CSV_FIELDS = ["term", "course", "section", "professor", "seats", "start_date", "end_date"]


def flatten(result: Result) -> List[Dict[str, str]]:
    """One row per (term, section). A section in two terms appears twice."""
    rows = []
    for group in result.sorted_courses_and_terms:
        for s in group.sections:
            rows.append({
                "term": group.term,
                "course": result.course.name,
                "section": s.name,
                "professor": s.professor or "",
                "seats": s.seats,
                "start_date": s.start_date.isoformat(),
                "end_date": s.end_date.isoformat(),
            })
    return rows


def export_ics(result: Result, out_path: str | Path) -> None:
    """One all-day event per (term, section), spanning its meeting dates."""
    cal = icalendar.Calendar()
    cal.add("prodid", "-//Kean Course Sections//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", result.course.name)

    for group in result.sorted_courses_and_terms:
        for s in group.sections:
            event = icalendar.Event()

            uid_string = f"{group.term}-{s.name}-{s.start_date.isoformat()}"
            uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
            event.add("uid", f"{uid_hash}@kean-course-sections")

            event.add("summary", f"{s.name} ({group.term})")
            desc = f"Course: {result.course.name}\nSeats: {s.seats}"
            if s.professor:
                desc = f"Instructor: {s.professor}\n" + desc
            event.add("description", desc)
            event.add("dtstart", s.start_date)
            # DTEND is exclusive for all-day events
            event.add("dtend", s.end_date + timedelta(days=1))
            event.add("dtstamp", datetime.now(timezone.utc))
            cal.add_component(event)

    Path(out_path).write_text(cal.to_ical().decode("utf-8"), encoding="utf-8")


def export_csv(result: Result, out_path: str | Path) -> None:
    """Export sections to CSV."""
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        w.writerows(flatten(result))


def export_json(result: Result, out_path: str | Path) -> None:
    """Export the result in the same shape the HTTP API returns."""
    Path(out_path).write_text(
        json.dumps(result.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
    )


def export(result: Result, out_path: str | Path, fmt: str) -> None:
    """Export to the given format: ics, csv, or json."""
    fmt = fmt.lower()
    if fmt == "ics":
        export_ics(result, out_path)
    elif fmt == "csv":
        export_csv(result, out_path)
    elif fmt == "json":
        export_json(result, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use ics, csv, or json.")
