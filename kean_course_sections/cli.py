"""
Command-line interface: look up a Kean course and print or export its sections.
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from . import __version__
from .browser import Browser
from .config import Settings, configure_logging
from .export import export
from .model import Outcome, OutcomeKind
from .search import result_from_page_html, search_course
from .server import serve


def _output_path(output: str, fmt: str) -> Path:
    ext = {"ics": ".ics", "csv": ".csv", "json": ".json"}[fmt]
    return Path(output).with_suffix(ext) if Path(output).suffix else Path(output + ext)


def _report(outcome: Outcome, query: str, args) -> int:
    if outcome.kind is OutcomeKind.NOT_FOUND:
        print(f"Course not found: {outcome.reason}: {query}", file=sys.stderr)
        return 1
    if outcome.kind is OutcomeKind.NAVIGATION_FAILED:
        print("Error: failed to access course search page.", file=sys.stderr)
        return 1
    if not outcome.ok:
        print("Error: an unexpected error occurred (see log).", file=sys.stderr)
        return 1

    result = outcome.result
    if not args.output:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return 0
    out_path = _output_path(args.output, args.format)
    export(result, out_path, args.format)
    count = sum(len(g.sections) for g in result.sorted_courses_and_terms)
    print(f"Exported {count} section(s) of {result.course.name} to {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kean-course-sections",
        description="Look up a course on the Kean self-service catalog and list its sections by term.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--terms-file",
        metavar="PATH",
        help='JSON term table: [{"term": "Fall 2025", "start": "2025-09-01", "end": "2025-12-20"}, ...]. '
        "Default: built-in calendar (or TERMS_FILE).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_output_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-o",
            "--output",
            help="Output path (without extension). Default: print JSON to stdout.",
        )
        p.add_argument(
            "-f",
            "--format",
            choices=["ics", "csv", "json"],
            default="json",
            help="Export format when --output is given. Default: json",
        )

    p_search = sub.add_parser("search", help="Fetch the catalog page with headless Chrome.")
    p_search.add_argument("query", help='Course code, e.g. "CS*2060" or "CS 2060".')
    p_search.add_argument("--show-browser", action="store_true", help="Run Chrome with a window.")
    add_output_args(p_search)

    p_html = sub.add_parser(
        "parse-html",
        help="Parse a saved search page (first result already expanded). No browser needed.",
    )
    p_html.add_argument("html_path", metavar="HTML_PATH")
    p_html.add_argument("query")
    add_output_args(p_html)

    p_serve = sub.add_parser("serve", help="Run the HTTP API (POST /api/courses).")
    p_serve.add_argument("--port", type=int, help="Default: PORT or 3002.")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env(terms_file=args.terms_file)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1
    configure_logging(settings.log_level)

    if args.command == "serve":
        if args.port:
            settings = replace(settings, port=args.port)
        serve(settings)
        return 0

    query = args.query.strip()
    if not query:
        print("Error: course name is required.", file=sys.stderr)
        return 1

    if args.command == "parse-html":
        p = Path(args.html_path)
        if not p.exists():
            print(f"Error: HTML file not found: {p}", file=sys.stderr)
            return 1
        html = p.read_text(encoding="utf-8", errors="ignore")
        outcome = result_from_page_html(html, query, settings.term_windows)
        return _report(outcome, query, args)

    headless = settings.headless and not args.show_browser
    try:
        with Browser(headless=headless) as browser:
            outcome = search_course(browser, query, settings)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return _report(outcome, query, args)


if __name__ == "__main__":
    sys.exit(main())
