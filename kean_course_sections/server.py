"""
HTTP front end: POST /api/courses {"name": "CS*2060"}.
"""
from __future__ import annotations

import atexit
import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from .browser import Browser
from .config import Settings
from .model import NO_EXACT_MATCH, OutcomeKind
from .search import search_course

logger = logging.getLogger(__name__)


def create_app(browser: Browser, settings: Settings | None = None) -> Flask:
    """Build the app around an already started Browser."""
    settings = settings or Settings()
    app = Flask(__name__)
    CORS(app)

    @app.route("/api/courses", methods=["POST"])
    def courses():
        body = request.get_json(silent=True) or {}
        name = body.get("name") if isinstance(body, dict) else None
        if not isinstance(name, str) or not name.strip():
            return jsonify({
                "error": "Invalid request body",
                "message": "Course name is required",
            }), 400
        name = name.strip()

        outcome = search_course(browser, name, settings)

        if outcome.kind is OutcomeKind.SUCCESS:
            return jsonify(outcome.result.to_dict())
        if outcome.kind is OutcomeKind.NOT_FOUND:
            if outcome.reason == NO_EXACT_MATCH:
                message = f"No exact match found for course: {name}"
            else:
                message = f"No results found for course: {name}"
            return jsonify({"error": "Course not found", "message": message}), 404
        if outcome.kind is OutcomeKind.NAVIGATION_FAILED:
            return jsonify({
                "error": "Navigation failed",
                "message": "Failed to access course search page",
            }), 503
        return jsonify({
            "error": "Internal server error",
            "message": "An unexpected error occurred while processing your request",
        }), 500

    return app


def serve(settings: Settings) -> None:
    """Start the browser pool, then serve until interrupted."""
    browser = Browser(
        headless=settings.headless, pool_size=settings.browser_pool_size
    ).start()
    atexit.register(browser.close)
    app = create_app(browser, settings)
    logger.info("Server is running on port %d", settings.port)
    app.run(host="0.0.0.0", port=settings.port, threaded=True)
