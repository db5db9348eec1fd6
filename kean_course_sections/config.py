"""
Runtime settings, read from the environment (and a .env file if present).

    COURSE_SEARCH_URL    catalog search page (default: Kean self-service)
    NAVIGATION_TIMEOUT   seconds allowed for the initial page load (30)
    HEADLESS             "0"/"false" to watch the browser work (true)
    PORT                 HTTP port for `serve` (3002)
    TERMS_FILE           JSON term table replacing the built-in calendar
    LOG_LEVEL            logging level name (INFO)
    BROWSER_POOL_SIZE    Chrome instances serving lookups concurrently (2)
    SESSION_WAIT_TIMEOUT seconds a lookup waits for a free instance (30)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from dotenv import load_dotenv

from .catalog_page import DEFAULT_SEARCH_URL
from .model import TermWindow
from .render_wait import Stage
from .terms import DEFAULT_TERM_WINDOWS, load_term_windows


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    search_url: str = DEFAULT_SEARCH_URL
    navigation_timeout: float = 30
    headless: bool = True
    port: int = 3002
    log_level: str = "INFO"
    term_windows: Sequence[TermWindow] = DEFAULT_TERM_WINDOWS
    # Per-stage overrides of the render_wait budgets
    stage_timeouts: Dict[Stage, float] = field(default_factory=dict)
    poll_frequency: float = 0.5
    browser_pool_size: int = 2
    session_wait_timeout: float = 30

    @classmethod
    def from_env(cls, terms_file: Optional[str] = None) -> "Settings":
        load_dotenv()
        terms_file = terms_file or os.getenv("TERMS_FILE")
        windows = load_term_windows(terms_file) if terms_file else DEFAULT_TERM_WINDOWS
        return cls(
            search_url=os.getenv("COURSE_SEARCH_URL") or DEFAULT_SEARCH_URL,
            navigation_timeout=float(os.getenv("NAVIGATION_TIMEOUT") or 30),
            headless=_env_bool(os.getenv("HEADLESS"), True),
            port=int(os.getenv("PORT") or 3002),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
            term_windows=tuple(windows),
            browser_pool_size=int(os.getenv("BROWSER_POOL_SIZE") or 2),
            session_wait_timeout=float(os.getenv("SESSION_WAIT_TIMEOUT") or 30),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
