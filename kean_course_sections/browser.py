"""
The shared headless Chrome instance and per-request sessions.

A small pool of Chrome instances is started when the service starts and
quit when it stops. Each lookup checks out one of them and gets its own tab
through Browser.session(), which always closes that tab and returns the
instance to the pool, whatever happens inside the ``with`` block.
"""
from __future__ import annotations

import logging
import queue
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from .errors import BrowserBusyError

logger = logging.getLogger(__name__)


def create_driver(headless: bool = True) -> webdriver.Chrome:
    """Create a Chrome WebDriver instance."""
    options = Options()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-setuid-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_argument("--window-size=1200,900")
    # Return from get() at DOMContentLoaded; render stages are awaited separately
    options.page_load_strategy = "eager"
    try:
        service = Service(ChromeDriverManager().install())
        return webdriver.Chrome(service=service, options=options)
    except Exception as e:
        raise RuntimeError(
            f"Could not start Chrome. Install Chrome and run again.\nError: {e}"
        ) from e


class Browser:
    """
    Owns the WebDrivers for the life of the process.

    A WebDriver connection drives one window at a time, so concurrent
    sessions each check out their own driver from a fixed-size pool.
    """

    def __init__(
        self,
        headless: bool = True,
        driver_factory: Optional[Callable[[], object]] = None,
        pool_size: int = 1,
    ):
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self._factory = driver_factory or (lambda: create_driver(headless=headless))
        self._pool_size = pool_size
        self._drivers: List[object] = []
        self._home_handles: Dict[int, str] = {}
        self._idle: "queue.Queue[object]" = queue.Queue()

    @property
    def started(self) -> bool:
        return bool(self._drivers)

    def start(self) -> "Browser":
        if not self._drivers:
            logger.info("Starting %d browser(s)", self._pool_size)
            for _ in range(self._pool_size):
                driver = self._factory()
                # Blank anchor window; keeps the process alive between sessions
                self._home_handles[id(driver)] = driver.current_window_handle
                self._drivers.append(driver)
                self._idle.put(driver)
        return self

    def close(self) -> None:
        drivers, self._drivers = self._drivers, []
        self._home_handles.clear()
        self._idle = queue.Queue()
        if drivers:
            logger.info("Shutting down %d browser(s)", len(drivers))
        for driver in drivers:
            driver.quit()

    def __enter__(self) -> "Browser":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.close()

    def _close_tab(self, driver) -> None:
        try:
            driver.close()
        except Exception as e:
            logger.warning("Could not close browser tab: %s", e)
        finally:
            driver.switch_to.window(self._home_handles[id(driver)])

    @contextmanager
    def session(
        self,
        page_load_timeout: float = 30,
        acquire_timeout: Optional[float] = None,
    ) -> Iterator[object]:
        """
        Check out an idle driver, open a fresh tab and yield the driver
        focused on it.

        Raises BrowserBusyError if no driver frees up within
        ``acquire_timeout`` seconds (None waits indefinitely). The tab is
        closed and the driver returned to the pool exactly once on exit,
        including when the body raises.
        """
        if not self._drivers:
            raise RuntimeError("Browser is not started.")
        try:
            driver = self._idle.get(timeout=acquire_timeout)
        except queue.Empty:
            raise BrowserBusyError(
                f"No browser free after {acquire_timeout:g}s ({self._pool_size} in use)"
            ) from None
        try:
            driver.switch_to.new_window("tab")
            try:
                driver.set_page_load_timeout(page_load_timeout)
                yield driver
            finally:
                self._close_tab(driver)
        finally:
            self._idle.put(driver)
