"""
Browser session: one browser, one page, one dedicated thread.

Playwright's sync objects belong to the thread that created them, so every
call is queued to a single worker that owns the browser and page. The queue
also serialises tool calls: two requests never drive the page at once.
The browser is launched lazily by the first call and torn down by close().
"""
import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from playwright.sync_api import sync_playwright

_log = logging.getLogger(__name__)

# Flags for running Chromium inside containers / CI
LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]

# Launcher returns (browser, driver); driver may be None when there is nothing to stop
Launcher = Callable[[], tuple[Any, Any]]

UNINITIALIZED = "uninitialized"
BROWSER_READY = "browser_ready"
PAGE_READY = "page_ready"


class SessionUnavailable(RuntimeError):
    """The browser or its page could not be created."""


def launch_chromium(headless: bool = True, args: list[str] | None = None) -> tuple[Any, Any]:
    """Start the Playwright driver and launch Chromium. Stops the driver again if launch fails."""
    driver = sync_playwright().start()
    try:
        browser = driver.chromium.launch(headless=headless, args=list(args or LAUNCH_ARGS))
    except Exception:
        driver.stop()
        raise
    return browser, driver


class BrowserSession:
    """Owns the browser and page handles. Nothing else holds them."""

    def __init__(self, launcher: Launcher | None = None, headless: bool = True):
        self._launcher = launcher or (lambda: launch_chromium(headless=headless))
        self._browser = None
        self._page = None
        self._driver = None
        self._lock = threading.Lock()
        self._commands: queue.Queue | None = None
        self._worker: threading.Thread | None = None

    @property
    def state(self) -> str:
        if self._page is not None:
            return PAGE_READY
        if self._browser is not None:
            return BROWSER_READY
        return UNINITIALIZED

    def run(self, fn: Callable[..., Any], *args: Any) -> Any:
        """Run fn(page, *args) on the session thread and return its result (or raise its error).

        Waits for as long as the call takes; timeouts are the handler's own business.
        """
        future: Future = Future()
        with self._lock:
            self._ensure_worker()
            self._commands.put((fn, args, future))
        return future.result()

    def close(self) -> None:
        """Close page, browser and driver. Safe to call repeatedly or before first use."""
        with self._lock:
            worker, commands = self._worker, self._commands
            self._worker = self._commands = None
            if worker is None:
                return
            # Queued behind any pending calls, which finish first
            commands.put(None)
            worker.join()
        _log.info("Browser session closed")

    def _ensure_worker(self) -> None:
        if self._worker is None or not self._worker.is_alive():
            self._commands = queue.Queue()
            self._worker = threading.Thread(
                target=self._work, args=(self._commands,), name="browser-session", daemon=True
            )
            self._worker.start()

    def _work(self, commands: queue.Queue) -> None:
        while True:
            cmd = commands.get()
            if cmd is None:
                break
            fn, args, future = cmd
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = fn(self._ensure_page(), *args)
            except Exception as e:
                future.set_exception(e)
            else:
                future.set_result(result)
        self._teardown()

    def _ensure_page(self):
        if self._browser is None:
            try:
                browser, driver = self._launcher()
            except Exception as e:
                _log.error("Failed to launch browser: %s", e)
                raise SessionUnavailable(f"Browser launch failed: {e}") from e
            self._browser, self._driver = browser, driver
            _log.info("Browser launched")
        if self._page is None:
            try:
                self._page = self._browser.new_page()
            except Exception as e:
                _log.error("Failed to create page: %s", e)
                raise SessionUnavailable(f"Page creation failed: {e}") from e
            _log.debug("Page created")
        return self._page

    def _teardown(self) -> None:
        page, browser, driver = self._page, self._browser, self._driver
        self._page = self._browser = self._driver = None
        for label, handle, method in (("page", page, "close"), ("browser", browser, "close"), ("driver", driver, "stop")):
            if handle is None:
                continue
            try:
                getattr(handle, method)()
            except Exception as e:
                _log.warning("Error closing %s: %s", label, e)
