"""Browser session: the single live browser/context/page for the process."""
import logging
from enum import Enum
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

from ..core.config import LaunchOptions
from ..network.inspector import NetworkInspector
from .launcher import LaunchResult, LaunchStrategyResolver

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle state of a browser session."""
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class BrowserSession:
    """Owns at most one live browser and serves its current page.

    Callers must obtain the page through ``acquire()`` on every operation;
    the session may replace it between calls after a disconnection.
    """

    def __init__(
        self,
        playwright: Optional[Playwright] = None,
        inspector: Optional[NetworkInspector] = None,
    ) -> None:
        """Initialize session.

        Args:
            playwright: Started driver handle. When omitted the session
                starts its own on first launch and stops it on release.
            inspector: Network inspector wired onto every new page.
        """
        self._playwright = playwright
        self._owns_playwright = playwright is None
        self._inspector = inspector or NetworkInspector()
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def state(self) -> SessionState:
        if self._page is None:
            return SessionState.UNINITIALIZED
        return SessionState.READY

    @property
    def page(self) -> Optional[Page]:
        return self._page

    @property
    def context(self) -> Optional[BrowserContext]:
        return self._context

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    @property
    def inspector(self) -> NetworkInspector:
        return self._inspector

    def is_healthy(self) -> bool:
        """Current page is open and its browser (if any) still connected."""
        if self._page is None:
            return False
        if self._browser is not None and not self._browser.is_connected():
            return False
        return not self._page.is_closed()

    def acquire(self, options: Optional[LaunchOptions] = None) -> Page:
        """Return the live page, launching a browser if there is none.

        Options only take effect when a launch happens; a healthy session
        is returned unchanged.

        Raises:
            LaunchError: If no browser could be started. The session stays
                uninitialized.
        """
        if self.is_healthy():
            logger.debug("Reusing live browser session")
            return self._page

        if self.state is SessionState.READY:
            logger.info("Browser session is stale, relaunching")
            self._close_handles()
            self._clear()

        options = options or LaunchOptions()
        result = LaunchStrategyResolver(self._ensure_playwright()).resolve(options)
        self._track(result)
        self._inspector.attach(result.page)
        logger.info(f"Browser session ready ({options.browser_type.value})")
        return result.page

    def release(self) -> None:
        """Close page, context, then browser, and clear the session."""
        logger.info("Releasing browser session")
        self._close_handles()
        self._clear()
        self._stop_playwright()

    def reset(self) -> None:
        """Forget all handles without closing them.

        Simulates a fresh process for isolated tests.
        """
        self._clear()
        self._inspector.reset()

    def _ensure_playwright(self) -> Playwright:
        if self._playwright is None:
            logger.debug("Starting Playwright driver")
            self._playwright = sync_playwright().start()
        return self._playwright

    def _stop_playwright(self) -> None:
        if self._owns_playwright and self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.debug(f"Ignoring Playwright stop failure: {e}")
            self._playwright = None

    def _track(self, result: LaunchResult) -> None:
        self._browser = result.browser
        self._context = result.context
        self._page = result.page

        if result.browser is not None:
            browser = result.browser
            browser.on("disconnected", lambda _: self._on_disconnected(browser))
        else:
            context = result.context
            context.on("close", lambda _: self._on_context_closed(context))

    def _on_disconnected(self, browser: Browser) -> None:
        if browser is self._browser:
            logger.warning("Browser disconnected")
            self._clear()

    def _on_context_closed(self, context: BrowserContext) -> None:
        if context is self._context:
            logger.warning("Persistent context closed")
            self._clear()

    def _close_handles(self) -> None:
        page, context, browser = self._page, self._context, self._browser
        for name, handle in (("page", page), ("context", context), ("browser", browser)):
            if handle is None:
                continue
            try:
                handle.close()
            except Exception as e:
                logger.debug(f"Ignoring {name} close failure: {e}")

    def _clear(self) -> None:
        self._browser = None
        self._context = None
        self._page = None
