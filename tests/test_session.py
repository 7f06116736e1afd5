"""Tests for the browser session lifecycle."""
from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from playbridge.browser.session import BrowserSession, SessionState
from playbridge.core.config import LaunchOptions
from playbridge.core.errors import LaunchError
from playbridge.network.inspector import NetworkInspector


def make_browser(name: str = "browser") -> MagicMock:
    """Connected browser whose context yields one open page."""
    browser = MagicMock(name=name)
    browser.is_connected.return_value = True
    page = browser.new_context.return_value.new_page.return_value
    page.is_closed.return_value = False
    return browser


def page_of(browser: MagicMock) -> MagicMock:
    return browser.new_context.return_value.new_page.return_value


def registered_events(target: MagicMock) -> list[str]:
    return [c.args[0] for c in target.on.call_args_list]


def fire(target: MagicMock, event: str, payload: object = None) -> None:
    for c in target.on.call_args_list:
        if c.args[0] == event:
            c.args[1](payload)


@pytest.fixture
def playwright() -> MagicMock:
    playwright = MagicMock(name="playwright")
    playwright.chromium.launch.return_value = make_browser()
    return playwright


@pytest.fixture
def session(playwright: MagicMock) -> BrowserSession:
    return BrowserSession(playwright=playwright)


class TestAcquire:
    def test_first_acquire_launches(self, session: BrowserSession, playwright: MagicMock) -> None:
        assert session.state is SessionState.UNINITIALIZED

        page = session.acquire(LaunchOptions(headless=True))

        browser = playwright.chromium.launch.return_value
        assert page is page_of(browser)
        assert session.browser is browser
        assert session.context is browser.new_context.return_value
        assert session.state is SessionState.READY

    def test_healthy_session_is_reused(self, session: BrowserSession, playwright: MagicMock) -> None:
        first = session.acquire()
        second = session.acquire(LaunchOptions(proxy={"server": "http://ignored:1"}))

        assert first is second
        playwright.chromium.launch.assert_called_once()

    def test_disconnected_browser_is_replaced(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        old, new = make_browser("old"), make_browser("new")
        playwright.chromium.launch.side_effect = [old, new]
        session.acquire()

        old.is_connected.return_value = False
        page = session.acquire()

        assert page is page_of(new)
        assert session.browser is new
        old.close.assert_called_once()

    def test_closed_page_is_replaced(self, session: BrowserSession, playwright: MagicMock) -> None:
        old, new = make_browser("old"), make_browser("new")
        playwright.chromium.launch.side_effect = [old, new]
        session.acquire()

        page_of(old).is_closed.return_value = True
        page = session.acquire()

        assert page is page_of(new)
        assert playwright.chromium.launch.call_count == 2
        old.close.assert_called_once()

    def test_failed_launch_leaves_session_uninitialized(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        recovered = make_browser("recovered")
        playwright.chromium.launch.side_effect = [
            Exception("crash"),
            Exception("crash again"),
            recovered,
        ]

        with pytest.raises(LaunchError):
            session.acquire()
        assert session.state is SessionState.UNINITIALIZED
        assert session.page is None

        assert session.acquire() is page_of(recovered)

    def test_persistent_session_has_no_browser_handle(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        context = MagicMock(name="persistent_context")
        context.browser = None
        page = MagicMock(name="page")
        page.is_closed.return_value = False
        context.pages = [page]
        playwright.chromium.launch_persistent_context.return_value = context

        assert session.acquire(LaunchOptions(user_data_dir="/profile")) is page
        assert session.browser is None
        assert session.context is context
        assert session.acquire() is page
        playwright.chromium.launch_persistent_context.assert_called_once()


class TestNetworkWiring:
    def test_listeners_registered_once_per_new_page(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        session.acquire()
        session.acquire()

        page = page_of(playwright.chromium.launch.return_value)
        assert registered_events(page) == ["request", "response", "requestfailed"]
        assert session.inspector.monitoring is True

    def test_replacement_page_gets_listeners(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        old, new = make_browser("old"), make_browser("new")
        playwright.chromium.launch.side_effect = [old, new]
        session.acquire()
        old.is_connected.return_value = False

        session.acquire()

        assert registered_events(page_of(new)) == ["request", "response", "requestfailed"]
        assert session.inspector.attached_page is page_of(new)

    def test_stopped_monitoring_survives_relaunch(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        old, new = make_browser("old"), make_browser("new")
        playwright.chromium.launch.side_effect = [old, new]
        session.acquire()
        session.inspector.stop()
        old.is_connected.return_value = False

        session.acquire()

        assert session.inspector.attached_page is page_of(new)
        assert session.inspector.monitoring is False


class TestDisconnection:
    def test_disconnect_event_clears_session(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        session.acquire()
        browser = playwright.chromium.launch.return_value

        fire(browser, "disconnected", browser)

        assert session.state is SessionState.UNINITIALIZED
        browser.close.assert_not_called()

    def test_stale_disconnect_event_is_ignored(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        old, new = make_browser("old"), make_browser("new")
        playwright.chromium.launch.side_effect = [old, new]
        session.acquire()
        old.is_connected.return_value = False
        session.acquire()

        fire(old, "disconnected", old)

        assert session.state is SessionState.READY
        assert session.browser is new

    def test_persistent_context_close_clears_session(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        context = playwright.chromium.launch_persistent_context.return_value
        context.browser = None
        context.pages[0].is_closed.return_value = False
        session.acquire(LaunchOptions(user_data_dir="/profile"))

        fire(context, "close", context)

        assert session.state is SessionState.UNINITIALIZED


class TestRelease:
    def test_closes_page_context_browser_in_order(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        order: list[str] = []
        browser = playwright.chromium.launch.return_value
        context = browser.new_context.return_value
        page_of(browser).close.side_effect = lambda: order.append("page")
        context.close.side_effect = lambda: order.append("context")
        browser.close.side_effect = lambda: order.append("browser")
        session.acquire()

        session.release()

        assert order == ["page", "context", "browser"]
        assert session.state is SessionState.UNINITIALIZED

    def test_close_failures_are_ignored(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        browser = playwright.chromium.launch.return_value
        page_of(browser).close.side_effect = Exception("Target page has been closed")
        browser.new_context.return_value.close.side_effect = Exception("already closed")
        session.acquire()

        session.release()

        browser.close.assert_called_once()
        assert session.page is None
        assert session.browser is None
        assert session.context is None

    def test_release_without_browser_is_noop(self, session: BrowserSession) -> None:
        session.release()
        assert session.state is SessionState.UNINITIALIZED

    def test_injected_driver_is_not_stopped(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        session.acquire()
        session.release()
        playwright.stop.assert_not_called()

    def test_owned_driver_started_lazily_and_stopped(self) -> None:
        with patch("playbridge.browser.session.sync_playwright") as factory:
            driver = factory.return_value.start.return_value
            driver.chromium.launch.return_value = make_browser()
            session = BrowserSession()
            factory.assert_not_called()

            session.acquire()
            session.release()

        factory.return_value.start.assert_called_once()
        driver.stop.assert_called_once()


class TestReset:
    def test_reset_forgets_without_closing(
        self, session: BrowserSession, playwright: MagicMock
    ) -> None:
        session.acquire()
        browser = playwright.chromium.launch.return_value

        session.reset()

        assert session.state is SessionState.UNINITIALIZED
        browser.close.assert_not_called()
        page_of(browser).close.assert_not_called()

    def test_reset_clears_inspector(self, playwright: MagicMock) -> None:
        inspector = NetworkInspector()
        session = BrowserSession(playwright=playwright, inspector=inspector)
        session.acquire()

        session.reset()

        assert inspector.attached_page is None
        assert inspector.monitoring is False
        assert inspector.entries() == []
