"""Launch strategy: ephemeral or profile-persistent browser startup."""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from playwright.sync_api import Browser, BrowserContext, Page, Playwright

from ..core.config import EPHEMERAL_VIEWPORT, PERSISTENT_VIEWPORT, LaunchOptions
from ..core.errors import LaunchError
from .engines import BrowserEngine, get_engine

logger = logging.getLogger(__name__)

# Playwright has no launch-level switch for certificate errors; the engine
# command line carries it instead.
INSECURE_CERT_ARGS: list[str] = ["--ignore-certificate-errors"]


@dataclass
class LaunchResult:
    """Handles produced by one launch.

    ``context`` doubles as the page's back-reference for teardown. For a
    persistent launch ``browser`` may be None: the context owns the process.
    """
    page: Page
    context: BrowserContext
    browser: Optional[Browser]
    persistent: bool


def build_launch_args(options: LaunchOptions) -> dict[str, Any]:
    """Argument set for an ephemeral ``launch`` call."""
    args: dict[str, Any] = {
        "headless": options.headless,
        "executable_path": options.executable_path,
    }
    if options.proxy:
        args["proxy"] = options.proxy.model_dump(exclude_none=True)
    if options.accept_insecure_certs:
        args["args"] = list(INSECURE_CERT_ARGS)
    return args


def without_executable_path(launch_args: dict[str, Any]) -> dict[str, Any]:
    """Reduced argument set for the fallback attempt.

    Drops the executable override so the engine falls back to its bundled
    binary; every other argument is kept as-is.
    """
    return {key: value for key, value in launch_args.items() if key != "executable_path"}


def build_context_args(options: LaunchOptions) -> dict[str, Any]:
    """Argument set for ``new_context`` on an ephemeral browser."""
    viewport = options.viewport or EPHEMERAL_VIEWPORT
    args: dict[str, Any] = {
        "viewport": viewport.model_dump(),
        "device_scale_factor": options.device_scale_factor,
        "ignore_https_errors": options.ignore_https_errors,
    }
    if options.user_agent:
        args["user_agent"] = options.user_agent
    return args


def build_persistent_args(options: LaunchOptions) -> dict[str, Any]:
    """Argument set for ``launch_persistent_context``."""
    viewport = options.viewport or PERSISTENT_VIEWPORT
    args: dict[str, Any] = {
        "headless": options.headless,
        "executable_path": options.executable_path,
    }
    if options.proxy:
        args["proxy"] = options.proxy.model_dump(exclude_none=True)
    if options.user_agent:
        args["user_agent"] = options.user_agent
    args["viewport"] = viewport.model_dump()
    args["device_scale_factor"] = options.device_scale_factor
    if options.accept_insecure_certs:
        args["args"] = list(INSECURE_CERT_ARGS)
    args["ignore_https_errors"] = options.ignore_https_errors
    return args


class LaunchStrategyResolver:
    """Produces a ready page by choosing and running one launch path."""

    def __init__(self, playwright: Playwright) -> None:
        """Initialize resolver.

        Args:
            playwright: Started Playwright driver handle.
        """
        self._playwright = playwright

    def resolve(self, options: LaunchOptions) -> LaunchResult:
        """Launch a browser for the given options.

        A non-empty ``user_data_dir`` selects the persistent path, anything
        else the ephemeral path, regardless of engine variant.

        Raises:
            LaunchError: If the browser could not be started.
        """
        engine = get_engine(self._playwright, options.browser_type)
        if options.persistent:
            return self._launch_persistent(engine, options)
        return self._launch_ephemeral(engine, options)

    def _launch_ephemeral(self, engine: BrowserEngine, options: LaunchOptions) -> LaunchResult:
        logger.info(f"Launching {options.browser_type.value} (ephemeral, headless={options.headless})")
        browser = self._launch_with_fallback(engine, build_launch_args(options))

        try:
            context = browser.new_context(**build_context_args(options))
            page = context.new_page()
        except Exception as e:
            self._close_quietly(browser)
            raise LaunchError(f"Failed to open browser context: {e}") from e

        return LaunchResult(page=page, context=context, browser=browser, persistent=False)

    def _launch_with_fallback(self, engine: BrowserEngine, launch_args: dict[str, Any]) -> Browser:
        """First attempt with the full argument set, one retry with the reduced set."""
        try:
            return engine.launch(**launch_args)
        except Exception as first_error:
            logger.warning(f"Browser launch failed, retrying without executable path: {first_error}")

        try:
            return engine.launch(**without_executable_path(launch_args))
        except Exception as e:
            logger.error(f"Browser launch retry failed: {e}")
            raise LaunchError(f"Failed to launch browser: {e}") from e

    def _launch_persistent(self, engine: BrowserEngine, options: LaunchOptions) -> LaunchResult:
        logger.info(
            f"Launching {options.browser_type.value} with profile {options.user_data_dir}"
        )
        try:
            context = engine.launch_persistent_context(
                options.user_data_dir, **build_persistent_args(options)
            )
        except Exception as e:
            logger.error(f"Persistent launch failed: {e}")
            raise LaunchError(f"Failed to launch persistent context: {e}") from e

        try:
            pages = context.pages
            page = pages[0] if pages else context.new_page()
        except Exception as e:
            self._close_quietly(context)
            raise LaunchError(f"Failed to open page in persistent context: {e}") from e

        return LaunchResult(page=page, context=context, browser=context.browser, persistent=True)

    def _close_quietly(self, handle: Union[Browser, BrowserContext]) -> None:
        try:
            handle.close()
        except Exception as e:
            logger.debug(f"Ignoring close failure on abandoned browser: {e}")
