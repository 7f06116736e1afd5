"""Navigation tool and its launch-argument parsing."""
import logging
from typing import Any, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..core.config import EPHEMERAL_VIEWPORT, PERSISTENT_VIEWPORT, LaunchOptions, with_tool_defaults
from ..core.errors import ConfigurationError, NavigationError
from .base import BrowserTool
from .types import ToolContext, ToolResponse, error_response, success_response

logger = logging.getLogger(__name__)

DEFAULT_WAIT_UNTIL: str = "load"


def launch_options_from_args(args: dict[str, Any]) -> LaunchOptions:
    """Translate navigate arguments into launch options.

    ``width``/``height`` become the viewport when either is given, the
    missing one taken from the launch path's default viewport. Without
    them each launch path keeps its own default viewport.

    Raises:
        ConfigurationError: If any option is invalid.
    """
    data = dict(args)
    width, height = data.pop("width", None), data.pop("height", None)
    options = LaunchOptions.from_args(data)

    if width is not None or height is not None:
        default = PERSISTENT_VIEWPORT if options.persistent else EPHEMERAL_VIEWPORT
        data["viewport"] = {
            "width": default.width if width is None else width,
            "height": default.height if height is None else height,
        }
        options = LaunchOptions.from_args(data)

    return with_tool_defaults(options)


def navigate(page: Page, url: str, timeout: Optional[float] = None, wait_until: str = DEFAULT_WAIT_UNTIL) -> None:
    """Navigate once; timeouts and transport failures are never retried.

    Raises:
        NavigationError: On timeout or transport failure.
    """
    try:
        page.goto(url, timeout=timeout, wait_until=wait_until)
    except PlaywrightTimeoutError as e:
        raise NavigationError(f"Navigation to {url} timed out: {e}") from e
    except PlaywrightError as e:
        raise NavigationError(f"Navigation to {url} failed: {e}") from e


class NavigateTool(BrowserTool):
    """Navigate the current page, launching a browser when needed."""

    NAME = "browser_navigate"
    DESCRIPTION = "Navigate to a URL"

    def __init__(self, default_timeout: Optional[float] = None) -> None:
        """Initialize tool.

        Args:
            default_timeout: Navigation timeout in ms used when a call sets none.
        """
        self._default_timeout = default_timeout

    def execute(self, args: dict[str, Any], context: ToolContext) -> ToolResponse:
        url = args.get("url")
        if not isinstance(url, str) or not url:
            return error_response("Navigation failed: url is required")

        try:
            options = launch_options_from_args(args)
        except ConfigurationError as e:
            return error_response(str(e))

        timeout = options.navigation_timeout or self._default_timeout
        wait_until = args.get("waitUntil") or DEFAULT_WAIT_UNTIL

        def go(page: Page) -> ToolResponse:
            logger.info(f"Navigating to: {url}")
            navigate(page, url, timeout=timeout, wait_until=wait_until)
            return success_response(f"Navigated to {url}")

        return self.safe_execute(context, "Navigation", go)
