"""Inline screenshot tool."""
import base64
import logging
from datetime import datetime
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from ..core.errors import ElementNotFoundError, OperationError
from .base import BrowserTool
from .types import ImageContent, TextContent, ToolContext, ToolResponse

logger = logging.getLogger(__name__)

RESOURCES_CHANGED = "notifications/resources/list_changed"


class ScreenshotTool(BrowserTool):
    """Capture the page or one element as a base64 PNG."""

    NAME = "browser_screenshot"
    DESCRIPTION = "Take a screenshot of the current page or a specific element"

    def __init__(self) -> None:
        self._screenshots: list[ImageContent] = []

    @property
    def screenshots(self) -> list[ImageContent]:
        """Images captured so far, oldest first."""
        return list(self._screenshots)

    def execute(self, args: dict[str, Any], context: ToolContext) -> ToolResponse:
        name = args.get("name") or "screenshot"
        selector = args.get("selector")
        full_page = bool(args.get("fullPage", False))

        def capture(page: Page) -> ToolResponse:
            try:
                if selector:
                    element = page.query_selector(selector)
                    if element is None:
                        raise ElementNotFoundError(selector)
                    data = element.screenshot(type="png")
                else:
                    data = page.screenshot(type="png", full_page=full_page)
            except PlaywrightError as e:
                raise OperationError("Screenshot", e.message) from e

            timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")
            image = ImageContent(data=base64.b64encode(data).decode("ascii"), mime_type="image/png")
            self._screenshots.append(image)
            context.notify(RESOURCES_CHANGED)
            logger.info(f"Screenshot taken: {name}")
            return ToolResponse(
                content=[TextContent(text=f"Screenshot taken: {name}-{timestamp}.png"), image],
                is_error=False,
            )

        return self.safe_execute(context, "Screenshot", capture)
