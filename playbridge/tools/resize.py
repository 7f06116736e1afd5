"""Viewport resize tool."""
import logging
from typing import Any

from playwright.sync_api import Page

from .base import BrowserTool
from .types import ToolContext, ToolResponse, error_response, success_response

logger = logging.getLogger(__name__)


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value > 0


class ResizeTool(BrowserTool):
    """Resize the viewport without relaunching the browser."""

    NAME = "browser_resize"
    DESCRIPTION = "Resize the browser viewport to test responsive layouts"

    def execute(self, args: dict[str, Any], context: ToolContext) -> ToolResponse:
        width, height = args.get("width"), args.get("height")
        if not _is_positive_number(width):
            return error_response("Width must be a positive number")
        if not _is_positive_number(height):
            return error_response("Height must be a positive number")

        def resize(page: Page) -> ToolResponse:
            try:
                page.set_viewport_size({"width": width, "height": height})
            except Exception as e:
                return error_response(f"Failed to resize viewport: {e}")
            logger.info(f"Viewport resized to {width}x{height}")
            return success_response(f"Viewport resized to {width}x{height} pixels")

        return self.safe_execute(context, "Resize viewport", resize)
