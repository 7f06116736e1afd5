"""Browser close tool."""
import logging
from typing import Any

from ..browser.session import BrowserSession
from .base import BrowserTool
from .types import ToolContext, ToolResponse, error_response, success_response

logger = logging.getLogger(__name__)


class CloseTool(BrowserTool):
    """Close the browser and release all resources."""

    NAME = "browser_close"
    DESCRIPTION = "Close the browser and release all resources"
    REQUIRES_PAGE = False

    def __init__(self, session: BrowserSession) -> None:
        self._session = session

    def execute(self, args: dict[str, Any], context: ToolContext) -> ToolResponse:
        try:
            self._session.release()
        except Exception as e:
            logger.error(f"Failed to close browser: {e}")
            return error_response(f"Failed to close browser: {e}")
        return success_response("Browser closed successfully")
