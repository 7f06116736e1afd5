"""Base class for browser tools."""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from playwright.sync_api import Page

from ..core.errors import PlaybridgeError
from .types import ToolContext, ToolResponse, error_response

logger = logging.getLogger(__name__)


class BrowserTool(ABC):
    """Abstract base class for tools invoked by the dispatcher."""

    NAME: str = "base"
    DESCRIPTION: str = ""
    REQUIRES_PAGE: bool = True

    def requires_page(self, args: dict[str, Any]) -> bool:
        """Whether this call needs a live page acquired before it runs."""
        return self.REQUIRES_PAGE

    @abstractmethod
    def execute(self, args: dict[str, Any], context: ToolContext) -> ToolResponse:
        """Run the tool with loosely-typed arguments."""
        pass

    def safe_execute(
        self,
        context: ToolContext,
        operation: str,
        fn: Callable[[Page], ToolResponse],
    ) -> ToolResponse:
        """Run ``fn`` against the context page, converting every failure.

        Args:
            context: Invocation context holding the current page.
            operation: Human-readable name used in error text.
            fn: Callable receiving the live page.
        """
        page = context.page
        if page is None or page.is_closed():
            return error_response(f"{operation} failed: browser page is not initialized")

        try:
            return fn(page)
        except PlaybridgeError as e:
            logger.warning(f"{self.NAME}: {e}")
            return error_response(str(e))
        except Exception as e:
            logger.error(f"{self.NAME}: {operation} failed: {e}")
            return error_response(f"{operation} failed: {e}")
