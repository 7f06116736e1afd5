"""Tool registry and dispatch against a browser session."""
import logging
from typing import Any, Optional

from ..browser.session import BrowserSession
from ..core.config import LaunchOptions, Settings
from ..core.errors import PlaybridgeError
from .base import BrowserTool
from .close import CloseTool
from .navigate import NavigateTool, launch_options_from_args
from .network import NetworkInspectionTool
from .resize import ResizeTool
from .screenshot import ScreenshotTool
from .types import Notifier, ToolContext, ToolResponse, error_response

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Routes tool calls to tools, acquiring the page when a tool needs one."""

    def __init__(
        self,
        session: BrowserSession,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            session: Browser session shared by every tool.
            settings: Application settings; defaults apply when omitted.
            notifier: Callback for protocol notifications.
        """
        self._session = session
        self._settings = settings or Settings()
        self._notifier = notifier

        tools: list[BrowserTool] = [
            NavigateTool(default_timeout=self._settings.browser.launch.navigation_timeout),
            ResizeTool(),
            ScreenshotTool(),
            NetworkInspectionTool(
                session.inspector,
                default_limit=self._settings.network.default_limit,
            ),
            CloseTool(session),
        ]
        self._tools: dict[str, BrowserTool] = {tool.NAME: tool for tool in tools}

    @property
    def tool_names(self) -> list[str]:
        return list(self._tools)

    def get_tool(self, name: str) -> Optional[BrowserTool]:
        return self._tools.get(name)

    def call(self, name: str, args: Optional[dict[str, Any]] = None) -> ToolResponse:
        """Invoke a tool by name. Never raises."""
        args = args or {}
        tool = self._tools.get(name)
        if tool is None:
            return error_response(f"Unknown tool: {name}")

        try:
            context = self._build_context(tool, args)
        except PlaybridgeError as e:
            logger.error(f"Failed to initialize browser for {name}: {e}")
            return error_response(f"Failed to initialize browser: {e}")

        try:
            return tool.execute(args, context)
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}")
            return error_response(f"Tool {name} failed: {e}")

    def _launch_options(self, tool: BrowserTool, args: dict[str, Any]) -> LaunchOptions:
        if isinstance(tool, NavigateTool):
            return launch_options_from_args(args)
        return self._settings.browser.launch

    def _build_context(self, tool: BrowserTool, args: dict[str, Any]) -> ToolContext:
        if not tool.requires_page(args):
            return ToolContext(browser=self._session.browser, notifier=self._notifier)

        page = self._session.acquire(self._launch_options(tool, args))
        return ToolContext(page=page, browser=self._session.browser, notifier=self._notifier)
