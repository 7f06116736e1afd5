"""Network inspection tool."""
from typing import Any, Literal, Optional

from playwright.sync_api import Page
from pydantic import BaseModel, ConfigDict, ValidationError

from ..network.formatting import format_stats
from ..network.inspector import DEFAULT_LIMIT, NetworkInspector
from ..network.models import NetworkFilter, OutputFormat
from .base import BrowserTool
from .types import ToolContext, ToolResponse, error_response, success_response

NetworkAction = Literal["start", "stop", "get", "clear", "stats"]


class NetworkInspectionArgs(BaseModel):
    """Arguments accepted by the network inspection tool."""

    model_config = ConfigDict(extra="ignore")

    action: NetworkAction = "get"
    filter: Optional[NetworkFilter] = None
    limit: int = DEFAULT_LIMIT
    clear: bool = False
    format: OutputFormat = "summary"


class NetworkInspectionTool(BrowserTool):
    """Start, stop, query, and clear captured network traffic."""

    NAME = "browser_network_inspection"
    DESCRIPTION = "Monitor and inspect network traffic in the browser"

    def __init__(self, inspector: NetworkInspector, default_limit: int = DEFAULT_LIMIT) -> None:
        self._inspector = inspector
        self._default_limit = default_limit

    def requires_page(self, args: dict[str, Any]) -> bool:
        # Only start attaches to a page; other actions read the inspector's table.
        return args.get("action") == "start"

    def execute(self, args: dict[str, Any], context: ToolContext) -> ToolResponse:
        try:
            params = NetworkInspectionArgs.model_validate({"limit": self._default_limit, **args})
        except ValidationError as e:
            return error_response(f"Invalid network inspection arguments: {e}")

        if params.action == "start":
            return self.safe_execute(context, "Start network monitoring", self._start)

        if params.action == "stop":
            self._inspector.stop()
            return success_response("Network monitoring stopped.")

        if params.action == "clear":
            self._inspector.clear()
            return success_response("Network entries cleared.")

        if params.action == "stats":
            return success_response(format_stats(self._inspector.stats(), self._inspector.monitoring))

        lines = self._inspector.get(
            filter=params.filter,
            limit=params.limit,
            clear=params.clear,
            format=params.format,
        )
        return success_response(lines)

    def _start(self, page: Page) -> ToolResponse:
        self._inspector.start(page)
        return success_response(
            "Network monitoring started. All network requests and responses will be captured."
        )
