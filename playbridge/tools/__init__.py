"""Agent-facing tools over the browser session."""
from .base import BrowserTool
from .close import CloseTool
from .navigate import NavigateTool
from .network import NetworkInspectionTool
from .registry import ToolDispatcher
from .resize import ResizeTool
from .screenshot import ScreenshotTool
from .types import ImageContent, TextContent, ToolContext, ToolResponse, error_response, success_response

__all__ = [
    "BrowserTool",
    "CloseTool",
    "NavigateTool",
    "NetworkInspectionTool",
    "ToolDispatcher",
    "ResizeTool",
    "ScreenshotTool",
    "ImageContent",
    "TextContent",
    "ToolContext",
    "ToolResponse",
    "error_response",
    "success_response",
]
