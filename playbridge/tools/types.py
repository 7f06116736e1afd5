"""Tool response and context shapes."""
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Union

from playwright.sync_api import Browser, Page
from pydantic import BaseModel, ConfigDict, Field


class TextContent(BaseModel):
    """Plain text content item."""

    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    """Base64-encoded image content item."""

    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    data: str
    mime_type: str = Field("image/png", alias="mimeType")


Content = Union[TextContent, ImageContent]


class ToolResponse(BaseModel):
    """Uniform result of every tool invocation."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[Content]
    is_error: bool = Field(False, alias="isError")

    @property
    def text(self) -> str:
        """All text items joined by newlines."""
        return "\n".join(item.text for item in self.content if isinstance(item, TextContent))


Notifier = Callable[[str], None]


@dataclass
class ToolContext:
    """What a tool may touch during one invocation."""
    page: Optional[Page] = None
    browser: Optional[Browser] = None
    notifier: Optional[Notifier] = None

    def notify(self, method: str) -> None:
        if self.notifier is not None:
            self.notifier(method)


def success_response(messages: Union[str, list[str]]) -> ToolResponse:
    if isinstance(messages, str):
        messages = [messages]
    return ToolResponse(content=[TextContent(text=message) for message in messages], is_error=False)


def error_response(message: str) -> ToolResponse:
    return ToolResponse(content=[TextContent(text=message)], is_error=True)
