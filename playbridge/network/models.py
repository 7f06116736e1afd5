"""Network traffic records, query filters, and aggregates."""
from dataclasses import dataclass, field
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


OutputFormat = Literal["summary", "detailed"]


@dataclass
class NetworkRequest:
    """Request half of an entry, captured when the request fires."""
    id: str
    url: str
    method: str
    headers: dict[str, str]
    post_data: Optional[str]
    timestamp: int
    resource_type: str


@dataclass
class NetworkResponse:
    """Response half, real or synthesized from a request failure (status 0)."""
    id: str
    url: str
    status: int
    status_text: str
    headers: dict[str, str]
    timestamp: int
    request_id: str


@dataclass
class NetworkEntry:
    """One correlated request and its optional response."""
    request: NetworkRequest
    response: Optional[NetworkResponse] = None

    @property
    def id(self) -> str:
        return self.request.id

    @property
    def completed(self) -> bool:
        return self.response is not None

    @property
    def duration(self) -> Optional[int]:
        """Milliseconds between capture of request and response; None while pending."""
        if self.response is None:
            return None
        return self.response.timestamp - self.request.timestamp

    def complete(self, response: NetworkResponse) -> bool:
        """Attach the response half once. Returns False if already completed."""
        if self.response is not None:
            return False
        self.response = response
        return True


class NetworkFilter(BaseModel):
    """Query predicates, combined with logical AND."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    method: Optional[str] = None
    url: Optional[str] = None
    status: Optional[int] = None
    resource_type: Optional[str] = Field(None, alias="resourceType")
    min_duration: Optional[int] = Field(None, alias="minDuration")

    def matches(self, entry: NetworkEntry) -> bool:
        request = entry.request
        if self.method is not None and request.method.lower() != self.method.lower():
            return False
        if self.url is not None and self.url not in request.url:
            return False
        if self.status is not None:
            if entry.response is None or entry.response.status != self.status:
                return False
        if self.resource_type is not None and request.resource_type != self.resource_type:
            return False
        if self.min_duration is not None:
            duration = entry.duration
            if duration is None or duration < self.min_duration:
                return False
        return True


@dataclass
class NetworkStats:
    """Aggregate view over every recorded entry."""
    total: int = 0
    completed: int = 0
    pending: int = 0
    methods: dict[str, int] = field(default_factory=dict)
    resource_types: dict[str, int] = field(default_factory=dict)
    status_codes: dict[int, int] = field(default_factory=dict)
    average_duration: int = 0
