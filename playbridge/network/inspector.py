"""Passive request/response correlation over a page's traffic events."""
import logging
import time
import weakref
from typing import Callable, Optional

from playwright.sync_api import Page, Request, Response

from .formatting import BODY_PREVIEW_CHARS, format_detailed, format_summary
from .models import (
    NetworkEntry,
    NetworkFilter,
    NetworkRequest,
    NetworkResponse,
    NetworkStats,
    OutputFormat,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT: int = 50
FAILED_STATUS: int = 0


def _now_ms() -> int:
    return int(time.time() * 1000)


class NetworkInspector:
    """Records correlated traffic for the session's current page.

    Event callbacks run to completion on the driver thread, so an entry is
    never observed half-written by a query.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        body_preview_chars: int = BODY_PREVIEW_CHARS,
    ) -> None:
        """Initialize inspector.

        Args:
            clock: Millisecond wall-clock source used for capture timestamps.
            body_preview_chars: Request body characters shown in detailed output.
        """
        self._clock = clock or _now_ms
        self._body_preview_chars = body_preview_chars
        self._entries: dict[str, NetworkEntry] = {}
        self._counter = 0
        self._monitoring = False
        self._stopped = False
        self._page: Optional[Page] = None
        # Request values are owned by the driver; the id is only looked up.
        self._request_ids: "weakref.WeakKeyDictionary[Request, str]" = weakref.WeakKeyDictionary()

    @property
    def monitoring(self) -> bool:
        return self._monitoring

    @property
    def attached_page(self) -> Optional[Page]:
        return self._page

    def start(self, page: Page) -> bool:
        """Begin (or resume) capturing traffic on a page.

        Listeners are registered at most once per page.

        Returns:
            True if listeners were newly registered.
        """
        self._stopped = False
        self._monitoring = True
        return self._register(page)

    def attach(self, page: Page) -> bool:
        """Register listeners on a session page without overriding ``stop``.

        Capture is on for the new page unless monitoring was explicitly
        stopped.

        Returns:
            True if listeners were newly registered.
        """
        self._monitoring = not self._stopped
        return self._register(page)

    def _register(self, page: Page) -> bool:
        if page is self._page:
            logger.debug("Network listeners already registered on current page")
            return False

        page.on("request", self._on_request)
        page.on("response", self._on_response)
        page.on("requestfailed", self._on_request_failed)
        self._page = page
        logger.info(f"Network listeners attached (monitoring={self._monitoring})")
        return True

    def stop(self) -> None:
        """Pause capture of new requests.

        Listeners stay registered; in-flight entries still receive their
        response or failure.
        """
        self._stopped = True
        self._monitoring = False
        logger.info("Network monitoring stopped")

    def clear(self) -> None:
        """Drop every entry and restart id numbering."""
        self._entries.clear()
        self._counter = 0
        logger.debug("Network entries cleared")

    def reset(self) -> None:
        """Forget the attached page and all recorded state."""
        self.clear()
        self._request_ids = weakref.WeakKeyDictionary()
        self._page = None
        self._monitoring = False
        self._stopped = False

    def entries(self) -> list[NetworkEntry]:
        return list(self._entries.values())

    def _next_id(self, timestamp: int) -> str:
        self._counter += 1
        return f"req_{self._counter}_{timestamp}"

    def _on_request(self, request: Request) -> None:
        if not self._monitoring:
            return

        timestamp = self._clock()
        request_id = self._next_id(timestamp)
        self._entries[request_id] = NetworkEntry(
            request=NetworkRequest(
                id=request_id,
                url=request.url,
                method=request.method,
                headers=dict(request.headers),
                post_data=request.post_data,
                timestamp=timestamp,
                resource_type=request.resource_type,
            )
        )
        self._request_ids[request] = request_id
        logger.debug(f"Request {request_id}: {request.method} {request.url}")

    def _lookup(self, request: Request) -> Optional[NetworkEntry]:
        request_id = self._request_ids.get(request)
        if request_id is None:
            return None
        return self._entries.get(request_id)

    def _on_response(self, response: Response) -> None:
        entry = self._lookup(response.request)
        if entry is None:
            return

        entry.complete(NetworkResponse(
            id=f"res_{entry.id}",
            url=response.url,
            status=response.status,
            status_text=response.status_text,
            headers=dict(response.headers),
            timestamp=self._clock(),
            request_id=entry.id,
        ))
        logger.debug(f"Response {entry.id}: {response.status} ({entry.duration}ms)")

    def _on_request_failed(self, request: Request) -> None:
        entry = self._lookup(request)
        if entry is None:
            return

        entry.complete(NetworkResponse(
            id=f"res_{entry.id}",
            url=request.url,
            status=FAILED_STATUS,
            status_text=request.failure or "Request failed",
            headers={},
            timestamp=self._clock(),
            request_id=entry.id,
        ))
        logger.debug(f"Request {entry.id} failed: {request.failure}")

    def query(
        self,
        filter: Optional[NetworkFilter] = None,
        limit: int = DEFAULT_LIMIT,
        clear: bool = False,
    ) -> list[NetworkEntry]:
        """Select entries matching every supplied predicate.

        Matches are ordered by request start time and the newest ``limit``
        are kept (all of them when ``limit`` is not positive). With
        ``clear`` the table is purged after the snapshot is taken.
        """
        criteria = filter or NetworkFilter()
        matched = [entry for entry in self._entries.values() if criteria.matches(entry)]
        matched.sort(key=lambda entry: entry.request.timestamp)
        if limit > 0:
            matched = matched[-limit:]

        if clear:
            self.clear()
        return matched

    def get(
        self,
        filter: Optional[NetworkFilter] = None,
        limit: int = DEFAULT_LIMIT,
        clear: bool = False,
        format: OutputFormat = "summary",
    ) -> list[str]:
        """Query and render entries as text lines."""
        entries = self.query(filter, limit, clear)
        if not entries:
            return ["No network entries matching the criteria"]
        if format == "detailed":
            return format_detailed(entries, self._body_preview_chars)
        return format_summary(entries)

    def stats(self) -> NetworkStats:
        entries = list(self._entries.values())
        completed = [entry for entry in entries if entry.completed]

        stats = NetworkStats(
            total=len(entries),
            completed=len(completed),
            pending=len(entries) - len(completed),
        )
        if completed:
            total_duration = sum(entry.duration for entry in completed)
            stats.average_duration = int(total_duration / len(completed) + 0.5)

        for entry in entries:
            method = entry.request.method
            stats.methods[method] = stats.methods.get(method, 0) + 1
            resource_type = entry.request.resource_type
            stats.resource_types[resource_type] = stats.resource_types.get(resource_type, 0) + 1
            if entry.response:
                status = entry.response.status
                stats.status_codes[status] = stats.status_codes.get(status, 0) + 1
        return stats
