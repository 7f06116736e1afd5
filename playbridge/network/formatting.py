"""Text rendering of network entries."""
from datetime import datetime, timezone

from .models import NetworkEntry, NetworkStats

BODY_PREVIEW_CHARS: int = 200


def format_timestamp(ms: int) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    moment = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_summary_line(entry: NetworkEntry) -> str:
    status = entry.response.status if entry.response else "Pending"
    duration = f"{entry.duration}ms" if entry.duration is not None else "N/A"
    return f"{entry.request.method} {entry.request.url} - {status} ({duration})"


def format_summary(entries: list[NetworkEntry]) -> list[str]:
    return [
        f"Retrieved {len(entries)} network entries:",
        "",
        *(format_summary_line(entry) for entry in entries),
    ]


def format_detailed_entry(entry: NetworkEntry, body_chars: int = BODY_PREVIEW_CHARS) -> str:
    request = entry.request
    lines = [
        f"--- Request {request.id} ---",
        f"URL: {request.url}",
        f"Method: {request.method}",
        f"Resource Type: {request.resource_type}",
        f"Timestamp: {format_timestamp(request.timestamp)}",
    ]

    if request.post_data:
        preview = request.post_data[:body_chars]
        if len(request.post_data) > body_chars:
            preview += "..."
        lines.append(f"Post Data: {preview}")

    if entry.response:
        lines.extend([
            "",
            f"Response Status: {entry.response.status} {entry.response.status_text}",
            f"Duration: {entry.duration}ms",
            f"Response Timestamp: {format_timestamp(entry.response.timestamp)}",
        ])
    else:
        lines.extend(["", "Response: Pending or Failed"])

    lines.append("")
    return "\n".join(lines)


def format_detailed(entries: list[NetworkEntry], body_chars: int = BODY_PREVIEW_CHARS) -> list[str]:
    return [
        f"Retrieved {len(entries)} network entries (detailed):",
        "",
        *(format_detailed_entry(entry, body_chars) for entry in entries),
    ]


def format_stats(stats: NetworkStats, monitoring: bool) -> list[str]:
    """Render aggregate counts, one text block per group."""
    def counts(group: dict) -> str:
        if not group:
            return "none"
        return ", ".join(f"{key}={value}" for key, value in sorted(group.items(), key=lambda kv: str(kv[0])))

    return [
        f"Monitoring: {'active' if monitoring else 'stopped'}",
        f"Total: {stats.total} (completed {stats.completed}, pending {stats.pending})",
        f"Methods: {counts(stats.methods)}",
        f"Resource types: {counts(stats.resource_types)}",
        f"Status codes: {counts(stats.status_codes)}",
        f"Average duration: {stats.average_duration}ms",
    ]
