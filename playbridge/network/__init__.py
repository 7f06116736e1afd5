"""Network inspection: traffic correlation, queries, and aggregates."""
from .inspector import NetworkInspector
from .models import NetworkEntry, NetworkFilter, NetworkRequest, NetworkResponse, NetworkStats

__all__ = [
    "NetworkInspector",
    "NetworkEntry",
    "NetworkFilter",
    "NetworkRequest",
    "NetworkResponse",
    "NetworkStats",
]
