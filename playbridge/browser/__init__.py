"""Browser lifecycle: engine selection, launch strategy, and the live session."""
from .engines import get_engine
from .launcher import LaunchResult, LaunchStrategyResolver
from .session import BrowserSession, SessionState

__all__ = [
    "get_engine",
    "LaunchResult",
    "LaunchStrategyResolver",
    "BrowserSession",
    "SessionState",
]
