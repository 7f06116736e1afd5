"""Error taxonomy shared by the session, launcher, and tool layers."""


class PlaybridgeError(Exception):
    """Base class for all playbridge failures."""


class ConfigurationError(PlaybridgeError):
    """Raised when launch options are invalid (unknown engine, bad viewport)."""


class LaunchError(PlaybridgeError):
    """Raised when the browser could not be started, even after the fallback attempt."""


class NavigationError(PlaybridgeError):
    """Raised when navigation times out or the transport fails."""


class ElementNotFoundError(PlaybridgeError):
    """Raised when a selector resolves to nothing."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"Element not found: {selector}")
        self.selector = selector


class OperationError(PlaybridgeError):
    """Raised when any other underlying browser call is rejected."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
