"""Core utilities: configuration, logging, and errors."""
from .config import (
    BrowserConfig,
    BrowserVariant,
    LaunchOptions,
    NetworkConfig,
    ProxySettings,
    Settings,
    Viewport,
)
from .errors import (
    ConfigurationError,
    ElementNotFoundError,
    LaunchError,
    NavigationError,
    OperationError,
    PlaybridgeError,
)
from .logging import setup_logging

__all__ = [
    "BrowserConfig",
    "BrowserVariant",
    "LaunchOptions",
    "NetworkConfig",
    "ProxySettings",
    "Settings",
    "Viewport",
    "ConfigurationError",
    "ElementNotFoundError",
    "LaunchError",
    "NavigationError",
    "OperationError",
    "PlaybridgeError",
    "setup_logging",
]
