"""Engine variant selection against a Playwright driver handle."""
import logging
from typing import Any, Optional, Protocol

from playwright.sync_api import Browser, BrowserContext, Playwright

from ..core.config import BrowserVariant

logger = logging.getLogger(__name__)


class BrowserEngine(Protocol):
    """Capability set every engine variant exposes."""

    def launch(self, **kwargs: Any) -> Browser: ...

    def launch_persistent_context(self, user_data_dir: str, **kwargs: Any) -> BrowserContext: ...


ENGINE_ATTRIBUTES: dict[BrowserVariant, str] = {
    BrowserVariant.CHROMIUM: "chromium",
    BrowserVariant.FIREFOX: "firefox",
    BrowserVariant.WEBKIT: "webkit",
}


def get_engine(playwright: Playwright, variant: Optional[BrowserVariant] = None) -> BrowserEngine:
    """Resolve a variant tag to the driver's engine implementation.

    Args:
        playwright: Started Playwright driver handle.
        variant: Engine tag; defaults to the primary variant (chromium).

    Returns:
        The matching Playwright BrowserType.
    """
    variant = variant or BrowserVariant.CHROMIUM
    engine = getattr(playwright, ENGINE_ATTRIBUTES[variant])
    logger.debug(f"Selected engine: {variant.value}")
    return engine
