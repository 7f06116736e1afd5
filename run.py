"""CLI entry point: open a page and report its network traffic."""
import argparse
import logging
import sys
from pathlib import Path

from playbridge.browser.session import BrowserSession
from playbridge.core.config import Settings
from playbridge.core.logging import setup_logging
from playbridge.network.inspector import NetworkInspector
from playbridge.tools.registry import ToolDispatcher


def main() -> int:
    """Navigate to a URL with network monitoring and print what was captured."""
    parser = argparse.ArgumentParser(
        description="Open a URL in a Playwright browser and inspect its network traffic"
    )
    parser.add_argument("url", help="URL to navigate to")
    parser.add_argument(
        "--config", "-c",
        default="config/settings.yaml",
        help="Path to settings YAML file (used when it exists)"
    )
    parser.add_argument(
        "--browser", "-b",
        choices=["chromium", "firefox", "webkit"],
        default="chromium",
        help="Browser engine (default: chromium)"
    )
    parser.add_argument(
        "--profile", "-p",
        help="Profile directory for a persistent browser context"
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run the browser without a window"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Navigation timeout in milliseconds"
    )
    parser.add_argument(
        "--detailed",
        action="store_true",
        help="Print detailed network entries instead of a summary"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    config_path = Path(args.config)
    settings = Settings.from_yaml(config_path) if config_path.exists() else Settings()

    setup_logging("DEBUG" if args.debug else settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Target: {args.url}")

    inspector = NetworkInspector(body_preview_chars=settings.network.body_preview_chars)
    session = BrowserSession(inspector=inspector)
    dispatcher = ToolDispatcher(session, settings)

    navigate_args = {
        "url": args.url,
        "browserType": args.browser,
        "headless": args.headless,
    }
    if args.profile:
        navigate_args["userDataDir"] = args.profile
    if args.timeout:
        navigate_args["timeout"] = args.timeout

    try:
        result = dispatcher.call("browser_navigate", navigate_args)
        print(result.text)
        if result.is_error:
            return 1

        entries = dispatcher.call(
            "browser_network_inspection",
            {"action": "get", "format": "detailed" if args.detailed else "summary"},
        )
        print(entries.text)

        stats = dispatcher.call("browser_network_inspection", {"action": "stats"})
        print(stats.text)
        return 0

    finally:
        dispatcher.call("browser_close")


if __name__ == "__main__":
    sys.exit(main())
