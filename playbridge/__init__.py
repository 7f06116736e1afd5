"""Playbridge: a Playwright session bridge for tool-calling agents."""

__version__ = "0.1.0"
