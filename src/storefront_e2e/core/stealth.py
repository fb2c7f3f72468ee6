"""Optional playwright-stealth integration for bot-sensitive storefronts.

See: https://github.com/mattwmaster58/playwright_stealth
"""
from __future__ import annotations

from contextlib import AbstractAsyncContextManager

from playwright.async_api import async_playwright
from playwright_stealth import Stealth


class StealthManager:
    """Hands out a Playwright context manager with or without stealth evasions."""

    def __init__(self, enabled: bool, **overrides: object) -> None:
        self.enabled = enabled
        self._overrides = overrides
        self._stealth = Stealth(**overrides) if enabled else None

    def wrap_playwright(self) -> AbstractAsyncContextManager:
        """Return the context manager to acquire Playwright."""
        if self._stealth is None:
            return async_playwright()
        return self._stealth.use_async(async_playwright())

    def describe(self) -> dict[str, object]:
        if not self.enabled:
            return {"enabled": False}
        return {"enabled": True, "overrides": self._overrides}
