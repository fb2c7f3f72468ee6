"""Shared wiring for page objects."""
from __future__ import annotations

from playwright.async_api import Page

from storefront_e2e.config.settings import Settings
from storefront_e2e.core.actions import ActionExecutor
from storefront_e2e.core.locators import LocatorResolver
from storefront_e2e.core.waits import StabilityWaiter, WaitTimeouts


class BasePage:
    """Gives each page object its own resolver, waiter and executor over ``page``."""

    def __init__(self, page: Page, settings: Settings) -> None:
        self.page = page
        self.settings = settings
        self.resolver = LocatorResolver(page)
        self.waiter = StabilityWaiter(self.resolver, WaitTimeouts.from_settings(settings))
        self.actions = ActionExecutor(self.resolver, self.waiter)
