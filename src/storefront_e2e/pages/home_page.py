"""Landing page: header search box and its submit control."""
from __future__ import annotations

import logging
from typing import Optional

from storefront_e2e.core.actions import Action
from storefront_e2e.core.waits import ElementVisible
from storefront_e2e.pages.base import BasePage
from storefront_e2e.selectors.home_page import HomeRoles

logger = logging.getLogger(__name__)

_CLEAR_SETTLE_MS = 100


class HomePage(BasePage):
    async def go_to(self, base_url: Optional[str] = None) -> None:
        url = base_url or self.settings.base_url
        logger.info("Navigating to %s", url)
        await self.page.goto(url)

    async def focus_search(self) -> None:
        await self.actions.perform(HomeRoles.search_input, Action.CLICK)

    async def type_search(self, text: str) -> None:
        """Replace whatever the search box holds with ``text``."""
        await self.actions.perform(HomeRoles.search_input, Action.FILL, text)

    async def clear_search(self) -> None:
        await self.actions.perform(HomeRoles.search_input, Action.FILL, "")
        # let on-change handlers run
        await self.page.wait_for_timeout(_CLEAR_SETTLE_MS)

    async def submit_search(self) -> bool:
        """Press Enter, then click the search button if no results show up in time.

        Returns ``True`` when Enter alone submitted the search.
        """
        return await self.actions.with_fallback(
            primary=lambda: self.actions.perform(HomeRoles.search_input, Action.PRESS, "Enter"),
            fallback=lambda: self.actions.perform(HomeRoles.search_button, Action.CLICK),
            success=ElementVisible(HomeRoles.search_results_signal),
            grace_ms=self.settings.search_grace_ms,
        )

    async def search_two_phase(self, first: str, second: str) -> None:
        """Type ``first``, clear it, then type and submit ``second``."""
        logger.info("Searching '%s' (clear) -> '%s'", first, second)
        await self.focus_search()
        await self.type_search(first)
        await self.clear_search()
        await self.type_search(second)
        await self.submit_search()
