"""Search results grid."""
from __future__ import annotations

import logging

from storefront_e2e.core.actions import Action
from storefront_e2e.core.waits import ElementAttached, ElementVisible
from storefront_e2e.pages.base import BasePage
from storefront_e2e.selectors.header import HeaderRoles
from storefront_e2e.selectors.search_page import SearchRoles

logger = logging.getLogger(__name__)

_RESULTS_SETTLE_MS = 200


class SearchPage(BasePage):
    async def wait_results(self) -> None:
        """Wait for the results container and a visible first card.

        A short pause follows so ribbons and lazy images finish their first paint.
        """
        await self.waiter.wait(ElementAttached(SearchRoles.results_container))
        await self.waiter.wait(ElementVisible(SearchRoles.first_card))
        await self.page.wait_for_timeout(_RESULTS_SETTLE_MS)

    async def count_results(self) -> int:
        return await self.resolver.resolve(SearchRoles.result_cards).count()

    async def get_first_product_name(self) -> str:
        return await self.actions.read_text(SearchRoles.first_card_title)

    async def add_first_product_to_cart(self) -> None:
        # scrolled first so sticky headers do not intercept the click
        await self.actions.perform(SearchRoles.first_card_add_button, Action.CLICK, scroll=True)
        logger.info("Added first search result to cart")

    async def open_cart_from_header(self) -> None:
        await self.actions.perform(HeaderRoles.cart_link, Action.CLICK)
