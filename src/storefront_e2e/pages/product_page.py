"""Product details page, for flows that open a single product."""
from __future__ import annotations

from storefront_e2e.core.actions import Action
from storefront_e2e.core.waits import ElementVisible
from storefront_e2e.pages.base import BasePage
from storefront_e2e.selectors.product_page import ProductRoles


class ProductPage(BasePage):
    async def wait_ready(self) -> None:
        await self.waiter.wait(ElementVisible(ProductRoles.title))

    async def read_title(self) -> str:
        return await self.actions.read_text(ProductRoles.title)

    async def read_price(self) -> str:
        return await self.actions.read_text(ProductRoles.price)

    async def add_to_cart(self, qty: int = 1) -> None:
        """Add the product, setting the quantity only when the theme shows the input."""
        if await self.actions.is_visible(ProductRoles.quantity_input):
            await self.actions.perform(ProductRoles.quantity_input, Action.FILL, str(qty))
        await self.actions.perform(ProductRoles.add_to_cart_button, Action.CLICK)
