"""Shopping cart page: first-line checks, quantity update and clearing.

Every read goes through a freshly resolved locator, so assertions made after
an update observe the re-rendered row rather than the one that was replaced.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront_e2e.core.actions import Action
from storefront_e2e.core.errors import TimeoutExceededError
from storefront_e2e.core.normalize import normalize_price, prices_equal
from storefront_e2e.core.waits import ElementVisible, LoadState, NetworkIdle, UrlMatches
from storefront_e2e.pages.base import BasePage
from storefront_e2e.selectors.cart_page import CartRoles
from storefront_e2e.selectors.header import HeaderRoles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    name: str
    unit_price: str
    quantity: str

    @property
    def normalized_price(self) -> str:
        return normalize_price(self.unit_price)


class CartPage(BasePage):
    async def open_cart_via_header(self) -> None:
        """Click the header cart link and wait until the first cart row is interactable."""
        await self.actions.perform(HeaderRoles.cart_link, Action.CLICK)
        await self.waiter.wait(UrlMatches(CartRoles.url_pattern))
        await self.waiter.wait(LoadState("domcontentloaded"))
        await self.waiter.wait(ElementVisible(CartRoles.table))
        await self.waiter.wait(ElementVisible(CartRoles.first_row))

    async def read_first_row(self) -> CartLine:
        return CartLine(
            name=await self.actions.read_text(CartRoles.product_name),
            unit_price=await self.actions.read_text(CartRoles.unit_price),
            quantity=await self.actions.read_value(CartRoles.quantity_input),
        )

    async def assert_product_name_contains(self, expected_part: str) -> None:
        name = await self.actions.read_text(CartRoles.product_name)
        if expected_part.casefold() not in name.casefold():
            raise AssertionError(
                f"Cart product name mismatch. Expected to contain '{expected_part}', actual '{name}'."
            )

    async def assert_unit_price_equals(self, expected_price: str) -> None:
        actual = await self.actions.read_text(CartRoles.unit_price)
        if not prices_equal(actual, expected_price):
            raise AssertionError(
                f"Cart unit price mismatch. Expected '{expected_price}', actual '{actual}'."
            )

    async def assert_quantity(self, expected: int) -> None:
        value = await self.actions.read_value(CartRoles.quantity_input)
        try:
            got = int(value.strip())
        except ValueError:
            got = None
        if got != expected:
            raise AssertionError(f"Quantity mismatch. Expected {expected}, actual '{value}'.")

    async def assert_cart_empty(self) -> None:
        try:
            await self.waiter.wait(ElementVisible(CartRoles.empty_message))
        except TimeoutExceededError as exc:
            raise AssertionError(f"Cart is not empty: {exc}") from exc

    async def change_quantity(self, qty: int) -> None:
        """Set the first line's quantity, press Update and wait for the row to re-render."""
        logger.info("Changing first cart line quantity to %s", qty)
        await self.actions.fill_and_commit(
            CartRoles.quantity_input,
            str(qty),
            CartRoles.update_button,
            CartRoles.first_row,
            settle_timeout_ms=self.settings.timeout_ms,
        )

    async def clear_cart(self) -> None:
        await self.actions.perform(CartRoles.clear_button, Action.CLICK)
        await self.waiter.wait(NetworkIdle())
