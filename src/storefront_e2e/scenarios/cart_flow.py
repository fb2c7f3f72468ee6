"""Login -> search -> add to cart -> cart checks -> quantity 2 -> clear cart."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import allure
from playwright.async_api import Page

from storefront_e2e.config.settings import Settings, resolve_output_dir
from storefront_e2e.core.errors import ConfigurationMissingError
from storefront_e2e.data.search_vector import SearchVector, read_search_vector
from storefront_e2e.pages import CartLine, CartPage, HomePage, LoginPage, SearchPage
from storefront_e2e.reporting.attachments import attach_text
from storefront_e2e.storage.product_writer import write_product_info

logger = logging.getLogger(__name__)

UPDATED_QUANTITY = 2


class CartFlowScenario:
    """Drives one page through the full cart flow, one Allure step per stage."""

    def __init__(
        self,
        settings: Settings,
        home: HomePage,
        login: LoginPage,
        search: SearchPage,
        cart: CartPage,
        *,
        output_dir: Optional[Path] = None,
    ) -> None:
        self.settings = settings
        self.home = home
        self.login = login
        self.search = search
        self.cart = cart
        self.output_dir = output_dir or resolve_output_dir(settings)

    @classmethod
    def for_page(cls, page: Page, settings: Settings, *, output_dir: Optional[Path] = None) -> "CartFlowScenario":
        return cls(
            settings,
            HomePage(page, settings),
            LoginPage(page, settings),
            SearchPage(page, settings),
            CartPage(page, settings),
            output_dir=output_dir,
        )

    async def run(self, vector: Optional[SearchVector] = None) -> None:
        await self.navigate_to_home()
        await self.sign_in()
        vector = vector or self.read_search_data()
        await self.search_products(vector)
        await self.add_first_result_to_cart()
        await self.verify_cart_line(vector)
        await self.change_quantity_and_verify(UPDATED_QUANTITY)
        await self.clear_cart_and_verify()
        logger.info("Cart flow completed successfully")

    async def navigate_to_home(self) -> None:
        with allure.step(f"1 Navigating to Home Page: {self.settings.base_url}"):
            await self.home.go_to()

    async def sign_in(self) -> None:
        email = self.settings.credentials.email
        password = self.settings.credentials.password
        if not email or not password:
            raise ConfigurationMissingError("credentials.email and credentials.password must be configured")
        with allure.step("2 Opening Login Page"):
            await self.login.go_to_login()
        with allure.step(f"2.1 Submitting credentials for '{email}'"):
            await self.login.login(email, password)
        with allure.step("2.2 Verifying login"):
            if not await self.login.is_login_successful():
                raise AssertionError("Login failed - account page not detected.")

    def read_search_data(self) -> SearchVector:
        sheet = self.settings.search_data_sheet
        with allure.step(f"3 Reading keywords & expected price from Excel (sheet '{sheet}')"):
            return read_search_vector(self.settings.search_data_excel_path, sheet)

    async def search_products(self, vector: SearchVector) -> None:
        with allure.step(f"3.1 Searching on Home: '{vector.first_keyword}' (clear) -> '{vector.second_keyword}'"):
            await self.home.search_two_phase(vector.first_keyword, vector.second_keyword)

    async def add_first_result_to_cart(self) -> None:
        with allure.step("4 Waiting for search results"):
            await self.search.wait_results()
        with allure.step("4.1 Adding first product to cart from search page"):
            await self.search.add_first_product_to_cart()

    async def verify_cart_line(self, vector: SearchVector) -> None:
        with allure.step("5 Opening cart via header"):
            await self.cart.open_cart_via_header()
        with allure.step(f"5.1 Asserting cart product NAME contains '{vector.second_keyword}'"):
            await self.cart.assert_product_name_contains(vector.second_keyword)
        with allure.step(f"5.2 Asserting cart product PRICE equals expected '{vector.expected_price}'"):
            await self.cart.assert_unit_price_equals(vector.expected_price)
        with allure.step("5.3 Recording cart line"):
            line = await self.cart.read_first_row()
            self._record_cart_line(line)

    async def change_quantity_and_verify(self, qty: int) -> None:
        with allure.step(f"6 Changing quantity to {qty} -> Update -> assert"):
            await self.cart.change_quantity(qty)
            await self.cart.assert_quantity(qty)

    async def clear_cart_and_verify(self) -> None:
        with allure.step("7 Clearing shopping cart and asserting empty message"):
            await self.cart.clear_cart()
            await self.cart.assert_cart_empty()

    def _record_cart_line(self, line: CartLine) -> None:
        """Write and attach ``product_info.txt``; a failure here is logged, not raised."""
        try:
            path = write_product_info(self.output_dir / "product_info.txt", line.name, line.unit_price)
            record = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not record cart line in %s: %s", self.output_dir, exc)
            return
        attach_text(record, "product_info.txt")
