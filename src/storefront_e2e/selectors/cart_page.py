"""Roles for the shopping cart page.

Row-level roles hang off ``first_row`` so they are re-derived from the live
table on every use; the update button replaces the row subtree.
"""
from __future__ import annotations

import re

from storefront_e2e.core.locators import ElementRole


class CartRoles:
    table = ElementRole("CartTable", ("table.cart",))
    first_row = ElementRole("CartFirstRow", ("tbody tr.cart-item-row",), parent=table)
    product_name = ElementRole("CartFirstRowName", ("td.product a.product-name",), parent=first_row)
    unit_price = ElementRole(
        "CartFirstRowUnitPrice",
        ("td.unit-price span.product-unit-price",),
        parent=first_row,
    )
    # Quantity is a text input whose id starts with 'itemquantity'.
    quantity_input = ElementRole(
        "CartFirstRowQuantity",
        ("td.quantity input[id^='itemquantity']",),
        parent=first_row,
    )
    update_button = ElementRole("CartUpdateButton", ("button#updatecart.button-2.update-cart-button",))
    clear_button = ElementRole("CartClearButton", ("button.button-2.clear-cart-button",))
    empty_message = ElementRole("CartEmptyMessage", ("div.no-data:has-text('Your Shopping Cart is empty')",))

    url_pattern = re.compile(r"/cart", re.IGNORECASE)
