"""Roles for a single product details page."""
from __future__ import annotations

from storefront_e2e.core.locators import ElementRole


class ProductRoles:
    title = ElementRole("ProductTitle", (".product-name h1", "h1[itemprop='name']"))
    price = ElementRole("ProductPrice", (".product-price .price", ".actual-price"))
    quantity_input = ElementRole(
        "ProductQuantity",
        ("input.qty-input", "input[name^='addtocart_'][name$='_EnteredQuantity']"),
    )
    add_to_cart_button = ElementRole(
        "ProductAddToCart",
        ("[id^='add-to-cart-button-']", "button.add-to-cart-button"),
    )
