"""Roles for the search results grid.

Card roles are scoped to the results container so marketing blocks
elsewhere on the page never match.
"""
from __future__ import annotations

from storefront_e2e.core.locators import ElementRole


class SearchRoles:
    results_container = ElementRole("SearchResultsContainer", (".products-wrapper .product-list",))
    result_cards = ElementRole("SearchResultCards", (".item-box",), parent=results_container, first=False)
    first_card = ElementRole("SearchFirstCard", (".item-box",), parent=results_container)
    first_card_title = ElementRole("SearchFirstCardTitle", ("h2.product-title a",), parent=first_card)
    first_card_add_button = ElementRole(
        "SearchFirstCardAddToCart",
        ("button.button-2.product-box-add-to-cart-button",),
        parent=first_card,
    )
