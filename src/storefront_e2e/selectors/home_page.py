"""Roles for the landing page search box.

Candidates run from the theme's stable ids to generic fallbacks seen on
other storefront themes.
"""
from __future__ import annotations

from storefront_e2e.core.locators import ElementRole


class HomeRoles:
    search_input = ElementRole(
        "SearchInput",
        ("#small-searchterms", "input[name='q']", "input[type='search']"),
    )
    search_button = ElementRole(
        "SearchButton",
        (
            "button.button-1.search-box-button",
            "form .search-box button[type='submit']",
            "button[type='submit']",
        ),
    )
    # Any of these appearing means the search was submitted.
    search_results_signal = ElementRole(
        "SearchResultsSignal",
        (".search-results", ".products-wrapper", ".product-item"),
    )
