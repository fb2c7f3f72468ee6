from __future__ import annotations

import pytest

from storefront_e2e.core.locators import ElementRole, LocatorResolver
from storefront_e2e.selectors import CartRoles, HomeRoles, SearchRoles


class _RecordingLocator:
    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        self.narrowed = False

    def locator(self, selector: str) -> "_RecordingLocator":
        return _RecordingLocator(self.chain + [selector])

    @property
    def first(self) -> "_RecordingLocator":
        narrowed = _RecordingLocator(self.chain + ["<first>"])
        narrowed.narrowed = True
        return narrowed


class _RecordingPage:
    def __init__(self) -> None:
        self.queries = 0

    def locator(self, selector: str) -> _RecordingLocator:
        self.queries += 1
        return _RecordingLocator([selector])


def test_role_requires_selectors():
    with pytest.raises(ValueError):
        ElementRole("Empty", ())
    with pytest.raises(ValueError):
        ElementRole("Blank", ("  ",))
    with pytest.raises(TypeError):
        ElementRole("Bare", "#id")  # type: ignore[arg-type]


def test_candidates_are_joined_in_priority_order():
    assert HomeRoles.search_input.compound_selector == (
        "#small-searchterms, input[name='q'], input[type='search']"
    )


def test_resolve_narrows_to_first_match():
    resolver = LocatorResolver(_RecordingPage())  # type: ignore[arg-type]
    handle = resolver.resolve(HomeRoles.search_input)
    assert handle.chain == [HomeRoles.search_input.compound_selector, "<first>"]


def test_resolve_all_keeps_every_match():
    resolver = LocatorResolver(_RecordingPage())  # type: ignore[arg-type]
    handle = resolver.resolve(SearchRoles.result_cards)
    assert handle.chain == [".products-wrapper .product-list", "<first>", ".item-box"]
    assert not handle.narrowed


def test_parent_scope_is_derived_from_role_chain():
    resolver = LocatorResolver(_RecordingPage())  # type: ignore[arg-type]
    handle = resolver.resolve(CartRoles.quantity_input)
    assert handle.chain == [
        "table.cart",
        "<first>",
        "tbody tr.cart-item-row",
        "<first>",
        "td.quantity input[id^='itemquantity']",
        "<first>",
    ]
    assert CartRoles.quantity_input.describe() == "CartTable > CartFirstRow > CartFirstRowQuantity"


def test_explicit_scope_overrides_parent():
    resolver = LocatorResolver(_RecordingPage())  # type: ignore[arg-type]
    scope = _RecordingLocator(["#other-row"])
    handle = resolver.resolve(CartRoles.product_name, scope=scope)  # type: ignore[arg-type]
    assert handle.chain == ["#other-row", "td.product a.product-name", "<first>"]


def test_within_rescopes_a_role():
    row = ElementRole("Row", ("tr.row",))
    cell = ElementRole("Cell", ("td",)).within(row)
    assert cell.parent is row
    assert cell.describe() == "Row > Cell"
