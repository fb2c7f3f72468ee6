"""Header controls shared by every storefront page."""
from __future__ import annotations

from storefront_e2e.core.locators import ElementRole


class HeaderRoles:
    cart_link = ElementRole("HeaderCartLink", ("a.ico-cart",))
    account_menu = ElementRole("HeaderAccountMenu", ("a.ico-account",))
    login_link = ElementRole("HeaderLoginLink", ("a.ico-login",))
    # Rendered only for an authenticated customer.
    account_opener = ElementRole("HeaderAccountOpener", ("a.ico-account.opener",))
