"""Element roles for each storefront screen."""

from .cart_page import CartRoles
from .header import HeaderRoles
from .home_page import HomeRoles
from .login_page import LoginRoles
from .product_page import ProductRoles
from .search_page import SearchRoles

__all__ = [
    "CartRoles",
    "HeaderRoles",
    "HomeRoles",
    "LoginRoles",
    "ProductRoles",
    "SearchRoles",
]
