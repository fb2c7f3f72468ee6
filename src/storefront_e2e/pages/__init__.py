"""Page objects for the storefront screens exercised by the suite."""

from .cart_page import CartLine, CartPage
from .home_page import HomePage
from .login_page import LoginPage
from .product_page import ProductPage
from .search_page import SearchPage

__all__ = [
    "CartLine",
    "CartPage",
    "HomePage",
    "LoginPage",
    "ProductPage",
    "SearchPage",
]
