"""Playwright page objects and scenarios for storefront end-to-end checks."""

__version__ = "0.1.0"
