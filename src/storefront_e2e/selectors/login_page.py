"""Selectors for the customer login form."""
from __future__ import annotations

from storefront_e2e.core.locators import ElementRole


class LoginRoles:
    email_input = ElementRole("LoginEmail", ("#Email",))
    password_input = ElementRole("LoginPassword", ("#Password",))
    submit_button = ElementRole("LoginSubmit", ("button.login-button",))
