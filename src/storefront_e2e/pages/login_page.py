"""Customer login flow."""
from __future__ import annotations

import logging
from typing import Optional

from storefront_e2e.core.actions import Action
from storefront_e2e.core.waits import ElementVisible, WaitOutcome
from storefront_e2e.pages.base import BasePage
from storefront_e2e.selectors.header import HeaderRoles
from storefront_e2e.selectors.login_page import LoginRoles

logger = logging.getLogger(__name__)

_CLIENT_VALIDATION_PAUSE_MS = 3000


class LoginPage(BasePage):
    async def go_to_login(self) -> None:
        """Open My Account, then Log in."""
        await self.actions.perform(HeaderRoles.account_menu, Action.CLICK)
        await self.actions.perform(HeaderRoles.login_link, Action.CLICK)

    async def login(self, email: str, password: str) -> None:
        logger.info("Submitting credentials for %s", _masked(email))
        await self.actions.perform(LoginRoles.email_input, Action.FILL, email)
        await self.actions.perform(LoginRoles.password_input, Action.FILL, password)
        # client-side validation hooks run asynchronously on this theme
        await self.page.wait_for_timeout(_CLIENT_VALIDATION_PAUSE_MS)
        await self.actions.perform(LoginRoles.submit_button, Action.CLICK)

    async def verify_login(self, timeout_ms: Optional[int] = None) -> WaitOutcome:
        """Wait for the header account opener that only signed-in customers see."""
        timeout = timeout_ms if timeout_ms is not None else self.settings.login_check_timeout_ms
        return await self.waiter.check(ElementVisible(HeaderRoles.account_opener, timeout_ms=timeout))

    async def is_login_successful(self, timeout_ms: Optional[int] = None) -> bool:
        outcome = await self.verify_login(timeout_ms)
        if outcome is WaitOutcome.TIMED_OUT:
            logger.warning("Account opener not visible; treating login as failed")
        return outcome is WaitOutcome.CONFIRMED


def _masked(email: str) -> str:
    if not email:
        return "<unset>"
    if len(email) <= 3:
        return "***"
    return f"{email[:3]}***"
