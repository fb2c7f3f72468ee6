"""User actions performed only once their target is ready."""
from __future__ import annotations

import enum
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Optional

from playwright.async_api import Error as PlaywrightError

from storefront_e2e.core.errors import ActionFailedError, TimeoutExceededError
from storefront_e2e.core.locators import ElementRole, LocatorResolver
from storefront_e2e.core.waits import ElementVisible, NetworkIdle, StabilityWaiter, WaitCondition

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    CLICK = "click"
    FILL = "fill"
    PRESS = "press"
    SELECT = "select_option"
    CHECK = "check"


class ActionExecutor:
    """Performs actions through ``resolver`` after ``waiter`` reports the target visible."""

    def __init__(self, resolver: LocatorResolver, waiter: StabilityWaiter) -> None:
        self.resolver = resolver
        self.waiter = waiter

    async def perform(
        self,
        role: ElementRole,
        action: Action,
        *args: object,
        timeout_ms: Optional[int] = None,
        scroll: bool = False,
    ) -> None:
        try:
            await self.waiter.wait(ElementVisible(role))
        except TimeoutExceededError as exc:
            raise ActionFailedError(role.describe(), action.value, str(exc)) from exc

        locator = self.resolver.resolve(role)
        timeout = timeout_ms if timeout_ms is not None else self.waiter.timeouts.action_ms
        logger.debug("%s on %s", action.value, role.describe())
        try:
            if scroll:
                await locator.scroll_into_view_if_needed(timeout=timeout)
            await getattr(locator, action.value)(*args, timeout=timeout)
        except PlaywrightError as exc:
            raise ActionFailedError(role.describe(), action.value, str(exc)) from exc

    async def read_text(self, role: ElementRole) -> str:
        """Return the trimmed inner text of ``role`` once it is visible."""
        await self.waiter.wait(ElementVisible(role))
        return (await self.resolver.resolve(role).inner_text()).strip()

    async def read_value(self, role: ElementRole) -> str:
        await self.waiter.wait(ElementVisible(role))
        return await self.resolver.resolve(role).input_value()

    async def is_visible(self, role: ElementRole) -> bool:
        """Instant visibility probe; never waits."""
        return await self.resolver.resolve(role).is_visible()

    async def fill_and_commit(
        self,
        field: ElementRole,
        value: str,
        commit: ElementRole,
        container: ElementRole,
        *,
        settle_timeout_ms: Optional[int] = None,
    ) -> None:
        """Fill ``field``, click ``commit`` and wait for ``container`` to render again.

        The commit may swap ``container`` for a fresh subtree, so the
        post-condition is checked on the container rather than on ``field``.
        """
        await self.perform(field, Action.FILL, value)
        await self.perform(commit, Action.CLICK)
        try:
            await self.waiter.wait(NetworkIdle())
            await self.waiter.wait(ElementVisible(container, timeout_ms=settle_timeout_ms))
        except TimeoutExceededError as exc:
            raise ActionFailedError(commit.describe(), Action.CLICK.value, str(exc)) from exc

    async def with_fallback(
        self,
        primary: Callable[[], Awaitable[None]],
        fallback: Callable[[], Awaitable[None]],
        success: WaitCondition,
        grace_ms: int,
    ) -> bool:
        """Run ``primary``; run ``fallback`` when ``success`` is not seen within ``grace_ms``.

        Returns ``True`` when the primary trigger was enough.
        """
        await primary()
        outcome = await self.waiter.check(replace(success, timeout_ms=grace_ms))
        if outcome:
            return True
        logger.info("Primary trigger produced no success signal within %s ms; using fallback", grace_ms)
        await fallback()
        return False
