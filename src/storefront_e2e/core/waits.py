"""Stability waits: block until a named UI condition holds or time out."""
from __future__ import annotations

import asyncio
import enum
import logging
import re
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Union

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from storefront_e2e.core.errors import TimeoutExceededError
from storefront_e2e.core.locators import ElementRole, LocatorResolver

logger = logging.getLogger(__name__)

LoadStateKind = Literal["load", "domcontentloaded", "networkidle"]
UrlPattern = Union[str, re.Pattern, Callable[[str], bool]]


@dataclass(frozen=True)
class ElementVisible:
    role: ElementRole
    timeout_ms: Optional[int] = None


@dataclass(frozen=True)
class ElementAttached:
    role: ElementRole
    timeout_ms: Optional[int] = None


@dataclass(frozen=True)
class UrlMatches:
    pattern: UrlPattern
    timeout_ms: Optional[int] = None


@dataclass(frozen=True)
class LoadState:
    kind: LoadStateKind = "load"
    timeout_ms: Optional[int] = None


@dataclass(frozen=True)
class NetworkIdle:
    timeout_ms: Optional[int] = None


WaitCondition = Union[ElementVisible, ElementAttached, UrlMatches, LoadState, NetworkIdle]


class WaitOutcome(enum.Enum):
    """Result of a wait whose timeout is an expected negative answer."""

    CONFIRMED = "confirmed"
    TIMED_OUT = "timed_out"

    def __bool__(self) -> bool:
        return self is WaitOutcome.CONFIRMED


@dataclass(frozen=True)
class WaitTimeouts:
    element_ms: int = 15000
    navigation_ms: int = 45000
    action_ms: int = 30000

    @classmethod
    def from_settings(cls, settings) -> "WaitTimeouts":
        return cls(
            element_ms=settings.element_timeout_ms,
            navigation_ms=settings.navigation_timeout_ms,
            action_ms=settings.timeout_ms,
        )


def describe_condition(condition: WaitCondition) -> str:
    if isinstance(condition, ElementVisible):
        return f"{condition.role.describe()} to be visible"
    if isinstance(condition, ElementAttached):
        return f"{condition.role.describe()} to be attached"
    if isinstance(condition, UrlMatches):
        pattern = condition.pattern
        if isinstance(pattern, re.Pattern):
            pattern = pattern.pattern
        elif callable(pattern):
            pattern = getattr(pattern, "__name__", "predicate")
        return f"URL matching {pattern}"
    if isinstance(condition, LoadState):
        return f"load state '{condition.kind}'"
    if isinstance(condition, NetworkIdle):
        return "network idle"
    raise TypeError(f"Unsupported wait condition: {condition!r}")


class StabilityWaiter:
    """Runs waits one at a time against the page behind ``resolver``."""

    def __init__(self, resolver: LocatorResolver, timeouts: Optional[WaitTimeouts] = None) -> None:
        self.resolver = resolver
        self.timeouts = timeouts or WaitTimeouts()
        self._lock = asyncio.Lock()

    @property
    def page(self):
        return self.resolver.page

    def timeout_for(self, condition: WaitCondition) -> int:
        """Timeout in ms for ``condition``; Playwright would read ``0`` as no limit, so it is rejected."""
        if condition.timeout_ms is not None:
            timeout = condition.timeout_ms
        elif isinstance(condition, (ElementVisible, ElementAttached)):
            timeout = self.timeouts.element_ms
        else:
            timeout = self.timeouts.navigation_ms
        if timeout <= 0:
            raise ValueError(f"Wait for {describe_condition(condition)} needs a positive timeout, got {timeout}")
        return timeout

    async def wait(self, condition: WaitCondition) -> None:
        """Return once ``condition`` holds; raise :class:`TimeoutExceededError` otherwise."""
        timeout = self.timeout_for(condition)
        async with self._lock:
            try:
                await self._dispatch(condition, timeout)
            except PlaywrightTimeoutError as exc:
                raise TimeoutExceededError(describe_condition(condition), timeout) from exc

    async def check(self, condition: WaitCondition) -> WaitOutcome:
        """Like :meth:`wait` but report a timeout as :attr:`WaitOutcome.TIMED_OUT`."""
        try:
            await self.wait(condition)
        except TimeoutExceededError as exc:
            logger.info("%s", exc)
            return WaitOutcome.TIMED_OUT
        return WaitOutcome.CONFIRMED

    async def _dispatch(self, condition: WaitCondition, timeout: int) -> None:
        if isinstance(condition, ElementVisible):
            await self.resolver.resolve(condition.role).wait_for(state="visible", timeout=timeout)
        elif isinstance(condition, ElementAttached):
            await self.resolver.resolve(condition.role).wait_for(state="attached", timeout=timeout)
        elif isinstance(condition, UrlMatches):
            await self.page.wait_for_url(condition.pattern, wait_until="commit", timeout=timeout)
        elif isinstance(condition, LoadState):
            await self.page.wait_for_load_state(condition.kind, timeout=timeout)
        elif isinstance(condition, NetworkIdle):
            await self.page.wait_for_load_state("networkidle", timeout=timeout)
        else:
            raise TypeError(f"Unsupported wait condition: {condition!r}")
