"""Element roles and their resolution into live Playwright locators."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementRole:
    """A semantic UI element and the selectors that may render it.

    ``selectors`` are listed in priority order and evaluated together as one
    selector list, so the earliest element in document order wins regardless
    of which candidate matched it. ``parent`` scopes the query to the
    descendants of another role; ``first`` narrows the match to one element.
    """

    name: str
    selectors: tuple[str, ...]
    parent: Optional["ElementRole"] = None
    first: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.selectors, str):
            raise TypeError(f"Role {self.name} selectors must be a tuple, not a string")
        if not self.selectors or not all(s.strip() for s in self.selectors):
            raise ValueError(f"Role {self.name} needs at least one non-empty selector")

    @property
    def compound_selector(self) -> str:
        return ", ".join(self.selectors)

    def within(self, parent: "ElementRole") -> "ElementRole":
        """Return a copy of this role scoped under ``parent``."""
        return ElementRole(self.name, self.selectors, parent=parent, first=self.first)

    def describe(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.describe()} > {self.name}"


class LocatorResolver:
    """Turns roles into deferred locators bound to one page.

    Nothing is queried here; Playwright evaluates the selector on every use,
    so a handle stays valid across re-renders that replace the element.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    def resolve(self, role: ElementRole, scope: Optional[Locator] = None) -> Locator:
        locator = self.resolve_all(role, scope)
        return locator.first if role.first else locator

    def resolve_all(self, role: ElementRole, scope: Optional[Locator] = None) -> Locator:
        """Resolve every element matching ``role`` without narrowing to the first."""
        root: Page | Locator
        if scope is not None:
            root = scope
        elif role.parent is not None:
            root = self.resolve(role.parent)
        else:
            root = self.page
        logger.debug("Resolving %s via %r", role.describe(), role.compound_selector)
        return root.locator(role.compound_selector)
