"""Browser orchestration helpers."""
from __future__ import annotations

import logging
import time
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Awaitable, Callable, Optional, Sequence, Type

import allure
from playwright.async_api import Browser, BrowserContext, Page, Playwright
from playwright.async_api import Error as PlaywrightError

from storefront_e2e.config.settings import Settings
from storefront_e2e.core.stealth import StealthManager
from storefront_e2e.reporting.attachments import attach_file

logger = logging.getLogger(__name__)

CleanupStep = tuple[str, Callable[[], Awaitable[object]]]


async def run_cleanup(steps: Sequence[CleanupStep]) -> list[str]:
    """Run every step in order, logging failures instead of raising.

    Returns the names of the steps that failed.
    """
    failed: list[str] = []
    for name, step in steps:
        try:
            await step()
        except Exception:
            logger.exception("Cleanup step '%s' failed", name)
            failed.append(name)
    return failed


async def start_tracing(context: BrowserContext) -> bool:
    try:
        await context.tracing.start(screenshots=True, snapshots=True, sources=True)
    except PlaywrightError as exc:
        if "already started" in str(exc).lower():
            logger.info("Tracing already started, continuing")
            return True
        logger.warning("Skipping tracing start due to %s", exc)
        return False
    logger.info("Started trace capture")
    return True


async def stop_tracing(context: BrowserContext, output_dir: Path) -> Optional[Path]:
    """Stop tracing into a timestamped zip under ``output_dir`` and attach it."""
    trace_path = output_dir / f"trace-{time.strftime('%Y%m%d_%H%M%S', time.gmtime())}.zip"
    try:
        trace_path.parent.mkdir(parents=True, exist_ok=True)
        await context.tracing.stop(path=str(trace_path))
    except PlaywrightError as exc:
        if "not been started" in str(exc).lower():
            logger.info("Tracing was not active, nothing to stop")
        else:
            logger.warning("Failed to save trace %s: %s", trace_path, exc)
        return None
    except OSError as exc:
        logger.warning("Failed to prepare trace directory %s: %s", trace_path.parent, exc)
        return None
    logger.info("Saved trace to %s", trace_path)
    attach_file(trace_path, "trace.zip", allure.attachment_type.ZIP)
    return trace_path


@dataclass
class BrowserSession:
    """Async context manager that owns Playwright, browser, context and page for one scenario."""

    settings: Settings
    _playwright_cm: Optional[AbstractAsyncContextManager] = None
    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _context: Optional[BrowserContext] = None
    _page: Optional[Page] = None
    _tracing: bool = False
    _output_dir: Optional[Path] = None

    async def __aenter__(self) -> "BrowserSession":  # noqa: D401
        self._output_dir = self.settings.ensure_directories()
        try:
            await self._open()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    @property
    def page(self) -> Page:
        if not self._page:
            raise RuntimeError("Page not initialised")
        return self._page

    @property
    def context(self) -> BrowserContext:
        if not self._context:
            raise RuntimeError("Browser context not initialised")
        return self._context

    @property
    def output_dir(self) -> Path:
        if self._output_dir is None:
            raise RuntimeError("Session not started")
        return self._output_dir

    async def _open(self) -> None:
        stealth = StealthManager(self.settings.stealth_enabled, **self.settings.stealth_kwargs())
        logger.debug("Stealth configuration: %s", stealth.describe())
        self._playwright_cm = stealth.wrap_playwright()
        self._playwright = await self._playwright_cm.__aenter__()
        self._browser = await self._launch()

        options = self.settings.context_options()
        logger.debug("Creating context with options: %s", options)
        self._context = await self._browser.new_context(**options)
        if self.settings.trace:
            self._tracing = await start_tracing(self._context)

        self._page = await self._context.new_page()
        self._page.set_default_timeout(self.settings.timeout_ms)
        self._page.set_default_navigation_timeout(self.settings.navigation_timeout_ms)

    async def _launch(self) -> Browser:
        launch_args = self.settings.chromium_launch_args()
        logger.info("Launching Chromium with args: %s", launch_args)
        channel = launch_args.get("channel")
        try:
            return await self._playwright.chromium.launch(**launch_args)
        except PlaywrightError as exc:
            if not channel:
                raise
            logger.warning(
                "Failed to launch with channel '%s': %s; retrying with bundled Chromium",
                channel,
                exc,
            )
            fallback_args = {k: v for k, v in launch_args.items() if k != "channel"}
            return await self._playwright.chromium.launch(**fallback_args)

    async def close(self) -> None:
        """Release everything this session opened; never raises."""
        steps: list[CleanupStep] = []
        context, browser, playwright_cm = self._context, self._browser, self._playwright_cm
        if context is not None and self._tracing:
            steps.append(("stop tracing", lambda: stop_tracing(context, self.output_dir)))
        if context is not None:
            steps.append(("close context", context.close))
        if browser is not None:
            steps.append(("close browser", browser.close))
        if playwright_cm is not None:
            steps.append(("stop playwright", lambda: playwright_cm.__aexit__(None, None, None)))

        self._page = self._context = self._browser = None
        self._playwright = self._playwright_cm = None
        self._tracing = False
        await run_cleanup(steps)
