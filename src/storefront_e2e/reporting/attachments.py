"""Best-effort Allure attachments for failure diagnostics.

Nothing in here may fail a test: every helper logs and returns instead of
raising when the report sink or the page misbehaves.
"""
from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Optional

import allure
from playwright.async_api import Page

from storefront_e2e.core.errors import DiagnosticCaptureError

logger = logging.getLogger(__name__)


def attach_bytes(data: bytes, name: str, attachment_type: allure.attachment_type) -> bool:
    try:
        allure.attach(data, name=name, attachment_type=attachment_type)
    except Exception as exc:  # pragma: no cover - report sink is best-effort
        logger.warning("Failed to attach %s to report: %s", name, exc)
        return False
    return True


def attach_file(path: Path, name: str, attachment_type: allure.attachment_type) -> bool:
    if not path.exists():
        logger.debug("Skipping attachment %s; %s does not exist", name, path)
        return False
    try:
        allure.attach.file(str(path), name=name, attachment_type=attachment_type)
    except Exception as exc:  # pragma: no cover - report sink is best-effort
        logger.warning("Failed to attach %s from %s: %s", name, path, exc)
        return False
    return True


def attach_text(text: str, name: str) -> bool:
    return attach_bytes(text.encode("utf-8"), name, allure.attachment_type.TEXT)


async def _grab_screenshot(page: Page) -> bytes:
    try:
        return await page.screenshot(full_page=True)
    except Exception as exc:
        raise DiagnosticCaptureError(f"screenshot failed: {exc}") from exc


async def _grab_html(page: Page) -> str:
    try:
        return await page.content()
    except Exception as exc:
        raise DiagnosticCaptureError(f"page content failed: {exc}") from exc


async def capture_failure_artifacts(page: Optional[Page], output_dir: Path) -> list[Path]:
    """Save and attach a full-page screenshot and the page HTML.

    Returns the files written to ``output_dir``.
    """
    if page is None or page.is_closed():
        logger.info("Page unavailable; skipping failure artifacts")
        return []

    written: list[Path] = []
    stem = f"{uuid.uuid4()}-failure"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Failed to prepare artifact directory %s: %s", output_dir, exc)

    try:
        png = await _grab_screenshot(page)
        attach_bytes(png, "screenshot", allure.attachment_type.PNG)
        path = output_dir / f"{stem}.png"
        path.write_bytes(png)
        written.append(path)
        logger.warning("Saved failure screenshot to %s", path)
    except (DiagnosticCaptureError, OSError) as exc:
        logger.warning("Could not capture failure screenshot: %s", exc)

    try:
        html = await _grab_html(page)
        attach_bytes(html.encode("utf-8"), "page.html", allure.attachment_type.HTML)
        path = output_dir / f"{stem}.html"
        path.write_text(html, encoding="utf-8")
        written.append(path)
    except (DiagnosticCaptureError, OSError) as exc:
        logger.warning("Could not capture failure HTML: %s", exc)

    return written
