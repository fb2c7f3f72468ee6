"""Log in once and persist the session for later runs.

The saved file is what ``storage_state_path`` points at; when it exists,
every scenario context starts already signed in.

Usage:
  python scripts/capture_storage_state.py
  python scripts/capture_storage_state.py --out ./storageState.json --headed
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from storefront_e2e.config.settings import DEFAULT_CONFIG_DIR, Settings, load_settings
from storefront_e2e.core.browser import BrowserSession
from storefront_e2e.core.logging import configure_logging
from storefront_e2e.pages import HomePage, LoginPage

logger = logging.getLogger(__name__)


async def capture(settings: Settings, out_path: Path) -> bool:
    # a fresh login must not start from a stale session
    settings = settings.model_copy(update={"storage_state_path": None, "trace": False})
    async with BrowserSession(settings) as session:
        home = HomePage(session.page, settings)
        login = LoginPage(session.page, settings)
        await home.go_to()
        await login.go_to_login()
        await login.login(settings.credentials.email or "", settings.credentials.password or "")
        if not await login.is_login_successful():
            logger.error("Login was not confirmed; storage state not saved")
            return False
        out_path.parent.mkdir(parents=True, exist_ok=True)
        await session.context.storage_state(path=str(out_path))
        logger.info("Saved storage state to %s", out_path)
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Capture a signed-in storage state")
    parser.add_argument("--config-dir", type=Path, default=DEFAULT_CONFIG_DIR)
    parser.add_argument("--out", type=Path, default=None, help="Defaults to storage_state_path")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--headed", action="store_true")
    mode.add_argument("--headless", action="store_true")
    args = parser.parse_args()

    overrides: dict[str, object] = {}
    if args.headed:
        overrides["headless"] = False
    elif args.headless:
        overrides["headless"] = True
    settings = load_settings(args.config_dir, **overrides)
    configure_logging(settings)

    if not settings.credentials.email or not settings.credentials.password:
        parser.error("credentials.email and credentials.password must be configured")
    out_path: Optional[Path] = args.out or settings.storage_state_path
    if out_path is None:
        parser.error("No --out given and storage_state_path is unset")

    ok = asyncio.run(capture(settings, out_path))
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
