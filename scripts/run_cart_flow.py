"""Entry point for manual runs of the cart flow outside pytest."""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from storefront_e2e.config.settings import DEFAULT_CONFIG_DIR, Settings, load_settings
from storefront_e2e.core.browser import BrowserSession
from storefront_e2e.core.logging import configure_logging
from storefront_e2e.reporting.attachments import capture_failure_artifacts
from storefront_e2e.scenarios import CartFlowScenario

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> None:
    async with BrowserSession(settings) as session:
        scenario = CartFlowScenario.for_page(session.page, settings, output_dir=session.output_dir)
        try:
            await scenario.run()
        except Exception:
            written = await capture_failure_artifacts(session.page, session.output_dir)
            logger.error("Cart flow failed; artifacts: %s", ", ".join(map(str, written)) or "<none>")
            raise


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the storefront cart flow once")
    parser.add_argument("--config-dir", type=Path, default=DEFAULT_CONFIG_DIR)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--headed", action="store_true", help="Force a visible browser window")
    mode.add_argument("--headless", action="store_true", help="Force headless mode")
    args = parser.parse_args()

    overrides: dict[str, object] = {}
    if args.headed:
        overrides["headless"] = False
    elif args.headless:
        overrides["headless"] = True
    settings = load_settings(args.config_dir, **overrides)

    configure_logging(settings)
    if overrides:
        logger.info("CLI override: headless=%s", settings.headless)

    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
