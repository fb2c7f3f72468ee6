"""Plain-text record of the product that ended up in the cart."""
from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def write_product_info(output_path: Path, name: str, price: str) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(f"Product: {name} | Price: {price}", encoding="utf-8")
    logger.info("Wrote product info to %s", output_path)
    return output_path
