"""Canonical forms for text read back from the storefront DOM."""
from __future__ import annotations

import re

_NON_PRICE_CHARS = re.compile(r"[^\d.,]")
_NON_FINAL_DOT = re.compile(r"\.(?=.*\.)")


def normalize_price(raw: str | None) -> str:
    """Reduce a displayed price to digits and a single decimal point.

    Currency symbols and whitespace are dropped, ``,`` is treated as ``.``
    and every dot except the last is discarded as a thousands separator::

        >>> normalize_price("$1,234.50")
        '1234.50'
        >>> normalize_price("12,90 €")
        '12.90'
    """
    cleaned = _NON_PRICE_CHARS.sub("", raw or "")
    cleaned = cleaned.replace(",", ".")
    return _NON_FINAL_DOT.sub("", cleaned)


def prices_equal(left: str | None, right: str | None) -> bool:
    return normalize_price(left) == normalize_price(right)
