from __future__ import annotations

import pytest

from storefront_e2e.core.normalize import normalize_price, prices_equal


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$1,234.50", "1234.50"),
        ("1234.50", "1234.50"),
        ("$ 12.90", "12.90"),
        ("12,90 €", "12.90"),
        ("1.234,50", "1234.50"),
        ("  19.99\n", "19.99"),
        ("Price: USD 1,800.00", "1800.00"),
        ("free", ""),
        ("", ""),
    ],
)
def test_normalize_price(raw, expected):
    assert normalize_price(raw) == expected


def test_normalize_handles_none():
    assert normalize_price(None) == ""


@pytest.mark.parametrize("raw", ["$1,234.50", "1.2.3.4", "€ 9,99", "abc", "1,000,000", ".5", "5."])
def test_normalize_is_idempotent(raw):
    once = normalize_price(raw)
    assert normalize_price(once) == once


def test_normalize_keeps_digit_order():
    raw = "$9,876,543.21"
    digits = [ch for ch in raw if ch.isdigit()]
    assert [ch for ch in normalize_price(raw) if ch.isdigit()] == digits


def test_prices_equal_ignores_symbols_and_spacing():
    assert prices_equal("12.90", "$ 12.90")
    assert prices_equal("$1,234.50", "1234.50")
    assert not prices_equal("12.90", "12.9")
