"""Shared pytest configuration.

Adds the ``--run-e2e`` switch for the live-browser scenario and the fixtures
that let page objects run against :mod:`fakes` instead of a browser.
"""
from __future__ import annotations

import pytest

from fakes import FakePage
from storefront_e2e.config.settings import Settings


def pytest_addoption(parser):
    """Hook to add custom command-line options to pytest."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run scenarios marked e2e against the configured storefront",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --run-e2e and a reachable storefront")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        element_timeout_ms=1500,
        navigation_timeout_ms=4500,
        timeout_ms=3000,
        login_check_timeout_ms=500,
        search_grace_ms=250,
        output_dir=tmp_path / "artifacts",
        storage_state_path=None,
        credentials={"email": "shopper@example.com", "password": "hunter2"},
    )
