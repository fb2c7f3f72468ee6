from __future__ import annotations

import pytest

from storefront_e2e.core.errors import ConfigurationMissingError
from storefront_e2e.data import SearchVector
from storefront_e2e.pages.cart_page import CartLine
from storefront_e2e.scenarios import CartFlowScenario

VECTOR = SearchVector("computer", "Apple MacBook Pro", "$1,800.00")


class DummyHome:
    def __init__(self, log: list) -> None:
        self.log = log

    async def go_to(self) -> None:
        self.log.append("home.go_to")

    async def search_two_phase(self, first: str, second: str) -> None:
        self.log.append(f"home.search:{first}->{second}")


class DummyLogin:
    def __init__(self, log: list, succeeds: bool = True) -> None:
        self.log = log
        self.succeeds = succeeds

    async def go_to_login(self) -> None:
        self.log.append("login.go_to_login")

    async def login(self, email: str, password: str) -> None:
        self.log.append(f"login.login:{email}")

    async def is_login_successful(self) -> bool:
        self.log.append("login.verify")
        return self.succeeds


class DummySearch:
    def __init__(self, log: list) -> None:
        self.log = log

    async def wait_results(self) -> None:
        self.log.append("search.wait_results")

    async def add_first_product_to_cart(self) -> None:
        self.log.append("search.add_first")


class DummyCart:
    def __init__(self, log: list) -> None:
        self.log = log

    async def open_cart_via_header(self) -> None:
        self.log.append("cart.open")

    async def assert_product_name_contains(self, expected: str) -> None:
        self.log.append(f"cart.name:{expected}")

    async def assert_unit_price_equals(self, expected: str) -> None:
        self.log.append(f"cart.price:{expected}")

    async def read_first_row(self) -> CartLine:
        return CartLine("Apple MacBook Pro 13-inch", "$1,800.00", "1")

    async def change_quantity(self, qty: int) -> None:
        self.log.append(f"cart.change_quantity:{qty}")

    async def assert_quantity(self, qty: int) -> None:
        self.log.append(f"cart.quantity:{qty}")

    async def clear_cart(self) -> None:
        self.log.append("cart.clear")

    async def assert_cart_empty(self) -> None:
        self.log.append("cart.empty")


def _scenario(settings, tmp_path, log: list, *, login_succeeds: bool = True) -> CartFlowScenario:
    return CartFlowScenario(
        settings,
        DummyHome(log),
        DummyLogin(log, login_succeeds),
        DummySearch(log),
        DummyCart(log),
        output_dir=tmp_path,
    )


@pytest.mark.asyncio
async def test_steps_run_in_order(settings, tmp_path):
    log: list[str] = []
    await _scenario(settings, tmp_path, log).run(VECTOR)

    assert log == [
        "home.go_to",
        "login.go_to_login",
        "login.login:shopper@example.com",
        "login.verify",
        "home.search:computer->Apple MacBook Pro",
        "search.wait_results",
        "search.add_first",
        "cart.open",
        "cart.name:Apple MacBook Pro",
        "cart.price:$1,800.00",
        "cart.change_quantity:2",
        "cart.quantity:2",
        "cart.clear",
        "cart.empty",
    ]


@pytest.mark.asyncio
async def test_cart_line_recorded(settings, tmp_path):
    await _scenario(settings, tmp_path, []).run(VECTOR)
    record = (tmp_path / "product_info.txt").read_text(encoding="utf-8")
    assert record == "Product: Apple MacBook Pro 13-inch | Price: $1,800.00"


@pytest.mark.asyncio
async def test_failed_login_stops_the_flow(settings, tmp_path):
    log: list[str] = []
    with pytest.raises(AssertionError, match="Login failed"):
        await _scenario(settings, tmp_path, log, login_succeeds=False).run(VECTOR)
    assert log[-1] == "login.verify"


@pytest.mark.asyncio
async def test_missing_credentials_fail_before_login(settings, tmp_path):
    settings = settings.model_copy(update={"credentials": settings.credentials.model_copy(update={"password": ""})})
    log: list[str] = []
    with pytest.raises(ConfigurationMissingError):
        await _scenario(settings, tmp_path, log).run(VECTOR)
    assert log == ["home.go_to"]


@pytest.mark.asyncio
async def test_vector_read_from_configured_workbook(settings, tmp_path):
    settings = settings.model_copy(update={"search_data_excel_path": tmp_path / "missing.xlsx"})
    with pytest.raises(FileNotFoundError):
        await _scenario(settings, tmp_path, []).run()


@pytest.mark.asyncio
async def test_unwritable_cart_record_does_not_fail_the_flow(settings, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    log: list[str] = []

    await _scenario(settings, blocker, log).run(VECTOR)

    assert log[-1] == "cart.empty"
    assert blocker.is_file()
