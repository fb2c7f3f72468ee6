from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest
from playwright.async_api import Error as PlaywrightError

from storefront_e2e.core.browser import BrowserSession, run_cleanup, start_tracing, stop_tracing


class DummyTracing:
    def __init__(self, start_error: Optional[str] = None, stop_error: Optional[str] = None) -> None:
        self.start_error = start_error
        self.stop_error = stop_error
        self.started = False

    async def start(self, **kwargs) -> None:
        if self.start_error:
            raise PlaywrightError(self.start_error)
        self.started = True

    async def stop(self, path: Optional[str] = None) -> None:
        if self.stop_error:
            raise PlaywrightError(self.stop_error)
        Path(path).write_bytes(b"PK\x05\x06" + b"\x00" * 18)


class DummyContext:
    def __init__(self, tracing: Optional[DummyTracing] = None, log: Optional[list] = None) -> None:
        self.tracing = tracing or DummyTracing()
        self.log = log if log is not None else []

    async def close(self) -> None:
        self.log.append("context")


class DummyBrowser:
    def __init__(self, log: list, fail: bool = False) -> None:
        self.log = log
        self.fail = fail

    async def close(self) -> None:
        self.log.append("browser")
        if self.fail:
            raise PlaywrightError("Target page, context or browser has been closed")


class DummyPlaywrightCM:
    def __init__(self, log: list) -> None:
        self.log = log

    async def __aexit__(self, *exc_info) -> None:
        self.log.append("playwright")


class DummyChromium:
    def __init__(self) -> None:
        self.launches: list[dict] = []

    async def launch(self, **kwargs):
        self.launches.append(kwargs)
        if kwargs.get("channel"):
            raise PlaywrightError("Chromium distribution 'chrome' is not found")
        return "bundled-browser"


class DummyPlaywright:
    def __init__(self) -> None:
        self.chromium = DummyChromium()


@pytest.mark.asyncio
async def test_run_cleanup_continues_past_failures():
    ran: list[str] = []

    async def ok(name: str) -> None:
        ran.append(name)

    async def boom() -> None:
        ran.append("boom")
        raise RuntimeError("already gone")

    failed = await run_cleanup([("first", lambda: ok("first")), ("boom", boom), ("last", lambda: ok("last"))])

    assert ran == ["first", "boom", "last"]
    assert failed == ["boom"]


@pytest.mark.asyncio
async def test_start_tracing_tolerates_already_started():
    assert await start_tracing(DummyContext(DummyTracing(start_error="Tracing has been already started")))
    assert not await start_tracing(DummyContext(DummyTracing(start_error="Browser closed")))


@pytest.mark.asyncio
async def test_stop_tracing_writes_timestamped_zip(tmp_path):
    trace = await stop_tracing(DummyContext(), tmp_path / "traces")
    assert trace is not None and trace.exists()
    assert trace.name.startswith("trace-") and trace.suffix == ".zip"


@pytest.mark.asyncio
async def test_stop_tracing_when_never_started(tmp_path):
    context = DummyContext(DummyTracing(stop_error="Tracing has not been started"))
    assert await stop_tracing(context, tmp_path) is None


@pytest.mark.asyncio
async def test_close_releases_everything_even_when_a_step_fails(settings, tmp_path):
    log: list[str] = []
    session = BrowserSession(settings)
    session._output_dir = tmp_path
    session._context = DummyContext(log=log)
    session._browser = DummyBrowser(log, fail=True)
    session._playwright_cm = DummyPlaywrightCM(log)
    session._page = object()

    await session.close()

    assert log == ["context", "browser", "playwright"]
    with pytest.raises(RuntimeError):
        session.page
    # a second close has nothing left to release
    await session.close()
    assert log == ["context", "browser", "playwright"]


@pytest.mark.asyncio
async def test_close_stops_tracing_first(settings, tmp_path):
    log: list[str] = []
    session = BrowserSession(settings)
    session._output_dir = tmp_path
    session._context = DummyContext(log=log)
    session._tracing = True

    await session.close()

    assert list(tmp_path.glob("trace-*.zip"))
    assert log == ["context"]


@pytest.mark.asyncio
async def test_launch_falls_back_to_bundled_chromium(settings):
    settings = settings.model_copy(update={"use_chrome_channel": True, "headless": True})
    session = BrowserSession(settings)
    session._playwright = DummyPlaywright()

    assert await session._launch() == "bundled-browser"
    launches = session._playwright.chromium.launches
    assert launches[0]["channel"] == "chrome"
    assert "channel" not in launches[1]
