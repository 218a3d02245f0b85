"""Tests for the background self-ping task."""

import asyncio

import httpx
import pytest

from hedge_proxy.config import KeepAliveSettings
from hedge_proxy.keepalive import SelfPinger

PING_URL = "https://proxy.test/health"


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_ping_once_returns_status() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ok": True})

    pinger = SelfPinger(KeepAliveSettings(url=PING_URL), http=_http(handler))

    assert await pinger.ping_once() == 200
    assert seen == [PING_URL]


@pytest.mark.asyncio
async def test_ping_failure_is_swallowed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    pinger = SelfPinger(KeepAliveSettings(url=PING_URL), http=_http(handler))

    assert await pinger.ping_once() is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "settings",
    [
        KeepAliveSettings(enabled=True, url=""),
        KeepAliveSettings(enabled=False, url=PING_URL),
    ],
)
async def test_disabled_pinger_never_starts(settings: KeepAliveSettings) -> None:
    pinger = SelfPinger(settings)

    await pinger.start()

    assert pinger.enabled is False
    assert pinger.running is False
    await pinger.stop()


@pytest.mark.asyncio
async def test_loop_pings_repeatedly_and_stops() -> None:
    count = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal count
        count += 1
        return httpx.Response(200)

    pinger = SelfPinger(
        KeepAliveSettings(url=PING_URL, interval_ms=10), http=_http(handler)
    )
    await pinger.start()
    await asyncio.sleep(0.1)
    await pinger.stop()

    assert count >= 2
    assert pinger.running is False
    stopped_at = count
    await asyncio.sleep(0.05)
    assert count == stopped_at


@pytest.mark.asyncio
async def test_loop_survives_failures() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise httpx.ConnectError("down", request=request)
        return httpx.Response(200)

    pinger = SelfPinger(
        KeepAliveSettings(url=PING_URL, interval_ms=10), http=_http(handler)
    )
    await pinger.start()
    await asyncio.sleep(0.1)
    await pinger.stop()

    assert calls >= 2
