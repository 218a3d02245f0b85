"""Shared test fixtures for the hedge proxy."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from hedge_proxy.api.app import create_app
from hedge_proxy.config import (
    AppSettings,
    ExchangeSettings,
    KeepAliveSettings,
    ProxySettings,
)
from hedge_proxy.exchange.types import UpstreamOk

PROXY_KEY = "test-proxy-key"


def make_settings(
    proxy_key: str = PROXY_KEY,
    api_key: str = "test-api-key",
    api_secret: str = "test-api-secret",
    offset_hours: float = 8.0,
) -> AppSettings:
    """AppSettings with explicit values so the host environment cannot leak in."""
    return AppSettings(
        log_level="DEBUG",
        timezone_offset_hours=offset_hours,
        proxy=ProxySettings(api_key=proxy_key),  # type: ignore[arg-type]
        exchange=ExchangeSettings(
            api_key=api_key,  # type: ignore[arg-type]
            api_secret=api_secret,  # type: ignore[arg-type]
            spot_base_url="https://spot.test",
            futures_base_url="https://futures.test",
        ),
        self_ping=KeepAliveSettings(enabled=False, url=""),
    )


@pytest.fixture
def mock_settings() -> AppSettings:
    """Settings with proxy key and Binance keys configured."""
    return make_settings()


@pytest.fixture
def keyless_settings() -> AppSettings:
    """Settings with a proxy key but no Binance credentials."""
    return make_settings(api_key="", api_secret="")


@pytest.fixture
def mock_client() -> AsyncMock:
    """Mock ExchangeClient with benign default results for every call."""
    client = AsyncMock()
    client.fetch_spot_price = AsyncMock(return_value=UpstreamOk({"price": "123.45"}))
    client.fetch_futures_price = AsyncMock(return_value=UpstreamOk({"price": "124.5"}))
    client.fetch_spot_account = AsyncMock(return_value=UpstreamOk({"balances": []}))
    client.fetch_futures_balance = AsyncMock(return_value=UpstreamOk([]))
    client.fetch_spot_trades = AsyncMock(return_value=UpstreamOk([]))
    client.fetch_futures_trades = AsyncMock(return_value=UpstreamOk([]))
    return client


@pytest.fixture
def api(mock_settings: AppSettings, mock_client: AsyncMock) -> TestClient:
    """TestClient over an app wired to the mock exchange client."""
    return TestClient(create_app(mock_settings, client=mock_client))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Proxy-Key": PROXY_KEY}
