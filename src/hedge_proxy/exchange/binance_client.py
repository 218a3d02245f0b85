"""Binance REST client over a shared httpx.AsyncClient.

Public calls carry only their query params. Private calls add
recvWindow, timestamp and an HMAC signature to the query string and the
API key in the X-MBX-APIKEY header. Failures come back as result
variants, never as exceptions, and nothing is retried.
"""

from urllib.parse import urlencode

import httpx

from hedge_proxy.config import ExchangeSettings
from hedge_proxy.exceptions import MissingExchangeCredentials
from hedge_proxy.exchange.client import ExchangeClient
from hedge_proxy.exchange.signer import build_signed_query
from hedge_proxy.exchange.types import (
    Market,
    TransportFailure,
    UpstreamFailure,
    UpstreamOk,
    UpstreamResult,
)
from hedge_proxy.logging import get_logger
from hedge_proxy.timerange import DateRange

logger = get_logger(__name__)

API_KEY_HEADER = "X-MBX-APIKEY"

SPOT_TICKER_PRICE = "/api/v3/ticker/price"
SPOT_ACCOUNT = "/api/v3/account"
SPOT_MY_TRADES = "/api/v3/myTrades"
FUTURES_TICKER_PRICE = "/fapi/v1/ticker/price"
FUTURES_BALANCE = "/fapi/v2/balance"
FUTURES_USER_TRADES = "/fapi/v1/userTrades"


class BinanceClient(ExchangeClient):
    """Concrete Binance client for the spot and USD-M futures REST APIs."""

    def __init__(
        self, settings: ExchangeSettings, http: httpx.AsyncClient | None = None
    ) -> None:
        self._settings = settings
        self._owns_http = http is None
        self._http = (
            http if http is not None else httpx.AsyncClient(timeout=settings.timeout_seconds)
        )
        self._base_urls = {
            Market.SPOT: settings.spot_base_url.rstrip("/"),
            Market.FUTURES: settings.futures_base_url.rstrip("/"),
        }

    @property
    def has_credentials(self) -> bool:
        return self._settings.has_credentials

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()
            logger.info("binance_client_closed")

    async def get_public(
        self, market: Market, path: str, params: dict | None = None
    ) -> UpstreamResult:
        query = urlencode(params or {})
        url = f"{self._base_urls[market]}{path}"
        if query:
            url = f"{url}?{query}"
        return await self._send(url, path, headers={})

    async def get_signed(
        self, market: Market, path: str, params: dict | None = None
    ) -> UpstreamResult:
        if not self.has_credentials:
            raise MissingExchangeCredentials()
        query = build_signed_query(
            params or {},
            self._settings.api_secret.get_secret_value(),
            self._settings.recv_window,
        )
        url = f"{self._base_urls[market]}{path}?{query}"
        headers = {API_KEY_HEADER: self._settings.api_key.get_secret_value()}
        return await self._send(url, path, headers=headers)

    async def _send(self, url: str, path: str, headers: dict) -> UpstreamResult:
        """Issue one GET and classify the outcome."""
        try:
            response = await self._http.get(url, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("upstream_transport_error", path=path, error=repr(e))
            return TransportFailure(f"{type(e).__name__}: {e}")

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(
                "upstream_invalid_json", path=path, status=response.status_code
            )
            return TransportFailure(f"{type(e).__name__}: {e}")

        if response.is_success:
            logger.debug("upstream_ok", path=path, status=response.status_code)
            return UpstreamOk(payload)

        logger.warning("upstream_error", path=path, status=response.status_code)
        return UpstreamFailure(response.status_code, payload)

    async def fetch_spot_price(self, symbol: str) -> UpstreamResult:
        return await self.get_public(Market.SPOT, SPOT_TICKER_PRICE, {"symbol": symbol})

    async def fetch_futures_price(self, symbol: str) -> UpstreamResult:
        return await self.get_public(
            Market.FUTURES, FUTURES_TICKER_PRICE, {"symbol": symbol}
        )

    async def fetch_spot_account(self) -> UpstreamResult:
        return await self.get_signed(Market.SPOT, SPOT_ACCOUNT)

    async def fetch_futures_balance(self) -> UpstreamResult:
        return await self.get_signed(Market.FUTURES, FUTURES_BALANCE)

    async def fetch_spot_trades(self, day: DateRange) -> UpstreamResult:
        return await self.get_signed(
            Market.SPOT,
            SPOT_MY_TRADES,
            {"startTime": day.start_ms, "endTime": day.end_ms},
        )

    async def fetch_futures_trades(self, day: DateRange) -> UpstreamResult:
        return await self.get_signed(
            Market.FUTURES,
            FUTURES_USER_TRADES,
            {"startTime": day.start_ms, "endTime": day.end_ms},
        )
