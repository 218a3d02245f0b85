"""Endpoint logic for the five proxied operations.

Each operation returns a JSON-ready dict or raises a ProxyError subclass.
Validation and credential checks happen before any upstream call.
Balance and price responses are all-or-nothing; hedge volume degrades
per side, so one ledger failing upstream reports zero for that side.
"""

import asyncio
import math
from decimal import Decimal
from typing import Any

from hedge_proxy.aggregation import parse_decimal, sum_quote_quantity
from hedge_proxy.config import AppSettings
from hedge_proxy.exceptions import (
    MissingDate,
    MissingExchangeCredentials,
    UpstreamError,
    UpstreamTransportError,
)
from hedge_proxy.exchange.client import ExchangeClient
from hedge_proxy.exchange.types import (
    TransportFailure,
    UpstreamFailure,
    UpstreamOk,
    UpstreamResult,
)
from hedge_proxy.logging import get_logger
from hedge_proxy.timerange import format_offset, get_day_range

logger = get_logger(__name__)

DEFAULT_SYMBOL = "BNBUSDT"
BALANCE_ASSET = "BNB"


def _unwrap(result: UpstreamResult) -> Any:
    """Return the payload of a successful call, raising for the other variants."""
    if isinstance(result, UpstreamOk):
        return result.payload
    if isinstance(result, UpstreamFailure):
        raise UpstreamError(result.status_code, result.body)
    if isinstance(result, TransportFailure):
        raise UpstreamTransportError(result.message)
    raise TypeError(f"unexpected upstream result {result!r}")


def _price_of(payload: Any) -> float | None:
    """Ticker price as a float, None when the field is absent or unparseable."""
    raw = payload.get("price") if isinstance(payload, dict) else None
    if raw is None:
        return None
    try:
        price = float(raw)
    except (TypeError, ValueError):
        return None
    return price if math.isfinite(price) else None


def _normalize_symbol(symbol: str | None) -> str:
    return (symbol or DEFAULT_SYMBOL).strip().upper() or DEFAULT_SYMBOL


class ProxyService:
    """Composes the exchange client, day-range resolver and aggregator.

    Args:
        settings: Frozen application settings.
        client: Exchange client used for every upstream call.
    """

    def __init__(self, settings: AppSettings, client: ExchangeClient) -> None:
        self._settings = settings
        self._client = client

    def _require_credentials(self) -> None:
        if not self._settings.exchange.has_credentials:
            raise MissingExchangeCredentials()

    async def spot_price(self, symbol: str | None = None) -> dict:
        symbol = _normalize_symbol(symbol)
        payload = _unwrap(await self._client.fetch_spot_price(symbol))
        return {"type": "spot", "symbol": symbol, "price": _price_of(payload)}

    async def futures_price(self, symbol: str | None = None) -> dict:
        symbol = _normalize_symbol(symbol)
        payload = _unwrap(await self._client.fetch_futures_price(symbol))
        return {"type": "futures", "symbol": symbol, "price": _price_of(payload)}

    async def spot_balance(self) -> dict:
        """Free and locked BNB in the spot account."""
        self._require_credentials()
        payload = _unwrap(await self._client.fetch_spot_account())

        balances = payload.get("balances") if isinstance(payload, dict) else None
        entry: dict = next(
            (
                b
                for b in balances or []
                if isinstance(b, dict) and b.get("asset") == BALANCE_ASSET
            ),
            {},
        )
        free = parse_decimal(entry.get("free"))
        locked = parse_decimal(entry.get("locked"))
        return {
            "asset": BALANCE_ASSET,
            "free": float(free),
            "locked": float(locked),
            "total": float(free + locked),
        }

    async def futures_balance(self) -> dict:
        """Futures wallet balances, relayed unfiltered."""
        self._require_credentials()
        payload = _unwrap(await self._client.fetch_futures_balance())
        return {"balances": payload}

    async def hedge_volume(self, date: str | None) -> dict:
        """Spot and futures quote volume traded on one local calendar day.

        Raises:
            MissingDate: No date given.
            InvalidDateRange: Date is not a real YYYY-MM-DD date.
            MissingExchangeCredentials: Binance keys not configured.
            UpstreamTransportError: Either trade call could not reach Binance.
        """
        if not date:
            raise MissingDate()
        offset = self._settings.timezone_offset_hours
        day = get_day_range(date, self._settings.tz_offset)
        self._require_credentials()

        results = await asyncio.gather(
            self._client.fetch_spot_trades(day),
            self._client.fetch_futures_trades(day),
            return_exceptions=True,
        )
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome
        spot_result, futures_result = results
        spot_volume = self._side_volume("spot", spot_result)
        futures_volume = self._side_volume("futures", futures_result)

        logger.info(
            "hedge_volume_computed",
            date=date,
            offset=format_offset(offset),
            start_ms=day.start_ms,
            end_ms=day.end_ms,
            spot=str(spot_volume),
            futures=str(futures_volume),
        )
        return {
            "date": date,
            "spotHedgeVolumeUSDT": float(spot_volume),
            "futuresHedgeVolumeUSDT": float(futures_volume),
        }

    @staticmethod
    def _side_volume(side: str, result: UpstreamResult) -> Decimal:
        """Sum one ledger's trades; an upstream rejection counts as zero."""
        if isinstance(result, TransportFailure):
            raise UpstreamTransportError(result.message)
        if isinstance(result, UpstreamFailure):
            logger.warning(
                "hedge_volume_side_failed", side=side, status=result.status_code
            )
            return sum_quote_quantity(result.body)
        return sum_quote_quantity(result.payload)
