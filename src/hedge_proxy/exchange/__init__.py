"""Exchange client layer -- Binance REST integration via httpx."""

from hedge_proxy.exchange.binance_client import BinanceClient
from hedge_proxy.exchange.client import ExchangeClient
from hedge_proxy.exchange.signer import build_signed_query, sign
from hedge_proxy.exchange.types import (
    Market,
    TransportFailure,
    UpstreamFailure,
    UpstreamOk,
    UpstreamResult,
)

__all__ = [
    "BinanceClient",
    "ExchangeClient",
    "Market",
    "TransportFailure",
    "UpstreamFailure",
    "UpstreamOk",
    "UpstreamResult",
    "build_signed_query",
    "sign",
]
