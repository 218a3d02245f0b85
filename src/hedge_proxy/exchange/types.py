"""Upstream call outcomes.

Exchange calls never raise for upstream or network trouble; they return
one of these variants and the caller decides what each one means for
its endpoint.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Market(str, Enum):
    """Which Binance API host a call goes to."""

    SPOT = "spot"
    FUTURES = "futures"


@dataclass(frozen=True)
class UpstreamOk:
    """2xx response with a decoded JSON payload."""

    payload: Any


@dataclass(frozen=True)
class UpstreamFailure:
    """Non-2xx response; status and decoded body are relayed as-is."""

    status_code: int
    body: Any


@dataclass(frozen=True)
class TransportFailure:
    """Binance unreachable, timed out, or sent a body that is not JSON."""

    message: str


UpstreamResult = UpstreamOk | UpstreamFailure | TransportFailure
