"""JSON endpoints: prices, balances and daily hedge volume."""

from __future__ import annotations

from collections.abc import Awaitable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from hedge_proxy.auth import require_proxy_key
from hedge_proxy.exceptions import ProxyError, UpstreamTransportError
from hedge_proxy.logging import get_logger
from hedge_proxy.service import DEFAULT_SYMBOL, ProxyService

log = get_logger(__name__)

router = APIRouter()

ROUTES = [
    "/price",
    "/futures-price",
    "/balance",
    "/futures-balance",
    "/hedge-volume?date=YYYY-MM-DD",
]


async def _respond(operation: str, pending: Awaitable[dict]) -> JSONResponse:
    """Await an operation, turning unexpected failures into proxy_exception."""
    try:
        body = await pending
        return JSONResponse(content=body)
    except ProxyError:
        raise
    except Exception as e:
        log.exception("operation_failed", operation=operation)
        raise UpstreamTransportError(f"{type(e).__name__}: {e}") from e


def _service(request: Request) -> ProxyService:
    return request.app.state.service


@router.get("/")
async def index() -> JSONResponse:
    """Route listing; the only endpoint without a proxy key."""
    return JSONResponse(content={"ok": True, "routes": ROUTES})


@router.get("/health")
async def health() -> JSONResponse:
    """Liveness probe, also the usual self-ping target."""
    return JSONResponse(content={"ok": True})


@router.get("/price", dependencies=[Depends(require_proxy_key)])
async def spot_price(
    request: Request, symbol: str = Query(default=DEFAULT_SYMBOL)
) -> JSONResponse:
    return await _respond("spot_price", _service(request).spot_price(symbol))


@router.get("/futures-price", dependencies=[Depends(require_proxy_key)])
async def futures_price(
    request: Request, symbol: str = Query(default=DEFAULT_SYMBOL)
) -> JSONResponse:
    return await _respond("futures_price", _service(request).futures_price(symbol))


@router.get("/balance", dependencies=[Depends(require_proxy_key)])
async def spot_balance(request: Request) -> JSONResponse:
    return await _respond("spot_balance", _service(request).spot_balance())


@router.get("/futures-balance", dependencies=[Depends(require_proxy_key)])
async def futures_balance(request: Request) -> JSONResponse:
    return await _respond("futures_balance", _service(request).futures_balance())


@router.get("/hedge-volume", dependencies=[Depends(require_proxy_key)])
async def hedge_volume(
    request: Request, date: str | None = Query(default=None)
) -> JSONResponse:
    """Daily spot and futures quote volume for the configured local day."""
    return await _respond("hedge_volume", _service(request).hedge_volume(date))
