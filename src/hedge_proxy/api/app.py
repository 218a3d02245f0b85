"""FastAPI application factory with open CORS and JSON error handling."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from hedge_proxy.api import routes
from hedge_proxy.auth import PROXY_KEY_HEADER
from hedge_proxy.config import AppSettings
from hedge_proxy.exceptions import ProxyError
from hedge_proxy.exchange.binance_client import BinanceClient
from hedge_proxy.exchange.client import ExchangeClient
from hedge_proxy.service import ProxyService

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS",
    "Access-Control-Allow-Headers": f"Content-Type,{PROXY_KEY_HEADER}",
}


async def _cors_and_context(request: Request, call_next: Any) -> Response:
    """Answer preflights directly and stamp CORS headers on every response."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(path=request.url.path)

    if request.method == "OPTIONS":
        response: Response = Response(status_code=204)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


async def _proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def create_app(
    settings: AppSettings,
    client: ExchangeClient | None = None,
    lifespan: Any = None,
) -> FastAPI:
    """Create and configure the proxy application.

    Args:
        settings: Frozen settings shared by every request.
        client: Exchange client; a BinanceClient is built when omitted.
        lifespan: Optional async context manager for startup/shutdown.
                  Used by main.py to run the self-pinger and close the client.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Binance Hedge Proxy",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    exchange_client = client or BinanceClient(settings.exchange)
    app.state.settings = settings
    app.state.exchange_client = exchange_client
    app.state.service = ProxyService(settings, exchange_client)

    app.middleware("http")(_cors_and_context)
    app.add_exception_handler(ProxyError, _proxy_error_handler)
    app.include_router(routes.router)

    return app
