"""Entry point for the hedge proxy.

Loads settings once, configures logging, and serves the FastAPI app via
uvicorn's programmatic API. The lifespan starts the self-pinger and
closes the shared Binance HTTP client on shutdown.
"""

import asyncio
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from hedge_proxy.api.app import create_app
from hedge_proxy.config import AppSettings
from hedge_proxy.keepalive import SelfPinger
from hedge_proxy.logging import get_logger, setup_logging
from hedge_proxy.timerange import format_offset


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start background tasks on startup; stop them and close clients on shutdown."""
    logger = get_logger("hedge_proxy.main")
    settings: AppSettings = app.state.settings

    pinger = SelfPinger(settings.self_ping)
    app.state.pinger = pinger
    await pinger.start()

    logger.info(
        "proxy_started",
        port=settings.port,
        proxy_key_configured=bool(settings.proxy.api_key.get_secret_value()),
        exchange_keys_configured=settings.exchange.has_credentials,
        timezone_offset=format_offset(settings.timezone_offset_hours),
    )
    if not settings.proxy.api_key.get_secret_value():
        logger.warning(
            "proxy_key_not_configured",
            note="PROXY_API_KEY is empty; every proxied route will return 401.",
        )

    yield

    await pinger.stop()
    await app.state.exchange_client.close()
    logger.info("proxy_stopped")


async def run() -> None:
    """Build the app from the environment and serve it until interrupted."""
    settings = AppSettings()
    setup_logging(settings.log_level)

    app = create_app(settings, lifespan=lifespan)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",  # request logging comes from structlog
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
