"""Proxy key authentication.

Every proxied route depends on require_proxy_key. An unset PROXY_API_KEY
locks the proxy rather than opening it.
"""

import hmac

from fastapi import Header, Query, Request

from hedge_proxy.exceptions import Unauthorized
from hedge_proxy.logging import get_logger

logger = get_logger(__name__)

PROXY_KEY_HEADER = "X-Proxy-Key"


def is_authorized(supplied: str | None, configured: str) -> bool:
    """Return True only for a non-empty configured key matched exactly."""
    if not configured or not supplied:
        return False
    return hmac.compare_digest(supplied.encode(), configured.encode())


def extract_proxy_key(header: str | None, query: str | None) -> str | None:
    """Pick the caller's key: the header when non-empty, else the query param."""
    return header or query or None


async def require_proxy_key(
    request: Request,
    x_proxy_key: str | None = Header(default=None, alias=PROXY_KEY_HEADER),
    key: str | None = Query(default=None),
) -> None:
    """FastAPI dependency rejecting callers without the proxy key."""
    configured = request.app.state.settings.proxy.api_key.get_secret_value()
    supplied = extract_proxy_key(x_proxy_key, key)
    if not is_authorized(supplied, configured):
        logger.warning(
            "unauthorized_request",
            path=request.url.path,
            key_supplied=supplied is not None,
            key_configured=bool(configured),
        )
        raise Unauthorized()
