"""HMAC-SHA256 request signing for Binance private endpoints.

Binance verifies the signature against the query string exactly as it
arrives, so the string is built once here, signed, and then sent
verbatim. Re-encoding or reordering it afterwards invalidates the
signature.
"""

import hashlib
import hmac
import time
from collections.abc import Iterable
from urllib.parse import urlencode


def sign(query_string: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of query_string keyed by secret."""
    return hmac.new(
        secret.encode("utf-8"), query_string.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def build_signed_query(
    params: dict | Iterable[tuple[str, object]],
    secret: str,
    recv_window: int,
    timestamp_ms: int | None = None,
) -> str:
    """Build the final query string for a signed call.

    Caller params keep their order, then recvWindow and timestamp are
    appended, and the signature over all of that goes last. A fresh
    timestamp is taken on every call unless one is supplied.

    Args:
        params: Endpoint parameters, in the order they should be sent.
        secret: Binance API secret.
        recv_window: Milliseconds Binance will accept the request for.
        timestamp_ms: Override for the request timestamp (tests only).

    Returns:
        Query string ending in ``&signature=<hex>``.
    """
    pairs = list(params.items()) if isinstance(params, dict) else list(params)
    pairs.append(("recvWindow", recv_window))
    pairs.append(("timestamp", timestamp_ms if timestamp_ms is not None else now_ms()))
    query = urlencode(pairs)
    return f"{query}&signature={sign(query, secret)}"
