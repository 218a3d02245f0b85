"""Custom exceptions for the hedge proxy.

Every error a caller can see is a ProxyError subclass. The API layer
turns them into JSON bodies with the carried status code, so nothing
below the handlers needs to know about HTTP responses.
"""

from typing import Any


class ProxyError(Exception):
    """Base exception for all proxy errors."""

    status_code: int = 500
    error: str = "proxy_exception"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.error)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        """JSON body returned to the caller."""
        body: dict[str, Any] = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class Unauthorized(ProxyError):
    """Raised when the proxy key is missing, wrong, or not configured."""

    status_code = 401
    error = "Unauthorized"


class MissingExchangeCredentials(ProxyError):
    """Raised when a signed call is needed but Binance keys are not set."""

    status_code = 400
    error = "missing_binance_keys"


class MissingDate(ProxyError):
    """Raised when hedge volume is requested without a date."""

    status_code = 400
    error = "missing_date"


class InvalidDateRange(ProxyError):
    """Raised when a date string cannot be resolved to a day range."""

    status_code = 400
    error = "invalid_date"


class UpstreamError(ProxyError):
    """Raised when Binance answers with a non-success status.

    The upstream status and decoded body are relayed to the caller unchanged.
    """

    error = "binance_error"

    def __init__(self, status_code: int, data: Any) -> None:
        super().__init__(f"upstream returned {status_code}")
        self.status_code = status_code
        self.data = data

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "data": self.data}


class UpstreamTransportError(ProxyError):
    """Raised when Binance could not be reached or returned an undecodable body."""

    status_code = 500
    error = "proxy_exception"
