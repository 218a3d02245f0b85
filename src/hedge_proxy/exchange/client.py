"""Abstract exchange client interface.

Endpoint logic depends only on this interface, keeping Binance-specific
URLs, headers and signing in the concrete implementation.
"""

from abc import ABC, abstractmethod

from hedge_proxy.exchange.types import Market, UpstreamResult
from hedge_proxy.timerange import DateRange


class ExchangeClient(ABC):
    """Abstract base class for exchange REST clients."""

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        ...

    @property
    @abstractmethod
    def has_credentials(self) -> bool:
        """Whether signed calls can be made."""
        ...

    @abstractmethod
    async def get_public(
        self, market: Market, path: str, params: dict | None = None
    ) -> UpstreamResult:
        """Unsigned GET against a public endpoint."""
        ...

    @abstractmethod
    async def get_signed(
        self, market: Market, path: str, params: dict | None = None
    ) -> UpstreamResult:
        """Signed GET against a private endpoint.

        Raises MissingExchangeCredentials when no key pair is configured.
        """
        ...

    @abstractmethod
    async def fetch_spot_price(self, symbol: str) -> UpstreamResult:
        """Latest spot price ticker for one symbol."""
        ...

    @abstractmethod
    async def fetch_futures_price(self, symbol: str) -> UpstreamResult:
        """Latest USD-M futures price ticker for one symbol."""
        ...

    @abstractmethod
    async def fetch_spot_account(self) -> UpstreamResult:
        """Spot account snapshot including the balances list."""
        ...

    @abstractmethod
    async def fetch_futures_balance(self) -> UpstreamResult:
        """USD-M futures wallet balances."""
        ...

    @abstractmethod
    async def fetch_spot_trades(self, day: DateRange) -> UpstreamResult:
        """Spot account trades inside the range (single page)."""
        ...

    @abstractmethod
    async def fetch_futures_trades(self, day: DateRange) -> UpstreamResult:
        """Futures account trades inside the range (single page)."""
        ...
