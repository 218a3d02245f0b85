"""Self-ping keep-alive task.

Some free hosting tiers suspend a process after a stretch without
inbound traffic. When configured, this task requests the proxy's own
public URL on a fixed interval. It runs independently of request
handling, and a failed ping is only logged.
"""

import asyncio

import httpx

from hedge_proxy.config import KeepAliveSettings
from hedge_proxy.logging import get_logger

logger = get_logger(__name__)


class SelfPinger:
    """Periodically GETs a configured URL in the background."""

    def __init__(
        self,
        settings: KeepAliveSettings,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._http = http
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def enabled(self) -> bool:
        return self._settings.enabled and bool(self._settings.url)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval_seconds(self) -> float:
        return self._settings.interval_ms / 1000

    async def start(self) -> None:
        """Begin pinging in the background, if enabled."""
        if not self.enabled:
            logger.info(
                "self_ping_disabled",
                keep_alive=self._settings.enabled,
                url_configured=bool(self._settings.url),
            )
            return
        if self._running:
            logger.warning("self_ping_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._ping_loop())
        logger.info(
            "self_ping_started",
            url=self._settings.url,
            interval_seconds=self.interval_seconds,
        )

    async def stop(self) -> None:
        """Cancel the ping task and wait for it to finish."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("self_ping_stopped")

    async def _ping_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.ping_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("self_ping_error", exc_info=True)

    async def ping_once(self) -> int | None:
        """Ping the URL once; return the status code, or None on failure."""
        try:
            if self._http is not None:
                response = await self._http.get(
                    self._settings.url, timeout=self._settings.timeout_seconds
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_seconds
                ) as http:
                    response = await http.get(self._settings.url)
        except httpx.HTTPError as e:
            logger.warning("self_ping_failed", error=repr(e))
            return None
        logger.debug("self_ping_ok", status=response.status_code)
        return response.status_code
