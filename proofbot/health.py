"""
HTTP health-check server.

Serves GET / on an aiohttp site that runs inside the bot's event loop, so
hosting platforms can check liveness without a Discord round-trip.
"""

from __future__ import annotations

from datetime import UTC, datetime

from aiohttp import web

from proofbot.config.logging import get_logger

logger = get_logger(__name__)

STATUS_TEXT = "Bot is running!"


async def health_check(request: web.Request) -> web.Response:
    """GET / — liveness check."""
    return web.json_response(
        {
            "status": STATUS_TEXT,
            "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        }
    )


def create_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/", health_check)
    return app


class HealthServer:
    """
    Owns the aiohttp runner and TCP site for the health endpoint.

    Use as an async context manager, or call start()/stop() directly.
    stop() is safe to call more than once.
    """

    def __init__(self, host: str = "0.0.0.0", port: int = 3000) -> None:
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None

    @property
    def running(self) -> bool:
        return self._site is not None

    async def start(self) -> None:
        if self._runner is not None:
            return
        self._runner = web.AppRunner(create_app())
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()
        logger.info(f"Health check server running on port {self.port}")

    async def stop(self) -> None:
        if self._runner is None:
            return
        await self._runner.cleanup()
        self._runner = None
        self._site = None
        logger.info("Health check server stopped")

    async def __aenter__(self) -> HealthServer:
        await self.start()
        return self

    async def __aexit__(self, *_args) -> None:
        await self.stop()
