"""Health check endpoints."""

from collections.abc import Awaitable, Callable

import falcon.asgi


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, readiness_check: Callable[[], Awaitable[bool]] | None = None) -> None:
        self._readiness_check = readiness_check

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database)."""
        ready = True
        if self._readiness_check is not None:
            try:
                ready = await self._readiness_check()
            except Exception:
                ready = False
        if ready:
            resp.media = {"status": "ready"}
            resp.status = falcon.HTTP_200
        else:
            resp.media = {"status": "unavailable"}
            resp.status = falcon.HTTP_503
