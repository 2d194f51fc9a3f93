"""
Identity header injection.

A plain ASGI middleware rather than BaseHTTPMiddleware: it rewrites the
response start message itself, so short-circuited responses (404s, chaos
500s/504s) carry the headers too.
"""

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class IdentityHeadersMiddleware:
    """Stamp X-App-Pool and X-Release-Id on every HTTP response."""

    def __init__(self, app: ASGIApp, pool: str, release_id: str) -> None:
        self.app = app
        self.pool = pool
        self.release_id = release_id

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_identity(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["X-App-Pool"] = self.pool
                headers["X-Release-Id"] = self.release_id
            await send(message)

        await self.app(scope, receive, send_with_identity)
