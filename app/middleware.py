"""Pure ASGI middlewares: request correlation and response hardening."""

import re
import uuid

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from structlog.contextvars import bound_contextvars

from app.config import get_settings

REQUEST_ID_HEADER = "x-request-id"

# Client-supplied ids are echoed into logs and headers, so keep them tame
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

SECURITY_HEADERS = {
    "x-content-type-options": "nosniff",
    "x-frame-options": "DENY",
    "referrer-policy": "strict-origin-when-cross-origin",
    "permissions-policy": "geolocation=(), camera=(), microphone=()",
}
HSTS_VALUE = "max-age=63072000; includeSubDomains"


def resolve_request_id(raw: bytes | None) -> str:
    """Reuse the caller's request id when it is well-formed, else mint one."""
    if raw:
        candidate = raw.decode("latin-1").strip()
        if _REQUEST_ID_PATTERN.match(candidate):
            return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Tag each HTTP exchange with an id, bound into structlog's context."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = next(
            (value for name, value in scope["headers"] if name == REQUEST_ID_HEADER.encode()),
            None,
        )
        request_id = resolve_request_id(incoming)
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        with bound_contextvars(request_id=request_id):
            await self.app(scope, receive, send_wrapper)


class SecurityHeadersMiddleware:
    """Stamp hardening headers on every response; HSTS only in production."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app
        self.headers = dict(SECURITY_HEADERS)
        if get_settings().is_production:
            self.headers["strict-transport-security"] = HSTS_VALUE

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    headers.setdefault(name, value)
            await send(message)

        await self.app(scope, receive, send_wrapper)
