# vidtube/middleware/request_id.py
from __future__ import annotations

"""
# VidTube — Request ID Middleware (pure ASGI)

- Reuses a client-supplied `X-Request-ID` when it is a valid UUIDv4.
- Generates a UUIDv4 otherwise.
- Stores it on `request.state.request_id` and echoes it in the response header.
- Binds `request_id` into the **loguru** context for the whole request.

## Usage
    from vidtube.middleware.request_id import RequestIDMiddleware, get_request_id
    app.add_middleware(RequestIDMiddleware)
"""

import os
import uuid

from loguru import logger
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

HEADER_NAME = os.getenv("REQUEST_ID_HEADER_NAME", "X-Request-ID")
TRUST_CLIENT_IDS = os.getenv("REQUEST_ID_TRUST_CLIENT_IDS", "true").lower() == "true"


class RequestIDMiddleware:
    """Per-request correlation id for logs and responses."""

    def __init__(self, app: ASGIApp, header_name: str = HEADER_NAME) -> None:
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        req_id = self._choose_request_id(Headers(scope=scope))
        scope.setdefault("state", {})["request_id"] = req_id
        name_bytes = self.header_name.encode("latin-1")

        async def _send_wrapper(message: Message) -> None:
            if message.get("type") == "http.response.start":
                raw = message.get("headers") or []
                headers = [(k, v) for (k, v) in raw if k.lower() != name_bytes.lower()]
                headers.append((name_bytes, req_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        with logger.contextualize(request_id=req_id):
            await self.app(scope, receive, _send_wrapper)

    def _choose_request_id(self, headers: Headers) -> str:
        if TRUST_CLIENT_IDS:
            incoming = (headers.get(self.header_name) or "").strip()
            if incoming and len(incoming) <= 64:
                try:
                    val = uuid.UUID(incoming)
                except ValueError:
                    val = None
                if val is not None and val.version == 4:
                    return str(val)
        return str(uuid.uuid4())


def get_request_id(request) -> str:
    """Current request id from `request.state`, or "" if absent."""
    return getattr(getattr(request, "state", object()), "request_id", "") or ""


__all__ = ["RequestIDMiddleware", "get_request_id"]
