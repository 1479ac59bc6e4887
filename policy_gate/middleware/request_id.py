"""Request ID middleware.

Forwards a client-supplied request id (or generates one), stores it in
scope["state"] so dependencies can hand it to the pipeline, echoes it on
the response, and logs one access line per HTTP request. Client values are
sanitized (length + character set) to prevent log injection. Raw ASGI, no
BaseHTTPMiddleware.
"""

import logging
import re
import time
import uuid
from typing import Any, Callable

logger = logging.getLogger(__name__)

REQUEST_ID_MAX_LENGTH = 64
REQUEST_ID_ALLOWED_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1," + str(REQUEST_ID_MAX_LENGTH) + r"}$")


def sanitize_request_id(raw: str | None) -> str:
    """Return raw (stripped) if it is a safe id, otherwise a new UUID4 string."""
    candidate = (raw or "").strip()
    if REQUEST_ID_ALLOWED_PATTERN.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware:
    """Attach a request id to every HTTP request and response."""

    def __init__(self, app: Callable, header_name: str = "X-Request-ID") -> None:
        self.app = app
        self.header_name = header_name
        self._header_key = header_name.lower().encode()

    def _incoming(self, scope: dict[str, Any]) -> str | None:
        for key, value in scope.get("headers", []):
            if key.lower() == self._header_key:
                return value.decode("latin-1")
        return None

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = sanitize_request_id(self._incoming(scope))
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status_holder: dict[str, int] = {}

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
                headers = [
                    (k, v) for k, v in message.get("headers", []) if k.lower() != self._header_key
                ]
                headers.append((self.header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            logger.debug(
                "%s %s -> %s in %.1fms [%s]",
                scope.get("method"),
                scope.get("path"),
                status_holder.get("status", "-"),
                (time.perf_counter() - started) * 1000,
                request_id,
            )
