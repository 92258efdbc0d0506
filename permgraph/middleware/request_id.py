"""Request ID middleware (raw ASGI).

Forwards a client X-Request-ID or generates one. The id is stored in
scope["state"]["request_id"], bound to the request-id contextvar for the
logging filter and error bodies, and echoed on the response. Header
values must pass sanitize_header_value, which also guards actor ids.
"""

import re
from typing import Callable

from permgraph.shared.context import reset_request_id, set_request_id
from permgraph.shared.utils.generators import generate_cuid

HEADER_VALUE_MAX_LENGTH = 64
HEADER_VALUE_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_.:-]{1," + str(HEADER_VALUE_MAX_LENGTH) + r"}$"
)


def read_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_header_value(raw: str | None) -> str | None:
    """Return the stripped value if it is short and log-safe, else None."""
    if raw is None:
        return None
    value = raw.strip()
    if not HEADER_VALUE_ALLOWED_PATTERN.match(value):
        return None
    return value


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id on each request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_header_value(read_header(scope, header_name)) or generate_cuid()
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_wrapper)
        finally:
            reset_request_id(token)

    return asgi_app
