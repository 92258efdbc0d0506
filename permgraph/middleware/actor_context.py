"""Actor context middleware.

Reads the acting administrator from the X-Actor-ID header (name from
settings.actor_header_name) into the contextvars actor context, so new
dependency edges are stamped with created_by and mutation logs name the
actor. Requests without a valid header run as the SYSTEM actor.
Authentication itself happens upstream of this service.
"""

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from permgraph.core.config import get_settings
from permgraph.middleware.request_id import sanitize_header_value
from permgraph.shared.context import clear_current_user, set_current_user
from permgraph.shared.enums import ActorType


def ActorContextMiddleware(app: Callable) -> Callable:
    """Set the actor context from the actor header before the route runs."""

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            header_name = get_settings().actor_header_name
            actor_id = sanitize_header_value(request.headers.get(header_name))
            if actor_id:
                set_current_user(actor_id, ActorType.USER)
            else:
                set_current_user(None, ActorType.SYSTEM)
            try:
                return await call_next(request)
            finally:
                clear_current_user()

    return _Middleware(app)
