"""HTTP middleware (raw ASGI or BaseHTTPMiddleware wrappers)."""

from permgraph.middleware.actor_context import ActorContextMiddleware
from permgraph.middleware.request_id import RequestIDMiddleware

__all__ = ["ActorContextMiddleware", "RequestIDMiddleware"]
