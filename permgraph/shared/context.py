"""Request-scoped context (contextvars): acting administrator and request id.

ActorContextMiddleware sets the actor from the actor header; the edge
repository stamps created_by from it and mutation logs name it.
RequestIDMiddleware sets the request id, which the logging filter adds to
every record emitted while the request is handled.

Usage:
    set_current_user("admin-1")
    get_current_actor_id()  # "admin-1"
    actor_label()           # "admin-1", or "system" outside a request
"""

from contextvars import ContextVar, Token

from permgraph.shared.enums import ActorType

SYSTEM_ACTOR_LABEL = "system"

_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)
_current_actor_type: ContextVar[ActorType] = ContextVar(
    "current_actor_type", default=ActorType.SYSTEM
)
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_current_user(
    user_id: str | None,
    actor_type: ActorType = ActorType.USER,
) -> None:
    """Set the acting administrator for this request.

    Raises:
        ValueError: If actor_type is USER and user_id is None or empty.
    """
    if actor_type == ActorType.USER and not user_id:
        raise ValueError("user_id is required when actor_type is USER")
    _current_user_id.set(user_id)
    _current_actor_type.set(actor_type)


def clear_current_user() -> None:
    _current_user_id.set(None)
    _current_actor_type.set(ActorType.SYSTEM)


def get_current_actor_id() -> str | None:
    """Return the acting user id, or None for system actions (seeds, migrations, scripts)."""
    return _current_user_id.get()


def get_current_actor_type() -> ActorType:
    return _current_actor_type.get()


def actor_label() -> str:
    """Actor as it appears in logs: the user id, or 'system'."""
    return _current_user_id.get() or SYSTEM_ACTOR_LABEL


def set_request_id(request_id: str) -> Token[str | None]:
    """Bind request_id to the current context; pass the token to reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()
