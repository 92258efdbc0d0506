"""Cross-cutting helpers used by every layer: request context, enums, logging. No business logic."""

from permgraph.shared.context import (
    actor_label,
    clear_current_user,
    get_current_actor_id,
    get_current_actor_type,
    get_request_id,
    set_current_user,
)
from permgraph.shared.enums import ActorType

__all__ = [
    "ActorType",
    "actor_label",
    "clear_current_user",
    "get_current_actor_id",
    "get_current_actor_type",
    "get_request_id",
    "set_current_user",
]
