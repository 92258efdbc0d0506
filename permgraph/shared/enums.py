"""Shared enumerations used across layers (e.g. actor type for request context).

Graph-specific enums (e.g. TraversalDirection) live in permgraph.domain.enums.
"""

from enum import Enum


class ActorType(str, Enum):
    """Who performed an action (stamped on created edges and mutation logs)."""

    USER = "user"
    SYSTEM = "system"
