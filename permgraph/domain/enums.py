"""Domain enumerations for the permission dependency graph."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TraversalDirection(_ValuesMixin, str, Enum):
    """Which edges a walk follows from the starting permission."""

    DEPENDENCIES = "dependencies"
    DEPENDENTS = "dependents"
    BOTH = "both"


class NodeRelation(_ValuesMixin, str, Enum):
    """How a discovered node relates to the starting permission."""

    DEPENDENCY = "dependency"
    DEPENDENT = "dependent"


class DependencyRejection(_ValuesMixin, str, Enum):
    """Why a proposed dependency edge is not allowed."""

    PERMISSION_NOT_FOUND = "permission_not_found"
    SELF_DEPENDENCY = "self_dependency"
    DUPLICATE_EDGE = "duplicate_edge"
    CYCLE_WOULD_BE_INTRODUCED = "cycle_would_be_introduced"


class IntegrityIssueType(_ValuesMixin, str, Enum):
    """Kinds of corruption the integrity report can find in stored edges."""

    SELF_DEPENDENCY = "self_dependency"
    DUPLICATE_EDGE = "duplicate_edge"
    ORPHAN_EDGE = "orphan_edge"
    CIRCULAR_DEPENDENCY = "circular_dependency"
