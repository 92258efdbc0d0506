"""Domain layer: enums, value objects, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from permgraph.domain.enums import (
    DependencyRejection,
    IntegrityIssueType,
    NodeRelation,
    TraversalDirection,
)
from permgraph.domain.exceptions import (
    ConcurrencyConflictException,
    DependencyRejectedException,
    DependencyEndpointMissingException,
    DuplicateDependencyException,
    GraphInvariantError,
    PermGraphException,
    PermissionAlreadyExistsException,
    PermissionInUseException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    SystemPermissionException,
    TraversalLimitExceededException,
    ValidationException,
)
from permgraph.domain.value_objects import PermissionName, PermissionTag

__all__ = [
    # Enums
    "DependencyRejection",
    "IntegrityIssueType",
    "NodeRelation",
    "TraversalDirection",
    # Exceptions
    "ConcurrencyConflictException",
    "DependencyRejectedException",
    "DependencyEndpointMissingException",
    "DuplicateDependencyException",
    "GraphInvariantError",
    "PermGraphException",
    "PermissionAlreadyExistsException",
    "PermissionInUseException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "SystemPermissionException",
    "TraversalLimitExceededException",
    "ValidationException",
    # Value objects
    "PermissionName",
    "PermissionTag",
]
