"""Domain exceptions for the permission dependency graph.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.

Expected validation outcomes of dependency checks (self dependency,
duplicate edge, would-be cycle) are returned as typed results
(DependencyCheck) instead; see DependencyRejectedException for the
strict single-add path.
"""

from typing import Any


class PermGraphException(Exception):
    """Base exception for all permgraph application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PermGraphException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(PermGraphException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'permission').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class PermissionAlreadyExistsException(PermGraphException):
    """Raised when creating a permission whose name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Permission with name '{name}' already exists",
            "PERMISSION_ALREADY_EXISTS",
            {"name": name},
        )


class PermissionInUseException(PermGraphException):
    """Raised when deleting a permission that other permissions still depend on."""

    def __init__(self, permission_id: str, dependent_ids: list[str]) -> None:
        super().__init__(
            f"Permission {permission_id} is required by {len(dependent_ids)} other permission(s)",
            "PERMISSION_IN_USE",
            {"permission_id": permission_id, "dependent_ids": dependent_ids},
        )


class SystemPermissionException(PermGraphException):
    """Raised when attempting to delete a seed-defined system permission."""

    def __init__(self, permission_id: str) -> None:
        super().__init__(
            f"System permission cannot be deleted: {permission_id}",
            "SYSTEM_PERMISSION",
            {"permission_id": permission_id},
        )


class DependencyRejectedException(PermGraphException):
    """Raised when a strict single dependency add fails validation.

    Carries the rejection reason and, for cycles, the path that would close.
    """

    def __init__(
        self,
        dependent_id: str,
        dependency_id: str,
        reason: str,
        cycle_path: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {
            "dependent_id": dependent_id,
            "dependency_id": dependency_id,
            "reason": reason,
        }
        if cycle_path:
            details["cycle_path"] = cycle_path
        super().__init__(
            f"Dependency {dependent_id} -> {dependency_id} rejected: {reason}",
            "DEPENDENCY_REJECTED",
            details,
        )


class DuplicateDependencyException(PermGraphException):
    """Raised by the edge store when the (permission, depends_on) pair already exists (unique constraint)."""

    def __init__(self, permission_id: str, depends_on_permission_id: str) -> None:
        super().__init__(
            "Dependency already exists",
            "DUPLICATE_EDGE",
            {
                "permission_id": permission_id,
                "depends_on_permission_id": depends_on_permission_id,
            },
        )


class DependencyEndpointMissingException(PermGraphException):
    """Raised by the edge store when an endpoint permission no longer exists (foreign key)."""

    def __init__(self, permission_id: str, depends_on_permission_id: str) -> None:
        super().__init__(
            "Dependency endpoint permission no longer exists",
            "DEPENDENCY_ENDPOINT_MISSING",
            {
                "permission_id": permission_id,
                "depends_on_permission_id": depends_on_permission_id,
            },
        )


class TraversalLimitExceededException(PermGraphException):
    """Raised when a graph walk visits more nodes than dependency_visit_limit.

    Signals a pathological query or a corrupted graph; the caller can
    narrow the scope (smaller max_depth, module filter) and retry.
    """

    def __init__(self, operation: str, limit: int) -> None:
        super().__init__(
            f"Traversal limit of {limit} nodes exceeded during {operation}",
            "TRAVERSAL_LIMIT_EXCEEDED",
            {"operation": operation, "limit": limit},
        )


class ConcurrencyConflictException(PermGraphException):
    """Raised when transactional re-validation fails because of a concurrent mutation; retry once."""

    def __init__(self, permission_id: str, reason: str) -> None:
        super().__init__(
            "Dependency graph was modified by another request; retry.",
            "CONCURRENCY_CONFLICT",
            {"permission_id": permission_id, "reason": reason},
        )


class SqlNotConfiguredException(PermGraphException):
    """Raised when an operation requires the database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )


class GraphInvariantError(RuntimeError):
    """Programming error: the engine reached a state its own invariants forbid."""
