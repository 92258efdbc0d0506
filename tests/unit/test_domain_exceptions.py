"""Tests for domain exceptions (error_code, message, details)."""

from permgraph.domain.exceptions import (
    ConcurrencyConflictException,
    DependencyEndpointMissingException,
    DependencyRejectedException,
    DuplicateDependencyException,
    PermGraphException,
    PermissionAlreadyExistsException,
    PermissionInUseException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    SystemPermissionException,
    TraversalLimitExceededException,
    ValidationException,
)


def test_permgraph_exception_default_error_code() -> None:
    """Base PermGraphException uses class name as error_code when not provided."""
    exc = PermGraphException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "PermGraphException"
    assert exc.details == {}


def test_permgraph_exception_to_dict() -> None:
    exc = PermGraphException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {"error": "CUSTOM", "message": "Oops", "details": {"key": "value"}}


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="max_depth")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "max_depth"}
    assert ValidationException("Invalid").details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("permission", "p1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "p1" in exc.message
    assert exc.details == {"resource_type": "permission", "resource_id": "p1"}


def test_permission_exceptions() -> None:
    assert PermissionAlreadyExistsException("users.view").error_code == "PERMISSION_ALREADY_EXISTS"
    in_use = PermissionInUseException("p1", ["p2", "p3"])
    assert in_use.error_code == "PERMISSION_IN_USE"
    assert in_use.details["dependent_ids"] == ["p2", "p3"]
    assert SystemPermissionException("p1").error_code == "SYSTEM_PERMISSION"


def test_dependency_rejected_exception_includes_cycle_path_only_when_given() -> None:
    exc = DependencyRejectedException("a", "b", "cycle_would_be_introduced", cycle_path=["a", "b", "a"])
    assert exc.error_code == "DEPENDENCY_REJECTED"
    assert exc.details["cycle_path"] == ["a", "b", "a"]
    plain = DependencyRejectedException("a", "a", "self_dependency")
    assert "cycle_path" not in plain.details


def test_graph_operation_exceptions() -> None:
    assert DuplicateDependencyException("a", "b").error_code == "DUPLICATE_EDGE"
    missing = DependencyEndpointMissingException("a", "b")
    assert missing.error_code == "DEPENDENCY_ENDPOINT_MISSING"
    assert missing.details == {"permission_id": "a", "depends_on_permission_id": "b"}
    limit = TraversalLimitExceededException("get_dependencies", 100)
    assert limit.error_code == "TRAVERSAL_LIMIT_EXCEEDED"
    assert limit.details == {"operation": "get_dependencies", "limit": 100}
    conflict = ConcurrencyConflictException("a", "duplicate_edge")
    assert conflict.error_code == "CONCURRENCY_CONFLICT"
    assert conflict.details["reason"] == "duplicate_edge"


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
