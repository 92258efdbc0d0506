"""PermissionService unit tests with mocked repos."""

from unittest.mock import AsyncMock

import pytest

from permgraph.application.dtos.dependency import DependencyEdgeResult
from permgraph.application.dtos.permission import PermissionResult
from permgraph.application.services.permission_service import PermissionService
from permgraph.domain.exceptions import (
    PermissionAlreadyExistsException,
    PermissionInUseException,
    ResourceNotFoundException,
    SystemPermissionException,
    ValidationException,
)


def _permission_result(
    pid: str = "perm1",
    name: str = "users.view",
    is_system_permission: bool = False,
) -> PermissionResult:
    return PermissionResult(
        id=pid,
        name=name,
        display_name="View users",
        description=None,
        module="users",
        type="view",
        is_system_permission=is_system_permission,
    )


@pytest.fixture
def permission_service_mocks():
    """PermissionService with mocked permission and dependency repos."""
    permission_repo = AsyncMock()
    permission_repo.get_by_name = AsyncMock(return_value=None)
    permission_repo.get_by_id = AsyncMock(return_value=_permission_result())
    permission_repo.create_permission = AsyncMock(return_value=_permission_result())
    permission_repo.delete_permission = AsyncMock(return_value=True)
    dependency_repo = AsyncMock()
    dependency_repo.list_edges = AsyncMock(return_value=[])
    svc = PermissionService(permission_repo, dependency_repo)
    return svc, permission_repo, dependency_repo


async def test_create_permission_calls_repo(permission_service_mocks) -> None:
    """create_permission validates the name and tags, then inserts."""
    svc, permission_repo, _ = permission_service_mocks

    created = await svc.create_permission(
        name="users.view", display_name="View users", module="users", type="view"
    )

    assert created.id == "perm1"
    permission_repo.get_by_name.assert_awaited_once_with("users.view")
    permission_repo.create_permission.assert_awaited_once()
    assert permission_repo.create_permission.call_args.kwargs["module"] == "users"


@pytest.mark.parametrize(
    ("name", "module", "type"),
    [
        ("Users.View", "users", "view"),
        ("users", "users", "view"),
        ("users.view", "Users", "view"),
        ("users.view", "users", "view-all"),
    ],
)
async def test_create_permission_rejects_invalid_format(
    permission_service_mocks, name: str, module: str, type: str
) -> None:
    """Malformed names or tags raise ValidationException before touching the repo."""
    svc, permission_repo, _ = permission_service_mocks

    with pytest.raises(ValidationException):
        await svc.create_permission(name=name, display_name="X", module=module, type=type)

    permission_repo.create_permission.assert_not_awaited()


async def test_create_permission_duplicate_name_raises(permission_service_mocks) -> None:
    svc, permission_repo, _ = permission_service_mocks
    permission_repo.get_by_name = AsyncMock(return_value=_permission_result())

    with pytest.raises(PermissionAlreadyExistsException) as exc_info:
        await svc.create_permission(
            name="users.view", display_name="View users", module="users", type="view"
        )

    assert exc_info.value.details == {"name": "users.view"}
    permission_repo.create_permission.assert_not_awaited()


async def test_get_permission_not_found_raises(permission_service_mocks) -> None:
    svc, permission_repo, _ = permission_service_mocks
    permission_repo.get_by_id = AsyncMock(return_value=None)

    with pytest.raises(ResourceNotFoundException) as exc_info:
        await svc.get_permission("nope")

    assert exc_info.value.details["resource_type"] == "permission"


async def test_delete_permission_without_dependents(permission_service_mocks) -> None:
    """Delete takes the graph lock, checks dependents, then deletes."""
    svc, permission_repo, dependency_repo = permission_service_mocks

    await svc.delete_permission("perm1")

    dependency_repo.lock_graph.assert_awaited_once()
    dependency_repo.list_edges.assert_awaited_once_with(depends_on_permission_id="perm1")
    permission_repo.delete_permission.assert_awaited_once_with("perm1")


async def test_delete_permission_in_use_raises(permission_service_mocks) -> None:
    """A permission other permissions depend on cannot be deleted."""
    svc, permission_repo, dependency_repo = permission_service_mocks
    dependency_repo.list_edges = AsyncMock(
        return_value=[
            DependencyEdgeResult(id="e2", permission_id="perm3", depends_on_permission_id="perm1"),
            DependencyEdgeResult(id="e1", permission_id="perm2", depends_on_permission_id="perm1"),
        ]
    )

    with pytest.raises(PermissionInUseException) as exc_info:
        await svc.delete_permission("perm1")

    assert exc_info.value.details["dependent_ids"] == ["perm2", "perm3"]
    permission_repo.delete_permission.assert_not_awaited()


async def test_delete_system_permission_raises(permission_service_mocks) -> None:
    svc, permission_repo, dependency_repo = permission_service_mocks
    permission_repo.get_by_id = AsyncMock(
        return_value=_permission_result(is_system_permission=True)
    )

    with pytest.raises(SystemPermissionException):
        await svc.delete_permission("perm1")

    dependency_repo.lock_graph.assert_not_awaited()
    permission_repo.delete_permission.assert_not_awaited()
