"""Dependency edge repository integration tests (SQLite file database; session rolled back after each test)."""

import pytest

from permgraph.domain.exceptions import (
    DependencyEndpointMissingException,
    DuplicateDependencyException,
)
from permgraph.infrastructure.persistence.repositories import (
    PermissionDependencyRepository,
    PermissionRepository,
)
from permgraph.shared.context import clear_current_user, set_current_user


async def _create(repo: PermissionRepository, name: str, type: str = "view"):
    module = name.split(".")[0]
    return await repo.create_permission(
        name=name, display_name=name.title(), module=module, type=type
    )


@pytest.mark.requires_db
async def test_add_edge_and_list_edges(db_session) -> None:
    """add_edge stores the pair; list_edges filters by either endpoint."""
    perms = PermissionRepository(db_session)
    edges = PermissionDependencyRepository(db_session)
    view = await _create(perms, "users.view")
    edit = await _create(perms, "users.edit", "edit")
    delete = await _create(perms, "users.delete", "delete")

    await edges.add_edge(edit.id, view.id)
    await edges.add_edge(delete.id, edit.id)

    all_edges = await edges.list_edges()
    assert len(all_edges) == 2
    keys = [(e.permission_id, e.depends_on_permission_id) for e in all_edges]
    assert keys == sorted(keys)

    on_view = await edges.list_edges(depends_on_permission_id=view.id)
    assert [e.permission_id for e in on_view] == [edit.id]
    from_delete = await edges.list_edges(permission_id=delete.id)
    assert [e.depends_on_permission_id for e in from_delete] == [edit.id]


@pytest.mark.requires_db
async def test_add_edge_stamps_current_actor(db_session) -> None:
    perms = PermissionRepository(db_session)
    edges = PermissionDependencyRepository(db_session)
    view = await _create(perms, "roles.view")
    edit = await _create(perms, "roles.edit", "edit")

    set_current_user("admin-7")
    try:
        edge = await edges.add_edge(edit.id, view.id)
    finally:
        clear_current_user()

    assert edge.created_by == "admin-7"
    assert edge.created_at is not None


@pytest.mark.requires_db
async def test_add_edge_duplicate_pair_raises(db_session) -> None:
    """The unique pair constraint surfaces as DuplicateDependencyException."""
    perms = PermissionRepository(db_session)
    edges = PermissionDependencyRepository(db_session)
    view = await _create(perms, "reports.view")
    edit = await _create(perms, "reports.edit", "edit")
    await edges.add_edge(edit.id, view.id)

    with pytest.raises(DuplicateDependencyException) as exc_info:
        await edges.add_edge(edit.id, view.id)

    assert exc_info.value.details == {
        "permission_id": edit.id,
        "depends_on_permission_id": view.id,
    }


@pytest.mark.requires_db
async def test_add_edge_to_missing_permission_raises_endpoint_missing(db_session) -> None:
    """A foreign-key failure is not reported as a duplicate pair."""
    perms = PermissionRepository(db_session)
    edges = PermissionDependencyRepository(db_session)
    edit = await _create(perms, "audit.edit", "edit")

    with pytest.raises(DependencyEndpointMissingException) as exc_info:
        await edges.add_edge(edit.id, "gone-permission-id")

    assert exc_info.value.error_code == "DEPENDENCY_ENDPOINT_MISSING"
    assert exc_info.value.details["depends_on_permission_id"] == "gone-permission-id"

@pytest.mark.requires_db
async def test_remove_edge(db_session) -> None:
    perms = PermissionRepository(db_session)
    edges = PermissionDependencyRepository(db_session)
    view = await _create(perms, "audit.view")
    edit = await _create(perms, "audit.edit", "edit")
    await edges.add_edge(edit.id, view.id)

    assert await edges.remove_edge(edit.id, view.id) is True
    assert await edges.remove_edge(edit.id, view.id) is False
    assert await edges.list_edges() == []


@pytest.mark.requires_db
async def test_deleting_permission_cascades_to_edges(db_session) -> None:
    """Edges on both sides of a deleted permission are removed by the foreign keys."""
    perms = PermissionRepository(db_session)
    edges = PermissionDependencyRepository(db_session)
    view = await _create(perms, "billing.view")
    edit = await _create(perms, "billing.edit", "edit")
    delete = await _create(perms, "billing.delete", "delete")
    await edges.add_edge(edit.id, view.id)
    await edges.add_edge(delete.id, edit.id)

    assert await perms.delete_permission(edit.id) is True

    assert await edges.list_edges() == []


@pytest.mark.requires_db
async def test_lock_graph_is_noop_on_sqlite(db_session) -> None:
    await PermissionDependencyRepository(db_session).lock_graph()
