"""DependencyService against the real repositories, one committed transaction per call."""

import pytest

from permgraph.application.services.dependency_service import DependencyService
from permgraph.domain.enums import DependencyRejection
from permgraph.domain.exceptions import ConcurrencyConflictException
from permgraph.infrastructure.persistence.repositories import (
    PermissionDependencyRepository,
    PermissionRepository,
)


def _service(session) -> DependencyService:
    return DependencyService(PermissionRepository(session), PermissionDependencyRepository(session))


async def _seed(session_factory) -> dict[str, str]:
    async with session_factory() as session:
        async with session.begin():
            repo = PermissionRepository(session)
            ids = {}
            for type in ("view", "edit", "delete"):
                created = await repo.create_permission(
                    name=f"users.{type}", display_name=type.title(), module="users", type=type
                )
                ids[type] = created.id
    return ids


@pytest.mark.requires_db
async def test_second_transaction_sees_committed_edge_as_duplicate(session_factory) -> None:
    """After the first add commits, the same add reports a DUPLICATE_EDGE skip."""
    ids = await _seed(session_factory)

    async with session_factory() as session:
        async with session.begin():
            first = await _service(session).add_dependencies(ids["edit"], [ids["view"]])
    async with session_factory() as session:
        async with session.begin():
            second = await _service(session).add_dependencies(ids["edit"], [ids["view"]])

    assert len(first.inserted) == 1
    assert second.inserted == []
    assert [s.reason for s in second.skipped] == [DependencyRejection.DUPLICATE_EDGE]


@pytest.mark.requires_db
async def test_second_transaction_rejects_reverse_edge(session_factory) -> None:
    ids = await _seed(session_factory)

    async with session_factory() as session:
        async with session.begin():
            await _service(session).add_dependencies(ids["delete"], [ids["edit"]])
            await _service(session).add_dependencies(ids["edit"], [ids["view"]])
    async with session_factory() as session:
        async with session.begin():
            result = await _service(session).add_dependencies(ids["view"], [ids["delete"]])

    assert result.inserted == []
    skipped = result.skipped[0]
    assert skipped.reason == DependencyRejection.CYCLE_WOULD_BE_INTRODUCED
    assert skipped.cycle_path == (ids["view"], ids["delete"], ids["edit"], ids["view"])


@pytest.mark.requires_db
async def test_module_auto_resolve_then_rerun(session_factory) -> None:
    """Auto-resolving a fresh module inserts edit -> view and delete -> edit; a rerun inserts nothing."""
    ids = await _seed(session_factory)

    async with session_factory() as session:
        async with session.begin():
            first = await _service(session).auto_resolve_module("users")
    async with session_factory() as session:
        async with session.begin():
            second = await _service(session).auto_resolve_module("users")

    inserted = {(e.permission_id, e.depends_on_permission_id) for e in first.inserted}
    assert inserted == {(ids["edit"], ids["view"]), (ids["delete"], ids["edit"])}
    assert first.skipped == []
    assert second.inserted == []
    assert len(second.skipped) == 2


@pytest.mark.requires_db
async def test_conflict_rolls_back_the_transaction(session_factory) -> None:
    """A unique violation mid-batch becomes ConcurrencyConflictException and nothing is committed."""
    ids = await _seed(session_factory)

    async with session_factory() as session:
        async with session.begin():
            service = _service(session)
            engine = await service.load_engine()
            plan = engine.plan_dependencies(ids["edit"], [ids["view"]])
    # Another writer commits the same edge after the plan was made.
    async with session_factory() as session:
        async with session.begin():
            await _service(session).add_dependencies(ids["edit"], [ids["view"]])

    with pytest.raises(ConcurrencyConflictException):
        async with session_factory() as session:
            async with session.begin():
                await _service(session)._apply(ids["edit"], plan)

    async with session_factory() as session:
        edges = await PermissionDependencyRepository(session).list_edges()
    assert len(edges) == 1
