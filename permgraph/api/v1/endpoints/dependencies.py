"""Per-permission dependency API: traverse, check, add, auto-resolve, remove, and the tree/graph/paths views."""

from typing import Annotated

from fastapi import APIRouter, Depends

from permgraph.api.v1.dependencies import (
    get_dependency_service,
    get_dependency_service_for_write,
)
from permgraph.application.dtos.dependency import DependencyPlan
from permgraph.application.dtos.permission import PermissionFilter
from permgraph.application.services.dependency_service import DependencyService
from permgraph.application.services.precedence_policy import PrecedencePolicy
from permgraph.core.config import get_settings
from permgraph.domain.enums import TraversalDirection
from permgraph.schemas.dependency import (
    AutoResolveRequest,
    DependencyAddRequest,
    DependencyBatchResponse,
    DependencyCheckResponse,
    DependencyNodeResponse,
    DependencyPathsResponse,
    DependencyPlanResponse,
    DependencyTreesResponse,
    GraphViewResponse,
    PathResponse,
    PathStepResponse,
)

router = APIRouter()


def _filter(module: str | None, type: str | None) -> PermissionFilter | None:
    permission_filter = PermissionFilter(module=module, type=type)
    return None if permission_filter.is_empty else permission_filter


@router.get("/{permission_id}/dependencies", response_model=list[DependencyNodeResponse])
async def get_dependencies(
    permission_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
    max_depth: int | None = None,
    direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
    module: str | None = None,
    type: str | None = None,
):
    """Permissions reachable within max_depth hops (BFS order) with depth and relation."""
    depth = max_depth if max_depth is not None else get_settings().dependency_default_depth
    nodes = await dependency_service.get_dependencies(
        permission_id, depth, direction, _filter(module, type)
    )
    return [DependencyNodeResponse.model_validate(n) for n in nodes]


@router.get("/{permission_id}/dependencies/check", response_model=DependencyCheckResponse)
async def check_dependency(
    permission_id: str,
    dependency_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
):
    """Whether permission_id may depend on dependency_id; rejections come back as 200 with allowed=false."""
    check = await dependency_service.can_add_dependency(permission_id, dependency_id)
    return DependencyCheckResponse.model_validate(check)


@router.post(
    "/{permission_id}/dependencies",
    response_model=DependencyBatchResponse,
    status_code=201,
)
async def add_dependencies(
    permission_id: str,
    body: DependencyAddRequest,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service_for_write)],
):
    """Add dependencies; invalid items are skipped with a reason unless strict is set."""
    result = await dependency_service.add_dependencies(
        permission_id, body.dependency_ids, strict=body.strict
    )
    return DependencyBatchResponse.model_validate(result)


@router.post(
    "/{permission_id}/dependencies/auto-resolve",
    response_model=DependencyBatchResponse | DependencyPlanResponse,
)
async def auto_resolve_dependencies(
    permission_id: str,
    body: AutoResolveRequest,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service_for_write)],
):
    """Add the dependencies the precedence policy implies (e.g. edit requires view).

    With dry_run the proposals are validated and returned without writing.
    """
    policy = PrecedencePolicy.from_mapping(body.policy) if body.policy is not None else None
    result = await dependency_service.auto_resolve_dependencies(
        permission_id, module=body.module, policy=policy, dry_run=body.dry_run
    )
    if isinstance(result, DependencyPlan):
        return DependencyPlanResponse.model_validate(result)
    return DependencyBatchResponse.model_validate(result)


@router.delete("/{permission_id}/dependencies/{dependency_id}", status_code=204)
async def remove_dependency(
    permission_id: str,
    dependency_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service_for_write)],
):
    """Remove one dependency edge."""
    await dependency_service.remove_dependency(permission_id, dependency_id)


@router.get("/{permission_id}/dependency-tree", response_model=DependencyTreesResponse)
async def get_dependency_tree(
    permission_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
    direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
    max_depth: int | None = None,
    module: str | None = None,
    type: str | None = None,
):
    """Nested trees rooted at the permission: dependencies, dependents, or both."""
    depth = max_depth if max_depth is not None else get_settings().dependency_default_depth
    trees = await dependency_service.dependency_tree(
        permission_id, direction, depth, _filter(module, type)
    )
    return DependencyTreesResponse.model_validate(trees)


@router.get("/{permission_id}/dependency-graph", response_model=GraphViewResponse)
async def get_dependency_graph(
    permission_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
    direction: TraversalDirection = TraversalDirection.BOTH,
    max_depth: int | None = None,
    module: str | None = None,
    type: str | None = None,
):
    """Network view around the permission: nodes with levels plus edges."""
    depth = max_depth if max_depth is not None else get_settings().dependency_default_depth
    view = await dependency_service.graph_view(
        permission_id, direction, depth, _filter(module, type)
    )
    return GraphViewResponse.model_validate(view)


@router.get("/{permission_id}/dependency-paths", response_model=DependencyPathsResponse)
async def get_dependency_paths(
    permission_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
    direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
):
    """Every path from the permission to a leaf, per requested direction."""
    paths = await dependency_service.all_paths(permission_id, direction)
    return DependencyPathsResponse.model_validate(paths)


@router.get("/{from_id}/path/{to_id}", response_model=PathResponse)
async def explain_path(
    from_id: str,
    to_id: str,
    dependency_service: Annotated[DependencyService, Depends(get_dependency_service)],
):
    """Why from_id requires to_id: one shortest chain of dependency edges."""
    steps = await dependency_service.explain_path(from_id, to_id)
    if steps is None:
        return PathResponse(found=False)
    return PathResponse(
        found=True, steps=[PathStepResponse.model_validate(s) for s in steps]
    )
