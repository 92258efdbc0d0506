"""Permissions API: create, list, get, delete (the nodes of the dependency graph)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from permgraph.api.v1.dependencies import (
    get_permission_service,
    get_permission_service_for_write,
)
from permgraph.application.dtos.permission import PermissionFilter
from permgraph.application.services.permission_service import PermissionService
from permgraph.schemas.permission import PermissionCreate, PermissionResponse

router = APIRouter()


@router.post("", response_model=PermissionResponse, status_code=201)
async def create_permission(
    body: PermissionCreate,
    permission_service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
):
    """Create a permission. 409 if the name is taken, 400 if name/module/type are malformed."""
    created = await permission_service.create_permission(
        name=body.name,
        display_name=body.display_name,
        module=body.module,
        type=body.type,
        description=body.description,
        is_system_permission=body.is_system_permission,
    )
    return PermissionResponse.model_validate(created)


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    permission_service: Annotated[PermissionService, Depends(get_permission_service)],
    module: str | None = None,
    type: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=1000)] = 200,
):
    """List permissions ordered by id, optionally filtered by module and type."""
    perms = await permission_service.list_permissions(
        PermissionFilter(module=module, type=type), skip=skip, limit=limit
    )
    return [PermissionResponse.model_validate(p) for p in perms]


@router.get("/{permission_id}", response_model=PermissionResponse)
async def get_permission(
    permission_id: str,
    permission_service: Annotated[PermissionService, Depends(get_permission_service)],
):
    """Get permission by id."""
    perm = await permission_service.get_permission(permission_id)
    return PermissionResponse.model_validate(perm)


@router.delete("/{permission_id}", status_code=204)
async def delete_permission(
    permission_id: str,
    permission_service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
):
    """Delete permission. 409 while other permissions depend on it; 403 for system permissions."""
    await permission_service.delete_permission(permission_id)
