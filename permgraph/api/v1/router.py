"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from permgraph.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from permgraph.api.v1.endpoints import (
    dependencies,
    dependency_graph,
    health,
    permissions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(
    dependencies.router, prefix="/permissions", tags=["permission-dependencies"]
)
api_router.include_router(
    dependency_graph.router, prefix="/dependency-graph", tags=["dependency-graph"]
)
