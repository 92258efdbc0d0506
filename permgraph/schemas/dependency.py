"""Dependency graph API schemas.

Built from application DTOs with model_validate (from_attributes); the
internal index representation of the graph never reaches a response.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from permgraph.domain.enums import DependencyRejection, IntegrityIssueType, NodeRelation
from permgraph.schemas.permission import PermissionResponse


class DependencyAddRequest(BaseModel):
    """Request body for POST /permissions/{id}/dependencies."""

    dependency_ids: list[str] = Field(..., min_length=1, max_length=500)
    strict: bool = Field(
        default=False,
        description="Reject the whole request (409) instead of skipping invalid items",
    )


class AutoResolveRequest(BaseModel):
    """Request body for POST /permissions/{id}/dependencies/auto-resolve."""

    module: str | None = Field(default=None, description="Module hint; defaults to the permission's module")
    policy: dict[str, list[str]] | None = Field(
        default=None,
        description="Precedence override: type -> required types",
        examples=[{"edit": ["view"], "delete": ["edit"]}],
    )
    dry_run: bool = False


class ModuleAutoResolveRequest(BaseModel):
    """Request body for POST /dependency-graph/auto-resolve."""

    module: str = Field(..., min_length=1, max_length=50, examples=["users"])
    policy: dict[str, list[str]] | None = None
    dry_run: bool = False


class DependencyEdgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    permission_id: str
    depends_on_permission_id: str
    created_at: datetime | None = None
    created_by: str | None = None


class SkippedDependencyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    permission_id: str
    depends_on_permission_id: str
    reason: DependencyRejection
    cycle_path: list[str] = Field(default_factory=list)


class ProposedDependencyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    permission_id: str
    depends_on_permission_id: str


class DependencyBatchResponse(BaseModel):
    """Outcome of an add or auto-resolve: inserted edges and skipped proposals."""

    model_config = ConfigDict(from_attributes=True)

    inserted: list[DependencyEdgeResponse]
    skipped: list[SkippedDependencyResponse]


class DependencyPlanResponse(BaseModel):
    """Auto-resolve dry run: what would be inserted and what would be skipped."""

    model_config = ConfigDict(from_attributes=True)

    accepted: list[ProposedDependencyResponse]
    skipped: list[SkippedDependencyResponse]


class DependencyCheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    allowed: bool
    reason: DependencyRejection | None = None
    cycle_path: list[str] = Field(default_factory=list)


class DependencyNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    permission: PermissionResponse
    depth: int
    relation: NodeRelation


class PathStepResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: int
    permission: PermissionResponse


class PathResponse(BaseModel):
    """explain_path result; found is False (and steps empty) when no path exists."""

    found: bool
    steps: list[PathStepResponse] = Field(default_factory=list)


class DependencyTreeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    permission: PermissionResponse
    depth: int
    children: list["DependencyTreeResponse"] = Field(default_factory=list)


class DependencyTreesResponse(BaseModel):
    """Tree view; a direction that was not requested is null."""

    model_config = ConfigDict(from_attributes=True)

    dependencies: DependencyTreeResponse | None = None
    dependents: DependencyTreeResponse | None = None


class GraphViewNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    permission: PermissionResponse
    level: int
    is_center: bool = False
    relation: NodeRelation | None = None


class GraphViewEdgeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    from_id: str
    to_id: str
    relation: NodeRelation


class GraphViewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    nodes: list[GraphViewNodeResponse]
    edges: list[GraphViewEdgeResponse]


class DependencyPathsResponse(BaseModel):
    """Every root-to-leaf path per requested direction; null for a direction not requested."""

    model_config = ConfigDict(from_attributes=True)

    dependencies: list[list[PermissionResponse]] | None = None
    dependents: list[list[PermissionResponse]] | None = None
    total: int


class CycleReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    has_cycle: bool
    cycle_path: list[str] = Field(default_factory=list)
    closing_edge: tuple[str, str] | None = None


class DependencyCountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    permission: PermissionResponse
    dependencies_count: int
    dependents_count: int


class GraphStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_permissions: int
    total_dependencies: int
    permissions_with_dependencies: int
    permissions_being_depended: int
    isolated_permissions: int
    complex_permissions: list[DependencyCountResponse]
    depth_distribution: dict[str, int]
    has_cycle: bool


class IntegrityIssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: IntegrityIssueType
    permission_id: str | None = None
    depends_on_permission_id: str | None = None
    path: list[str] = Field(default_factory=list)


class IntegrityReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    is_valid: bool
    total_issues: int
    issues: list[IntegrityIssueResponse]
