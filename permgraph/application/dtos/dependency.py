"""DTOs for dependency graph use cases (no dependency on ORM).

Results of DependencyGraphEngine and DependencyService. The API layer
serializes these into response schemas; callers never see the graph's
internal index representation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from permgraph.application.dtos.permission import PermissionResult
from permgraph.domain.enums import DependencyRejection, IntegrityIssueType, NodeRelation


@dataclass(frozen=True)
class DependencyEdgeResult:
    """Stored dependency edge: permission_id requires depends_on_permission_id."""

    id: str
    permission_id: str
    depends_on_permission_id: str
    created_at: datetime | None = None
    created_by: str | None = None


@dataclass(frozen=True)
class DependencyNode:
    """A permission discovered by a bounded walk, with its hop count and relation."""

    permission: PermissionResult
    depth: int
    relation: NodeRelation


@dataclass(frozen=True)
class CycleReport:
    """Result of detect_cycle. cycle_path starts and ends with the same id."""

    has_cycle: bool
    cycle_path: tuple[str, ...] = ()
    closing_edge: tuple[str, str] | None = None


@dataclass(frozen=True)
class DependencyCheck:
    """Typed result of can_add_dependency: allowed, or the rejection reason.

    reason is None exactly when allowed is True.
    """

    allowed: bool
    reason: DependencyRejection | None = None
    cycle_path: tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> DependencyCheck:
        return cls(allowed=True)

    @classmethod
    def rejected(
        cls, reason: DependencyRejection, cycle_path: tuple[str, ...] = ()
    ) -> DependencyCheck:
        return cls(allowed=False, reason=reason, cycle_path=cycle_path)


@dataclass(frozen=True)
class ProposedDependency:
    """An edge that passed validation and may be inserted."""

    permission_id: str
    depends_on_permission_id: str


@dataclass(frozen=True)
class SkippedDependency:
    """An edge proposal that was dropped, with the reason (and cycle path, if any)."""

    permission_id: str
    depends_on_permission_id: str
    reason: DependencyRejection
    cycle_path: tuple[str, ...] = ()


@dataclass(frozen=True)
class DependencyPlan:
    """Batch validation outcome: accepted proposals and per-item skips."""

    accepted: list[ProposedDependency] = field(default_factory=list)
    skipped: list[SkippedDependency] = field(default_factory=list)


@dataclass(frozen=True)
class DependencyBatchResult:
    """Outcome of an applied batch: edges actually inserted plus skipped proposals."""

    inserted: list[DependencyEdgeResult] = field(default_factory=list)
    skipped: list[SkippedDependency] = field(default_factory=list)


@dataclass(frozen=True)
class PathStep:
    """One hop of an explained path; position 0 is the start permission."""

    position: int
    permission: PermissionResult


@dataclass(frozen=True)
class DependencyTreeNode:
    """Nested tree node for the tree view."""

    permission: PermissionResult
    depth: int
    children: list[DependencyTreeNode] = field(default_factory=list)


@dataclass(frozen=True)
class DependencyTrees:
    """Tree view: one tree per requested direction; None for a direction not requested."""

    dependencies: DependencyTreeNode | None = None
    dependents: DependencyTreeNode | None = None


@dataclass(frozen=True)
class DependencyPaths:
    """Paths view: root-to-leaf paths per requested direction; None when not requested."""

    dependencies: list[list[PermissionResult]] | None = None
    dependents: list[list[PermissionResult]] | None = None

    @property
    def total(self) -> int:
        return len(self.dependencies or ()) + len(self.dependents or ())


@dataclass(frozen=True)
class GraphViewNode:
    """Network view node. The selected permission is the center at level 0."""

    permission: PermissionResult
    level: int
    is_center: bool = False
    relation: NodeRelation | None = None


@dataclass(frozen=True)
class GraphViewEdge:
    """Network view edge, always pointing from dependent to dependency."""

    from_id: str
    to_id: str
    relation: NodeRelation


@dataclass(frozen=True)
class GraphView:
    nodes: list[GraphViewNode] = field(default_factory=list)
    edges: list[GraphViewEdge] = field(default_factory=list)


@dataclass(frozen=True)
class DependencyCount:
    """Per-permission edge counts (used for the 'complex permissions' list)."""

    permission: PermissionResult
    dependencies_count: int
    dependents_count: int


@dataclass(frozen=True)
class GraphStatistics:
    """Whole-graph statistics for the dependency overview."""

    total_permissions: int
    total_dependencies: int
    permissions_with_dependencies: int
    permissions_being_depended: int
    isolated_permissions: int
    complex_permissions: list[DependencyCount]
    depth_distribution: dict[str, int]
    has_cycle: bool


@dataclass(frozen=True)
class IntegrityIssue:
    """One problem found in the stored edge set."""

    type: IntegrityIssueType
    permission_id: str | None = None
    depends_on_permission_id: str | None = None
    path: tuple[str, ...] = ()


@dataclass(frozen=True)
class IntegrityReport:
    issues: list[IntegrityIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def total_issues(self) -> int:
        return len(self.issues)
