"""Application DTOs (read-models and command results; no ORM imports)."""

from permgraph.application.dtos.dependency import (
    CycleReport,
    DependencyBatchResult,
    DependencyCheck,
    DependencyCount,
    DependencyEdgeResult,
    DependencyNode,
    DependencyPaths,
    DependencyPlan,
    DependencyTreeNode,
    DependencyTrees,
    GraphStatistics,
    GraphView,
    GraphViewEdge,
    GraphViewNode,
    IntegrityIssue,
    IntegrityReport,
    PathStep,
    ProposedDependency,
    SkippedDependency,
)
from permgraph.application.dtos.permission import PermissionFilter, PermissionResult

__all__ = [
    "CycleReport",
    "DependencyBatchResult",
    "DependencyCheck",
    "DependencyCount",
    "DependencyEdgeResult",
    "DependencyNode",
    "DependencyPaths",
    "DependencyPlan",
    "DependencyTreeNode",
    "DependencyTrees",
    "GraphStatistics",
    "GraphView",
    "GraphViewEdge",
    "GraphViewNode",
    "IntegrityIssue",
    "IntegrityReport",
    "PathStep",
    "PermissionFilter",
    "PermissionResult",
    "ProposedDependency",
    "SkippedDependency",
]
