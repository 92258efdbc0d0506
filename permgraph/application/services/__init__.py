"""Application services: dependency graph engine, precedence policy, permission and dependency services."""

from permgraph.application.services.dependency_graph_engine import (
    DependencyGraph,
    DependencyGraphEngine,
)
from permgraph.application.services.dependency_service import DependencyService
from permgraph.application.services.permission_service import PermissionService
from permgraph.application.services.precedence_policy import PrecedencePolicy

__all__ = [
    "DependencyGraph",
    "DependencyGraphEngine",
    "DependencyService",
    "PermissionService",
    "PrecedencePolicy",
]
