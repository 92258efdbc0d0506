"""Dependency application service: loads graph snapshots and applies validated edge changes.

Reads build a DependencyGraphEngine over a plain snapshot (no locking,
staleness tolerated). Mutations run inside the request transaction:
lock the graph, re-read and re-validate, insert, then re-read and
check that no inserted edge closes a cycle before the transaction
commits. Cycles already present in corrupted data do not block writes.
"""

from __future__ import annotations

from collections.abc import Iterable

from permgraph.application.dtos.dependency import (
    CycleReport,
    DependencyBatchResult,
    DependencyCheck,
    DependencyEdgeResult,
    DependencyNode,
    DependencyPaths,
    DependencyPlan,
    DependencyTrees,
    GraphStatistics,
    GraphView,
    IntegrityReport,
    PathStep,
)
from permgraph.application.dtos.permission import PermissionFilter
from permgraph.application.interfaces.repositories import (
    IPermissionDependencyRepository,
    IPermissionRepository,
)
from permgraph.application.services.dependency_graph_engine import (
    DEFAULT_MAX_DEPTH_LIMIT,
    DEFAULT_VIEW_DEPTH,
    DEFAULT_VISIT_LIMIT,
    DependencyGraph,
    DependencyGraphEngine,
)
from permgraph.application.services.precedence_policy import PrecedencePolicy
from permgraph.domain.enums import TraversalDirection
from permgraph.domain.exceptions import (
    ConcurrencyConflictException,
    DependencyEndpointMissingException,
    DependencyRejectedException,
    DuplicateDependencyException,
    ResourceNotFoundException,
)
from permgraph.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class DependencyService:
    """Permission dependency queries and mutations over the edge store."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        dependency_repo: IPermissionDependencyRepository,
        *,
        max_depth_limit: int = DEFAULT_MAX_DEPTH_LIMIT,
        visit_limit: int = DEFAULT_VISIT_LIMIT,
        policy: PrecedencePolicy | None = None,
    ) -> None:
        self._permissions = permission_repo
        self._edges = dependency_repo
        self._max_depth_limit = max_depth_limit
        self._visit_limit = visit_limit
        self._policy = policy or PrecedencePolicy.default()

    async def load_engine(self) -> DependencyGraphEngine:
        """Read all permissions and edges and wrap them in an engine."""
        permissions = await self._permissions.list_permissions()
        edges = await self._edges.list_edges()
        return DependencyGraphEngine(
            DependencyGraph(permissions, edges),
            max_depth_limit=self._max_depth_limit,
            visit_limit=self._visit_limit,
            policy=self._policy,
        )

    # ---- Queries ----

    async def get_dependencies(
        self,
        permission_id: str,
        max_depth: int,
        direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
        permission_filter: PermissionFilter | None = None,
    ) -> list[DependencyNode]:
        engine = await self.load_engine()
        return engine.get_dependencies(permission_id, max_depth, direction, permission_filter)

    async def can_add_dependency(self, dependent_id: str, dependency_id: str) -> DependencyCheck:
        engine = await self.load_engine()
        return engine.can_add_dependency(dependent_id, dependency_id)

    async def detect_cycle(self) -> CycleReport:
        engine = await self.load_engine()
        return engine.detect_cycle()

    async def explain_path(self, from_id: str, to_id: str) -> list[PathStep] | None:
        engine = await self.load_engine()
        return engine.explain_path(from_id, to_id)

    async def dependency_tree(
        self,
        permission_id: str,
        direction: TraversalDirection,
        max_depth: int = DEFAULT_VIEW_DEPTH,
        permission_filter: PermissionFilter | None = None,
    ) -> DependencyTrees:
        engine = await self.load_engine()
        return engine.dependency_tree(permission_id, direction, max_depth, permission_filter)

    async def graph_view(
        self,
        permission_id: str,
        direction: TraversalDirection,
        max_depth: int,
        permission_filter: PermissionFilter | None = None,
    ) -> GraphView:
        engine = await self.load_engine()
        return engine.graph_view(permission_id, direction, max_depth, permission_filter)

    async def all_paths(
        self, permission_id: str, direction: TraversalDirection
    ) -> DependencyPaths:
        engine = await self.load_engine()
        return engine.all_paths(permission_id, direction)

    async def statistics(self) -> GraphStatistics:
        engine = await self.load_engine()
        return engine.statistics()

    async def integrity_issues(self) -> IntegrityReport:
        engine = await self.load_engine()
        return engine.integrity_issues()

    # ---- Mutations (call inside a transaction) ----

    async def add_dependencies(
        self,
        permission_id: str,
        dependency_ids: Iterable[str],
        *,
        strict: bool = False,
    ) -> DependencyBatchResult:
        """Add every safe edge permission_id -> dependency_id; skip the rest with reasons.

        With strict=True the first rejection raises DependencyRejectedException
        and nothing is inserted.

        Raises:
            ResourceNotFoundException: permission_id is unknown.
            DependencyRejectedException: strict and a proposal was rejected.
            ConcurrencyConflictException: a concurrent writer invalidated the plan; retry once.
        """
        dependency_ids = list(dependency_ids)
        await self._edges.lock_graph()
        engine = await self.load_engine()
        engine.graph.require(permission_id)
        plan = engine.plan_dependencies(permission_id, dependency_ids)
        if strict and plan.skipped:
            first = plan.skipped[0]
            raise DependencyRejectedException(
                first.permission_id,
                first.depends_on_permission_id,
                first.reason.value,
                cycle_path=list(first.cycle_path) or None,
            )
        return await self._apply(permission_id, plan)

    async def auto_resolve_dependencies(
        self,
        permission_id: str,
        module: str | None = None,
        policy: PrecedencePolicy | None = None,
        *,
        dry_run: bool = False,
    ) -> DependencyBatchResult | DependencyPlan:
        """Propose edges from the precedence policy and insert the accepted ones.

        Returns the DependencyPlan unchanged when dry_run is True.
        """
        if not dry_run:
            await self._edges.lock_graph()
        engine = await self.load_engine()
        plan = engine.auto_resolve_dependencies(permission_id, module=module, policy=policy)
        if dry_run:
            return plan
        return await self._apply(permission_id, plan)

    async def auto_resolve_module(
        self,
        module: str,
        policy: PrecedencePolicy | None = None,
        *,
        dry_run: bool = False,
    ) -> DependencyBatchResult | DependencyPlan:
        """Apply the precedence policy across a whole module (e.g. edit -> view, delete -> edit)."""
        if not dry_run:
            await self._edges.lock_graph()
        engine = await self.load_engine()
        plan = engine.auto_resolve_module(module, policy=policy)
        if dry_run:
            return plan
        return await self._apply(module, plan)

    async def remove_dependency(self, permission_id: str, dependency_id: str) -> None:
        """Delete one edge. Raises ResourceNotFoundException if it does not exist."""
        await self._edges.lock_graph()
        removed = await self._edges.remove_edge(permission_id, dependency_id)
        if not removed:
            raise ResourceNotFoundException(
                "permission_dependency", f"{permission_id}->{dependency_id}"
            )
        logger.info("Dependency removed: %s -> %s", permission_id, dependency_id)

    async def _apply(self, scope: str, plan: DependencyPlan) -> DependencyBatchResult:
        inserted: list[DependencyEdgeResult] = []
        for proposal in plan.accepted:
            try:
                edge = await self._edges.add_edge(
                    proposal.permission_id, proposal.depends_on_permission_id
                )
            except DuplicateDependencyException as exc:
                logger.warning(
                    "Concurrent insert of %s -> %s",
                    proposal.permission_id,
                    proposal.depends_on_permission_id,
                )
                raise ConcurrencyConflictException(scope, "duplicate_edge") from exc
            except DependencyEndpointMissingException as exc:
                logger.warning(
                    "Endpoint of %s -> %s deleted concurrently",
                    proposal.permission_id,
                    proposal.depends_on_permission_id,
                )
                raise ConcurrencyConflictException(scope, "permission_deleted") from exc
            inserted.append(edge)

        if inserted:
            # Only cycles through the new edges count; older corruption is left to the integrity report.
            engine = await self.load_engine()
            for edge in inserted:
                cycle = engine.cycle_through(edge.permission_id, edge.depends_on_permission_id)
                if cycle is not None:
                    logger.warning("Cycle after insert for %s: %s", scope, " -> ".join(cycle))
                    raise ConcurrencyConflictException(scope, "cycle_detected")

        for edge in inserted:
            logger.info(
                "Dependency added: %s -> %s", edge.permission_id, edge.depends_on_permission_id
            )
        return DependencyBatchResult(inserted=inserted, skipped=list(plan.skipped))

