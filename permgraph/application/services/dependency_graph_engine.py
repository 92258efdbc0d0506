"""Permission dependency graph engine (implements the structural queries and the edge gate).

DependencyGraph is an immutable snapshot of permissions and dependency
edges: permissions live in an arena ordered by id, and adjacency lists
hold arena indexes sorted by neighbour id, so every walk is
deterministic. DependencyGraphEngine answers queries against one
snapshot and is the only place that decides whether an edge may be
added (self dependency, duplicate, would-be cycle).

The engine is synchronous and stateless beyond its snapshot; the async
DependencyService loads a fresh snapshot per logical operation.
"""

from __future__ import annotations

import bisect
from collections import deque
from collections.abc import Iterable, Iterator

from permgraph.application.dtos.dependency import (
    CycleReport,
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
from permgraph.application.services.precedence_policy import PrecedencePolicy
from permgraph.domain.constants import (
    COMPLEX_PERMISSION_LIMIT,
    COMPLEX_PERMISSION_THRESHOLD,
)
from permgraph.domain.enums import (
    DependencyRejection,
    IntegrityIssueType,
    NodeRelation,
    TraversalDirection,
)
from permgraph.domain.exceptions import (
    GraphInvariantError,
    ResourceNotFoundException,
    TraversalLimitExceededException,
    ValidationException,
)
from permgraph.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_VIEW_DEPTH = 3
DEFAULT_MAX_DEPTH_LIMIT = 10
DEFAULT_VISIT_LIMIT = 10_000

_WHITE, _GRAY, _BLACK = 0, 1, 2


class DependencyGraph:
    """Snapshot of permission nodes and dependency edges (arena + index adjacency).

    Edge rows that break the invariants are not dropped silently: rows
    with a missing endpoint go to orphan_edges and repeated pairs to
    duplicate_edges. Self-loops stay in the adjacency so cycle detection
    reports them.
    """

    def __init__(
        self,
        permissions: Iterable[PermissionResult],
        edges: Iterable[DependencyEdgeResult] = (),
    ) -> None:
        self.nodes: list[PermissionResult] = sorted(permissions, key=lambda p: p.id)
        self._index: dict[str, int] = {p.id: i for i, p in enumerate(self.nodes)}
        if len(self._index) != len(self.nodes):
            raise ValueError("Permission ids in a graph snapshot must be unique")
        self._dependencies: list[list[int]] = [[] for _ in self.nodes]
        self._dependents: list[list[int]] = [[] for _ in self.nodes]
        self._edge_keys: set[tuple[int, int]] = set()
        self.orphan_edges: list[DependencyEdgeResult] = []
        self.duplicate_edges: list[DependencyEdgeResult] = []

        rows = sorted(edges, key=lambda e: (e.permission_id, e.depends_on_permission_id))
        for edge in rows:
            src = self._index.get(edge.permission_id)
            dst = self._index.get(edge.depends_on_permission_id)
            if src is None or dst is None:
                self.orphan_edges.append(edge)
            elif (src, dst) in self._edge_keys:
                self.duplicate_edges.append(edge)
            else:
                # Rows are sorted by endpoint ids and arena order is id order, so appends stay sorted.
                self._edge_keys.add((src, dst))
                self._dependencies[src].append(dst)
                bisect.insort(self._dependents[dst], src)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edge_keys)

    def index_of(self, permission_id: str) -> int | None:
        return self._index.get(permission_id)

    def require(self, permission_id: str) -> int:
        """Return the arena index for permission_id. Raises ResourceNotFoundException."""
        idx = self._index.get(permission_id)
        if idx is None:
            raise ResourceNotFoundException("permission", permission_id)
        return idx

    def permission(self, idx: int) -> PermissionResult:
        return self.nodes[idx]

    def dependencies_of(self, idx: int) -> list[int]:
        return self._dependencies[idx]

    def dependents_of(self, idx: int) -> list[int]:
        return self._dependents[idx]

    def neighbours(self, idx: int, relation: NodeRelation) -> list[int]:
        if relation is NodeRelation.DEPENDENCY:
            return self._dependencies[idx]
        return self._dependents[idx]

    def has_edge(self, src: int, dst: int) -> bool:
        return (src, dst) in self._edge_keys

    def self_loops(self) -> list[int]:
        return [src for src, dst in sorted(self._edge_keys) if src == dst]

    def copy(self) -> DependencyGraph:
        """Return a snapshot sharing the node arena but with independent adjacency."""
        clone = DependencyGraph.__new__(DependencyGraph)
        clone.nodes = self.nodes
        clone._index = self._index
        clone._dependencies = [list(adj) for adj in self._dependencies]
        clone._dependents = [list(adj) for adj in self._dependents]
        clone._edge_keys = set(self._edge_keys)
        clone.orphan_edges = list(self.orphan_edges)
        clone.duplicate_edges = list(self.duplicate_edges)
        return clone

    def link(self, src: int, dst: int) -> None:
        """Add an edge to this snapshot (used on working copies while planning a batch)."""
        if (src, dst) in self._edge_keys:
            raise GraphInvariantError(
                f"Edge {self.nodes[src].id} -> {self.nodes[dst].id} is already linked"
            )
        self._edge_keys.add((src, dst))
        bisect.insort(self._dependencies[src], dst)
        bisect.insort(self._dependents[dst], src)


class _VisitBudget:
    """Counts node visits for one operation and aborts past the limit."""

    def __init__(self, limit: int, operation: str) -> None:
        self._limit = limit
        self._operation = operation
        self._spent = 0

    def spend(self) -> None:
        self._spent += 1
        if self._spent > self._limit:
            logger.warning(
                "Traversal limit hit: operation=%s limit=%d", self._operation, self._limit
            )
            raise TraversalLimitExceededException(self._operation, self._limit)


def _relations(direction: TraversalDirection) -> tuple[NodeRelation, ...]:
    if direction is TraversalDirection.DEPENDENCIES:
        return (NodeRelation.DEPENDENCY,)
    if direction is TraversalDirection.DEPENDENTS:
        return (NodeRelation.DEPENDENT,)
    return (NodeRelation.DEPENDENCY, NodeRelation.DEPENDENT)


class DependencyGraphEngine:
    """Structural queries and edge validation over one DependencyGraph snapshot."""

    def __init__(
        self,
        graph: DependencyGraph,
        *,
        max_depth_limit: int = DEFAULT_MAX_DEPTH_LIMIT,
        visit_limit: int = DEFAULT_VISIT_LIMIT,
        policy: PrecedencePolicy | None = None,
    ) -> None:
        self._graph = graph
        self._max_depth_limit = max_depth_limit
        self._visit_limit = visit_limit
        self._policy = policy or PrecedencePolicy.default()

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    # ---- Traversal ----

    def get_dependencies(
        self,
        permission_id: str,
        max_depth: int,
        direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
        permission_filter: PermissionFilter | None = None,
    ) -> list[DependencyNode]:
        """Return permissions reachable within max_depth hops, in BFS discovery order.

        For BOTH, the dependency walk runs first, then the dependents walk,
        sharing one visited set. Nodes failing permission_filter are left out
        of the result but the walk still passes through them.

        Raises:
            ResourceNotFoundException: permission_id is unknown.
            ValidationException: max_depth < 1.
            TraversalLimitExceededException: visit cap reached.
        """
        start = self._graph.require(permission_id)
        depth_limit = self._clamp_depth(max_depth)
        budget = _VisitBudget(self._visit_limit, "get_dependencies")
        visited = {start}
        found: list[DependencyNode] = []
        for relation in _relations(direction):
            for _, node, depth, is_new in self._bfs(
                start, relation, depth_limit, visited, budget
            ):
                if not is_new:
                    continue
                permission = self._graph.permission(node)
                if permission_filter is None or permission_filter.matches(permission):
                    found.append(DependencyNode(permission, depth, relation))
        return found

    def explain_path(self, from_id: str, to_id: str) -> list[PathStep] | None:
        """Return one shortest dependency path from_id -> to_id, or None if there is none."""
        start = self._graph.require(from_id)
        goal = self._graph.require(to_id)
        budget = _VisitBudget(self._visit_limit, "explain_path")
        path = self._shortest_path(start, goal, NodeRelation.DEPENDENCY, budget)
        if path is None:
            return None
        return [
            PathStep(position=i, permission=self._graph.permission(idx))
            for i, idx in enumerate(path)
        ]

    # ---- Cycle detection and edge gate ----

    def detect_cycle(self) -> CycleReport:
        """Three-colour DFS over all nodes (id ascending); report the first back edge.

        Works on corrupted snapshots too: a self-loop is reported as [x, x].
        """
        graph = self._graph
        color = [_WHITE] * len(graph)
        for root in range(len(graph)):
            if color[root] != _WHITE:
                continue
            color[root] = _GRAY
            path = [root]
            cursors = [0]
            while path:
                node = path[-1]
                neighbours = graph.dependencies_of(node)
                pos = cursors[-1]
                if pos >= len(neighbours):
                    color[node] = _BLACK
                    path.pop()
                    cursors.pop()
                    continue
                cursors[-1] = pos + 1
                nxt = neighbours[pos]
                if color[nxt] == _GRAY:
                    cycle = path[path.index(nxt):] + [nxt]
                    return CycleReport(
                        has_cycle=True,
                        cycle_path=tuple(graph.permission(i).id for i in cycle),
                        closing_edge=(graph.permission(node).id, graph.permission(nxt).id),
                    )
                if color[nxt] == _WHITE:
                    color[nxt] = _GRAY
                    path.append(nxt)
                    cursors.append(0)
        return CycleReport(has_cycle=False)

    def can_add_dependency(self, dependent_id: str, dependency_id: str) -> DependencyCheck:
        """Validate the edge dependent_id -> dependency_id against the snapshot.

        Never raises for expected outcomes; returns a typed rejection instead.
        """
        return self._check(self._graph, dependent_id, dependency_id)

    def cycle_through(self, dependent_id: str, dependency_id: str) -> tuple[str, ...] | None:
        """Return the shortest cycle closed by the stored edge dependent_id -> dependency_id.

        None when the edge is absent or lies on no cycle. Cycles elsewhere
        in a corrupted snapshot are not reported here; see detect_cycle.
        """
        src = self._graph.index_of(dependent_id)
        dst = self._graph.index_of(dependency_id)
        if src is None or dst is None or not self._graph.has_edge(src, dst):
            return None
        budget = _VisitBudget(self._visit_limit, "cycle_through")
        back_path = self._shortest_path(dst, src, NodeRelation.DEPENDENCY, budget)
        if back_path is None:
            return None
        return (dependent_id,) + tuple(self._graph.permission(i).id for i in back_path)

    def plan_dependencies(
        self, dependent_id: str, dependency_ids: Iterable[str]
    ) -> DependencyPlan:
        """Validate a batch of edges for one dependent, accepting everything safe."""
        return self.plan_edges(
            ProposedDependency(dependent_id, dependency_id)
            for dependency_id in dict.fromkeys(dependency_ids)
        )

    def plan_edges(self, proposals: Iterable[ProposedDependency]) -> DependencyPlan:
        """Validate proposals in order against the snapshot plus the ones accepted so far.

        Rejections are recorded and skipped; the batch never aborts.
        """
        working = self._graph.copy()
        accepted: list[ProposedDependency] = []
        skipped: list[SkippedDependency] = []
        for proposal in proposals:
            check = self._check(
                working, proposal.permission_id, proposal.depends_on_permission_id
            )
            reason = check.reason
            if reason is None:
                working.link(
                    working.require(proposal.permission_id),
                    working.require(proposal.depends_on_permission_id),
                )
                accepted.append(proposal)
                continue
            logger.debug(
                "Skipping dependency %s -> %s: %s",
                proposal.permission_id,
                proposal.depends_on_permission_id,
                reason.value,
            )
            skipped.append(
                SkippedDependency(
                    permission_id=proposal.permission_id,
                    depends_on_permission_id=proposal.depends_on_permission_id,
                    reason=reason,
                    cycle_path=check.cycle_path,
                )
            )
        return DependencyPlan(accepted=accepted, skipped=skipped)

    def auto_resolve_dependencies(
        self,
        permission_id: str,
        module: str | None = None,
        policy: PrecedencePolicy | None = None,
    ) -> DependencyPlan:
        """Propose edges from the precedence policy and validate them as one batch."""
        permission = self._graph.permission(self._graph.require(permission_id))
        active = policy or self._policy
        candidates = active.candidates_for(permission, self._graph.nodes, module=module)
        return self.plan_dependencies(permission.id, (c.id for c in candidates))

    def auto_resolve_module(
        self, module: str, policy: PrecedencePolicy | None = None
    ) -> DependencyPlan:
        """Apply the precedence policy to every permission of a module (id order) as one batch.

        Proposals that already exist come back as DUPLICATE_EDGE skips, so
        re-running on a resolved module inserts nothing.
        """
        active = policy or self._policy
        members = [p for p in self._graph.nodes if p.module == module]
        return self.plan_edges(
            ProposedDependency(permission.id, candidate.id)
            for permission in members
            for candidate in active.candidates_for(permission, members)
        )

    # ---- Views ----

    def dependency_tree(
        self,
        permission_id: str,
        direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
        max_depth: int = DEFAULT_VIEW_DEPTH,
        permission_filter: PermissionFilter | None = None,
    ) -> DependencyTrees:
        """Nested trees rooted at the permission, one per requested direction.

        A node never repeats along one branch. Children failing
        permission_filter are pruned together with their subtrees; the
        root is always present.
        """
        root = self._graph.require(permission_id)
        depth_limit = self._clamp_depth(max_depth)
        budget = _VisitBudget(self._visit_limit, "dependency_tree")
        trees = {
            relation: self._subtree(
                root, relation, 0, depth_limit, frozenset({root}), budget, permission_filter
            )
            for relation in _relations(direction)
        }
        return DependencyTrees(
            dependencies=trees.get(NodeRelation.DEPENDENCY),
            dependents=trees.get(NodeRelation.DEPENDENT),
        )

    def graph_view(
        self,
        permission_id: str,
        direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
        max_depth: int = DEFAULT_VIEW_DEPTH,
        permission_filter: PermissionFilter | None = None,
    ) -> GraphView:
        """Nodes and edges around the permission for the network view.

        Unlike get_dependencies, a filter prunes the walk so every edge
        returned joins two returned nodes.
        """
        center = self._graph.require(permission_id)
        depth_limit = self._clamp_depth(max_depth)
        budget = _VisitBudget(self._visit_limit, "graph_view")
        nodes = [GraphViewNode(self._graph.permission(center), level=0, is_center=True)]
        edges: list[GraphViewEdge] = []
        seen_edges: set[tuple[int, int]] = set()
        visited = {center}
        for relation in _relations(direction):
            for parent, node, depth, is_new in self._bfs(
                center, relation, depth_limit, visited, budget, permission_filter
            ):
                if is_new:
                    nodes.append(
                        GraphViewNode(self._graph.permission(node), level=depth, relation=relation)
                    )
                src, dst = (parent, node) if relation is NodeRelation.DEPENDENCY else (node, parent)
                if (src, dst) not in seen_edges:
                    seen_edges.add((src, dst))
                    edges.append(
                        GraphViewEdge(
                            from_id=self._graph.permission(src).id,
                            to_id=self._graph.permission(dst).id,
                            relation=relation,
                        )
                    )
        return GraphView(nodes=nodes, edges=edges)

    def all_paths(
        self,
        permission_id: str,
        direction: TraversalDirection = TraversalDirection.DEPENDENCIES,
    ) -> DependencyPaths:
        """Every path from the permission to a leaf, per requested direction.

        A path ends where the walk would revisit a node already on it.
        """
        start = self._graph.require(permission_id)
        budget = _VisitBudget(self._visit_limit, "all_paths")
        paths = {
            relation: self._leaf_paths(start, relation, budget)
            for relation in _relations(direction)
        }
        return DependencyPaths(
            dependencies=paths.get(NodeRelation.DEPENDENCY),
            dependents=paths.get(NodeRelation.DEPENDENT),
        )

    def statistics(self) -> GraphStatistics:
        """Counts, complex permissions and depth distribution for the whole graph."""
        graph = self._graph
        with_deps = sum(1 for i in range(len(graph)) if graph.dependencies_of(i))
        depended = sum(1 for i in range(len(graph)) if graph.dependents_of(i))
        isolated = sum(
            1
            for i in range(len(graph))
            if not graph.dependencies_of(i) and not graph.dependents_of(i)
        )
        counts = [
            DependencyCount(
                permission=graph.permission(i),
                dependencies_count=len(graph.dependencies_of(i)),
                dependents_count=len(graph.dependents_of(i)),
            )
            for i in range(len(graph))
        ]
        complex_permissions = sorted(
            (
                c
                for c in counts
                if c.dependencies_count >= COMPLEX_PERMISSION_THRESHOLD
                or c.dependents_count >= COMPLEX_PERMISSION_THRESHOLD
            ),
            key=lambda c: (-c.dependencies_count, -c.dependents_count, c.permission.id),
        )[:COMPLEX_PERMISSION_LIMIT]
        return GraphStatistics(
            total_permissions=len(graph),
            total_dependencies=graph.edge_count,
            permissions_with_dependencies=with_deps,
            permissions_being_depended=depended,
            isolated_permissions=isolated,
            complex_permissions=complex_permissions,
            depth_distribution=self._depth_distribution(),
            has_cycle=self.detect_cycle().has_cycle,
        )

    def integrity_issues(self) -> IntegrityReport:
        """Self dependencies, duplicate rows, orphan rows and a cycle, if present."""
        graph = self._graph
        issues: list[IntegrityIssue] = []
        for idx in graph.self_loops():
            pid = graph.permission(idx).id
            issues.append(IntegrityIssue(IntegrityIssueType.SELF_DEPENDENCY, pid, pid))
        for edge in graph.duplicate_edges:
            issues.append(
                IntegrityIssue(
                    IntegrityIssueType.DUPLICATE_EDGE,
                    edge.permission_id,
                    edge.depends_on_permission_id,
                )
            )
        for edge in graph.orphan_edges:
            issues.append(
                IntegrityIssue(
                    IntegrityIssueType.ORPHAN_EDGE,
                    edge.permission_id,
                    edge.depends_on_permission_id,
                )
            )
        cycle = self.detect_cycle()
        # Self-loops are already reported above.
        if cycle.has_cycle and len(cycle.cycle_path) > 2 and cycle.closing_edge:
            issues.append(
                IntegrityIssue(
                    IntegrityIssueType.CIRCULAR_DEPENDENCY,
                    cycle.closing_edge[0],
                    cycle.closing_edge[1],
                    path=cycle.cycle_path,
                )
            )
        return IntegrityReport(issues=issues)

    # ---- Internals ----

    def _clamp_depth(self, max_depth: int) -> int:
        if max_depth < 1:
            raise ValidationException("max_depth must be at least 1", field="max_depth")
        return min(max_depth, self._max_depth_limit)

    def _check(
        self, graph: DependencyGraph, dependent_id: str, dependency_id: str
    ) -> DependencyCheck:
        src = graph.index_of(dependent_id)
        dst = graph.index_of(dependency_id)
        if src is None or dst is None:
            return DependencyCheck.rejected(DependencyRejection.PERMISSION_NOT_FOUND)
        if src == dst:
            return DependencyCheck.rejected(DependencyRejection.SELF_DEPENDENCY)
        if graph.has_edge(src, dst):
            return DependencyCheck.rejected(DependencyRejection.DUPLICATE_EDGE)
        budget = _VisitBudget(self._visit_limit, "can_add_dependency")
        back_path = self._shortest_path(dst, src, NodeRelation.DEPENDENCY, budget, graph)
        if back_path is not None:
            cycle = (dependent_id,) + tuple(graph.permission(i).id for i in back_path)
            return DependencyCheck.rejected(
                DependencyRejection.CYCLE_WOULD_BE_INTRODUCED, cycle_path=cycle
            )
        return DependencyCheck.ok()

    def _bfs(
        self,
        start: int,
        relation: NodeRelation,
        max_depth: int,
        visited: set[int],
        budget: _VisitBudget,
        permission_filter: PermissionFilter | None = None,
    ) -> Iterator[tuple[int, int, int, bool]]:
        """Yield (parent, node, depth, is_new) for every edge followed from start."""
        queue: deque[tuple[int, int]] = deque([(start, 0)])
        while queue:
            idx, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for nxt in self._graph.neighbours(idx, relation):
                if permission_filter is not None and not permission_filter.matches(
                    self._graph.permission(nxt)
                ):
                    continue
                if nxt in visited:
                    yield idx, nxt, depth + 1, False
                    continue
                visited.add(nxt)
                budget.spend()
                yield idx, nxt, depth + 1, True
                queue.append((nxt, depth + 1))

    def _shortest_path(
        self,
        start: int,
        goal: int,
        relation: NodeRelation,
        budget: _VisitBudget,
        graph: DependencyGraph | None = None,
    ) -> list[int] | None:
        graph = graph or self._graph
        if start == goal:
            return [start]
        parents: dict[int, int] = {start: start}
        queue: deque[int] = deque([start])
        while queue:
            idx = queue.popleft()
            for nxt in graph.neighbours(idx, relation):
                if nxt in parents:
                    continue
                parents[nxt] = idx
                budget.spend()
                if nxt == goal:
                    path = [goal]
                    while path[-1] != start:
                        path.append(parents[path[-1]])
                    path.reverse()
                    return path
                queue.append(nxt)
        return None

    def _subtree(
        self,
        idx: int,
        relation: NodeRelation,
        depth: int,
        max_depth: int,
        on_branch: frozenset[int],
        budget: _VisitBudget,
        permission_filter: PermissionFilter | None = None,
    ) -> DependencyTreeNode:
        children: list[DependencyTreeNode] = []
        if depth < max_depth:
            for nxt in self._graph.neighbours(idx, relation):
                if nxt in on_branch:
                    continue
                if permission_filter is not None and not permission_filter.matches(
                    self._graph.permission(nxt)
                ):
                    continue
                budget.spend()
                children.append(
                    self._subtree(
                        nxt,
                        relation,
                        depth + 1,
                        max_depth,
                        on_branch | {nxt},
                        budget,
                        permission_filter,
                    )
                )
        return DependencyTreeNode(
            permission=self._graph.permission(idx), depth=depth, children=children
        )

    def _leaf_paths(
        self, start: int, relation: NodeRelation, budget: _VisitBudget
    ) -> list[list[PermissionResult]]:
        paths: list[list[PermissionResult]] = []
        stack: list[list[int]] = [[start]]
        while stack:
            path = stack.pop()
            on_path = set(path)
            extensions = [
                n for n in self._graph.neighbours(path[-1], relation) if n not in on_path
            ]
            if not extensions:
                paths.append([self._graph.permission(i) for i in path])
                continue
            for nxt in reversed(extensions):
                budget.spend()
                stack.append(path + [nxt])
        return paths

    def _depth_distribution(self) -> dict[str, int]:
        """Bucket permissions by their longest dependency chain.

        Chains are computed leaf-first (Kahn's algorithm on dependencies);
        permissions on or upstream of a cycle have no finite chain and are
        counted under 'in_cycle'.
        """
        graph = self._graph
        remaining = [len(graph.dependencies_of(i)) for i in range(len(graph))]
        level = [0] * len(graph)
        resolved = [False] * len(graph)
        queue: deque[int] = deque(i for i, n in enumerate(remaining) if n == 0)
        while queue:
            idx = queue.popleft()
            resolved[idx] = True
            for dependent in graph.dependents_of(idx):
                level[dependent] = max(level[dependent], level[idx] + 1)
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    queue.append(dependent)
        distribution = {"depth_0": 0, "depth_1": 0, "depth_2": 0, "depth_3_plus": 0, "in_cycle": 0}
        for idx in range(len(graph)):
            if not resolved[idx]:
                distribution["in_cycle"] += 1
            elif level[idx] >= 3:
                distribution["depth_3_plus"] += 1
            else:
                distribution[f"depth_{level[idx]}"] += 1
        return distribution
