"""Graph — adjacency-list engine over a bounded integer vertex space.

Supports directed and undirected graphs with ids ``1..n``. Provides BFS and
DFS with a seed-then-sweep policy, cycle detection (parent-tracking DFS for
undirected graphs, Kahn elimination for directed ones), topological order,
and component enumeration.

Visitation state (``discovered`` / ``processed``) lives on the instance and
survives between calls; ``unvisit()`` resets it without touching structure.

INVARIANT: ``processed[v]`` implies ``discovered[v]``.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator

from graphctl.domain.errors import CycleError, InvalidArgumentError, OutOfRangeError
from graphctl.domain.types import MAX_VERTEX, Edge, TraversalMethod, Vertex

logger = logging.getLogger(__name__)

# Parent marker for DFS roots.
NO_PARENT = 0


class Graph:
    """Directed or undirected multigraph with vertices ``1..vertex_count``.

    Duplicate edges and self-loops are kept. Edges are never removed.

    Usage::

        g = Graph(3, directed=True)
        g.add_edge(1, 2)
        g.add_edge(2, 3)
        g.topological_order()  # [1, 2, 3]
    """

    def __init__(
        self,
        vertex_count: int,
        directed: bool = False,
        *,
        max_vertex: int = MAX_VERTEX,
    ) -> None:
        if isinstance(vertex_count, bool) or not isinstance(vertex_count, int):
            msg = f"Vertex count must be an integer, got {vertex_count!r}"
            raise InvalidArgumentError(msg, vertex_count=vertex_count)
        limit = min(max_vertex, MAX_VERTEX)
        if vertex_count < 0 or vertex_count > limit:
            msg = f"Vertex count {vertex_count} outside supported range [0, {limit}]"
            raise InvalidArgumentError(msg, vertex_count=vertex_count, max_vertex=limit)

        self._nvertex = vertex_count
        self._directed = directed
        self._edge_count = 0
        # Index 0 is allocated but never used, so vertex ids index directly.
        self._vertices = [Vertex() for _ in range(vertex_count + 1)]
        self._discovered = [False] * (vertex_count + 1)
        self._processed = [False] * (vertex_count + 1)
        self._parent = [NO_PARENT] * (vertex_count + 1)
        logger.debug("Graph created: %d vertices, directed=%s", vertex_count, directed)

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph(vertices={self._nvertex}, edges={self._edge_count}, {kind})"

    def __len__(self) -> int:
        return self._nvertex

    def __contains__(self, v: object) -> bool:
        return isinstance(v, int) and not isinstance(v, bool) and 1 <= v <= self._nvertex

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return self._nvertex

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def edge_count(self) -> int:
        """Number of stored arcs (an undirected ``connect`` stores two)."""
        return self._edge_count

    def vertices(self) -> range:
        """Vertex ids in ascending order."""
        return range(1, self._nvertex + 1)

    def add_edge(self, x: int, y: int, weight: int = 0) -> None:
        """Append the arc ``x -> y`` to *x*'s outgoing list.

        Never symmetrizes, even on an undirected graph; use :meth:`connect`
        for that. Degree counters change only when the graph is directed.
        """
        self._check_vertex(x)
        self._check_vertex(y)
        vx = self._vertices[x]
        vx.edges.append(Edge(to=y, weight=weight))
        self._edge_count += 1
        if self._directed:
            vx.outdegree += 1
            self._vertices[y].indegree += 1

    def connect(self, x: int, y: int, weight: int = 0) -> None:
        """Insert ``x -> y``, plus ``y -> x`` when the graph is undirected."""
        self._check_vertex(x)
        self._check_vertex(y)
        self.add_edge(x, y, weight)
        if not self._directed:
            self.add_edge(y, x, weight)

    def neighbors(self, v: int) -> list[int]:
        """Targets of *v*'s outgoing edges, in insertion order."""
        self._check_vertex(v)
        return [e.to for e in self._vertices[v].edges]

    def edges(self) -> Iterator[tuple[int, int, int]]:
        """Yield every stored arc as ``(from, to, weight)``."""
        for v in self.vertices():
            for e in self._vertices[v].edges:
                yield v, e.to, e.weight

    def indegree(self, v: int) -> int:
        self._check_vertex(v)
        return self._vertices[v].indegree

    def outdegree(self, v: int) -> int:
        self._check_vertex(v)
        return self._vertices[v].outdegree

    def _check_vertex(self, v: int) -> None:
        if v not in self:
            msg = f"Vertex {v!r} outside range [1, {self._nvertex}]"
            raise OutOfRangeError(msg, vertex=v, vertex_count=self._nvertex)

    # ------------------------------------------------------------------
    # Visitation state
    # ------------------------------------------------------------------

    def unvisit(self) -> None:
        """Clear discovered/processed marks. Structure is untouched."""
        size = self._nvertex + 1
        self._discovered = [False] * size
        self._processed = [False] * size
        self._parent = [NO_PARENT] * size

    def is_discovered(self, v: int) -> bool:
        self._check_vertex(v)
        return self._discovered[v]

    def is_processed(self, v: int) -> bool:
        self._check_vertex(v)
        return self._processed[v]

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def iter_bfs(self, start: int) -> Iterator[int]:
        """Lazy BFS from *start*, then from every vertex still undiscovered.

        An out-of-range *start* is skipped; only the sweep runs.
        """
        if start in self:
            yield from self._bfs_from(start)
        for v in self.vertices():
            if not self._discovered[v]:
                yield from self._bfs_from(v)

    def iter_dfs(self, start: int) -> Iterator[int]:
        """Lazy DFS from *start*, then from every vertex still undiscovered."""
        if start in self:
            yield from self._dfs_from(start)
        for v in self.vertices():
            if not self._discovered[v]:
                yield from self._dfs_from(v)

    def bfs(self, start: int) -> list[int]:
        """Breadth-first visit order. Does not reset visitation state."""
        return list(self.iter_bfs(start))

    def dfs(self, start: int) -> list[int]:
        """Depth-first visit order. Does not reset visitation state."""
        return list(self.iter_dfs(start))

    def traverse(
        self, start: int, method: TraversalMethod | str = TraversalMethod.DFS
    ) -> list[int]:
        """Run the traversal named by *method* (``"dfs"`` or ``"bfs"``)."""
        if _resolve_method(method) is TraversalMethod.BFS:
            return self.bfs(start)
        return self.dfs(start)

    def _bfs_from(self, start: int) -> Iterator[int]:
        if self._discovered[start]:
            return
        self._discovered[start] = True
        queue: deque[int] = deque([start])
        while queue:
            v = queue.popleft()
            for e in self._vertices[v].edges:
                if not self._discovered[e.to]:
                    # Marked on enqueue so a vertex is never queued twice.
                    self._discovered[e.to] = True
                    queue.append(e.to)
            self._processed[v] = True
            yield v

    def _dfs_from(self, root: int) -> Iterator[int]:
        if self._discovered[root]:
            return
        self._discovered[root] = True
        yield root
        # Frames are (vertex, index of the next edge to follow).
        stack: list[tuple[int, int]] = [(root, 0)]
        while stack:
            v, i = stack[-1]
            edges = self._vertices[v].edges
            if i == len(edges):
                stack.pop()
                self._processed[v] = True
                continue
            stack[-1] = (v, i + 1)
            to = edges[i].to
            if not self._discovered[to]:
                self._discovered[to] = True
                yield to
                stack.append((to, 0))

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def find_components(
        self, method: TraversalMethod | str = TraversalMethod.DFS
    ) -> list[list[int]]:
        """Partition the vertices into components, ordered by lowest seed id.

        Resets visitation state first. Component *k* is at index ``k - 1``.
        Traversal follows outgoing edges only, so on a directed graph these
        are forward-reachability groups rather than weak components unless
        every arc was also inserted in reverse.
        """
        walk = (
            self._bfs_from if _resolve_method(method) is TraversalMethod.BFS else self._dfs_from
        )
        self.unvisit()
        components: list[list[int]] = []
        for v in self.vertices():
            if not self._discovered[v]:
                components.append(list(walk(v)))
        logger.debug("Found %d components", len(components))
        return components

    # ------------------------------------------------------------------
    # Cycles and topological order
    # ------------------------------------------------------------------

    def has_cycle(self) -> bool:
        """Whether the graph contains a cycle.

        Undirected graphs reset visitation state and run a parent-tracking
        DFS per component. Directed graphs run Kahn elimination on a copy of
        the indegrees, leaving visitation state alone.
        """
        if self._nvertex == 0:
            return False
        if self._directed:
            _, cycle = self.kahn()
            return cycle

        self.unvisit()
        for v in self.vertices():
            if not self._discovered[v] and self._undirected_cycle_from(v):
                logger.debug("Cycle found in component seeded at %d", v)
                return True
        return False

    def kahn(self) -> tuple[list[int], bool]:
        """Kahn elimination on a working copy of the indegrees.

        Returns ``(order, has_cycle)``. Zero-indegree vertices are held on a
        LIFO stack, seeded in ascending id order. When ``has_cycle`` is False,
        ``order`` is a topological order of all vertices.
        """
        if not self._directed:
            msg = "Kahn elimination requires a directed graph"
            raise InvalidArgumentError(msg)

        indegree = [vx.indegree for vx in self._vertices]
        stack = [v for v in self.vertices() if indegree[v] == 0]
        order: list[int] = []
        while stack:
            v = stack.pop()
            order.append(v)
            for e in self._vertices[v].edges:
                indegree[e.to] -= 1
                if indegree[e.to] == 0:
                    stack.append(e.to)

        cycle = len(order) != self._nvertex
        logger.debug("Kahn processed %d of %d vertices", len(order), self._nvertex)
        return order, cycle

    def topological_order(self) -> list[int]:
        """Topological order of a directed acyclic graph.

        Raises:
            InvalidArgumentError: The graph is undirected.
            CycleError: Some vertices never reach indegree zero.
        """
        order, cycle = self.kahn()
        if cycle:
            remaining = sorted(set(self.vertices()).difference(order))
            msg = f"Graph has a cycle; {len(remaining)} vertices never reached indegree zero"
            raise CycleError(msg, unresolved=remaining)
        return order

    def _undirected_cycle_from(self, root: int) -> bool:
        """Iterative DFS that reports any back edge other than the one arrived by.

        Only one arc back to the parent is forgiven per vertex, which is the
        mirror of the arc used to get here. A second arc to the parent (a
        parallel edge) or any arc to self counts as a cycle.
        """
        self._discovered[root] = True
        self._parent[root] = NO_PARENT
        # Frames are [vertex, next edge index, parent arc already forgiven].
        stack: list[list[int]] = [[root, 0, 0]]
        while stack:
            frame = stack[-1]
            v, i, forgiven = frame
            edges = self._vertices[v].edges
            if i == len(edges):
                stack.pop()
                self._processed[v] = True
                continue
            frame[1] = i + 1
            to = edges[i].to
            if not self._discovered[to]:
                self._discovered[to] = True
                self._parent[to] = v
                stack.append([to, 0, 0])
            elif to == self._parent[v] and not forgiven:
                frame[2] = 1
            else:
                return True
        return False


def _resolve_method(method: TraversalMethod | str) -> TraversalMethod:
    try:
        return TraversalMethod(method)
    except ValueError:
        choices = ", ".join(m.value for m in TraversalMethod)
        msg = f"Unknown traversal method {method!r}; expected one of: {choices}"
        raise InvalidArgumentError(msg, method=str(method)) from None
