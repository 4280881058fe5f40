"""GraphService — traversal, components, cycle checks, topological order, export.

Wraps a loaded :class:`Graph`. Every method returns a ServiceResult; engine
errors become ``ok=False`` results carrying the error's code.
Traversals reset visitation state first unless told otherwise, so each
result reflects a clean run.
"""

from __future__ import annotations

from typing import Any

from graphctl.domain.errors import GraphError
from graphctl.domain.types import TraversalMethod
from graphctl.infrastructure.graph.engine import ExportFormat, serialize, to_networkx
from graphctl.services._helpers import error_result
from graphctl.services.base import BaseService
from graphctl.services.result import ServiceError, ServiceResult
from graphctl.services.telemetry import trace_span, traced


class GraphService(BaseService):
    """Runs graph algorithms and packages their output."""

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    @traced
    def bfs(self, start: int, *, reset: bool = True) -> ServiceResult:
        """Breadth-first visit order from *start*, sweeping unreached vertices."""
        return self._traverse("bfs", start, TraversalMethod.BFS, reset=reset)

    @traced
    def dfs(self, start: int, *, reset: bool = True) -> ServiceResult:
        """Depth-first visit order from *start*, sweeping unreached vertices."""
        return self._traverse("dfs", start, TraversalMethod.DFS, reset=reset)

    def _traverse(
        self, op: str, start: int, method: TraversalMethod, *, reset: bool
    ) -> ServiceResult:
        g = self._graph
        warnings: list[str] = []
        if start not in g:
            warnings.append(f"Start vertex {start} is out of range; sweeping from vertex 1")
        if reset:
            g.unvisit()

        with trace_span(f"graph.{method.value}") as span:
            order = g.traverse(start, method)
            if span:
                span.annotate("visited", len(order))

        return ServiceResult(
            ok=True,
            op=op,
            data={**self._summary(), "start": start, "count": len(order), "order": order},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @traced
    def components(self, method: TraversalMethod | str = TraversalMethod.DFS) -> ServiceResult:
        """Partition vertices into components, numbered from 1."""
        try:
            with trace_span("graph.find_components") as span:
                groups = self._graph.find_components(method)
                if span:
                    span.annotate("components", len(groups))
        except GraphError as exc:
            return error_result("components", exc)

        warnings: list[str] = []
        if self._graph.directed:
            warnings.append(
                "Directed graph: components follow outgoing edges only "
                "and may differ from weak components"
            )

        return ServiceResult(
            ok=True,
            op="components",
            data={
                **self._summary(),
                "method": str(TraversalMethod(method)),
                "count": len(groups),
                "components": _component_items(groups),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Cycles and topological order
    # ------------------------------------------------------------------

    @traced
    def cycle(self) -> ServiceResult:
        """Report whether the graph contains a cycle."""
        g = self._graph
        data: dict[str, Any] = self._summary()
        with trace_span("graph.has_cycle"):
            if g.directed and g.vertex_count:
                order, has_cycle = g.kahn()
                data["processed"] = len(order)
            else:
                has_cycle = g.has_cycle()
        data["has_cycle"] = has_cycle
        data["strategy"] = "kahn" if g.directed else "dfs"
        return ServiceResult(ok=True, op="cycle", data=data)

    @traced
    def topo(self) -> ServiceResult:
        """Topological order of a directed acyclic graph."""
        try:
            with trace_span("graph.kahn") as span:
                order = self._graph.topological_order()
                if span:
                    span.annotate("processed", len(order))
        except GraphError as exc:
            return error_result("topo", exc)

        return ServiceResult(
            ok=True,
            op="topo",
            data={**self._summary(), "count": len(order), "order": order},
        )

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------

    @traced
    def report(
        self,
        start: int | None = None,
        *,
        method: TraversalMethod | str = TraversalMethod.DFS,
    ) -> ServiceResult:
        """BFS, DFS, components, and a cycle check in one pass.

        *start* defaults to ``n // 2`` for directed graphs and 1 for
        undirected ones. Visitation state is reset between stages.
        """
        g = self._graph
        if start is None:
            start = g.vertex_count // 2 if g.directed else 1
        warnings: list[str] = []
        if start not in g:
            warnings.append(f"Start vertex {start} is out of range; sweeping from vertex 1")

        try:
            with trace_span("report.bfs"):
                g.unvisit()
                bfs_order = g.bfs(start)
            with trace_span("report.dfs"):
                g.unvisit()
                dfs_order = g.dfs(start)
            with trace_span("report.components"):
                groups = g.find_components(method)
            with trace_span("report.has_cycle"):
                has_cycle = g.has_cycle()
        except GraphError as exc:
            return error_result("report", exc)

        return ServiceResult(
            ok=True,
            op="report",
            data={
                **self._summary(),
                "start": start,
                "bfs": bfs_order,
                "dfs": dfs_order,
                "components": _component_items(groups),
                "has_cycle": has_cycle,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    @traced
    def export(self, fmt: ExportFormat | str = ExportFormat.NODE_LINK) -> ServiceResult:
        """Serialize the graph through NetworkX."""
        try:
            fmt = ExportFormat(fmt)
        except ValueError:
            choices = ", ".join(f.value for f in ExportFormat)
            return ServiceResult(
                ok=False,
                op="export",
                error=ServiceError(
                    code="INVALID_ARGUMENT",
                    message=f"Unknown export format {fmt!r}; expected one of: {choices}",
                    detail={"format": str(fmt)},
                ),
            )

        with trace_span("export.to_networkx"):
            nxg = to_networkx(self._graph)
        with trace_span("export.serialize") as span:
            content = serialize(nxg, fmt)
            if span:
                span.annotate("bytes", len(content))

        return ServiceResult(
            ok=True,
            op="export",
            data={
                **self._summary(),
                "format": fmt.value,
                "node_count": nxg.number_of_nodes(),
                "link_count": nxg.number_of_edges(),
                "content": content,
            },
        )


def _component_items(groups: list[list[int]]) -> list[dict[str, Any]]:
    return [
        {"index": i, "size": len(members), "members": members}
        for i, members in enumerate(groups, start=1)
    ]
