"""BaseService — foundation for services that operate on one loaded Graph.

The Graph is owned by the caller for the service's whole lifetime; services
never rebuild it, only query it and reset its visitation state.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from graphctl.services._helpers import graph_summary

if TYPE_CHECKING:
    from graphctl.domain.graph import Graph

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class GraphService(BaseService):
            def bfs(self, start: int) -> ServiceResult:
                self._graph.unvisit()
                ...
    """

    def __init__(self, graph: Graph) -> None:
        self._graph = graph

    @property
    def graph(self) -> Graph:
        return self._graph

    def _summary(self) -> dict[str, Any]:
        g = self._graph
        return graph_summary(g.vertex_count, g.edge_count, g.directed)
