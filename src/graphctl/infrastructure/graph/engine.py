"""NetworkX bridge — convert a Graph and serialize it.

Directed graphs become ``nx.MultiDiGraph``. Undirected graphs become
``nx.MultiGraph`` with mirrored arc pairs collapsed back into one edge,
so a ``connect(1, 2)`` appears once, not twice.
Isolated vertices are always present as nodes.
"""

from __future__ import annotations

import json
from collections import Counter
from enum import StrEnum

import networkx as nx
from networkx.readwrite import json_graph

from graphctl.domain.graph import Graph

type _NxGraph = nx.MultiDiGraph | nx.MultiGraph

_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


class ExportFormat(StrEnum):
    """Serialization formats supported by :func:`export_graph`."""

    NODE_LINK = "node-link"
    GRAPHML = "graphml"
    ADJLIST = "adjlist"


def to_networkx(graph: Graph) -> _NxGraph:
    """Build a NetworkX multigraph carrying every vertex and edge of *graph*."""
    g: _NxGraph = nx.MultiDiGraph() if graph.directed else nx.MultiGraph()
    g.add_nodes_from(graph.vertices())

    if graph.directed:
        for x, y, weight in graph.edges():
            g.add_edge(x, y, weight=weight)
        return g

    # Each undirected edge is stored as two arcs; skip the arc that mirrors
    # one already added.
    pending: Counter[tuple[int, int]] = Counter()
    for x, y, weight in graph.edges():
        if pending[(y, x)]:
            pending[(y, x)] -= 1
            continue
        g.add_edge(x, y, weight=weight)
        pending[(x, y)] += 1
    return g


def serialize(g: _NxGraph, fmt: ExportFormat | str = ExportFormat.NODE_LINK) -> str:
    """Serialize a NetworkX graph in the requested format."""
    match ExportFormat(fmt):
        case ExportFormat.NODE_LINK:
            data = json_graph.node_link_data(g, edges="edges")
            return json.dumps(data, indent=2)
        case ExportFormat.GRAPHML:
            # generate_graphml omits the declaration that write_graphml emits.
            return "\n".join([_XML_DECLARATION, *nx.generate_graphml(g)])
        case ExportFormat.ADJLIST:
            return "\n".join(nx.generate_adjlist(g))


def export_graph(graph: Graph, fmt: ExportFormat | str = ExportFormat.NODE_LINK) -> str:
    """Serialize *graph* in the requested format."""
    return serialize(to_networkx(graph), fmt)
