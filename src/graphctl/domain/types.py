"""Value types for the graph engine.

Vertices are integer ids in ``[1, n]``; id 0 is reserved and never used.
Each vertex exclusively owns its outgoing edge list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

# Historical upper bound on the vertex count.
MAX_VERTEX = 10000


class TraversalMethod(StrEnum):
    """Traversal used to grow a component from its seed."""

    DFS = "dfs"
    BFS = "bfs"


@dataclass(frozen=True, slots=True)
class Edge:
    """An outgoing arc. ``weight`` is carried but unused by every algorithm."""

    to: int
    weight: int = 0


@dataclass(slots=True)
class Vertex:
    """Degree counters plus outgoing edges in insertion order.

    Degrees are only maintained for directed graphs.
    """

    indegree: int = 0
    outdegree: int = 0
    edges: list[Edge] = field(default_factory=list)
