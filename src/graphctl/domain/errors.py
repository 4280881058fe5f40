"""Error taxonomy for the graph engine and its reader.

Every error carries a stable ``code`` so the service layer can map it onto
a ``ServiceError`` without inspecting the message.
"""

from __future__ import annotations

from typing import Any


class GraphError(Exception):
    """Base class for all graph errors."""

    code = "GRAPH_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.detail: dict[str, Any] = detail


class InvalidArgumentError(GraphError, ValueError):
    """Bad vertex count, unknown method name, or an operation the graph kind forbids."""

    code = "INVALID_ARGUMENT"


class OutOfRangeError(GraphError, IndexError):
    """Edge endpoint outside ``[1, vertex_count]``."""

    code = "OUT_OF_RANGE"


class MalformedInputError(GraphError, ValueError):
    """Edge-list text that cannot be parsed into integer pairs."""

    code = "MALFORMED_INPUT"


class CycleError(GraphError):
    """A topological order was requested on a graph with a cycle."""

    code = "CYCLE_DETECTED"
