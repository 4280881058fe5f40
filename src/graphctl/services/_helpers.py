"""Shared service-layer helper functions."""

from __future__ import annotations

from typing import Any

from graphctl.domain.errors import GraphError
from graphctl.services.result import ServiceError, ServiceResult


def error_result(op: str, exc: GraphError) -> ServiceResult:
    """Convert a raised GraphError into a failed ServiceResult."""
    detail: dict[str, Any] = {k: v for k, v in exc.detail.items() if v is not None}
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=exc.code, message=str(exc), detail=detail),
    )


def graph_summary(vertex_count: int, edge_count: int, directed: bool) -> dict[str, Any]:
    """Common header fields for every graph result payload."""
    return {
        "vertex_count": vertex_count,
        "edge_count": edge_count,
        "directed": directed,
    }
