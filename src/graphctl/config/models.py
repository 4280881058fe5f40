"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, graphctl.toml only contains overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, field_validator

from graphctl.domain.types import MAX_VERTEX

# --- graphctl.toml sections ---


class GraphConfig(BaseModel):
    """[graph] section."""

    model_config = {"frozen": True}

    directed: bool = True
    max_vertex: int = MAX_VERTEX

    @field_validator("max_vertex")
    @classmethod
    def _within_engine_limit(cls, value: int) -> int:
        if not 0 <= value <= MAX_VERTEX:
            msg = f"max_vertex must be between 0 and {MAX_VERTEX}"
            raise ValueError(msg)
        return value


class TraversalConfig(BaseModel):
    """[traversal] section."""

    model_config = {"frozen": True}

    component_method: Literal["dfs", "bfs"] = "dfs"


class ReaderConfig(BaseModel):
    """[reader] section."""

    model_config = {"frozen": True}

    comment_prefix: str = "#"


class ExportConfig(BaseModel):
    """[export] section."""

    model_config = {"frozen": True}

    default_format: Literal["node-link", "graphml", "adjlist"] = "node-link"
