"""Standalone command: the full harness run over one graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from graphctl.commands._base import CtlCommand, graph_source
from graphctl.services.graph import GraphService

if TYPE_CHECKING:
    from graphctl.commands._context import AppContext


@click.command(
    cls=CtlCommand,
    examples="""\
  graphctl report edges.txt
  graphctl report edges.txt --undirected --start 1
  graphctl --quiet report edges.txt"""
)
@graph_source
@click.option(
    "--start",
    default=None,
    type=int,
    help="Seed vertex (default n/2, or 1 if undirected).",
)
@click.pass_obj
def report(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
    start: int | None,
) -> None:
    """Run BFS, DFS, components, and a cycle check."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    method = app.settings.traversal.component_method
    app.emit(GraphService(graph).report(start, method=method))
