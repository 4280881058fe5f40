"""Command group: components, cycle detection, topological order."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from graphctl.commands._base import CtlGroup, graph_source
from graphctl.domain.types import TraversalMethod
from graphctl.services.graph import GraphService

if TYPE_CHECKING:
    from graphctl.commands._context import AppContext

_ANALYZE_EXAMPLES = """\
  graphctl analyze components edges.txt --undirected
  graphctl analyze cycle edges.txt
  graphctl analyze topo edges.txt --directed"""


@click.group(cls=CtlGroup, examples=_ANALYZE_EXAMPLES)
def analyze() -> None:
    """Inspect graph structure."""


@analyze.command(
    examples="""\
  graphctl analyze components edges.txt --undirected
  graphctl analyze components edges.txt --method bfs
  graphctl --json analyze components edges.txt"""
)
@graph_source
@click.option(
    "--method",
    type=click.Choice([m.value for m in TraversalMethod]),
    default=None,
    help="Traversal that grows each component (default from [traversal]).",
)
@click.pass_obj
def components(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
    method: str | None,
) -> None:
    """Partition vertices into components."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    method = method or app.settings.traversal.component_method
    app.emit(GraphService(graph).components(method))


@analyze.command(
    examples="""\
  graphctl analyze cycle edges.txt
  graphctl analyze cycle edges.txt --undirected
  graphctl --quiet analyze cycle edges.txt"""
)
@graph_source
@click.pass_obj
def cycle(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
) -> None:
    """Detect whether the graph has a cycle."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    app.emit(GraphService(graph).cycle())


@analyze.command(
    examples="""\
  graphctl analyze topo edges.txt
  graphctl --quiet analyze topo edges.txt --directed"""
)
@graph_source
@click.pass_obj
def topo(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
) -> None:
    """Topological order of a directed acyclic graph."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    app.emit(GraphService(graph).topo())
