"""Command group: breadth-first and depth-first traversal."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from graphctl.commands._base import CtlGroup, graph_source
from graphctl.services.graph import GraphService

if TYPE_CHECKING:
    from graphctl.commands._context import AppContext

_TRAVERSE_EXAMPLES = """\
  graphctl traverse bfs edges.txt
  graphctl traverse dfs edges.txt --start 3
  cat edges.txt | graphctl --quiet traverse bfs --undirected"""


@click.group(cls=CtlGroup, examples=_TRAVERSE_EXAMPLES)
def traverse() -> None:
    """Visit every vertex in BFS or DFS order."""


@traverse.command(
    examples="""\
  graphctl traverse bfs edges.txt
  graphctl traverse bfs edges.txt --start 4 --undirected
  graphctl --json traverse bfs - --vertices 5 < pairs.txt"""
)
@graph_source
@click.option("--start", default=1, type=int, help="Seed vertex (out-of-range seeds just sweep).")
@click.pass_obj
def bfs(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
    start: int,
) -> None:
    """Breadth-first order from START, then from each unreached vertex."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    app.emit(GraphService(graph).bfs(start))


@traverse.command(
    examples="""\
  graphctl traverse dfs edges.txt
  graphctl traverse dfs edges.txt --start 2 --directed
  graphctl --quiet traverse dfs edges.txt"""
)
@graph_source
@click.option("--start", default=1, type=int, help="Seed vertex (out-of-range seeds just sweep).")
@click.pass_obj
def dfs(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
    start: int,
) -> None:
    """Depth-first order from START, then from each unreached vertex."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    app.emit(GraphService(graph).dfs(start))
