"""Standalone command: serialize a graph via NetworkX."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import click

from graphctl.commands._base import CtlCommand, graph_source
from graphctl.infrastructure.graph.engine import ExportFormat
from graphctl.services.graph import GraphService

if TYPE_CHECKING:
    from graphctl.commands._context import AppContext


@click.command(
    cls=CtlCommand,
    examples="""\
  graphctl export edges.txt
  graphctl export edges.txt --format graphml -o graph.graphml
  graphctl export edges.txt --format adjlist --undirected"""
)
@graph_source
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in ExportFormat]),
    default=None,
    help="Output format (default from [export]).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to a file instead of stdout.",
)
@click.pass_obj
def export(
    app: AppContext,
    source: TextIO,
    directed: bool | None,
    vertex_count: int | None,
    fmt: str | None,
    output: Path | None,
) -> None:
    """Serialize the graph as node-link JSON, GraphML, or an adjacency list."""
    graph = app.load_graph(source, directed=directed, vertex_count=vertex_count)
    result = GraphService(graph).export(fmt or app.settings.export.default_format)
    if result.ok and output is not None:
        output.write_text(result.data["content"] + "\n", encoding="utf-8")
        data = {k: v for k, v in result.data.items() if k != "content"}
        data["output_file"] = str(output)
        result = result.model_copy(update={"data": data})
    app.emit(result)
