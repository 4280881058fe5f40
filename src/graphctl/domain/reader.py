"""Edge-list reader — whitespace-separated integers into a Graph.

Stream format (the harness format)::

    # optional comment lines
    4          <- vertex count, omitted when passed explicitly
    1 2
    2 3

Tokens are consumed pairwise regardless of line breaks. Each pair
``x y`` is inserted with :meth:`Graph.connect`, so undirected graphs get
both arcs.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from graphctl.domain.errors import MalformedInputError, OutOfRangeError
from graphctl.domain.graph import Graph
from graphctl.domain.types import MAX_VERTEX

DEFAULT_COMMENT_PREFIX = "#"


def tokenize(text: str, *, comment_prefix: str = DEFAULT_COMMENT_PREFIX) -> list[tuple[int, int]]:
    """Parse *text* into ``(value, line_number)`` integer tokens.

    Anything from *comment_prefix* to the end of a line is ignored.

    Raises:
        MalformedInputError: A token is not an integer.
    """
    tokens: list[tuple[int, int]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if comment_prefix:
            line = line.split(comment_prefix, 1)[0]
        for raw in line.split():
            try:
                tokens.append((int(raw), lineno))
            except ValueError:
                msg = f"line {lineno}: expected an integer, got {raw!r}"
                raise MalformedInputError(msg, line=lineno, token=raw) from None
    return tokens


def _pairs(tokens: list[tuple[int, int]]) -> list[tuple[int, int, int]]:
    """Group tokens into ``(x, y, line_of_y)`` triples."""
    if len(tokens) % 2:
        value, lineno = tokens[-1]
        msg = f"line {lineno}: dangling vertex {value} without a partner"
        raise MalformedInputError(msg, line=lineno, token=str(value))
    return [
        (tokens[i][0], tokens[i + 1][0], tokens[i + 1][1]) for i in range(0, len(tokens), 2)
    ]


def parse_edge_list(
    text: str, *, comment_prefix: str = DEFAULT_COMMENT_PREFIX
) -> list[tuple[int, int]]:
    """Parse *text* holding only ``x y`` pairs into a list of edges."""
    return [(x, y) for x, y, _ in _pairs(tokenize(text, comment_prefix=comment_prefix))]


def parse_graph(
    text: str,
    *,
    directed: bool,
    vertex_count: int | None = None,
    comment_prefix: str = DEFAULT_COMMENT_PREFIX,
    max_vertex: int = MAX_VERTEX,
) -> Graph:
    """Build a Graph from edge-list *text*.

    When *vertex_count* is None the first integer of *text* is the count.

    Raises:
        MalformedInputError: Unparseable tokens, missing count, odd pair count.
        InvalidArgumentError: Vertex count negative or above the limit.
        OutOfRangeError: A pair references a vertex outside ``[1, n]``.
    """
    tokens = tokenize(text, comment_prefix=comment_prefix)
    if vertex_count is None:
        if not tokens:
            msg = "missing vertex count"
            raise MalformedInputError(msg, line=0)
        vertex_count = tokens[0][0]
        tokens = tokens[1:]

    graph = Graph(vertex_count, directed=directed, max_vertex=max_vertex)
    for x, y, lineno in _pairs(tokens):
        try:
            graph.connect(x, y, 0)
        except OutOfRangeError as exc:
            msg = f"line {lineno}: {exc}"
            raise OutOfRangeError(msg, line=lineno, **exc.detail) from exc
    return graph


def read_graph(stream: TextIO, **kwargs: object) -> Graph:
    """Read an edge list from an open text stream. See :func:`parse_graph`."""
    text = _read_text(stream.read, getattr(stream, "name", "<stream>"))
    return parse_graph(text, **kwargs)  # type: ignore[arg-type]


def read_graph_file(path: Path | str, **kwargs: object) -> Graph:
    """Read an edge list from a file. See :func:`parse_graph`."""
    p = Path(path)
    text = _read_text(lambda: p.read_text(encoding="utf-8"), str(p))
    return parse_graph(text, **kwargs)  # type: ignore[arg-type]


def _read_text(read: Callable[[], str], source: str) -> str:
    try:
        return read()
    except UnicodeDecodeError as exc:
        msg = f"{source} is not valid text: {exc.reason} at byte {exc.start}"
        raise MalformedInputError(msg, source=source, byte=exc.start) from exc
