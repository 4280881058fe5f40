"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from graphctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from graphctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Visit orders print as space-separated ids, one component per line,
    and the report reproduces the classic harness transcript.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    d = result.data
    match result.op:
        case "bfs" | "dfs" | "topo":
            return _ids(d.get("order", []))
        case "components":
            return "\n".join(_ids(c.get("members", [])) for c in d.get("components", []))
        case "cycle":
            return "true" if d.get("has_cycle") else "false"
        case "export":
            return str(d.get("content", ""))
        case "report":
            lines = [f"bfs: {_ids(d.get('bfs', []))}", f"dfs: {_ids(d.get('dfs', []))}"]
            for comp in d.get("components", []):
                lines.append(f"component {comp.get('index')}: {_ids(comp.get('members', []))}")
            if d.get("has_cycle"):
                lines.append("Cycle detected.")
            return "\n".join(lines)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _ids(vertices: list[int]) -> str:
    return " ".join(str(v) for v in vertices)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="graph.ok")
    op = Text(f"  {result.op}", style="graph.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="graph.key")
    if key == "start":
        v = Text(str(value), style="graph.vertex")
    elif key.endswith("count"):
        v = Text(str(value), style="graph.count")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _summary_fields(console: Console, result: ServiceResult) -> None:
    d = result.data
    kind = "directed" if d.get("directed") else "undirected"
    _field(console, "graph", f"{kind}, {d.get('vertex_count', 0)} vertices")
    _field(console, "edge_count", d.get("edge_count", 0))


def _order_line(console: Console, label: str, vertices: list[int]) -> None:
    line = Text(f"  {label}: ", style="graph.key")
    line.append(_ids(vertices), style="graph.vertex")
    console.print(line, soft_wrap=True)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations")
    if annotations:
        line += f"  ({', '.join(f'{k}={v}' for k, v in annotations.items())})"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _component_table(components: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", style="graph.count", justify="right", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Members", style="graph.vertex")
    for comp in components:
        table.add_row(
            str(comp.get("index", "")),
            str(comp.get("size", 0)),
            _ids(comp.get("members", [])),
        )
    return table


def _cycle_text(has_cycle: bool) -> Text:
    if has_cycle:
        return Text("Cycle detected.", style="graph.cycle")
    return Text("No cycle.", style="graph.acyclic")


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="graph.error")
    op = Text(f"  {result.op}", style="graph.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_order(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render bfs/dfs/topo visit orders."""
    _status_line(console, result)
    _summary_fields(console, result)
    if "start" in result.data:
        _field(console, "start", result.data["start"])
    _field(console, "count", result.data.get("count", 0))
    _order_line(console, "order", result.data.get("order", []))
    if verbose:
        _render_meta(console, result)


def _render_components(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render the component partition as a table."""
    _status_line(console, result)
    _summary_fields(console, result)
    _field(console, "method", result.data.get("method", ""))
    components = result.data.get("components", [])
    console.print()
    console.print(_component_table(components))
    console.print(f"\n{result.data.get('count', len(components))} components")
    if verbose:
        _render_meta(console, result)


def _render_cycle(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the cycle check verdict."""
    _status_line(console, result)
    _summary_fields(console, result)
    _field(console, "strategy", result.data.get("strategy", ""))
    if "processed" in result.data:
        _field(console, "processed", result.data["processed"])
    console.print(Text("  "), _cycle_text(bool(result.data.get("has_cycle"))))
    if verbose:
        _render_meta(console, result)


def _render_report(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the full harness run: orders, components, cycle verdict."""
    d = result.data
    _status_line(console, result)
    _summary_fields(console, result)
    _field(console, "start", d.get("start", ""))
    _order_line(console, "bfs", d.get("bfs", []))
    _order_line(console, "dfs", d.get("dfs", []))
    console.print()
    console.print(_component_table(d.get("components", [])))
    console.print()
    console.print(_cycle_text(bool(d.get("has_cycle"))))
    if verbose:
        _render_meta(console, result)


def _render_export(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render export results: the serialized text, or where it was written."""
    d = result.data
    if "output_file" in d:
        _status_line(console, result)
        for key in ("output_file", "format", "node_count", "link_count"):
            if key in d:
                _field(console, key, d[key])
        if verbose:
            _render_meta(console, result)
        return
    # Serialized content goes out verbatim; Rich must not wrap or mark it up.
    console.out(str(d.get("content", "")), highlight=False)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback: status line plus key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    "bfs": _render_order,
    "dfs": _render_order,
    "topo": _render_order,
    "components": _render_components,
    "cycle": _render_cycle,
    "report": _render_report,
    "export": _render_export,
}
