"""Shared pytest fixtures and test helpers for graphctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from graphctl.domain.graph import Graph
from graphctl.services.telemetry import _current_span, disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test from an empty directory with no config env vars.

    Keeps a stray graphctl.toml above the checkout from leaking in, and
    resets telemetry that a ``--verbose`` invocation may have switched on.
    """
    for var in ("GRAPHCTL_CONFIG", "GRAPHCTL_QUIET", "GRAPHCTL_JSON_OUTPUT", "GRAPHCTL_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    isolated = tmp_path / "cwd"
    isolated.mkdir()
    (isolated / "graphctl.toml").write_text("")
    monkeypatch.chdir(isolated)
    yield
    disable_telemetry()
    _current_span.set(None)


# ---------------------------------------------------------------------------
# Shared graph builders
# ---------------------------------------------------------------------------


def build_graph(n: int, pairs: list[tuple[int, int]], *, directed: bool) -> Graph:
    """Graph with *n* vertices; undirected pairs are inserted both ways."""
    g = Graph(n, directed=directed)
    for x, y in pairs:
        g.connect(x, y)
    return g


def edge_text(n: int, pairs: list[tuple[int, int]]) -> str:
    """Render the harness input format: vertex count, then one pair per line."""
    lines = [str(n), *(f"{x} {y}" for x, y in pairs)]
    return "\n".join(lines) + "\n"


@pytest.fixture
def chain() -> Graph:
    """Scenario A: directed 1 -> 2 -> 3."""
    return build_graph(3, [(1, 2), (2, 3)], directed=True)


@pytest.fixture
def directed_triangle() -> Graph:
    """Scenario B: directed 1 -> 2 -> 3 -> 1."""
    return build_graph(3, [(1, 2), (2, 3), (3, 1)], directed=True)


@pytest.fixture
def path_plus_isolated() -> Graph:
    """Scenario C: undirected 1 - 2 - 3 plus isolated vertex 4."""
    return build_graph(4, [(1, 2), (2, 3)], directed=False)


@pytest.fixture
def undirected_triangle() -> Graph:
    """Scenario D: undirected triangle 1 - 2 - 3 - 1."""
    return build_graph(3, [(1, 2), (2, 3), (3, 1)], directed=False)


@pytest.fixture
def diamond() -> Graph:
    """Scenario E: directed 1 -> 2, 1 -> 3, 2 -> 4, 3 -> 4."""
    return build_graph(4, [(1, 2), (1, 3), (2, 4), (3, 4)], directed=True)


@pytest.fixture
def edges_file(tmp_path: Path) -> Path:
    """Harness-format file for the diamond graph."""
    path = tmp_path / "diamond.txt"
    path.write_text(edge_text(4, [(1, 2), (1, 3), (2, 4), (3, 4)]))
    return path
