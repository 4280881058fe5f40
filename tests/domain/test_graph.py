"""Tests for the Graph engine — construction, traversal, cycles, components."""

from __future__ import annotations

import pytest

from graphctl.domain.errors import (
    CycleError,
    GraphError,
    InvalidArgumentError,
    OutOfRangeError,
)
from graphctl.domain.graph import Graph
from graphctl.domain.types import MAX_VERTEX, TraversalMethod
from tests.conftest import build_graph


def _assert_processed_implies_discovered(g: Graph) -> None:
    for v in g.vertices():
        if g.is_processed(v):
            assert g.is_discovered(v), v


def _assert_clean(g: Graph) -> None:
    for v in g.vertices():
        assert not g.is_discovered(v)
        assert not g.is_processed(v)


# ---------------------------------------------------------------------------
# Construction & mutation
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_basic(self) -> None:
        g = Graph(5, directed=True)
        assert g.vertex_count == 5
        assert g.directed is True
        assert g.edge_count == 0
        assert list(g.vertices()) == [1, 2, 3, 4, 5]
        assert len(g) == 5

    def test_default_is_undirected(self) -> None:
        assert Graph(2).directed is False

    def test_zero_vertices_allowed(self) -> None:
        g = Graph(0, directed=True)
        assert list(g.vertices()) == []
        assert g.has_cycle() is False
        assert g.bfs(1) == []

    def test_max_vertex_allowed(self) -> None:
        assert Graph(MAX_VERTEX).vertex_count == MAX_VERTEX

    def test_over_max_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            Graph(MAX_VERTEX + 1)
        assert exc_info.value.code == "INVALID_ARGUMENT"
        assert exc_info.value.detail["vertex_count"] == MAX_VERTEX + 1

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Graph(-1)

    def test_lower_limit_respected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Graph(11, max_vertex=10)

    def test_limit_cannot_exceed_engine_max(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Graph(MAX_VERTEX + 1, max_vertex=MAX_VERTEX * 2)

    @pytest.mark.parametrize("bad", [2.5, "3", True, None])
    def test_non_integer_rejected(self, bad: object) -> None:
        with pytest.raises(InvalidArgumentError):
            Graph(bad)  # type: ignore[arg-type]

    def test_errors_share_base_and_builtin(self) -> None:
        with pytest.raises(GraphError):
            Graph(-5)
        with pytest.raises(ValueError):
            Graph(-5)

    def test_fresh_graph_is_unvisited(self) -> None:
        _assert_clean(Graph(6, directed=True))

    def test_repr(self) -> None:
        g = Graph(2, directed=True)
        g.add_edge(1, 2)
        assert repr(g) == "Graph(vertices=2, edges=1, directed)"

    def test_contains(self) -> None:
        g = Graph(3)
        assert 1 in g
        assert 3 in g
        assert 0 not in g
        assert 4 not in g
        assert True not in g


class TestAddEdge:
    def test_directed_degrees(self) -> None:
        g = Graph(3, directed=True)
        g.add_edge(1, 2)
        g.add_edge(1, 3)
        g.add_edge(2, 3)
        assert g.outdegree(1) == 2
        assert g.indegree(3) == 2
        assert g.indegree(1) == 0
        assert g.edge_count == 3

    def test_degree_sums_match_edge_count(self) -> None:
        g = build_graph(5, [(1, 2), (2, 3), (3, 1), (4, 5), (5, 5), (1, 2)], directed=True)
        total_out = sum(g.outdegree(v) for v in g.vertices())
        total_in = sum(g.indegree(v) for v in g.vertices())
        assert total_out == total_in == g.edge_count == 6

    def test_undirected_degrees_untouched(self) -> None:
        g = Graph(2, directed=False)
        g.add_edge(1, 2)
        assert g.outdegree(1) == 0
        assert g.indegree(2) == 0

    def test_add_edge_does_not_symmetrize(self) -> None:
        g = Graph(2, directed=False)
        g.add_edge(1, 2)
        assert g.neighbors(1) == [2]
        assert g.neighbors(2) == []

    def test_connect_symmetrizes_undirected(self) -> None:
        g = Graph(2, directed=False)
        g.connect(1, 2)
        assert g.neighbors(1) == [2]
        assert g.neighbors(2) == [1]
        assert g.edge_count == 2

    def test_connect_directed_is_single_arc(self) -> None:
        g = Graph(2, directed=True)
        g.connect(1, 2)
        assert g.neighbors(2) == []
        assert g.edge_count == 1

    def test_duplicates_and_self_loops_kept(self) -> None:
        g = Graph(2, directed=True)
        g.add_edge(1, 2)
        g.add_edge(1, 2)
        g.add_edge(2, 2)
        assert g.neighbors(1) == [2, 2]
        assert g.neighbors(2) == [2]

    def test_insertion_order_preserved(self) -> None:
        g = Graph(4, directed=True)
        for y in (4, 2, 3):
            g.add_edge(1, y)
        assert g.neighbors(1) == [4, 2, 3]

    def test_weight_carried(self) -> None:
        g = Graph(2, directed=True)
        g.add_edge(1, 2, 7)
        assert list(g.edges()) == [(1, 2, 7)]

    @pytest.mark.parametrize(("x", "y"), [(0, 1), (1, 0), (4, 1), (1, 4), (-1, 2)])
    def test_out_of_range(self, x: int, y: int) -> None:
        g = Graph(3, directed=True)
        with pytest.raises(OutOfRangeError) as exc_info:
            g.add_edge(x, y)
        assert exc_info.value.code == "OUT_OF_RANGE"
        assert g.edge_count == 0

    def test_connect_out_of_range_leaves_no_half_edge(self) -> None:
        g = Graph(2, directed=False)
        with pytest.raises(OutOfRangeError):
            g.connect(1, 3)
        assert g.edge_count == 0

    def test_out_of_range_is_index_error(self) -> None:
        with pytest.raises(IndexError):
            Graph(1).add_edge(1, 2)


# ---------------------------------------------------------------------------
# BFS
# ---------------------------------------------------------------------------


class TestBfs:
    def test_diamond_visits_join_once(self, diamond: Graph) -> None:
        order = diamond.bfs(1)
        assert order == [1, 2, 3, 4]
        assert order.count(4) == 1

    def test_level_order(self) -> None:
        g = build_graph(6, [(1, 2), (1, 3), (2, 4), (2, 5), (3, 6)], directed=True)
        assert g.bfs(1) == [1, 2, 3, 4, 5, 6]

    def test_sweeps_disconnected(self, path_plus_isolated: Graph) -> None:
        assert path_plus_isolated.bfs(1) == [1, 2, 3, 4]

    def test_seed_then_ascending_sweep(self) -> None:
        g = build_graph(5, [(3, 4), (1, 2)], directed=True)
        assert g.bfs(3) == [3, 4, 1, 2, 5]

    def test_out_of_range_start_just_sweeps(self, chain: Graph) -> None:
        assert chain.bfs(99) == [1, 2, 3]
        chain.unvisit()
        assert chain.bfs(0) == [1, 2, 3]

    def test_directed_respects_direction(self, chain: Graph) -> None:
        assert chain.bfs(3) == [3, 1, 2]

    def test_marks_everything(self, diamond: Graph) -> None:
        diamond.bfs(1)
        for v in diamond.vertices():
            assert diamond.is_discovered(v)
            assert diamond.is_processed(v)

    def test_second_run_without_reset_is_empty(self, diamond: Graph) -> None:
        assert diamond.bfs(1)
        assert diamond.bfs(1) == []
        assert diamond.bfs(3) == []

    def test_lazy_iteration_keeps_invariant(self, diamond: Graph) -> None:
        it = diamond.iter_bfs(1)
        assert next(it) == 1
        _assert_processed_implies_discovered(diamond)
        assert diamond.is_discovered(2)
        assert diamond.is_discovered(3)
        assert not diamond.is_processed(2)


# ---------------------------------------------------------------------------
# DFS
# ---------------------------------------------------------------------------


class TestDfs:
    def test_depth_first_order(self) -> None:
        g = build_graph(6, [(1, 2), (1, 3), (2, 4), (2, 5), (3, 6)], directed=True)
        assert g.dfs(1) == [1, 2, 4, 5, 3, 6]

    def test_diamond(self, diamond: Graph) -> None:
        assert diamond.dfs(1) == [1, 2, 4, 3]

    def test_undirected(self, path_plus_isolated: Graph) -> None:
        assert path_plus_isolated.dfs(2) == [2, 1, 3, 4]

    def test_second_run_without_reset_is_empty(self, chain: Graph) -> None:
        assert chain.dfs(1) == [1, 2, 3]
        assert chain.dfs(1) == []

    def test_reset_allows_rerun(self, chain: Graph) -> None:
        first = chain.dfs(1)
        chain.unvisit()
        assert chain.dfs(1) == first

    def test_deep_chain_no_recursion_limit(self) -> None:
        n = MAX_VERTEX
        g = build_graph(n, [(i, i + 1) for i in range(1, n)], directed=True)
        order = g.dfs(1)
        assert order == list(range(1, n + 1))

    def test_processed_after_children(self) -> None:
        g = build_graph(3, [(1, 2), (2, 3)], directed=True)
        it = g.iter_dfs(1)
        assert next(it) == 1
        assert next(it) == 2
        assert not g.is_processed(1)
        assert not g.is_processed(2)
        assert next(it) == 3
        _assert_processed_implies_discovered(g)
        assert list(it) == []
        assert g.is_processed(1)

    def test_self_loop_ignored(self) -> None:
        g = build_graph(2, [(1, 1), (1, 2)], directed=True)
        assert g.dfs(1) == [1, 2]


class TestTraversalEquivalence:
    @pytest.mark.parametrize("start", [1, 2, 3, 4])
    def test_bfs_and_dfs_cover_same_set(self, diamond: Graph, start: int) -> None:
        bfs_order = diamond.bfs(start)
        diamond.unvisit()
        dfs_order = diamond.dfs(start)
        assert set(bfs_order) == set(dfs_order) == set(diamond.vertices())
        assert len(bfs_order) == len(dfs_order) == diamond.vertex_count

    def test_traverse_dispatch(self, diamond: Graph) -> None:
        assert diamond.traverse(1, "bfs") == [1, 2, 3, 4]
        diamond.unvisit()
        assert diamond.traverse(1, TraversalMethod.DFS) == [1, 2, 4, 3]

    def test_traverse_unknown_method(self, diamond: Graph) -> None:
        with pytest.raises(InvalidArgumentError):
            diamond.traverse(1, "random")


class TestUnvisit:
    def test_clears_state(self, diamond: Graph) -> None:
        diamond.dfs(1)
        diamond.unvisit()
        _assert_clean(diamond)

    def test_keeps_structure(self, diamond: Graph) -> None:
        before = list(diamond.edges())
        indegrees = [diamond.indegree(v) for v in diamond.vertices()]
        diamond.bfs(1)
        diamond.unvisit()
        assert list(diamond.edges()) == before
        assert [diamond.indegree(v) for v in diamond.vertices()] == indegrees


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class TestComponents:
    def test_scenario_c(self, path_plus_isolated: Graph) -> None:
        assert path_plus_isolated.find_components() == [[1, 2, 3], [4]]

    def test_bfs_method(self, path_plus_isolated: Graph) -> None:
        assert path_plus_isolated.find_components("bfs") == [[1, 2, 3], [4]]

    def test_partition_covers_all_vertices(self) -> None:
        g = build_graph(8, [(1, 5), (5, 7), (2, 3), (6, 8)], directed=False)
        groups = g.find_components()
        flat = [v for group in groups for v in group]
        assert sorted(flat) == list(g.vertices())
        assert len(flat) == len(set(flat))
        assert [sorted(grp) for grp in groups] == [[1, 5, 7], [2, 3], [4], [6, 8]]

    def test_resets_before_running(self, path_plus_isolated: Graph) -> None:
        path_plus_isolated.bfs(1)
        assert path_plus_isolated.find_components() == [[1, 2, 3], [4]]

    def test_directed_follows_outgoing_only(self) -> None:
        g = build_graph(3, [(2, 1), (3, 2)], directed=True)
        assert g.find_components() == [[1], [2], [3]]

    def test_unknown_method(self, chain: Graph) -> None:
        with pytest.raises(InvalidArgumentError):
            chain.find_components("sideways")

    def test_empty_graph(self) -> None:
        assert Graph(0).find_components() == []


# ---------------------------------------------------------------------------
# Cycles
# ---------------------------------------------------------------------------


class TestUndirectedCycle:
    def test_scenario_d_triangle(self, undirected_triangle: Graph) -> None:
        assert undirected_triangle.has_cycle() is True

    def test_path_is_acyclic(self, path_plus_isolated: Graph) -> None:
        assert path_plus_isolated.has_cycle() is False

    def test_tree_is_acyclic(self) -> None:
        g = build_graph(7, [(1, 2), (1, 3), (2, 4), (2, 5), (3, 6), (3, 7)], directed=False)
        assert g.has_cycle() is False

    def test_cycle_in_later_component(self) -> None:
        g = build_graph(6, [(1, 2), (4, 5), (5, 6), (6, 4)], directed=False)
        assert g.has_cycle() is True

    def test_self_loop_is_cycle(self) -> None:
        g = build_graph(2, [(1, 2), (2, 2)], directed=False)
        assert g.has_cycle() is True

    def test_parallel_edges_are_cycle(self) -> None:
        g = build_graph(2, [(1, 2), (1, 2)], directed=False)
        assert g.has_cycle() is True

    def test_repeatable(self, undirected_triangle: Graph) -> None:
        assert undirected_triangle.has_cycle() is True
        assert undirected_triangle.has_cycle() is True

    def test_leaves_invariant(self, undirected_triangle: Graph) -> None:
        undirected_triangle.has_cycle()
        _assert_processed_implies_discovered(undirected_triangle)


class TestDirectedCycle:
    def test_scenario_a_acyclic(self, chain: Graph) -> None:
        assert chain.has_cycle() is False

    def test_scenario_b_cycle(self, directed_triangle: Graph) -> None:
        assert directed_triangle.has_cycle() is True

    def test_self_loop(self) -> None:
        g = build_graph(2, [(1, 2), (2, 2)], directed=True)
        assert g.has_cycle() is True

    def test_two_cycle(self) -> None:
        g = build_graph(2, [(1, 2), (2, 1)], directed=True)
        assert g.has_cycle() is True

    def test_diamond_acyclic(self, diamond: Graph) -> None:
        assert diamond.has_cycle() is False

    def test_idempotent(self, directed_triangle: Graph, chain: Graph) -> None:
        assert [directed_triangle.has_cycle() for _ in range(3)] == [True] * 3
        assert [chain.has_cycle() for _ in range(3)] == [False] * 3

    def test_indegrees_preserved(self, diamond: Graph) -> None:
        before = [diamond.indegree(v) for v in diamond.vertices()]
        diamond.has_cycle()
        assert [diamond.indegree(v) for v in diamond.vertices()] == before

    def test_does_not_touch_visitation(self, chain: Graph) -> None:
        chain.has_cycle()
        _assert_clean(chain)


class TestTopologicalOrder:
    def test_scenario_a(self, chain: Graph) -> None:
        assert chain.topological_order() == [1, 2, 3]

    def test_valid_linearization(self) -> None:
        pairs = [(5, 3), (5, 1), (3, 2), (1, 2), (2, 4), (6, 4), (6, 1)]
        g = build_graph(6, pairs, directed=True)
        order = g.topological_order()
        assert sorted(order) == list(g.vertices())
        position = {v: i for i, v in enumerate(order)}
        for x, y, _ in g.edges():
            assert position[x] < position[y]

    def test_isolated_vertices_included(self) -> None:
        g = build_graph(4, [(2, 3)], directed=True)
        assert sorted(g.topological_order()) == [1, 2, 3, 4]

    def test_cycle_raises(self, directed_triangle: Graph) -> None:
        with pytest.raises(CycleError) as exc_info:
            directed_triangle.topological_order()
        assert exc_info.value.code == "CYCLE_DETECTED"
        assert exc_info.value.detail["unresolved"] == [1, 2, 3]

    def test_partial_cycle_reports_unresolved(self) -> None:
        g = build_graph(4, [(1, 2), (2, 3), (3, 2), (3, 4)], directed=True)
        order, cycle = g.kahn()
        assert cycle is True
        assert order == [1]

    def test_undirected_rejected(self, path_plus_isolated: Graph) -> None:
        with pytest.raises(InvalidArgumentError):
            path_plus_isolated.topological_order()

    def test_lifo_seed_order(self) -> None:
        g = Graph(3, directed=True)
        assert g.topological_order() == [3, 2, 1]
