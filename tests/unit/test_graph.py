"""Tests for BFS, DFS and Dijkstra over the undirected weighted graph."""

import math

from algotrace.algorithms import graph
from algotrace.builders import GraphBuilder, seed_graph


def _make_split_graph():
    """A-B-C connected, X-Y connected, no edge between the two groups."""
    builder = GraphBuilder()
    for node_id in ("A", "B", "C", "X", "Y"):
        builder.add_node(node_id)
    builder.add_edge("A", "B", 1).add_edge("B", "C", 2).add_edge("X", "Y", 1)
    return builder.build()


class TestAdjacency:
    def test_edges_are_mirrored(self):
        adj = seed_graph().adjacency()
        assert adj["A"] == [("B", 4), ("E", 2)]
        assert adj["E"] == [("A", 2), ("D", 5), ("B", 7)]


class TestBFS:
    def test_visits_all_five_nodes_once(self):
        result = graph.bfs(seed_graph(), "A")
        assert result.value == ["A", "B", "E", "C", "D"]

    def test_b_and_e_enqueued_from_a(self):
        result = graph.bfs(seed_graph(), "A")
        enqueued = [s.label for s in result.trace if s.label.startswith("enqueue")]
        assert enqueued[:2] == ["enqueue B", "enqueue E"]

    def test_unreachable_nodes_never_appear(self):
        result = graph.bfs(_make_split_graph(), "A")
        assert result.value == ["A", "B", "C"]

    def test_unknown_start(self):
        g = seed_graph()
        result = graph.bfs(g, "Z")
        assert not result.ok
        assert result.structure is g


class TestDFS:
    def test_visits_neighbors_in_adjacency_order(self):
        result = graph.dfs(seed_graph(), "A")
        assert result.value == ["A", "B", "C", "D", "E"]

    def test_each_reachable_node_once(self):
        result = graph.dfs(_make_split_graph(), "Y")
        assert result.value == ["Y", "X"]


class TestDijkstra:
    def test_shortest_path_a_to_d(self):
        g = seed_graph()
        result = graph.dijkstra(g, "A", "D")
        path, distance = result.value
        assert path == ["A", "E", "D"]
        assert distance == 7
        assert sum(g.edge_weight(a, b) for a, b in zip(path, path[1:])) == distance

    def test_path_edges_are_highlighted(self):
        result = graph.dijkstra(seed_graph(), "A", "D")
        labels = [s.label for s in result.trace if s.label.startswith("path edge")]
        assert labels == ["path edge A -> E", "path edge E -> D"]

    def test_start_equals_end(self):
        result = graph.dijkstra(seed_graph(), "C", "C")
        assert result.value == (["C"], 0)

    def test_unreachable_end(self):
        result = graph.dijkstra(_make_split_graph(), "A", "X")
        path, distance = result.value
        assert path == []
        assert math.isinf(distance)
        assert result.trace.last.label == "no path"

    def test_path_cost_matches_distance_for_every_target(self):
        g = seed_graph()
        for target in g.node_ids():
            path, distance = graph.dijkstra(g, "B", target).value
            assert path[0] == "B" and path[-1] == target
            assert sum(g.edge_weight(a, b) for a, b in zip(path, path[1:])) == distance
