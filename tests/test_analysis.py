"""Tests for strongly-connected components and cycle classification."""

import pytest

from modfather.analysis import (
    CycleSeverity,
    CycleType,
    classify_severity,
    count_internal_edges,
    find_cycles,
    find_sccs,
)
from modfather.model import DependencyGraph, Edge, Node


def _graph(*edges, nodes=()):
    graph = DependencyGraph()
    for node in nodes:
        graph.add_node(Node(node, node))
    for source, target in edges:
        graph.add_edge(Edge(source, target))
    return graph


class TestFindSccs:
    def test_acyclic_graph_yields_singletons(self):
        sccs = find_sccs({"A": ["B"], "B": ["C"], "C": []})
        assert sorted(map(sorted, sccs)) == [["A"], ["B"], ["C"]]

    def test_discovery_order_is_reverse_topological(self):
        sccs = find_sccs({"A": ["B"], "B": ["C"], "C": []})
        assert sccs == [["C"], ["B"], ["A"]]

    def test_two_components(self):
        adjacency = {"A": ["B"], "B": ["A", "C"], "C": ["D"], "D": ["C"]}
        sccs = find_sccs(adjacency)
        assert sorted(sorted(s) for s in sccs) == [["A", "B"], ["C", "D"]]

    def test_unknown_targets_are_ignored(self):
        assert find_sccs({"A": ["Missing"]}) == [["A"]]

    def test_long_chain_does_not_recurse(self):
        n = 5000
        adjacency = {f"N{i}": [f"N{i + 1}"] for i in range(n)}
        adjacency[f"N{n}"] = ["N0"]
        sccs = find_sccs(adjacency)
        assert len(sccs) == 1
        assert len(sccs[0]) == n + 1


class TestFindCycles:
    def test_self_cycle(self):
        cycles = find_cycles(_graph(("A", "A")))
        assert len(cycles) == 1
        assert cycles[0].cycle_type is CycleType.SELF_CYCLE
        assert cycles[0].severity is CycleSeverity.MEDIUM
        assert cycles[0].namespaces == ["A"]

    def test_mutual_reference_is_simple_low(self):
        cycles = find_cycles(_graph(("B", "A"), ("A", "B")))
        assert len(cycles) == 1
        assert cycles[0].cycle_type is CycleType.SIMPLE
        assert cycles[0].namespaces == ["A", "B"]
        assert cycles[0].severity is CycleSeverity.LOW
        assert cycles[0].edge_count == 2

    def test_three_node_ring_is_complex_medium(self):
        cycles = find_cycles(_graph(("A", "B"), ("B", "C"), ("C", "A")))
        assert len(cycles) == 1
        assert cycles[0].cycle_type is CycleType.COMPLEX
        assert cycles[0].namespaces == ["A", "B", "C"]
        assert cycles[0].edge_count == 3
        assert cycles[0].severity is CycleSeverity.MEDIUM

    def test_dense_component_is_high(self):
        edges = [(a, b) for a in "ABC" for b in "ABC" if a != b]
        cycles = find_cycles(_graph(*edges))
        assert cycles[0].edge_count == 6
        assert cycles[0].severity is CycleSeverity.HIGH

    def test_edges_leaving_the_component_are_not_counted(self):
        cycles = find_cycles(_graph(("A", "B"), ("B", "A"), ("A", "X"), ("X", "Y")))
        assert len(cycles) == 1
        assert cycles[0].edge_count == 2

    def test_acyclic_graph_has_no_cycles(self):
        assert find_cycles(_graph(("A", "B"), ("B", "C"), nodes=["D"])) == []

    def test_graph_is_not_mutated(self):
        graph = _graph(("A", "B"), ("B", "A"))
        find_cycles(graph)
        assert set(graph.edges) == {("A", "B"), ("B", "A")}
        assert set(graph.nodes) == {"A", "B"}


class TestSeverity:
    @pytest.mark.parametrize(
        "edges,expected",
        [
            (0, CycleSeverity.LOW),
            (2, CycleSeverity.LOW),
            (3, CycleSeverity.MEDIUM),
            (5, CycleSeverity.MEDIUM),
            (6, CycleSeverity.HIGH),
            (40, CycleSeverity.HIGH),
        ],
    )
    def test_thresholds(self, edges, expected):
        assert classify_severity(edges) is expected

    def test_count_internal_edges_includes_self_loops(self):
        adjacency = {"A": ["A", "B"], "B": ["A", "C"], "C": []}
        assert count_internal_edges(adjacency, ["A", "B"]) == 3
