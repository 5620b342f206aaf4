"""Tests for module suggestions, cycle-breaking advice and report assembly."""

import pytest

from modfather.analysis import Cycle, CycleSeverity, CycleType
from modfather.model import DependencyGraph, Edge, Node
from modfather.recommender import (
    CYCLE_MARKER,
    ModuleRecommender,
    cohesion,
    cycle_breaking_suggestions,
    top_level_segment,
)


def _namespace_graph(classes, edges):
    graph = DependencyGraph()
    for namespace, count in classes.items():
        graph.add_node(
            Node(namespace, namespace)
            .with_metadata("type", "internal")
            .with_metadata("classes", str(count))
        )
    for source, target in edges:
        graph.add_edge(Edge(source, target))
    return graph


@pytest.fixture
def recommender():
    graph = _namespace_graph(
        {
            "App\\Models": 4,
            "App\\Http": 2,
            "Billing\\Invoices": 3,
            "Billing\\Payments": 1,
            "Tools": 1,
            "\\": 2,
        },
        [
            ("App\\Http", "App\\Models"),
            ("App\\Models", "Billing\\Invoices"),
            ("Billing\\Invoices", "App\\Models"),
            ("Billing\\Invoices", "Billing\\Payments"),
            ("\\", "Tools"),
        ],
    )
    return ModuleRecommender(graph)


class TestMetrics:
    def test_metrics_from_graph(self, recommender):
        models = recommender.metrics["App\\Models"]
        assert models.class_count == 4
        assert models.incoming_edges == 2
        assert models.outgoing_edges == 1

    def test_missing_or_bad_class_count(self):
        graph = DependencyGraph()
        graph.add_node(Node("A", "A").with_metadata("classes", "many"))
        graph.add_node(Node("B", "B"))
        rec = ModuleRecommender(graph)
        assert rec.metrics["A"].class_count == 0
        assert rec.metrics["B"].class_count == 0


class TestSuggestModules:
    def test_grouped_by_top_level_segment(self, recommender):
        modules = {m.name.split()[0]: m for m in recommender.suggest_modules()}
        assert set(modules) == {"App", "Billing", "Tools"}
        assert sorted(modules["App"].namespaces) == ["App\\Http", "App\\Models"]
        assert modules["App"].class_count == 6
        assert modules["Billing"].class_count == 4

    def test_global_namespace_is_excluded(self, recommender):
        namespaces = [ns for m in recommender.suggest_modules() for ns in m.namespaces]
        assert "\\" not in namespaces

    def test_internal_and_external_counts(self, recommender):
        modules = {m.name.split()[0]: m for m in recommender.suggest_modules()}
        assert modules["App"].internal_dependencies == 1
        assert modules["App"].external_dependencies == 1
        assert modules["App"].cohesion_score == pytest.approx(0.5)
        assert modules["Billing"].internal_dependencies == 1
        assert modules["Billing"].external_dependencies == 1

    def test_zero_edge_module_has_full_cohesion(self, recommender):
        modules = {m.name.split()[0]: m for m in recommender.suggest_modules()}
        assert modules["Tools"].cohesion_score == 1.0

    def test_cycle_flag_in_name(self, recommender):
        modules = {m.name.split()[0]: m for m in recommender.suggest_modules()}
        assert modules["App"].name == f"App {CYCLE_MARKER}"
        assert modules["App"].has_cycles
        assert modules["Tools"].name == "Tools"
        assert not modules["Tools"].has_cycles

    def test_sorted_by_cohesion_with_stable_ties(self, recommender):
        names = [m.name.split()[0] for m in recommender.suggest_modules()]
        # App and Billing tie at 0.5 and keep discovery order.
        assert names == ["Tools", "App", "Billing"]


class TestCycleBreaking:
    def test_self_cycle_suggestions(self):
        cycle = Cycle(["App"], CycleType.SELF_CYCLE, CycleSeverity.MEDIUM)
        suggestions = cycle_breaking_suggestions(cycle)
        assert len(suggestions) == 3
        assert "'App'" in suggestions[0]
        assert "splitting" in suggestions[1]

    def test_simple_cycle_names_both_namespaces(self):
        cycle = Cycle(["A", "B"], CycleType.SIMPLE, CycleSeverity.LOW)
        suggestions = cycle_breaking_suggestions(cycle)
        assert len(suggestions) == 4
        assert suggestions[0] == "Cycle between: A ↔ B"
        assert suggestions[3].startswith("Option 3")
        assert "make B depend on abstractions from A" in suggestions[3]

    def test_complex_cycle_has_four_remedies(self):
        cycle = Cycle(["A", "B", "C"], CycleType.COMPLEX, CycleSeverity.MEDIUM)
        suggestions = cycle_breaking_suggestions(cycle)
        assert "A → B → C → [back to start]" in suggestions[0]
        assert [s.split(":")[0] for s in suggestions[1:]] == [
            "Option 1", "Option 2", "Option 3", "Option 4",
        ]

    def test_impact_follows_severity(self, recommender):
        cycles = [
            Cycle(["A"], CycleType.SELF_CYCLE, CycleSeverity.MEDIUM),
            Cycle(["B", "C"], CycleType.SIMPLE, CycleSeverity.LOW),
            Cycle(["D", "E", "F"], CycleType.COMPLEX, CycleSeverity.HIGH),
        ]
        recs = recommender.recommend_cycle_breaking(cycles)
        assert [r.impact.split(":")[0] for r in recs] == [
            "Medium impact", "Low impact", "High impact",
        ]
        assert recs[1].cycle is cycles[1]


class TestReport:
    def test_generate_report(self, recommender):
        report = recommender.generate_report()
        assert report.total_namespaces == 6
        assert report.namespaces_in_cycles == 2
        assert len(report.cycles) == 1
        assert report.cycles[0].namespaces == ["App\\Models", "Billing\\Invoices"]
        assert len(report.cycle_breaking_recommendations) == 1
        assert len(report.module_suggestions) == 3

    def test_acyclic_report(self):
        graph = _namespace_graph({"A\\X": 1, "A\\Y": 1}, [("A\\X", "A\\Y")])
        report = ModuleRecommender(graph).generate_report()
        assert report.cycles == []
        assert report.namespaces_in_cycles == 0
        assert report.module_suggestions[0].cohesion_score == 1.0


def test_helpers():
    assert top_level_segment("App\\Models\\Sub") == "App"
    assert top_level_segment("App") == "App"
    assert cohesion(0, 0) == 1.0
    assert cohesion(3, 1) == 0.75
