"""Module grouping suggestions and cycle-breaking advice for namespace graphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from modfather.analysis import Cycle, CycleSeverity, CycleType, find_cycles
from modfather.extractors.php.names import NAMESPACE_SEPARATOR
from modfather.model import DependencyGraph

logger = logging.getLogger(__name__)

CYCLE_MARKER = "⚠️ (contains cycles)"

_IMPACT = {
    CycleSeverity.LOW: (
        "Low impact: Few dependencies involved, should be straightforward to resolve"
    ),
    CycleSeverity.MEDIUM: (
        "Medium impact: Moderate coupling, may require interface extraction "
        "or class movement"
    ),
    CycleSeverity.HIGH: (
        "High impact: Tight coupling detected, likely requires significant "
        "refactoring or module merging"
    ),
}


@dataclass
class NamespaceMetrics:
    class_count: int = 0
    incoming_edges: int = 0
    outgoing_edges: int = 0


@dataclass
class ModuleSuggestion:
    """A candidate module: every namespace sharing one top-level segment."""

    name: str
    namespaces: list[str]
    class_count: int
    internal_dependencies: int
    external_dependencies: int
    cohesion_score: float
    has_cycles: bool = False


@dataclass
class CycleBreakingRecommendation:
    cycle: Cycle
    suggestions: list[str]
    impact: str


@dataclass
class ModularizationReport:
    total_namespaces: int
    namespaces_in_cycles: int
    cycles: list[Cycle] = field(default_factory=list)
    cycle_breaking_recommendations: list[CycleBreakingRecommendation] = field(
        default_factory=list
    )
    module_suggestions: list[ModuleSuggestion] = field(default_factory=list)


def top_level_segment(namespace: str) -> str:
    return namespace.split(NAMESPACE_SEPARATOR, 1)[0]


def cohesion(internal: int, external: int) -> float:
    total = internal + external
    if total == 0:
        return 1.0
    return internal / total


class ModuleRecommender:
    """Analyze a namespace-level graph without mutating it.

    The graph's nodes are namespaces whose ``classes`` metadata holds the
    number of declarations they contain.
    """

    def __init__(self, graph: DependencyGraph) -> None:
        self._graph = graph
        self._adjacency = graph.adjacency()
        self.metrics: dict[str, NamespaceMetrics] = {}

        for ns_id, node in graph.nodes.items():
            try:
                class_count = int(node.metadata.get("classes", 0))
            except ValueError:
                class_count = 0
            self.metrics[ns_id] = NamespaceMetrics(class_count=class_count)

        for source, target in graph.edges:
            self.metrics[source].outgoing_edges += 1
            self.metrics[target].incoming_edges += 1

    def detect_cycles(self) -> list[Cycle]:
        return find_cycles(self._graph)

    def recommend_cycle_breaking(
        self, cycles: list[Cycle]
    ) -> list[CycleBreakingRecommendation]:
        return [
            CycleBreakingRecommendation(
                cycle=cycle,
                suggestions=cycle_breaking_suggestions(cycle),
                impact=_IMPACT[cycle.severity],
            )
            for cycle in cycles
        ]

    def suggest_modules(self, cycles: list[Cycle] | None = None) -> list[ModuleSuggestion]:
        """Group namespaces by top-level segment, best cohesion first."""
        if cycles is None:
            cycles = self.detect_cycles()
        cyclic = {ns for cycle in cycles for ns in cycle.namespaces}

        groups: dict[str, list[str]] = {}
        for namespace in self.metrics:
            if namespace == NAMESPACE_SEPARATOR:
                continue
            groups.setdefault(top_level_segment(namespace), []).append(namespace)

        suggestions: list[ModuleSuggestion] = []
        for top_level, namespaces in groups.items():
            internal, external = self._module_dependencies(namespaces)
            has_cycles = any(ns in cyclic for ns in namespaces)
            suggestions.append(
                ModuleSuggestion(
                    name=f"{top_level} {CYCLE_MARKER}" if has_cycles else top_level,
                    namespaces=namespaces,
                    class_count=sum(self.metrics[ns].class_count for ns in namespaces),
                    internal_dependencies=internal,
                    external_dependencies=external,
                    cohesion_score=cohesion(internal, external),
                    has_cycles=has_cycles,
                )
            )

        # sorted() is stable: equal scores keep discovery order.
        return sorted(suggestions, key=lambda s: s.cohesion_score, reverse=True)

    def _module_dependencies(self, namespaces: list[str]) -> tuple[int, int]:
        members = set(namespaces)
        internal = external = 0
        for namespace in namespaces:
            for target in self._adjacency.get(namespace, ()):
                if target in members:
                    internal += 1
                else:
                    external += 1
        return internal, external

    def generate_report(self) -> ModularizationReport:
        cycles = self.detect_cycles()
        logger.debug("Cycles detected: %d", len(cycles))
        return ModularizationReport(
            total_namespaces=len(self.metrics),
            namespaces_in_cycles=len({ns for c in cycles for ns in c.namespaces}),
            cycles=cycles,
            cycle_breaking_recommendations=self.recommend_cycle_breaking(cycles),
            module_suggestions=self.suggest_modules(cycles),
        )


def cycle_breaking_suggestions(cycle: Cycle) -> list[str]:
    """Return the advisory remedies for *cycle*, keyed by its shape."""
    names = cycle.namespaces
    if cycle.cycle_type is CycleType.SELF_CYCLE:
        return [
            f"Namespace '{names[0]}' has internal circular dependencies",
            "Consider splitting into separate sub-namespaces",
            "Extract interfaces to break direct class dependencies",
        ]
    if cycle.cycle_type is CycleType.SIMPLE:
        return [
            f"Cycle between: {names[0]} ↔ {names[1]}",
            "Option 1: Extract shared interfaces into a common namespace",
            "Option 2: Move coupled classes into one namespace",
            f"Option 3: Introduce dependency inversion - make {names[1]} "
            f"depend on abstractions from {names[0]}",
        ]
    return [
        f"Complex cycle detected: {' → '.join(names)} → [back to start]",
        "Option 1: Extract a shared 'Core' or 'Common' namespace for shared types",
        "Option 2: Consider if these namespaces should be merged into a single module",
        "Option 3: Apply dependency inversion principle with interfaces",
        "Option 4: Identify and remove unnecessary dependencies",
    ]
