"""Post-extraction graph analysis (cycle detection and classification)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from modfather.model import DependencyGraph


class CycleType(Enum):
    SELF_CYCLE = "SelfCycle"  # A -> A
    SIMPLE = "Simple"  # A -> B -> A
    COMPLEX = "Complex"  # A -> B -> C -> A

    def __str__(self) -> str:
        return self.value


class CycleSeverity(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __str__(self) -> str:
        return self.value


@dataclass
class Cycle:
    """A dependency cycle between namespaces (members sorted by name)."""

    namespaces: list[str]
    cycle_type: CycleType
    severity: CycleSeverity
    edge_count: int = 0


def find_sccs(adjacency: dict[str, list[str]]) -> list[list[str]]:
    """Return all strongly-connected components using Tarjan's algorithm.

    Components are returned in discovery order (a component is emitted once
    everything reachable from it has been emitted), including singletons.
    Targets missing from *adjacency* are ignored.  Iterative, so deep
    dependency chains cannot exhaust the interpreter stack.
    """
    index: dict[str, int] = {}
    lowlink: dict[str, int] = {}
    on_stack: set[str] = set()
    stack: list[str] = []
    sccs: list[list[str]] = []
    counter = 0

    for root in adjacency:
        if root in index:
            continue
        index[root] = lowlink[root] = counter
        counter += 1
        stack.append(root)
        on_stack.add(root)
        work: list[tuple[str, int]] = [(root, 0)]

        while work:
            v, i = work[-1]
            neighbors = adjacency[v]
            if i < len(neighbors):
                work[-1] = (v, i + 1)
                w = neighbors[i]
                if w not in adjacency:
                    continue
                if w not in index:
                    index[w] = lowlink[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack.add(w)
                    work.append((w, 0))
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[v])

            if lowlink[v] == index[v]:
                scc: list[str] = []
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    scc.append(w)
                    if w == v:
                        break
                sccs.append(scc)

    return sccs


def count_internal_edges(adjacency: dict[str, list[str]], members: list[str]) -> int:
    """Count edges whose endpoints both lie in *members*."""
    member_set = set(members)
    return sum(
        1 for node in members for target in adjacency.get(node, ()) if target in member_set
    )


def classify_severity(edge_count: int) -> CycleSeverity:
    if edge_count <= 2:
        return CycleSeverity.LOW
    if edge_count <= 5:
        return CycleSeverity.MEDIUM
    return CycleSeverity.HIGH


def find_cycles(graph: DependencyGraph) -> list[Cycle]:
    """Detect and classify cycles in a namespace-level *graph*.

    Cycles follow component discovery order; only member lists are sorted.
    """
    adjacency = graph.adjacency()
    cycles: list[Cycle] = []

    for scc in find_sccs(adjacency):
        if len(scc) == 1:
            node = scc[0]
            if node in adjacency[node]:
                cycles.append(
                    Cycle(
                        namespaces=[node],
                        cycle_type=CycleType.SELF_CYCLE,
                        severity=CycleSeverity.MEDIUM,
                        edge_count=1,
                    )
                )
            continue

        edge_count = count_internal_edges(adjacency, scc)
        cycles.append(
            Cycle(
                namespaces=sorted(scc),
                cycle_type=CycleType.SIMPLE if len(scc) == 2 else CycleType.COMPLEX,
                severity=classify_severity(edge_count),
                edge_count=edge_count,
            )
        )

    return cycles
