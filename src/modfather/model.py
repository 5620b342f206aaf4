"""Language-agnostic dependency graph model shared by analyzers and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Node:
    """A class, interface, trait, enum or namespace in the graph."""

    id: str
    label: str
    metadata: dict[str, str] = field(default_factory=dict)

    def with_metadata(self, key: str, value: str) -> Node:
        self.metadata[key] = value
        return self

    @property
    def is_external(self) -> bool:
        return self.metadata.get("type") == "external"


@dataclass
class Edge:
    """A directed dependency.  Identity is the (from, to) pair only."""

    source: str
    target: str
    label: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass
class DependencyGraph:
    """Nodes keyed by id and a set of edges keyed by (from, to)."""

    nodes: dict[str, Node] = field(default_factory=dict)
    edges: dict[tuple[str, str], Edge] = field(default_factory=dict)

    def add_node(self, node: Node) -> None:
        self.nodes[node.id] = node

    def add_edge(self, edge: Edge) -> None:
        # Endpoints are created on demand so every edge references real nodes.
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.nodes:
                self.add_node(Node(endpoint, endpoint))
        self.edges.setdefault(edge.key, edge)

    def dependencies_of(self, node_id: str) -> list[Node]:
        return [
            self.nodes[e.target]
            for e in self.edges.values()
            if e.source == node_id and e.target in self.nodes
        ]

    def dependents_of(self, node_id: str) -> list[Node]:
        return [
            self.nodes[e.source]
            for e in self.edges.values()
            if e.target == node_id and e.source in self.nodes
        ]

    def adjacency(self) -> dict[str, list[str]]:
        """Return ``{node_id: [target_ids]}`` covering every node."""
        adj: dict[str, list[str]] = {node_id: [] for node_id in self.nodes}
        for source, target in self.edges:
            adj[source].append(target)
        return adj
