"""Project class-level dependencies up to namespace-level dependencies."""

from __future__ import annotations

import logging
from collections import Counter

from modfather.extractors.php.class_deps import ClassDependencyAnalyzer
from modfather.extractors.php.names import NAMESPACE_SEPARATOR, namespace_of
from modfather.extractors.php.syntax import Program
from modfather.model import DependencyGraph, Edge, Node

logger = logging.getLogger(__name__)

GLOBAL_NAMESPACE = NAMESPACE_SEPARATOR


class NamespaceDependencyAnalyzer:
    """Same extraction as :class:`ClassDependencyAnalyzer`, grouped by namespace.

    Class references within a single namespace produce a namespace self-edge,
    which the recommender reports as a self-cycle.
    """

    def __init__(self) -> None:
        self._classes = ClassDependencyAnalyzer()

    def analyze(self, file_path: str, content: str | bytes) -> None:
        self._classes.analyze(file_path, content)

    def visit(self, program: Program, file_path: str) -> list[tuple[str, str]]:
        return self._classes.visit(program, file_path)

    def namespace_for(self, class_name: str) -> str:
        decl = self._classes.classes.get(class_name)
        if decl is not None:
            return decl.namespace or GLOBAL_NAMESPACE
        return namespace_of(class_name) or GLOBAL_NAMESPACE

    def build_graph(self, include_external: bool = False) -> DependencyGraph:
        graph = DependencyGraph()

        class_counts = Counter(
            decl.namespace or GLOBAL_NAMESPACE
            for decl in self._classes.classes.values()
        )
        for namespace in sorted(class_counts):
            graph.add_node(
                Node(namespace, namespace)
                .with_metadata("type", "internal")
                .with_metadata("classes", str(class_counts[namespace]))
            )

        for source, targets in self._classes.dependencies.items():
            source_ns = self.namespace_for(source)
            for target in sorted(targets):
                target_ns = self.namespace_for(target)
                if target_ns not in class_counts:
                    if not include_external:
                        continue
                    if target_ns not in graph.nodes:
                        graph.add_node(
                            Node(target_ns, target_ns).with_metadata(
                                "type", "external"
                            )
                        )
                graph.add_edge(Edge(source_ns, target_ns))

        logger.debug(
            "Namespace graph: %d namespaces, %d edges",
            len(graph.nodes),
            len(graph.edges),
        )
        return graph
