"""Render a DependencyGraph as Graphviz DOT."""

from __future__ import annotations

import re
from typing import TextIO

from modfather.model import DependencyGraph, Edge, Node

_BARE_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Matched case-insensitively by Graphviz.
_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})

_EXTERNAL_FILL = "lightgray"


def escape_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def escape_id(value: str) -> str:
    if _BARE_ID_RE.match(value) and value.lower() not in _KEYWORDS:
        return value
    return f'"{escape_string(value)}"'


def _attrs(pairs: list[tuple[str, str]]) -> str:
    return ", ".join(f'{key}="{escape_string(value)}"' for key, value in pairs)


class DotWriter:
    """Write nodes sorted by id and edges sorted by (from, to)."""

    def __init__(
        self,
        graph_name: str = "php_dependencies",
        graph_attributes: list[tuple[str, str]] | None = None,
        node_attributes: list[tuple[str, str]] | None = None,
        edge_attributes: list[tuple[str, str]] | None = None,
    ) -> None:
        self.graph_name = graph_name
        self.graph_attributes = graph_attributes or [
            ("rankdir", "LR"),
            ("splines", "ortho"),
        ]
        self.node_attributes = node_attributes or [
            ("shape", "box"),
            ("style", "rounded,filled"),
            ("fillcolor", "lightblue"),
        ]
        self.edge_attributes = edge_attributes or [("color", "gray")]

    def render(self, graph: DependencyGraph) -> str:
        lines = [f"digraph {escape_id(self.graph_name)} {{"]
        for key, value in self.graph_attributes:
            lines.append(f'  {key}="{escape_string(value)}";')
        lines.append("")
        lines.append(f"  node [{_attrs(self.node_attributes)}];")
        lines.append(f"  edge [{_attrs(self.edge_attributes)}];")
        lines.append("")

        for node_id in sorted(graph.nodes):
            lines.append(self._node_line(graph.nodes[node_id]))
        lines.append("")

        for key in sorted(graph.edges):
            lines.append(self._edge_line(graph.edges[key]))

        lines.append("}")
        return "\n".join(lines) + "\n"

    def write(self, graph: DependencyGraph, out: TextIO) -> None:
        out.write(self.render(graph))

    def _node_line(self, node: Node) -> str:
        pairs = [("label", node.label)]
        pairs.extend(sorted(node.metadata.items()))
        if node.is_external and "fillcolor" not in node.metadata:
            pairs.append(("fillcolor", _EXTERNAL_FILL))
        return f"  {escape_id(node.id)} [{_attrs(pairs)}];"

    def _edge_line(self, edge: Edge) -> str:
        line = f"  {escape_id(edge.source)} -> {escape_id(edge.target)}"
        pairs: list[tuple[str, str]] = []
        if edge.label is not None:
            pairs.append(("label", edge.label))
        pairs.extend(sorted(edge.metadata.items()))
        if pairs:
            line += f" [{_attrs(pairs)}]"
        return line + ";"
