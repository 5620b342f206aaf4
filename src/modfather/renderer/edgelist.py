"""Render a DependencyGraph as a ``from,to`` edge list."""

from __future__ import annotations

import csv
import io
from typing import TextIO

from modfather.model import DependencyGraph


class CsvWriter:
    def __init__(self, include_header: bool = True) -> None:
        self.include_header = include_header

    def write(self, graph: DependencyGraph, out: TextIO) -> None:
        writer = csv.writer(out, lineterminator="\n")
        if self.include_header:
            writer.writerow(["from", "to"])
        # Sorted so repeated runs produce identical files.
        writer.writerows(sorted(graph.edges))

    def render(self, graph: DependencyGraph) -> str:
        buf = io.StringIO()
        self.write(graph, buf)
        return buf.getvalue()

