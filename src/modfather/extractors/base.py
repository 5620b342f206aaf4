"""Analyzer protocol: every dependency analyzer conforms to this interface."""

from __future__ import annotations

from typing import Protocol

from modfather.model import DependencyGraph


class Analyzer(Protocol):
    """Protocol for analyzers that accumulate dependencies file by file."""

    def analyze(self, file_path: str, content: str | bytes) -> None:
        """Parse *content* and merge its declarations and dependencies."""
        ...

    def build_graph(self, include_external: bool = False) -> DependencyGraph:
        """Return the dependency graph accumulated so far."""
        ...
