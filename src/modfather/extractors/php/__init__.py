"""PHP extractors: declaration visitor and namespace aggregator."""

from __future__ import annotations

from pathlib import Path

from modfather.extractors.php.class_deps import ClassDependencyAnalyzer
from modfather.extractors.php.namespace_deps import NamespaceDependencyAnalyzer

__all__ = [
    "ClassDependencyAnalyzer",
    "NamespaceDependencyAnalyzer",
    "is_php_file",
]


def is_php_file(path: Path) -> bool:
    """Return True if *path* has a ``.php`` extension (any case)."""
    return path.suffix.lower() == ".php"
