"""Orchestrator: discover → parse → analyze → render."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from modfather.config import guess_graph_name, load_settings
from modfather.discovery import find_php_files, read_source
from modfather.extractors.base import Analyzer
from modfather.extractors.php import (
    ClassDependencyAnalyzer,
    NamespaceDependencyAnalyzer,
)
from modfather.model import DependencyGraph
from modfather.recommender import ModularizationReport, ModuleRecommender
from modfather.renderer.dot import DotWriter
from modfather.renderer.edgelist import CsvWriter
from modfather.renderer.report import format_report

logger = logging.getLogger(__name__)

ANALYSIS_TYPES = ("class", "namespace", "recommend")
OUTPUT_FORMATS = ("dot", "csv")


def _make_analyzer(analysis_type: str) -> Analyzer:
    if analysis_type == "class":
        return ClassDependencyAnalyzer()
    return NamespaceDependencyAnalyzer()


def _require_parser() -> None:
    try:
        import modfather.extractors.php.parser  # noqa: F401
    except ImportError as e:
        logger.error("%s", e)
        sys.exit(1)


def analyze_files(analyzer: Analyzer, files: list[Path]) -> int:
    """Feed every readable file to *analyzer*; return how many were analyzed."""
    analyzed = 0
    for i, php_file in enumerate(files, 1):
        logger.debug("[%d/%d] Analyzing: %s", i, len(files), php_file)
        content = read_source(php_file)
        if content is None:
            continue
        analyzer.analyze(str(php_file), content)
        analyzed += 1
    return analyzed


def build_graph(
    files: list[Path], analysis_type: str = "class", include_external: bool = False
) -> DependencyGraph:
    analyzer = _make_analyzer(analysis_type)
    analyze_files(analyzer, files)
    graph = analyzer.build_graph(include_external)
    logger.debug("Graph: %d nodes, %d edges", len(graph.nodes), len(graph.edges))
    return graph


def build_report(files: list[Path]) -> ModularizationReport:
    # Externals would only add noise to module boundaries.
    graph = build_graph(files, "namespace", include_external=False)
    return ModuleRecommender(graph).generate_report()


def run(
    paths: list[Path],
    *,
    output: Path | None = None,
    graph_name: str | None = None,
    analysis_type: str = "class",
    output_format: str = "dot",
    include_external: bool | None = None,
    exclude: list[str] | None = None,
) -> str:
    """Run the full pipeline; write to *output* if given and return the text."""
    for path in paths:
        if not path.exists():
            logger.error("Path does not exist: %s", path)
            sys.exit(1)

    project_dir = next((p for p in paths if p.is_dir()), paths[0].parent)
    settings = load_settings(project_dir)
    if include_external is None:
        include_external = bool(settings.include_external)

    _require_parser()
    files = find_php_files(paths, exclude=[*settings.exclude, *(exclude or [])])

    if analysis_type == "recommend":
        text = format_report(build_report(files))
    else:
        graph = build_graph(files, analysis_type, include_external)
        if output_format == "csv":
            text = CsvWriter().render(graph)
        else:
            text = DotWriter(graph_name or guess_graph_name(project_dir)).render(graph)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        logger.info("Generated %s", output)

    return text
