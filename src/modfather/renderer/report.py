"""Render a ModularizationReport as markdown-flavoured text."""

from __future__ import annotations

from modfather.analysis import CycleSeverity
from modfather.recommender import ModularizationReport

_SEVERITY_ICON = {
    CycleSeverity.LOW: "🟢",
    CycleSeverity.MEDIUM: "🟡",
    CycleSeverity.HIGH: "🔴",
}


def format_report(report: ModularizationReport) -> str:
    out: list[str] = ["# PHP Modularization Analysis Report", ""]

    out += [
        "## Overview",
        "",
        f"- Total namespaces analyzed: {report.total_namespaces}",
        f"- Namespaces involved in cycles: {report.namespaces_in_cycles}",
        f"- Cycles detected: {len(report.cycles)}",
        "",
    ]

    if report.cycles:
        out += [
            "## ⚠️  Circular Dependencies Detected",
            "",
            "Circular dependencies prevent clean module boundaries and should be resolved.",
            "",
        ]
        for i, cycle in enumerate(report.cycles, 1):
            out += [
                f"### Cycle #{i}",
                "",
                f"**Severity**: {_SEVERITY_ICON[cycle.severity]} {cycle.severity}",
                "",
                f"**Type**: {cycle.cycle_type}",
                "",
                "**Namespaces involved**:",
            ]
            out += [f"- `{ns}`" for ns in cycle.namespaces]
            out.append("")

        out += ["## 💡 Recommendations to Break Cycles", ""]
        for i, rec in enumerate(report.cycle_breaking_recommendations, 1):
            out += [
                f"### Cycle #{i}",
                "",
                f"**Impact**: {rec.impact}",
                "",
                "**Suggestions**:",
                "",
            ]
            out += [f"- {s}" for s in rec.suggestions]
            out.append("")
    else:
        out += [
            "## ✅ No Circular Dependencies",
            "",
            "Great! Your namespace structure is acyclic, which supports clean modularization.",
            "",
        ]

    out += [
        "## 📦 Suggested Module Groupings",
        "",
        "Modules are suggested based on top-level namespaces. "
        "Higher cohesion scores indicate better module candidates.",
        "",
    ]
    for i, module in enumerate(report.module_suggestions, 1):
        out += [
            f"### {i}. {module.name}",
            "",
            f"- **Classes**: {module.class_count}",
            f"- **Cohesion Score**: {module.cohesion_score:.2f} (higher is better)",
            f"- **Internal Dependencies**: {module.internal_dependencies}",
            f"- **External Dependencies**: {module.external_dependencies}",
            "",
            "**Namespaces**:",
        ]
        out += [f"- `{ns}`" for ns in module.namespaces]
        out.append("")

    return "\n".join(out) + "\n"

