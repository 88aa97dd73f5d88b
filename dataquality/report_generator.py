"""Report generator that compiles a dataset quality analysis into a Markdown report."""

from __future__ import annotations

import os

from dataquality.models import ColumnAnalysis, DatasetAnalysis, QualityMetrics
from dataquality.tools.inspection import get_data_type_distribution
from dataquality.tools.ranking import get_column_issues, get_column_recommendations


def _format_scores(metrics: QualityMetrics) -> str:
    """Format the quality scores as a Markdown table."""
    lines = [
        "| Metric | Score |",
        "|--------|-------|",
        f"| Completeness | {metrics.completeness}% |",
        f"| Consistency | {metrics.consistency}% |",
        f"| Accuracy | {metrics.accuracy}% |",
        f"| **Overall** | **{metrics.composite_score}/100** ({metrics.score_level.value}) |",
        "",
        f"_{metrics.summary}_",
        "",
    ]
    return "\n".join(lines)


def _format_column_table(analysis: DatasetAnalysis) -> str:
    """Format per-column statistics as a Markdown table."""
    if not analysis.columns:
        return "No columns to analyze.\n"

    lines = [
        "| Column | Type | Missing % | Unique % | Duplicate % | Outliers | Format Issues |",
        "|--------|------|-----------|----------|-------------|----------|---------------|",
    ]
    for col in analysis.columns.values():
        lines.append(
            f"| {col.column_name} | {col.data_type.value} | {col.missing_percent:.2f}% "
            f"| {col.unique_percent:.2f}% | {col.duplicate_percent:.2f}% "
            f"| {col.outliers_count} | {col.format_issues_count} |"
        )
    lines.append("")
    return "\n".join(lines)


def _format_column_issue(col: ColumnAnalysis, issue_count: int) -> str:
    """Format one ranked column with its recommendations."""
    lines = [f"### {col.column_name} ({issue_count} issue type(s))\n"]
    for rec in get_column_recommendations(col):
        lines.append(f"- **{rec.message}**: {'; '.join(rec.actions)}")
    if col.outlier_values:
        values = ", ".join(f"{v:g}" for v in col.outlier_values)
        lines.append(f"- Sample outliers: {values}")
    if col.format_issue_values:
        values = ", ".join(repr(v) for v in col.format_issue_values)
        lines.append(f"- Sample format issues: {values}")
    lines.append("")
    return "\n".join(lines)


def generate_report(
    analysis: DatasetAnalysis,
    metrics: QualityMetrics,
    output_dir: str,
    file_name: str = "dataset",
) -> str:
    """Generate a Markdown quality report and save to output_dir/report.md.

    Args:
        analysis: Result of ``analyze_dataset``.
        metrics: Result of ``calculate_quality_metrics``.
        output_dir: Directory to save the report.
        file_name: Name of the analyzed file, shown in the title.

    Returns:
        The path to the saved report file.
    """
    os.makedirs(output_dir, exist_ok=True)

    sections: list[str] = []

    # Title
    sections.append(f"# Data Quality Report: {file_name}\n")

    # Dataset Overview
    sections.append("## Dataset Overview\n")
    sections.append(f"- **Rows**: {analysis.row_count}")
    sections.append(f"- **Columns**: {analysis.column_count}")
    if analysis.timestamp:
        sections.append(f"- **Analyzed at**: {analysis.timestamp}")
    distribution = get_data_type_distribution(analysis)
    if distribution:
        types = ", ".join(f"{name}: {count}" for name, count in distribution.items())
        sections.append(f"- **Column types**: {types}")
    sections.append("")

    # Quality Scores
    sections.append("## Quality Scores\n")
    sections.append(_format_scores(metrics))

    # Column Statistics
    sections.append("## Column Statistics\n")
    sections.append(_format_column_table(analysis))

    # Issues
    sections.append("## Issues by Column\n")
    ranked = get_column_issues(analysis)
    if ranked:
        for item in ranked:
            sections.append(_format_column_issue(item.column, item.issue_count))
    else:
        sections.append("No issues detected.\n")

    report_content = "\n".join(sections)
    report_path = os.path.join(output_dir, "report.md")
    with open(report_path, "w", encoding="utf-8") as f:
        f.write(report_content)

    return report_path
