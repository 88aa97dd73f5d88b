"""Prompt text handed to an external insight generator.

Only builds the text; sending it anywhere is the caller's business.
"""

from __future__ import annotations

from dataquality.models import ColumnAnalysis, DatasetAnalysis, QualityMetrics

TOP_ISSUE_COLUMNS = 5

_INSTRUCTIONS = """Provide:
1. Executive summary (2-3 sentences)
2. Top 3 critical issues to fix
3. Specific recommendations for each issue
4. Estimated impact of fixes (high/medium/low)

Format as JSON:
{
  "summary": "...",
  "issues": [
    {"title": "...", "description": "...", "recommendation": "...", "impact": "high/medium/low"}
  ]
}
"""


def _issue_weight(column: ColumnAnalysis) -> int:
    return column.missing_count + column.duplicate_count + column.outliers_count


def _format_column(column: ColumnAnalysis) -> str:
    return (
        f"{column.column_name} ({column.data_type.value}):\n"
        f"  - Missing values: {column.missing_count} ({column.missing_percent:.2f}%)\n"
        f"  - Duplicates: {column.duplicate_count} ({column.duplicate_percent:.2f}%)\n"
        f"  - Outliers: {column.outliers_count} ({column.outliers_percent:.2f}%)\n"
        f"  - Format issues: {column.format_issues_count} ({column.format_issues_percent:.2f}%)\n"
    )


def build_analysis_prompt(
    analysis: DatasetAnalysis,
    metrics: QualityMetrics,
    file_name: str = "dataset",
) -> str:
    """Build the insight prompt for a dataset's analysis and scores.

    Lists the columns with the most missing, duplicate and outlier values
    (at most five, ties in column order) followed by fixed answer
    instructions.
    """
    top_columns = sorted(analysis.columns.values(), key=_issue_weight, reverse=True)
    top_columns = top_columns[:TOP_ISSUE_COLUMNS]

    lines = [
        "Analyze this dataset quality report and provide insights:",
        "",
        f"File: {file_name}",
        f"Rows: {analysis.row_count} | Columns: {analysis.column_count}",
        "",
        "Quality Scores:",
        f"- Completeness: {metrics.completeness}%",
        f"- Consistency: {metrics.consistency}%",
        f"- Accuracy: {metrics.accuracy}%",
        f"- Overall Score: {metrics.composite_score}/100",
        "",
        "Top Issues by Column:",
    ]
    if top_columns:
        lines.extend(_format_column(column) for column in top_columns)
    else:
        lines.append("(no columns)\n")
    lines.append(_INSTRUCTIONS)
    return "\n".join(lines)
