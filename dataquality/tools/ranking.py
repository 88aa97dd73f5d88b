"""Issue ranking and per-column recommendations."""

from __future__ import annotations

from dataquality.models import ColumnAnalysis, DatasetAnalysis, RankedColumn, Recommendation


def count_issue_categories(column: ColumnAnalysis) -> int:
    """Number of categories (missing, duplicate, outlier, format) with a positive count."""
    counts = (
        column.missing_count,
        column.duplicate_count,
        column.outliers_count,
        column.format_issues_count,
    )
    return sum(1 for count in counts if count > 0)


def get_column_issues(analysis: DatasetAnalysis) -> list[RankedColumn]:
    """Columns with at least one issue category, most affected first.

    Ties keep the original column order.
    """
    ranked = [
        RankedColumn(column=column, issue_count=count_issue_categories(column))
        for column in analysis.columns.values()
    ]
    ranked = [item for item in ranked if item.issue_count > 0]
    # sorted() is stable
    return sorted(ranked, key=lambda item: item.issue_count, reverse=True)


def get_column_recommendations(column: ColumnAnalysis) -> list[Recommendation]:
    """Fixed follow-up suggestions for each issue category present on a column."""
    recommendations: list[Recommendation] = []

    if column.missing_count > 0:
        recommendations.append(
            Recommendation(
                type="missing",
                message=f"Handle {column.missing_count} missing values",
                actions=(
                    "Remove rows with missing data",
                    "Impute with average (for numeric) or mode",
                    'Mark as "unknown"',
                ),
            )
        )

    if column.duplicate_count > 0:
        recommendations.append(
            Recommendation(
                type="duplicates",
                message=f"Address {column.duplicate_count} duplicate values",
                actions=(
                    "Remove exact duplicates",
                    "Normalize values (trim, lowercase)",
                    'Consolidate variants (e.g., "USA" vs "US")',
                ),
            )
        )

    if column.outliers_count > 0:
        recommendations.append(
            Recommendation(
                type="outliers",
                message=f"Review {column.outliers_count} potential outliers",
                actions=(
                    "Validate against business rules",
                    "Remove if erroneous",
                    "Keep if legitimate",
                ),
            )
        )

    if column.format_issues_count > 0:
        recommendations.append(
            Recommendation(
                type="format",
                message=f"Fix {column.format_issues_count} format inconsistencies",
                actions=(
                    "Standardize formatting",
                    "Use regex validation",
                    "Apply consistent parsing rules",
                ),
            )
        )

    return recommendations
