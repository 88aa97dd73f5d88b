"""Quality scoring: completeness, consistency, accuracy and the composite score."""

from __future__ import annotations

import math
from collections.abc import Iterable

from dataquality.models import ColumnAnalysis, DatasetAnalysis, QualityMetrics, ScoreLevel

# Inclusive lower bounds, checked top-down
_LEVEL_THRESHOLDS: tuple[tuple[int, ScoreLevel], ...] = (
    (90, ScoreLevel.EXCELLENT),
    (70, ScoreLevel.GOOD),
    (50, ScoreLevel.FAIR),
)

_SUMMARIES: dict[ScoreLevel, str] = {
    ScoreLevel.EXCELLENT: "Dataset is in excellent condition with minimal quality issues.",
    ScoreLevel.GOOD: "Dataset is in good condition with some quality issues to address.",
    ScoreLevel.FAIR: "Dataset has fair quality with several issues that should be fixed.",
    ScoreLevel.POOR: "Dataset has significant quality issues that require attention.",
}

_COLORS: dict[ScoreLevel, str] = {
    ScoreLevel.EXCELLENT: "#10b981",
    ScoreLevel.GOOD: "#f59e0b",
    ScoreLevel.FAIR: "#f97316",
    ScoreLevel.POOR: "#ef4444",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _mean(scores: list[float]) -> float:
    return sum(scores) / len(scores) if scores else 100.0


def _row_share(column: ColumnAnalysis, problem_count: int) -> float:
    """Percentage of a column's rows not counted in ``problem_count``."""
    if column.total_rows == 0:
        return 100.0
    return (column.total_rows - problem_count) / column.total_rows * 100


def calculate_completeness(analysis: DatasetAnalysis) -> float:
    """Share of non-missing cells across the whole dataset."""
    total_cells = analysis.row_count * analysis.column_count
    if total_cells == 0:
        return 100.0
    missing_cells = sum(col.missing_count for col in analysis.columns.values())
    return 100 - missing_cells / total_cells * 100


def calculate_consistency(columns: Iterable[ColumnAnalysis]) -> float:
    """Mean per-column share of values that are present and well formatted."""
    return _mean(
        [_row_share(col, col.missing_count + col.format_issues_count) for col in columns]
    )


def calculate_accuracy(columns: Iterable[ColumnAnalysis]) -> float:
    """Mean per-column share of values that are neither outliers nor malformed."""
    return _mean(
        [_row_share(col, col.outliers_count + col.format_issues_count) for col in columns]
    )


def get_score_level(score: float) -> ScoreLevel:
    """Map a composite score to its quality level."""
    for lower_bound, level in _LEVEL_THRESHOLDS:
        if score >= lower_bound:
            return level
    return ScoreLevel.POOR


def generate_score_summary(score: float) -> str:
    """Fixed one-sentence summary for the level of ``score``."""
    return _SUMMARIES[get_score_level(score)]


def get_score_color(score: float) -> str:
    """Hex colour used to display ``score``."""
    return _COLORS[get_score_level(score)]


def calculate_quality_metrics(analysis: DatasetAnalysis) -> QualityMetrics:
    """Aggregate a dataset analysis into quality scores.

    The composite score is the rounded mean of the unrounded completeness,
    consistency and accuracy; each of those is rounded half-up separately
    for output. An analysis without rows or columns scores 100 on every
    measure.
    """
    columns = list(analysis.columns.values())
    completeness = calculate_completeness(analysis)
    consistency = calculate_consistency(columns)
    accuracy = calculate_accuracy(columns)
    composite = round_half_up((completeness + consistency + accuracy) / 3)

    return QualityMetrics(
        completeness=round_half_up(completeness),
        consistency=round_half_up(consistency),
        accuracy=round_half_up(accuracy),
        composite_score=composite,
        score_level=get_score_level(composite),
        summary=generate_score_summary(composite),
    )


def get_metric_chart_data(metrics: QualityMetrics) -> list[dict]:
    """Label/value/colour triples for the three component scores."""
    return [
        {"label": "Completeness", "value": metrics.completeness, "color": "#3b82f6"},
        {"label": "Consistency", "value": metrics.consistency, "color": "#10b981"},
        {"label": "Accuracy", "value": metrics.accuracy, "color": "#f59e0b"},
    ]
