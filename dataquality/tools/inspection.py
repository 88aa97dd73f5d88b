"""Column and dataset inspection: missingness, uniqueness, type, outliers, formats."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

from dataquality.config import DEFAULT_CONFIG, AnalysisConfig
from dataquality.loader import rows_from_dataframe
from dataquality.models import (
    CellValue,
    ColumnAnalysis,
    DatasetAnalysis,
    DataType,
    MalformedRowError,
)
from dataquality.tools.formats import detect_format_issues
from dataquality.tools.inference import infer_data_type
from dataquality.tools.outliers import detect_outliers
from dataquality.tools.validators import cell_kind, is_missing, to_text

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    """Return an ISO-8601 UTC timestamp string."""
    return datetime.now(timezone.utc).isoformat()


def _percent(count: int, denominator: int) -> float:
    """Return ``count / denominator`` as a percentage rounded half-up to 2 decimals, 0 for an empty denominator."""
    if denominator == 0:
        return 0.0
    return math.floor(count * 10000 / denominator + 0.5) / 100


def _column_values(rows: Sequence[Mapping[str, Any]], column_name: str) -> list[CellValue]:
    """Collect one column's cells, absent keys read as None."""
    values: list[CellValue] = []
    for index, row in enumerate(rows):
        value = row.get(column_name)
        try:
            cell_kind(value)
        except MalformedRowError as exc:
            raise MalformedRowError(
                f"Malformed row {index}: column '{column_name}' holds a non-scalar value ({exc})",
                row_index=index,
                column=column_name,
            ) from exc
        values.append(value)
    return values


def analyze_column(
    rows: Sequence[Mapping[str, Any]],
    column_name: str,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> ColumnAnalysis:
    """Compute quality statistics for a single column.

    Uniqueness is counted over the stringified non-missing values, while
    duplicates are ``total_rows - unique_count`` over every row. Outlier and
    format percentages divide by the non-missing count; all other
    percentages divide by ``total_rows``.

    Args:
        rows: The dataset rows.
        column_name: Column to analyze.
        config: Sample sizes and caps.

    Returns:
        The column's ColumnAnalysis.

    Raises:
        MalformedRowError: If a cell of the column is not a scalar.
    """
    values = _column_values(rows, column_name)
    present = [v for v in values if not is_missing(v)]

    total_rows = len(values)
    missing_count = total_rows - len(present)
    unique_count = len({to_text(v) for v in present})
    duplicate_count = total_rows - unique_count

    data_type = infer_data_type(
        present[: config.column_sample_size],
        sample_size=config.inference_sample_size,
        threshold=config.majority_threshold,
    )

    if data_type is DataType.NUMBER:
        outliers = detect_outliers(
            present,
            min_values=config.min_outlier_values,
            multiplier=config.iqr_multiplier,
        )
    else:
        outliers = []
    format_check = detect_format_issues(
        present, data_type, max_values=config.max_format_issue_values
    )

    return ColumnAnalysis(
        column_name=column_name,
        data_type=data_type,
        total_rows=total_rows,
        missing_count=missing_count,
        missing_percent=_percent(missing_count, total_rows),
        unique_count=unique_count,
        unique_percent=_percent(unique_count, total_rows),
        duplicate_count=duplicate_count,
        duplicate_percent=_percent(duplicate_count, total_rows),
        outliers_count=len(outliers),
        outliers_percent=_percent(len(outliers), len(present)),
        outlier_values=tuple(outliers[: config.max_outlier_values]),
        format_issues_count=format_check.count,
        format_issues_percent=_percent(format_check.count, len(present)),
        format_issue_values=format_check.values,
        examples=tuple(present[: config.max_examples]),
    )


def analyze_dataset(data: Any, config: Optional[AnalysisConfig] = None) -> DatasetAnalysis:
    """Analyze every column of a dataset.

    Column names are taken from the first row and analyzed in that order.
    Empty input, or input that is not a sequence of rows, gives an analysis
    with zero rows and columns rather than an error. A DataFrame is
    converted to rows first.

    Args:
        data: Sequence of row mappings, or a pandas DataFrame.
        config: Sample sizes and caps; defaults apply when omitted.

    Returns:
        A DatasetAnalysis.

    Raises:
        MalformedRowError: If a row is not a mapping or holds a non-scalar cell.
        ValueError: If ``config`` is invalid.
    """
    config = (config or DEFAULT_CONFIG).validate()

    if isinstance(data, pd.DataFrame):
        data = rows_from_dataframe(data)

    if (
        not isinstance(data, Sequence)
        or isinstance(data, (str, bytes))
        or len(data) == 0
    ):
        logger.debug("No rows to analyze (got %s)", type(data).__name__)
        return DatasetAnalysis(timestamp=_timestamp())

    for index, row in enumerate(data):
        if not isinstance(row, Mapping):
            raise MalformedRowError(
                f"Malformed row {index}: expected a mapping of column name to value, "
                f"got {type(row).__name__}",
                row_index=index,
            )

    column_names = list(data[0].keys())
    columns: dict[str, ColumnAnalysis] = {}
    for name in column_names:
        column = analyze_column(data, name, config)
        logger.debug(
            "Column '%s': type=%s missing=%d unique=%d outliers=%d format_issues=%d",
            name,
            column.data_type.value,
            column.missing_count,
            column.unique_count,
            column.outliers_count,
            column.format_issues_count,
        )
        columns[name] = column

    logger.info("Analyzed %d rows x %d columns", len(data), len(columns))
    return DatasetAnalysis(
        columns=columns,
        row_count=len(data),
        column_count=len(columns),
        timestamp=_timestamp(),
    )


def get_data_type_distribution(analysis: DatasetAnalysis) -> dict[str, int]:
    """Count columns per inferred data type."""
    distribution: dict[str, int] = {}
    for column in analysis.columns.values():
        key = column.data_type.value
        distribution[key] = distribution.get(key, 0) + 1
    return distribution
