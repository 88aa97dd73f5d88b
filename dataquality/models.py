"""Core data models for the dataset quality analysis engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from typing_extensions import TypedDict

CellValue = Union[None, bool, int, float, str]


class MalformedRowError(ValueError):
    """Raised when a row is not a flat record of scalar cells."""

    def __init__(self, message: str, row_index: Optional[int] = None, column: Optional[str] = None):
        super().__init__(message)
        self.row_index = row_index
        self.column = column


class CellKind(str, Enum):
    """Tag of a single cell value."""

    NULL = "null"
    BOOL = "boolean"
    NUMBER = "number"
    STRING = "string"


class DataType(str, Enum):
    """Semantic type inferred for a whole column."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    EMAIL = "email"
    URL = "url"
    DATE = "date"
    TEXT = "text"
    UNKNOWN = "unknown"


class ScoreLevel(str, Enum):
    """Quality band of a composite score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


# ---------------------------------------------------------------------------
# Serialized shapes handed to renderers and the prompt builder
# ---------------------------------------------------------------------------


class ColumnAnalysisDict(TypedDict):
    columnName: str
    dataType: str
    totalRows: int
    missingCount: int
    missingPercent: float
    uniqueCount: int
    uniquePercent: float
    duplicateCount: int
    duplicatePercent: float
    outliersCount: int
    outliersPercent: float
    outlierValues: list[float]
    formatIssuesCount: int
    formatIssuesPercent: float
    formatIssueValues: list[Any]
    examples: list[Any]


class DatasetAnalysisDict(TypedDict):
    columns: dict[str, ColumnAnalysisDict]
    rowCount: int
    columnCount: int
    timestamp: str


class QualityMetricsDict(TypedDict):
    completeness: int
    consistency: int
    accuracy: int
    compositeScore: int
    scoreLevel: str
    summary: str


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ColumnAnalysis:
    """Quality statistics for one column.

    ``duplicate_count`` always equals ``total_rows - unique_count``: it counts
    non-distinct slots over every row, missing ones included, while
    ``unique_count`` only looks at non-missing values.
    """

    column_name: str
    data_type: DataType
    total_rows: int
    missing_count: int
    missing_percent: float
    unique_count: int
    unique_percent: float
    duplicate_count: int
    duplicate_percent: float
    outliers_count: int = 0
    outliers_percent: float = 0.0
    outlier_values: tuple[float, ...] = ()
    format_issues_count: int = 0
    format_issues_percent: float = 0.0
    format_issue_values: tuple[CellValue, ...] = ()
    examples: tuple[CellValue, ...] = ()

    def to_dict(self) -> ColumnAnalysisDict:
        return {
            "columnName": self.column_name,
            "dataType": self.data_type.value,
            "totalRows": self.total_rows,
            "missingCount": self.missing_count,
            "missingPercent": self.missing_percent,
            "uniqueCount": self.unique_count,
            "uniquePercent": self.unique_percent,
            "duplicateCount": self.duplicate_count,
            "duplicatePercent": self.duplicate_percent,
            "outliersCount": self.outliers_count,
            "outliersPercent": self.outliers_percent,
            "outlierValues": list(self.outlier_values),
            "formatIssuesCount": self.format_issues_count,
            "formatIssuesPercent": self.format_issues_percent,
            "formatIssueValues": list(self.format_issue_values),
            "examples": list(self.examples),
        }


@dataclass(frozen=True)
class DatasetAnalysis:
    """Per-column analyses of a dataset, keyed by column name in column order."""

    columns: dict[str, ColumnAnalysis] = field(default_factory=dict)
    row_count: int = 0
    column_count: int = 0
    timestamp: str = field(default="", compare=False)

    def to_dict(self) -> DatasetAnalysisDict:
        return {
            "columns": {name: col.to_dict() for name, col in self.columns.items()},
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class QualityMetrics:
    """Composite quality scores of a dataset."""

    completeness: int
    consistency: int
    accuracy: int
    composite_score: int
    score_level: ScoreLevel
    summary: str

    def to_dict(self) -> QualityMetricsDict:
        return {
            "completeness": self.completeness,
            "consistency": self.consistency,
            "accuracy": self.accuracy,
            "compositeScore": self.composite_score,
            "scoreLevel": self.score_level.value,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class RankedColumn:
    """A column with at least one issue category, as ordered for display."""

    column: ColumnAnalysis
    issue_count: int

    def to_dict(self) -> dict:
        data: dict = dict(self.column.to_dict())
        data["issueCount"] = self.issue_count
        return data


@dataclass(frozen=True)
class Recommendation:
    """Suggested follow-up for one issue category of a column."""

    type: str
    message: str
    actions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message, "actions": list(self.actions)}
