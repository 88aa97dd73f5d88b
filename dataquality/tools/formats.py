"""Format conformance checks against a column's inferred type."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from dataquality.config import MAX_FORMAT_ISSUE_VALUES
from dataquality.models import CellValue, DataType
from dataquality.tools.validators import (
    is_valid_date,
    is_valid_email,
    is_valid_url,
    parse_number,
    to_text,
)


@dataclass(frozen=True)
class FormatCheck:
    """Outcome of re-validating a column: full count plus the first failures."""

    count: int = 0
    values: tuple[CellValue, ...] = ()


_RULES: dict[DataType, Callable[[str], bool]] = {
    DataType.EMAIL: is_valid_email,
    DataType.URL: is_valid_url,
    DataType.DATE: is_valid_date,
    DataType.NUMBER: lambda text: parse_number(text) is not None,
}


def detect_format_issues(
    values: Sequence[CellValue],
    data_type: DataType,
    max_values: int = MAX_FORMAT_ISSUE_VALUES,
) -> FormatCheck:
    """Re-check every value against the strict rule for ``data_type``.

    Only number, email, url and date columns have a rule; any other type
    yields no issues.

    Args:
        values: Non-missing values of the column.
        data_type: The column's inferred type.
        max_values: Number of failing values to keep.

    Returns:
        A FormatCheck with the full failure count and up to ``max_values``
        failing values in column order.
    """
    rule = _RULES.get(data_type)
    if rule is None:
        return FormatCheck()

    failing = [v for v in values if not rule(to_text(v).strip())]
    return FormatCheck(count=len(failing), values=tuple(failing[:max_values]))
