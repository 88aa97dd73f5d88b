"""Column type inference by majority vote over a value sample."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional

from dataquality.config import INFERENCE_SAMPLE_SIZE, MAJORITY_THRESHOLD
from dataquality.models import CellValue, DataType
from dataquality.tools.validators import (
    is_valid_date,
    is_valid_email,
    is_valid_url,
    parse_number,
    to_text,
)

# Tie-break order: on equal tallies the earlier type wins
_VOTE_ORDER = (
    DataType.NUMBER,
    DataType.BOOLEAN,
    DataType.EMAIL,
    DataType.URL,
    DataType.DATE,
)


def classify_value(value: CellValue) -> Optional[DataType]:
    """Classify one value, or return None when it matches no typed category.

    The value is stringified, trimmed and lower-cased, then tried as
    boolean, number, email, url and date, in that order.
    """
    text = to_text(value).strip().lower()
    if text in ("true", "false"):
        return DataType.BOOLEAN
    if parse_number(text) is not None:
        return DataType.NUMBER
    if is_valid_email(text):
        return DataType.EMAIL
    if is_valid_url(text):
        return DataType.URL
    if is_valid_date(text):
        return DataType.DATE
    return None


def infer_data_type(
    values: Sequence[CellValue],
    sample_size: int = INFERENCE_SAMPLE_SIZE,
    threshold: float = MAJORITY_THRESHOLD,
) -> DataType:
    """Infer the semantic type of a column from its non-missing values.

    Args:
        values: Non-missing values of the column.
        sample_size: Only the first ``sample_size`` values are examined.
        threshold: Share of the sample the winning type must exceed.

    Returns:
        The winning type, ``DataType.TEXT`` when no type has a majority, or
        ``DataType.UNKNOWN`` for an empty sample.
    """
    sample = list(values[:sample_size])
    if not sample:
        return DataType.UNKNOWN

    tally = {data_type: 0 for data_type in _VOTE_ORDER}
    for value in sample:
        data_type = classify_value(value)
        if data_type is not None:
            tally[data_type] += 1

    best = _VOTE_ORDER[0]
    for data_type in _VOTE_ORDER[1:]:
        if tally[data_type] > tally[best]:
            best = data_type

    if tally[best] > len(sample) * threshold:
        return best
    return DataType.TEXT
