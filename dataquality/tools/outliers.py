"""Outlier detection for numeric columns using an interquartile-range fence.

Quartiles are read straight off the sorted sample at ``floor(n * 0.25)`` and
``floor(n * 0.75)``, without interpolation between neighbouring ranks.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from dataquality.config import IQR_MULTIPLIER, MIN_OUTLIER_VALUES
from dataquality.models import CellValue
from dataquality.tools.validators import parse_number


def compute_fence(
    numbers: Sequence[float], multiplier: float = IQR_MULTIPLIER
) -> tuple[float, float]:
    """Return the ``(lower, upper)`` fence for a non-empty numeric sample."""
    ordered = np.sort(np.asarray(numbers, dtype=float))
    n = len(ordered)
    q1 = float(ordered[math.floor(n * 0.25)])
    q3 = float(ordered[math.floor(n * 0.75)])
    iqr = q3 - q1
    return q1 - multiplier * iqr, q3 + multiplier * iqr


def values_outside(
    numbers: Sequence[float], lower: float, upper: float
) -> list[float]:
    """Return the values strictly outside ``[lower, upper]`` in ascending order."""
    ordered = np.sort(np.asarray(numbers, dtype=float))
    mask = (ordered < lower) | (ordered > upper)
    return [float(v) for v in ordered[mask]]


def detect_outliers(
    values: Sequence[CellValue],
    min_values: int = MIN_OUTLIER_VALUES,
    multiplier: float = IQR_MULTIPLIER,
) -> list[float]:
    """Detect outliers among the numeric values of a column.

    Values that do not parse as finite numbers are ignored. Fewer than
    ``min_values`` numbers yields no outliers.

    Args:
        values: Non-missing values of the column.
        min_values: Minimum count of numeric values required.
        multiplier: Fence width in IQR units.

    Returns:
        Every outlier value, ascending.
    """
    numbers = [n for n in (parse_number(v) for v in values) if n is not None]
    if len(numbers) < min_values:
        return []

    lower, upper = compute_fence(numbers, multiplier)
    return values_outside(numbers, lower, upper)
