"""Shared Hypothesis strategies and fixtures for the quality engine tests.

Provides reusable strategies for generating messy row datasets and a factory
for hand-built ColumnAnalysis records.
"""

from __future__ import annotations

import pytest
from hypothesis import strategies as st

from dataquality.models import ColumnAnalysis, DataType


# ---------------------------------------------------------------------------
# messy_rows: generates datasets with controlled messiness
# ---------------------------------------------------------------------------

_EMAILS = ["ann@example.com", "bob@mail.org", "not-an-email", "eve@corp.io"]
_DATES = ["2024-01-15", "2023-12-31", "1999-07-04", "garbage"]
_URLS = ["https://example.com", "http://data.org/x", "nowhere"]


def _cell_strategy(kind: str) -> st.SearchStrategy:
    if kind == "numeric":
        return st.one_of(
            st.integers(min_value=0, max_value=1000),
            st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False),
        )
    if kind == "email":
        return st.sampled_from(_EMAILS)
    if kind == "date":
        return st.sampled_from(_DATES)
    if kind == "url":
        return st.sampled_from(_URLS)
    if kind == "boolean":
        return st.booleans()
    if kind == "text":
        return st.text(alphabet="abcxyz ", min_size=1, max_size=6)
    # mixed
    return st.one_of(
        st.integers(min_value=0, max_value=50),
        st.booleans(),
        st.sampled_from(_EMAILS + _URLS),
        st.text(alphabet="abc", min_size=1, max_size=3),
    )


@st.composite
def messy_rows(
    draw: st.DrawFn,
    min_rows: int = 0,
    max_rows: int = 30,
    min_cols: int = 1,
    max_cols: int = 5,
) -> list[dict]:
    """Generate a list of row dicts with missing values, duplicates,
    outliers and malformed values mixed into typed columns.

    Parameters
    ----------
    draw : hypothesis draw function
    min_rows, max_rows : row count bounds (default 0-30)
    min_cols, max_cols : column count bounds (default 1-5)
    """
    n_rows = draw(st.integers(min_value=min_rows, max_value=max_rows))
    n_cols = draw(st.integers(min_value=min_cols, max_value=max_cols))
    kinds = draw(
        st.lists(
            st.sampled_from(["numeric", "email", "date", "url", "boolean", "text", "mixed"]),
            min_size=n_cols,
            max_size=n_cols,
        )
    )

    missing = st.sampled_from([None, ""])
    rows: list[dict] = [{} for _ in range(n_rows)]
    for i, kind in enumerate(kinds):
        col_name = f"{kind}_{i}"
        cell = st.one_of(_cell_strategy(kind), missing) if draw(st.booleans()) else _cell_strategy(kind)
        for row in rows:
            row[col_name] = draw(cell)

    # --- Inject an extreme value into a numeric column ---------------------
    numeric_cols = [f"{k}_{i}" for i, k in enumerate(kinds) if k == "numeric"]
    if numeric_cols and rows and draw(st.booleans()):
        r = draw(st.integers(min_value=0, max_value=n_rows - 1))
        rows[r][numeric_cols[0]] = draw(st.sampled_from([-1e9, 1e9]))

    return rows


@pytest.fixture
def make_column():
    """Factory for ColumnAnalysis records with consistent defaults."""

    def _make(
        name: str = "col",
        total_rows: int = 10,
        missing_count: int = 0,
        unique_count: int | None = None,
        outliers_count: int = 0,
        format_issues_count: int = 0,
        data_type: DataType = DataType.TEXT,
    ) -> ColumnAnalysis:
        if unique_count is None:
            unique_count = total_rows - missing_count
        duplicate_count = total_rows - unique_count
        present = total_rows - missing_count

        def pct(count: int, denom: int) -> float:
            return round(count / denom * 100, 2) if denom else 0.0

        return ColumnAnalysis(
            column_name=name,
            data_type=data_type,
            total_rows=total_rows,
            missing_count=missing_count,
            missing_percent=pct(missing_count, total_rows),
            unique_count=unique_count,
            unique_percent=pct(unique_count, total_rows),
            duplicate_count=duplicate_count,
            duplicate_percent=pct(duplicate_count, total_rows),
            outliers_count=outliers_count,
            outliers_percent=pct(outliers_count, present),
            format_issues_count=format_issues_count,
            format_issues_percent=pct(format_issues_count, present),
        )

    return _make
