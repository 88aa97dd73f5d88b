"""Unit tests for the dataset loader."""

import json
import os
import tempfile

import numpy as np
import pandas as pd
import pytest

from dataquality.loader import (
    get_column_names,
    load_dataset,
    normalize_data,
    rows_from_dataframe,
)


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield d


def _write_file(path: str, content: bytes):
    with open(path, "wb") as f:
        f.write(content)


class TestLoadCsv:
    def test_basic_csv(self, tmp_dir):
        path = os.path.join(tmp_dir, "basic.csv")
        _write_file(path, b"a,b,c\n1,2,3\n4,5,6\n")
        result = load_dataset(path)
        assert result["error"] is None
        assert result["rows"] == [
            {"a": "1", "b": "2", "c": "3"},
            {"a": "4", "b": "5", "c": "6"},
        ]

    def test_empty_cells_stay_empty_strings(self, tmp_dir):
        path = os.path.join(tmp_dir, "gaps.csv")
        _write_file(path, b"a,b\n1,\n3,4\n")
        result = load_dataset(path)
        assert result["error"] is None
        assert result["rows"][0] == {"a": "1", "b": ""}

    def test_blank_lines_skipped(self, tmp_dir):
        path = os.path.join(tmp_dir, "blank.csv")
        _write_file(path, b"a,b\n1,2\n\n3,4\n")
        result = load_dataset(path)
        assert len(result["rows"]) == 2

    def test_tab_delimiter(self, tmp_dir):
        path = os.path.join(tmp_dir, "tabs.txt")
        _write_file(path, b"a\tb\tc\n1\t2\t3\n4\t5\t6\n")
        result = load_dataset(path)
        assert result["error"] is None
        assert list(result["rows"][0]) == ["a", "b", "c"]

    def test_semicolon_delimiter(self, tmp_dir):
        path = os.path.join(tmp_dir, "semi.csv")
        _write_file(path, b"a;b\n1;2\n3;4\n")
        result = load_dataset(path)
        assert result["error"] is None
        assert result["rows"][1] == {"a": "3", "b": "4"}

    def test_latin1_encoding(self, tmp_dir):
        path = os.path.join(tmp_dir, "latin1.csv")
        content = "name,city\nJosé,São Paulo\nRené,Zürich\n"
        _write_file(path, content.encode("latin-1"))
        result = load_dataset(path)
        assert result["error"] is None
        assert len(result["rows"]) == 2

    def test_headers_only(self, tmp_dir):
        path = os.path.join(tmp_dir, "headers.csv")
        _write_file(path, b"a,b,c\n")
        result = load_dataset(path)
        assert result["rows"] is None
        assert "no data rows" in result["error"]


class TestLoadJson:
    def test_array(self, tmp_dir):
        path = os.path.join(tmp_dir, "rows.json")
        _write_file(path, json.dumps([{"a": 1, "b": None}, {"a": 2, "b": "x"}]).encode())
        result = load_dataset(path)
        assert result["error"] is None
        assert result["rows"] == [{"a": 1, "b": None}, {"a": 2, "b": "x"}]

    def test_data_wrapper(self, tmp_dir):
        path = os.path.join(tmp_dir, "wrapped.json")
        _write_file(path, json.dumps({"data": [{"a": 1}]}).encode())
        assert load_dataset(path)["rows"] == [{"a": 1}]

    def test_single_object(self, tmp_dir):
        path = os.path.join(tmp_dir, "single.json")
        _write_file(path, json.dumps({"a": 1, "b": True}).encode())
        assert load_dataset(path)["rows"] == [{"a": 1, "b": True}]

    def test_scalar_rejected(self, tmp_dir):
        path = os.path.join(tmp_dir, "scalar.json")
        _write_file(path, b"42")
        result = load_dataset(path)
        assert result["rows"] is None
        assert result["error"] == "JSON must be an array or object"

    def test_invalid_json(self, tmp_dir):
        path = os.path.join(tmp_dir, "broken.json")
        _write_file(path, b"[{\"a\": 1,")
        result = load_dataset(path)
        assert result["rows"] is None
        assert result["error"].startswith("JSON parse error")


class TestLoadExcel:
    def test_first_sheet(self, tmp_dir):
        path = os.path.join(tmp_dir, "book.xlsx")
        pd.DataFrame({"name": ["Ann", "Bob"], "age": [30, None]}).to_excel(path, index=False)
        result = load_dataset(path)
        assert result["error"] is None
        assert result["rows"][0] == {"name": "Ann", "age": 30.0}
        assert result["rows"][1]["age"] is None

    def test_not_a_workbook(self, tmp_dir):
        path = os.path.join(tmp_dir, "fake.xlsx")
        _write_file(path, b"plain text, not a zip archive")
        result = load_dataset(path)
        assert result["rows"] is None
        assert result["error"].startswith("Excel parse error")


class TestLoadErrors:
    def test_missing_file(self):
        result = load_dataset("/nonexistent/path/data.csv")
        assert result["rows"] is None
        assert "File not found" in result["error"]

    def test_directory(self, tmp_dir):
        result = load_dataset(tmp_dir)
        assert "not a file" in result["error"]

    def test_empty_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "empty.csv")
        _write_file(path, b"")
        assert load_dataset(path)["error"] == "File is empty"

    def test_whitespace_only_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "blank.csv")
        _write_file(path, b"   \n\n  ")
        assert load_dataset(path)["error"] == "File is empty"

    def test_unsupported_extension(self, tmp_dir):
        path = os.path.join(tmp_dir, "data.parquet")
        _write_file(path, b"PAR1")
        result = load_dataset(path)
        assert result["rows"] is None
        assert result["error"].startswith("Unsupported file type: .parquet")

    def test_legacy_xls_rejected(self, tmp_dir):
        path = os.path.join(tmp_dir, "old.xls")
        _write_file(path, b"\xd0\xcf\x11\xe0")
        result = load_dataset(path)
        assert result["rows"] is None
        assert result["error"] == (
            "Unsupported file type: .xls (supported: .csv, .txt, .json, .xlsx)"
        )


class TestRowsFromDataframe:
    def test_conversions(self):
        df = pd.DataFrame(
            {
                "n": np.array([1, 2], dtype="int64"),
                "f": [1.5, np.nan],
                "t": pd.to_datetime(["2024-01-01", None]),
                "s": ["x", None],
            }
        )
        rows = rows_from_dataframe(df)
        assert rows[0] == {"n": 1, "f": 1.5, "t": "2024-01-01T00:00:00", "s": "x"}
        assert rows[1] == {"n": 2, "f": None, "t": None, "s": None}
        assert type(rows[0]["n"]) is int

    def test_empty_dataframe(self):
        assert rows_from_dataframe(pd.DataFrame({"a": []})) == []


class TestNormalizeData:
    def test_values_become_strings_or_none(self):
        rows = [{"a": 1, "b": "", "c": None, "d": "x"}]
        assert normalize_data(rows) == [{"a": "1", "b": None, "c": None, "d": "x"}]

    def test_non_list_input(self):
        assert normalize_data(None) == []
        assert normalize_data([]) == []


class TestGetColumnNames:
    def test_first_row_keys(self):
        assert get_column_names([{"a": 1, "b": 2}, {"c": 3}]) == ["a", "b"]

    def test_unusable_input(self):
        assert get_column_names([]) == []
        assert get_column_names([1, 2]) == []
        assert get_column_names("abc") == []
