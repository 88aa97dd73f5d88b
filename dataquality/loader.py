"""Dataset loader for CSV, JSON and Excel files.

Produces the list-of-row-mappings shape the analyzers consume. Loading never
raises for bad input files: failures come back as ``{"rows": None,
"error": "<message>"}``.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import os
from datetime import date, datetime
from typing import Any, Optional
from zipfile import BadZipFile

import chardet
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("csv", "txt", "json", "xlsx")


def _detect_encoding(file_path: str) -> str:
    """Detect file encoding using chardet, falling back to utf-8."""
    try:
        with open(file_path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        logger.warning("Could not sniff encoding of %s: %s", file_path, exc)
        return "utf-8"
    if not raw:
        return "utf-8"
    encoding = chardet.detect(raw).get("encoding")
    return encoding or "utf-8"


def _detect_delimiter(text: str) -> str:
    """Detect CSV delimiter using csv.Sniffer, falling back to comma."""
    try:
        sample = text[:8192]
        dialect = csv.Sniffer().sniff(sample, delimiters=",\t;|")
        return dialect.delimiter
    except csv.Error:
        return ","


def _read_with_encoding(file_path: str, encoding: str) -> Optional[str]:
    """Try reading a file with the given encoding. Returns text or None."""
    try:
        with open(file_path, "r", encoding=encoding) as f:
            return f.read()
    except (UnicodeDecodeError, LookupError):
        return None


def _try_parse(text: str, delimiter: str) -> Optional[pd.DataFrame]:
    """Parse CSV text keeping every cell as a string; empty cells stay ``""``."""
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            engine="python",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as exc:
        logger.debug("CSV parse with delimiter %r failed: %s", delimiter, exc)
        return None


def _to_scalar(value: Any) -> Any:
    """Convert a DataFrame cell to a plain Python scalar or None."""
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    if isinstance(value, np.generic):
        return value.item()
    return value


def rows_from_dataframe(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a DataFrame into a list of row mappings.

    NaN/NaT become None, numpy scalars become Python scalars and timestamps
    become ISO-8601 strings.
    """
    columns = [str(c) for c in df.columns]
    return [
        {col: _to_scalar(value) for col, value in zip(columns, record)}
        for record in df.itertuples(index=False, name=None)
    ]


def _load_csv_rows(file_path: str) -> dict:
    # Detect encoding with fallback chain
    encoding = _detect_encoding(file_path)
    text = _read_with_encoding(file_path, encoding)

    if text is None:
        logger.warning("Decoding %s as %s failed, retrying as utf-8", file_path, encoding)
        text = _read_with_encoding(file_path, "utf-8")
    if text is None:
        # latin-1 never fails for byte sequences
        text = _read_with_encoding(file_path, "latin-1")
    if text is None:
        return {"rows": None, "error": "Failed to decode file with any supported encoding"}

    if not text.strip():
        return {"rows": None, "error": "File is empty"}

    delimiter = _detect_delimiter(text)
    df = _try_parse(text, delimiter)
    if df is None:
        return {"rows": None, "error": "CSV parse error: failed to parse file"}

    # A single wide column usually means the sniffer picked the wrong delimiter
    if len(df.columns) == 1 and len(df) > 1:
        for alt_delim in ["\t", ";", "|", ","]:
            if alt_delim == delimiter:
                continue
            alt_df = _try_parse(text, alt_delim)
            if alt_df is not None and len(alt_df.columns) > 1:
                logger.info("Delimiter %r gave one column, using %r instead", delimiter, alt_delim)
                df = alt_df
                break

    if len(df) == 0:
        return {"rows": None, "error": "File contains only headers with no data rows"}

    return {"rows": df.to_dict(orient="records"), "error": None}


def _load_json_rows(file_path: str) -> dict:
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            parsed = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return {"rows": None, "error": f"JSON parse error: {exc}"}

    if isinstance(parsed, list):
        return {"rows": parsed, "error": None}
    if isinstance(parsed, dict) and isinstance(parsed.get("data"), list):
        return {"rows": parsed["data"], "error": None}
    if isinstance(parsed, dict):
        return {"rows": [parsed], "error": None}
    return {"rows": None, "error": "JSON must be an array or object"}


def _load_excel_rows(file_path: str) -> dict:
    try:
        df = pd.read_excel(file_path, sheet_name=0, engine="openpyxl")
    except (ValueError, KeyError, OSError, BadZipFile) as exc:
        return {"rows": None, "error": f"Excel parse error: {exc}"}

    df.columns = [str(c).strip() for c in df.columns]
    if len(df.columns) == 0:
        return {"rows": None, "error": "Excel parse error: header row is empty"}
    if len(df) == 0:
        return {"rows": None, "error": "Excel sheet is empty or contains no data rows"}
    return {"rows": rows_from_dataframe(df), "error": None}


def load_dataset(file_path: str) -> dict:
    """Load a CSV, JSON or Excel file into a list of row mappings.

    Args:
        file_path: Path to a ``.csv``, ``.txt``, ``.json`` or ``.xlsx`` file.

    Returns:
        dict with keys:
            - "rows": list of row dicts, or None
            - "error": Optional[str] error message if loading failed
    """
    if not os.path.exists(file_path):
        return {"rows": None, "error": f"File not found: {file_path}"}

    if not os.path.isfile(file_path):
        return {"rows": None, "error": f"Path is not a file: {file_path}"}

    try:
        if os.path.getsize(file_path) == 0:
            return {"rows": None, "error": "File is empty"}
    except OSError as e:
        return {"rows": None, "error": f"Cannot read file: {e}"}

    ext = os.path.splitext(file_path)[1].lstrip(".").lower()
    if ext in ("csv", "txt"):
        result = _load_csv_rows(file_path)
    elif ext == "json":
        result = _load_json_rows(file_path)
    elif ext == "xlsx":
        result = _load_excel_rows(file_path)
    else:
        supported = ", ".join(f".{e}" for e in SUPPORTED_EXTENSIONS)
        return {"rows": None, "error": f"Unsupported file type: .{ext} (supported: {supported})"}

    if result["error"] is None:
        logger.info("Loaded %d rows from %s", len(result["rows"]), file_path)
    return result


def normalize_data(rows: Any) -> list:
    """Convert every cell to ``str``, or None for missing values.

    Non-mapping rows are passed through untouched.
    """
    if not isinstance(rows, list) or len(rows) == 0:
        return []

    normalized: list = []
    for row in rows:
        if not isinstance(row, dict):
            normalized.append(row)
            continue
        normalized.append(
            {key: None if value is None or value == "" else str(value) for key, value in row.items()}
        )
    return normalized


def get_column_names(rows: Any) -> list[str]:
    """Column names of a dataset, taken from its first row."""
    if not isinstance(rows, list) or len(rows) == 0:
        return []
    first_row = rows[0]
    if not isinstance(first_row, dict):
        return []
    return list(first_row.keys())
