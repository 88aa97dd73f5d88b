"""Value conversions and per-type format checks.

Every check here is total: a value that cannot be parsed simply does not
match, no check raises for bad input. Only :func:`cell_kind` raises, and only
for values that are not scalar cells at all.
"""

from __future__ import annotations

import math
import numbers
import re
import warnings
from typing import Any, Optional
from urllib.parse import urlsplit

import numpy as np
import pandas as pd

from dataquality.models import CellKind, MalformedRowError

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_INT_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_SCHEME_RE = re.compile(r"[a-z][a-z0-9+.\-]*")
_DIGIT_RE = re.compile(r"\d")


def cell_kind(value: Any) -> CellKind:
    """Tag a cell value as null, boolean, number or string.

    Raises:
        MalformedRowError: If the value is not one of those scalars.
    """
    if value is None:
        return CellKind.NULL
    if isinstance(value, (bool, np.bool_)):
        return CellKind.BOOL
    if isinstance(value, numbers.Real):
        return CellKind.NUMBER
    if isinstance(value, str):
        return CellKind.STRING
    raise MalformedRowError(
        f"Unsupported cell value of type {type(value).__name__}: {value!r}"
    )


def is_missing(value: Any) -> bool:
    """Return True for None and the empty string."""
    return value is None or (isinstance(value, str) and value == "")


def to_text(value: Any) -> str:
    """Stringify a cell value.

    Booleans become ``"true"``/``"false"`` and integral floats drop their
    fractional part, so ``1`` and ``1.0`` share one representation.
    """
    kind = cell_kind(value)
    if kind is CellKind.STRING:
        return value
    if kind is CellKind.NULL:
        return "null"
    if kind is CellKind.BOOL:
        return "true" if value else "false"

    if isinstance(value, numbers.Integral):
        value = int(value)
        try:
            float(value)
        except OverflowError:
            # Integers past the float range read as infinite
            return "Infinity" if value > 0 else "-Infinity"
        return str(value)
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def parse_number(value: Any) -> Optional[float]:
    """Strictly parse a value as a finite number.

    Accepts numeric cells and strings holding a whole decimal literal
    (optionally signed, with exponent) or a ``0x``/``0o``/``0b`` integer,
    surrounded by optional whitespace. Returns None when the value does not
    parse or is not finite; booleans never parse.
    """
    if isinstance(value, (bool, np.bool_)) or value is None:
        return None
    if isinstance(value, numbers.Real):
        try:
            number = float(value)
        except OverflowError:
            return None
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if _DECIMAL_RE.fullmatch(text):
        number = float(text)
    elif _PREFIXED_INT_RE.fullmatch(text):
        try:
            number = float(int(text, 0))
        except OverflowError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_valid_email(text: str) -> bool:
    """Single ``@``, no whitespace, and a dot in the domain part."""
    return _EMAIL_RE.fullmatch(text) is not None


def is_valid_url(text: str) -> bool:
    """Absolute URL with a scheme and a network location."""
    if not text or any(ch.isspace() for ch in text):
        return False
    try:
        parts = urlsplit(text)
        # Accessing the port validates it
        parts.port
    except ValueError:
        return False
    if not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    return bool(parts.netloc) and bool(parts.hostname)


def is_valid_date(text: str) -> bool:
    """Calendar date (or date-time) that resolves to a real instant.

    Bare words such as ``"may"`` or ``"today"`` are rejected: a date needs at
    least one digit.
    """
    if not text or not _DIGIT_RE.search(text):
        return False
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(text, errors="coerce")
    except Exception:
        # Any parser failure just means "not a date"
        return False
    return parsed is not pd.NaT and not pd.isna(parsed)
