"""
Shared utilities for report decoding: string cleanup, lenient numeric
parsing, timestamp hour extraction and the date filter.
"""

import logging
import math
import re
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def clean_str(val: Any) -> str:
    """Return a stripped string, treating None and NaN as empty."""
    if val is None:
        return ""
    if isinstance(val, float) and pd.isna(val):
        return ""
    return str(val).strip()


def leading_int(val: Any) -> int | None:
    """Parse the integer prefix of a value.

    Exports carry units and decimals in numeric cells ("12m", "15.8"),
    so only the leading digits are read: "12m" -> 12, "15.8" -> 15.
    Returns None when the value does not start with a number.
    """
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return None if pd.isna(val) else int(val)
    match = _LEADING_INT.match(clean_str(val))
    if match is None:
        return None
    return int(match.group(1))


def leading_float(val: Any) -> float | None:
    """Parse the decimal prefix of a value ("7.5 hrs" -> 7.5).

    Returns None for empty, non-numeric or non-finite values ("1e999").
    """
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        number = float(val)
    else:
        match = _LEADING_FLOAT.match(clean_str(val))
        if match is None:
            return None
        number = float(match.group(1))
    return number if math.isfinite(number) else None


def parse_hour(val: Any) -> int | None:
    """Return the hour-of-day (0-23) of a timestamp string.

    The wall-clock hour is taken as written; timezone offsets are not
    converted. Returns None for missing or unparseable values.
    """
    text = clean_str(val)
    if not text:
        return None
    try:
        ts = pd.Timestamp(text)
    except (ValueError, TypeError, OverflowError):
        logger.debug("Could not parse timestamp: %s", text)
        return None
    if pd.isna(ts):
        return None
    return int(ts.hour)


def matches_date(val: Any, selected_date: str) -> bool:
    """Literal date filter: True when the field contains the selected date.

    This is a substring match on the raw text ("2024-10-19"), not a
    calendar comparison.
    """
    text = clean_str(val)
    return bool(text) and selected_date in text
