"""
Loaders for the guard-operations exports.

Activity report: Activity-Report.csv
    One row per logged patrol/check activity. Columns used: Date/Time,
    Service Number, User Name, Post Name, Time Accuracy,
    Location Accuracy, Alert.

Attendance report: Post-basis-attendance.csv
    One row per post shift. Columns used: Login Date, Service Number,
    Full Name, Post Name, Late Hours, Duty Hours.

Both are read as text: every cell is a string and empty cells are "".
Missing columns are tolerated; the affected fields decode as empty.
"""

import logging
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from ..config import (
    ACTIVITY_COLUMNS,
    ATTENDANCE_COLUMNS,
    COL_ALERT,
    COL_DATE_TIME,
    COL_DUTY_HOURS,
    COL_FULL_NAME,
    COL_LATE_HOURS,
    COL_LOCATION_ACCURACY,
    COL_LOGIN_DATE,
    COL_POST_NAME,
    COL_SERVICE_NUMBER,
    COL_TIME_ACCURACY,
    COL_USER_NAME,
)
from ..models import ActivityRecord, AttendanceRecord
from .utils import clean_str, leading_float, leading_int

logger = logging.getLogger(__name__)

_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class ReportLoadError(Exception):
    """A report could not be fetched or decoded."""


def load_report(source: str | Path) -> pd.DataFrame:
    """Read one export into a string-typed DataFrame.

    Parameters
    ----------
    source : Local path or URL of a UTF-8 CSV with a header row, or a
             path to an .xlsx workbook (first sheet).

    Raises
    ------
    ReportLoadError if the source cannot be read or parsed.
    """
    source_str = str(source)
    suffix = Path(source_str.split("?", 1)[0]).suffix.lower()

    try:
        if suffix in _EXCEL_SUFFIXES:
            df = pd.read_excel(source_str, dtype=str, engine="openpyxl")
            df = df.fillna("")
        else:
            df = pd.read_csv(
                source_str,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8",
                skip_blank_lines=True,
            )
    except Exception as exc:
        logger.exception("Failed to load report: %s", source_str)
        raise ReportLoadError(f"Could not load {source_str}: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]
    logger.info("Loaded %d rows from %s", len(df), source_str)
    return df


def _warn_missing_columns(df: pd.DataFrame, expected: list[str], label: str) -> None:
    missing = [c for c in expected if c not in df.columns]
    if missing:
        logger.warning("%s is missing columns %s; fields will decode as empty", label, missing)


def load_activity_report(source: str | Path) -> pd.DataFrame:
    """Load the activity report export."""
    df = load_report(source)
    _warn_missing_columns(df, ACTIVITY_COLUMNS, "Activity report")
    return df


def load_attendance_report(source: str | Path) -> pd.DataFrame:
    """Load the post-basis attendance export."""
    df = load_report(source)
    _warn_missing_columns(df, ATTENDANCE_COLUMNS, "Attendance report")
    return df


# ---------------------------------------------------------------------------
# Row decoding
# ---------------------------------------------------------------------------

def activity_record_from_row(row: Mapping[str, Any]) -> ActivityRecord:
    return ActivityRecord(
        guard_id=clean_str(row.get(COL_SERVICE_NUMBER)),
        timestamp=clean_str(row.get(COL_DATE_TIME)),
        location_accuracy_m=leading_int(row.get(COL_LOCATION_ACCURACY)),
        time_accuracy=clean_str(row.get(COL_TIME_ACCURACY)),
        alert=clean_str(row.get(COL_ALERT)),
        post_name=clean_str(row.get(COL_POST_NAME)),
        user_name=clean_str(row.get(COL_USER_NAME)),
    )


def attendance_record_from_row(row: Mapping[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        guard_id=clean_str(row.get(COL_SERVICE_NUMBER)),
        full_name=clean_str(row.get(COL_FULL_NAME)),
        post_name=clean_str(row.get(COL_POST_NAME)),
        login_date=clean_str(row.get(COL_LOGIN_DATE)),
        lateness=clean_str(row.get(COL_LATE_HOURS)),
        duty_hours=leading_float(row.get(COL_DUTY_HOURS)),
    )


def decode_activity_records(df: pd.DataFrame) -> list[ActivityRecord]:
    """Turn an activity report frame into immutable records."""
    if df is None or df.empty:
        return []
    return [activity_record_from_row(row) for row in df.to_dict("records")]


def decode_attendance_records(df: pd.DataFrame) -> list[AttendanceRecord]:
    """Turn an attendance report frame into immutable records."""
    if df is None or df.empty:
        return []
    return [attendance_record_from_row(row) for row in df.to_dict("records")]
