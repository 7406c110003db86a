"""
Report loading and row decoding tests.
"""

import openpyxl
import pandas as pd
import pytest

from guard_ops_dashboard.loaders import (
    ReportLoadError,
    decode_activity_records,
    decode_attendance_records,
    load_activity_report,
    load_attendance_report,
    load_report,
)
from guard_ops_dashboard.loaders.utils import (
    clean_str,
    leading_float,
    leading_int,
    matches_date,
    parse_hour,
)

ACTIVITY_CSV = """Date/Time,Service Number,User Name,Post Name,Time Accuracy,Location Accuracy,Alert
2024-10-19 08:05:00,G1,Alice Dube,Gate A,On Time,5,None
2024-10-19 09:10:00,G2,Brian Sithole,Gate B,Minor Delay,,Critical
"""

ATTENDANCE_CSV = """Login Date,Service Number,Full Name,Post Name,Late Hours,Duty Hours
2024-10-19 06:00,G1,Alice Dube,Gate A,On-time,12
2024-10-19 06:00,,,Gate C,,
"""


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("raw, expected", [
    ("12", 12), ("12m", 12), (" 15.8", 15), ("abc", None), ("", None), (None, None), (7, 7),
])
def test_leading_int(raw, expected):
    assert leading_int(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("7.5", 7.5), ("7.5 hrs", 7.5), (".5", 0.5), ("n/a", None), ("", None), (8, 8.0),
    ("1e999", None), (float("inf"), None), (float("nan"), None),
])
def test_leading_float(raw, expected):
    assert leading_float(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("2024-10-19 08:05:00", 8),
    ("2024-10-19T23:59:59", 23),
    ("2024-10-19", 0),
    ("", None),
    ("not a timestamp", None),
])
def test_parse_hour(raw, expected):
    assert parse_hour(raw) == expected


def test_clean_str_handles_missing_values():
    assert clean_str(None) == ""
    assert clean_str(float("nan")) == ""
    assert clean_str("  Gate A ") == "Gate A"


def test_matches_date():
    assert matches_date("2024-10-19 08:00", "2024-10-19")
    assert not matches_date("2024-10-20 08:00", "2024-10-19")
    assert not matches_date(None, "2024-10-19")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def test_load_csv_reports(tmp_path):
    activity_path = tmp_path / "Activity-Report.csv"
    attendance_path = tmp_path / "Post-basis-attendance.csv"
    activity_path.write_text(ACTIVITY_CSV, encoding="utf-8")
    attendance_path.write_text(ATTENDANCE_CSV, encoding="utf-8")

    activity_df = load_activity_report(activity_path)
    attendance_df = load_attendance_report(attendance_path)

    assert len(activity_df) == 2
    assert activity_df.loc[1, "Location Accuracy"] == ""
    assert attendance_df.loc[1, "Full Name"] == ""


def test_load_missing_file_raises_report_load_error(tmp_path):
    with pytest.raises(ReportLoadError):
        load_report(tmp_path / "missing.csv")


def test_load_excel_report(tmp_path):
    path = tmp_path / "attendance.xlsx"
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.append(["Login Date", "Service Number", "Full Name", "Post Name", "Late Hours", "Duty Hours"])
    ws.append(["2024-10-19 06:00", "G1", "Alice Dube", "Gate A", "On-time", "12"])
    ws.append(["2024-10-19 06:00", None, None, "Gate C", None, None])
    wb.save(path)

    df = load_report(path)
    records = decode_attendance_records(df)

    assert len(records) == 2
    assert records[0].duty_hours == 12.0
    assert records[1].full_name == ""
    assert records[1].duty_hours is None


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def test_decode_activity_records(tmp_path):
    path = tmp_path / "activity.csv"
    path.write_text(ACTIVITY_CSV, encoding="utf-8")
    first, second = decode_activity_records(load_report(path))

    assert first.guard_id == "G1"
    assert first.location_accuracy_m == 5
    assert first.user_name == "Alice Dube"
    assert second.location_accuracy_m is None
    assert second.alert == "Critical"


def test_decode_tolerates_missing_columns():
    df = pd.DataFrame([{"Service Number": "G1", "Post Name": "Gate A"}])
    (record,) = decode_attendance_records(df)
    assert record.guard_id == "G1"
    assert record.full_name == ""
    assert record.login_date == ""
    assert record.duty_hours is None


def test_decode_empty_frame():
    assert decode_activity_records(pd.DataFrame()) == []
    assert decode_attendance_records(None) == []
