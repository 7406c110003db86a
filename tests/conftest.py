"""
conftest.py — shared fixtures for the analytics tests.

Records are built directly from dicts keyed by the export column names,
the same shape the CSV decoder produces.
"""

import pytest

from guard_ops_dashboard.loaders.csv_reports import (
    activity_record_from_row,
    attendance_record_from_row,
)

DAY = "2024-10-19"
OTHER_DAY = "2024-10-20"


def activity(
    guard_id: str,
    when: str = f"{DAY} 08:15:00",
    time_accuracy: str = "On Time",
    location_accuracy: str = "5",
    post: str = "Gate A",
    user_name: str = "",
    alert: str = "None",
):
    return activity_record_from_row({
        "Service Number": guard_id,
        "Date/Time": when,
        "Time Accuracy": time_accuracy,
        "Location Accuracy": location_accuracy,
        "Post Name": post,
        "User Name": user_name,
        "Alert": alert,
    })


def attendance(
    guard_id: str = "",
    name: str = "",
    post: str = "Gate A",
    late: str = "On-time",
    duty_hours: str = "",
    login_date: str = f"{DAY} 06:00",
):
    return attendance_record_from_row({
        "Service Number": guard_id,
        "Full Name": name,
        "Post Name": post,
        "Late Hours": late,
        "Duty Hours": duty_hours,
        "Login Date": login_date,
    })


@pytest.fixture
def attendance_rows():
    return [
        attendance("G1", "Alice Dube", "Gate A", "On-time", "12"),
        attendance("G1", "Alice Dube", "Gate B", "00:20", "11.5"),
        attendance("G2", "Brian Sithole", "Gate A", "On-time", "12"),
        attendance("", "", "Gate C", late=""),
        attendance("G3", "Chipo Ndlovu", "Gate C", "On-time", "n/a"),
        attendance("G1", "Alice Dube", "Gate A", "On-time", "12", login_date=f"{OTHER_DAY} 06:00"),
    ]


@pytest.fixture
def activity_rows():
    return [
        activity("G1", f"{DAY} 08:05:00", "On Time", "5"),
        activity("G1", f"{DAY} 08:40:00", "Minor Delay", "35"),
        activity("G2", f"{DAY} 14:10:00", "On Time", "12m", alert="Critical"),
        activity("G2", f"{DAY} 03:00:00", "On Time", ""),
        activity("G9", f"{DAY} 14:30:00", "On Time", "3", user_name="Ghost Guard"),
        activity("G1", "", "On Time", "5"),
        activity("G1", f"{OTHER_DAY} 09:00:00", "On Time", "5"),
    ]
