"""
Simulated data generator for the guard operations dashboard.

Generates activity and attendance exports in the same column layout as
the real CSV files. All values are synthetic; no real personnel data is
used.
"""

import numpy as np
import pandas as pd

from .config import (
    ACTIVITY_ON_TIME,
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
    SHIFT_ON_TIME,
)

_POSTS = [
    "Main Gate",
    "Warehouse North",
    "Warehouse South",
    "Admin Block",
    "Parking Lot B",
    "Control Room",
]

# (service number, full name, punctuality, patrol diligence)
_GUARDS = [
    ("SG-1001", "Tendai Moyo", 0.97, 0.93),
    ("SG-1002", "Aisha Bello", 0.92, 0.88),
    ("SG-1003", "Ravi Kumar", 0.85, 0.80),
    ("SG-1004", "Maria Santos", 0.99, 0.95),
    ("SG-1005", "John Okafor", 0.75, 0.70),
    ("SG-1006", "Lina Park", 0.90, 0.91),
    ("SG-1007", "Peter Ncube", 0.65, 0.60),
    ("SG-1008", "Grace Mensah", 0.95, 0.85),
]

_DELAY_LABELS = ["Minor Delay", "Major Delay"]
_ALERTS = ["None", "Informational", "Critical"]


def generate_attendance_report(
    start_date: str = "2024-10-15",
    n_days: int = 7,
    shifts_per_post: int = 2,
    vacancy_rate: float = 0.08,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate a post-basis attendance export.

    Each post runs shifts_per_post shifts a day. A vacant shift has a post
    but no guard.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(start_date, periods=n_days, freq="D")
    rows = []

    for date in dates:
        for post in _POSTS:
            for shift in range(shifts_per_post):
                login = date + pd.Timedelta(hours=6 + 12 * shift)
                base = {
                    COL_LOGIN_DATE: login.strftime("%Y-%m-%d %H:%M"),
                    COL_POST_NAME: post,
                    COL_SERVICE_NUMBER: "",
                    COL_FULL_NAME: "",
                    COL_LATE_HOURS: "",
                    COL_DUTY_HOURS: "",
                }
                if rng.uniform() < vacancy_rate:
                    rows.append(base)
                    continue

                sn, name, punctuality, _ = _GUARDS[rng.integers(len(_GUARDS))]
                on_time = rng.uniform() < punctuality
                late_minutes = int(rng.integers(5, 90))
                hours = 12 - (0 if on_time else late_minutes / 60) + rng.normal(0, 0.3)

                rows.append({
                    **base,
                    COL_SERVICE_NUMBER: sn,
                    COL_FULL_NAME: name,
                    COL_LATE_HOURS: SHIFT_ON_TIME if on_time else f"{late_minutes // 60:02d}:{late_minutes % 60:02d}",
                    COL_DUTY_HOURS: f"{max(hours, 0):.2f}",
                })

    return pd.DataFrame(rows)


def generate_activity_report(
    attendance_df: pd.DataFrame,
    activities_per_shift: int = 6,
    seed: int = 7,
) -> pd.DataFrame:
    """Generate patrol activities for each staffed shift in attendance_df."""
    rng = np.random.default_rng(seed)
    diligence = {sn: d for sn, _, _, d in _GUARDS}
    rows = []

    for shift in attendance_df.to_dict("records"):
        sn = shift[COL_SERVICE_NUMBER]
        if not sn:
            continue
        start = pd.Timestamp(shift[COL_LOGIN_DATE])
        score = diligence.get(sn, 0.8)

        for _ in range(activities_per_shift):
            when = start + pd.Timedelta(minutes=int(rng.integers(0, 12 * 60)))
            if rng.uniform() < score:
                time_accuracy = ACTIVITY_ON_TIME
            else:
                time_accuracy = _DELAY_LABELS[rng.integers(len(_DELAY_LABELS))]
            accuracy_m = abs(rng.normal(8, 6)) if rng.uniform() < score else rng.uniform(20, 120)
            alert = _ALERTS[rng.choice(3, p=[0.9, 0.08, 0.02])]

            rows.append({
                COL_DATE_TIME: when.strftime("%Y-%m-%d %H:%M:%S"),
                COL_SERVICE_NUMBER: sn,
                COL_USER_NAME: shift[COL_FULL_NAME],
                COL_POST_NAME: shift[COL_POST_NAME],
                COL_TIME_ACCURACY: time_accuracy,
                COL_LOCATION_ACCURACY: f"{accuracy_m:.0f}",
                COL_ALERT: alert,
            })

    return pd.DataFrame(rows)


def generate_reports(
    start_date: str = "2024-10-15",
    n_days: int = 7,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return (activity_df, attendance_df) covering n_days from start_date."""
    attendance = generate_attendance_report(start_date, n_days)
    activity = generate_activity_report(attendance)
    return activity, attendance
