"""
Configuration: report paths, column names, thresholds, compliance registry.

COMPLIANCE_CHECKS maps each entity kind to the policy checks it is scored
against: the profile metric each check reads and the minimum value that
passes.
"""

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# File paths: adjust these if the exports move
# ---------------------------------------------------------------------------
DATA_DIR = Path(
    os.environ.get(
        "GUARD_OPS_DATA_DIR",
        Path(__file__).resolve().parent.parent / "data",
    )
)

ACTIVITY_REPORT_FILE = DATA_DIR / "Activity-Report.csv"
ATTENDANCE_REPORT_FILE = DATA_DIR / "Post-basis-attendance.csv"

DEFAULT_SELECTED_DATE = "2024-10-19"

# ---------------------------------------------------------------------------
# Source columns (exact, case-sensitive)
# ---------------------------------------------------------------------------
COL_DATE_TIME = "Date/Time"
COL_TIME_ACCURACY = "Time Accuracy"
COL_LOCATION_ACCURACY = "Location Accuracy"
COL_SERVICE_NUMBER = "Service Number"
COL_FULL_NAME = "Full Name"
COL_POST_NAME = "Post Name"
COL_LATE_HOURS = "Late Hours"
COL_DUTY_HOURS = "Duty Hours"
COL_USER_NAME = "User Name"
COL_ALERT = "Alert"
COL_LOGIN_DATE = "Login Date"

ACTIVITY_COLUMNS = [
    COL_DATE_TIME,
    COL_SERVICE_NUMBER,
    COL_USER_NAME,
    COL_POST_NAME,
    COL_TIME_ACCURACY,
    COL_LOCATION_ACCURACY,
    COL_ALERT,
]

ATTENDANCE_COLUMNS = [
    COL_LOGIN_DATE,
    COL_SERVICE_NUMBER,
    COL_FULL_NAME,
    COL_POST_NAME,
    COL_LATE_HOURS,
    COL_DUTY_HOURS,
]

# ---------------------------------------------------------------------------
# Classification literals as they appear in the exports
# ---------------------------------------------------------------------------
ACTIVITY_ON_TIME = "On Time"
ACTIVITY_DELAY_MARKER = "Delay"
SHIFT_ON_TIME = "On-time"
ALERT_NONE_VALUES = {"", "none", "no alert"}

# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------
LOCATION_ACCURACY_THRESHOLD_M = 20
COVERAGE_SATURATION_LOCATIONS = 3

# Performance score weights (sum to 100)
ATTENDANCE_WEIGHT = 30
ACTIVITY_WEIGHT = 40
COVERAGE_WEIGHT = 30

# Guard visibility: when False, activity rows only attach to guards that
# already have an attendance record for the selected date.
INCLUDE_ACTIVITY_ONLY_GUARDS = False

# ---------------------------------------------------------------------------
# Compliance registry
# ---------------------------------------------------------------------------
# metric: attribute read from the profile
# threshold: minimum value that passes the check
COMPLIANCE_CHECKS: dict[str, dict[str, dict]] = {
    "location": {
        "coverage_compliance": {
            "metric": "coverage_rate",
            "threshold": 95,
        },
        "punctuality_compliance": {
            "metric": "punctuality_rate",
            "threshold": 90,
        },
        "staffing_compliance": {
            "metric": "guard_count",
            "threshold": 2,
        },
    },
    "guard": {
        "attendance_compliance": {
            "metric": "attendance_rate",
            "threshold": 95,
        },
        "activity_compliance": {
            "metric": "activity_compliance_rate",
            "threshold": 90,
        },
        "coverage_compliance": {
            "metric": "coverage_count",
            "threshold": 1,
        },
    },
}

# ---------------------------------------------------------------------------
# Display bands
# ---------------------------------------------------------------------------
HIGH_PERFORMER_SCORE = 80
PERFORMANCE_AMBER_SCORE = 60

FULL_COVERAGE_RATE = 90
ADEQUATE_COVERAGE_RATE = 70

COMPLIANT_SCORE = 90

RAG_COLORS = {
    "green": "#10B981",
    "amber": "#F59E0B",
    "red": "#EF4444",
    "grey": "#95a5a6",
}
