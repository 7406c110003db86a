"""
Dashboard-ready output functions.

These are the primary entry points for the Streamlit front end.
build_dashboard() returns one immutable DashboardResult per selected date;
the remaining functions derive card values, filtered lists and
DataFrames from it without touching the source records again.
"""

import logging
from typing import Iterable, Sequence

import pandas as pd

from .config import (
    COL_DATE_TIME,
    COL_LOGIN_DATE,
    COMPLIANT_SCORE,
    FULL_COVERAGE_RATE,
    HIGH_PERFORMER_SCORE,
    INCLUDE_ACTIVITY_ONLY_GUARDS,
)
from .kpis import classify_coverage, classify_performance, evaluate_compliance
from .models import ActivityRecord, AttendanceRecord, DashboardResult, GuardProfile
from .transforms import (
    aggregate_guards,
    aggregate_hourly_activity,
    aggregate_locations,
    filter_activity_for_date,
    filter_attendance_for_date,
    summarise_attendance,
)

logger = logging.getLogger(__name__)

_ISO_DATE = r"(\d{4}-\d{2}-\d{2})"


def build_dashboard(
    activity_records: Iterable[ActivityRecord],
    attendance_records: Iterable[AttendanceRecord],
    selected_date: str,
    include_activity_only_guards: bool = INCLUDE_ACTIVITY_ONLY_GUARDS,
) -> DashboardResult:
    """Single entry point the front end calls after every date change.

    Parameters
    ----------
    activity_records : All decoded activity rows.
    attendance_records : All decoded attendance rows.
    selected_date : "YYYY-MM-DD"; matched as a substring of the row dates.
    include_activity_only_guards : Let guards that appear only in the
        activity report form a profile.

    Returns
    -------
    DashboardResult holding hourly buckets, guard and location profiles,
    compliance results and the attendance summary.
    """
    activity = filter_activity_for_date(activity_records, selected_date)
    attendance = filter_attendance_for_date(attendance_records, selected_date)

    if not activity and not attendance:
        logger.warning("No activity or attendance rows for %s", selected_date)

    hourly = aggregate_hourly_activity(activity)
    locations = aggregate_locations(attendance)
    guards = aggregate_guards(
        attendance,
        activity,
        include_activity_only_guards=include_activity_only_guards,
    )
    compliance = evaluate_compliance(locations, guards)

    return DashboardResult(
        selected_date=selected_date,
        hourly=tuple(hourly),
        guards=tuple(guards),
        locations=tuple(locations),
        compliance=compliance,
        attendance=summarise_attendance(attendance),
        activity_count=len(activity),
    )


def get_overview_summary(result: DashboardResult) -> dict:
    """Return a dict suitable for the top-level dashboard cards.

    Returns
    -------
    {
        "selected_date": "2024-10-19",
        "overall_compliance": 72,
        "punctuality_rate": 88, "total_shifts": ..., "late_arrivals": ...,
        "active_guards": ..., "high_performers": ...,
        "monitored_locations": ..., "fully_covered_locations": ...,
        "compliant_locations": ..., "compliant_guards": ...,
        "total_activities": ...,
    }
    """
    compliance = result.compliance
    return {
        "selected_date": result.selected_date,
        "overall_compliance": compliance.overall,
        "punctuality_rate": result.attendance.punctuality_rate,
        "total_shifts": result.attendance.total_shifts,
        "late_arrivals": result.attendance.late,
        "active_guards": len(result.guards),
        "high_performers": sum(
            1 for g in result.guards if g.performance_score >= HIGH_PERFORMER_SCORE
        ),
        "monitored_locations": len(result.locations),
        "fully_covered_locations": sum(
            1 for loc in result.locations if loc.coverage_rate >= FULL_COVERAGE_RATE
        ),
        "compliant_locations": sum(
            1 for c in compliance.by_location if c.compliance_score >= COMPLIANT_SCORE
        ),
        "compliant_guards": sum(
            1 for c in compliance.by_guard if c.compliance_score >= COMPLIANT_SCORE
        ),
        "total_activities": result.activity_count,
    }


def collect_rates(result: DashboardResult) -> list[int]:
    """Every 0-100 rate in a result, for range checks."""
    rates = [result.compliance.overall, result.attendance.punctuality_rate]
    rates += [b.compliance_rate for b in result.hourly]
    for g in result.guards:
        rates += [g.attendance_rate, g.activity_compliance_rate, g.performance_score]
    for loc in result.locations:
        rates += [loc.coverage_rate, loc.punctuality_rate]
    rates += [c.compliance_score for c in result.compliance.by_location]
    rates += [c.compliance_score for c in result.compliance.by_guard]
    return rates


def filter_guards(
    guards: Sequence[GuardProfile],
    search_term: str = "",
    location: str | None = None,
) -> list[GuardProfile]:
    """Case-insensitive name search, optionally limited to one covered post."""
    term = (search_term or "").strip().lower()
    return [
        g for g in guards
        if term in g.name.lower()
        and (location is None or location in g.locations)
    ]


def get_available_dates(
    activity_df: pd.DataFrame | None,
    attendance_df: pd.DataFrame | None,
) -> list[str]:
    """Return sorted YYYY-MM-DD strings found in either report, for the date picker.

    Dates are read as literal substrings, the same way the date filter
    matches rows, so every offered date selects at least one row.
    """
    dates: set[str] = set()
    for df, col in ((activity_df, COL_DATE_TIME), (attendance_df, COL_LOGIN_DATE)):
        if df is None or df.empty or col not in df.columns:
            continue
        found = df[col].astype(str).str.extract(_ISO_DATE, expand=False)
        dates.update(found.dropna().unique().tolist())
    return sorted(dates)


# ---------------------------------------------------------------------------
# DataFrame views for charts and tables
# ---------------------------------------------------------------------------

def hourly_frame(result: DashboardResult) -> pd.DataFrame:
    columns = ["hour", "total", "on_time", "location_accurate", "delayed",
               "alert_count", "compliance_rate"]
    if not result.hourly:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([b.to_dict() for b in result.hourly])[columns]


def guards_frame(guards: Sequence[GuardProfile]) -> pd.DataFrame:
    """Guard table with the performance RAG band appended."""
    if not guards:
        return pd.DataFrame(columns=[
            "guard_id", "name", "performance_score", "attendance_rate",
            "activity_compliance_rate", "coverage_count", "rag",
        ])
    df = pd.DataFrame([g.to_dict() for g in guards])
    df["rag"] = df["performance_score"].apply(classify_performance)
    return df


def locations_frame(result: DashboardResult) -> pd.DataFrame:
    """Location table with the coverage status label appended."""
    if not result.locations:
        return pd.DataFrame(columns=[
            "location", "coverage_rate", "punctuality_rate", "guard_count",
            "average_shift_hours", "status",
        ])
    df = pd.DataFrame([loc.to_dict() for loc in result.locations])
    df["status"] = df["coverage_rate"].apply(classify_coverage)
    return df


def compliance_frames(result: DashboardResult) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return (location_compliance, guard_compliance) tables."""
    by_location = pd.DataFrame([c.to_dict() for c in result.compliance.by_location])
    by_guard = pd.DataFrame([c.to_dict() for c in result.compliance.by_guard])
    return by_location, by_guard
