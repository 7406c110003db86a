"""
End-to-end tests for build_dashboard() and the front-end helpers.
"""

import pandas as pd

from guard_ops_dashboard.dashboard import (
    build_dashboard,
    collect_rates,
    compliance_frames,
    filter_guards,
    get_available_dates,
    get_overview_summary,
    guards_frame,
    hourly_frame,
    locations_frame,
)
from tests.conftest import DAY


def test_build_dashboard(activity_rows, attendance_rows):
    result = build_dashboard(activity_rows, attendance_rows, DAY)

    assert result.selected_date == DAY
    assert result.activity_count == 5
    assert [b.hour for b in result.hourly] == [3, 8, 14]
    assert [g.guard_id for g in result.guards] == ["G2", "G1", "G3"]
    assert [loc.location for loc in result.locations] == ["Gate A", "Gate B", "Gate C"]

    compliance = result.compliance
    assert [c.compliance_score for c in compliance.by_location] == [100, 33, 33]
    assert [c.compliance_score for c in compliance.by_guard] == [67, 33, 67]
    assert (compliance.passed_checks, compliance.total_checks) == (10, 18)
    assert compliance.overall == 56


def test_build_dashboard_is_deterministic(activity_rows, attendance_rows):
    first = build_dashboard(activity_rows, attendance_rows, DAY)
    second = build_dashboard(activity_rows, attendance_rows, DAY)
    assert first == second


def test_all_rates_within_bounds(activity_rows, attendance_rows):
    result = build_dashboard(
        activity_rows, attendance_rows, DAY, include_activity_only_guards=True
    )
    rates = collect_rates(result)

    assert len(rates) == 2 + 3 + 4 * 3 + 3 * 2 + 3 + 4
    assert all(0 <= r <= 100 for r in rates)


def test_build_dashboard_for_date_without_data(activity_rows, attendance_rows):
    result = build_dashboard(activity_rows, attendance_rows, "1999-01-01")
    assert result.hourly == ()
    assert result.guards == ()
    assert result.locations == ()
    assert result.compliance.overall == 0
    assert result.attendance.punctuality_rate == 0


def test_overview_summary(activity_rows, attendance_rows):
    overview = get_overview_summary(build_dashboard(activity_rows, attendance_rows, DAY))

    assert overview == {
        "selected_date": DAY,
        "overall_compliance": 56,
        "punctuality_rate": 60,
        "total_shifts": 5,
        "late_arrivals": 2,
        "active_guards": 3,
        "high_performers": 0,
        "monitored_locations": 3,
        "fully_covered_locations": 2,
        "compliant_locations": 1,
        "compliant_guards": 0,
        "total_activities": 5,
    }


def test_filter_guards(activity_rows, attendance_rows):
    guards = build_dashboard(activity_rows, attendance_rows, DAY).guards

    assert [g.guard_id for g in filter_guards(guards, "alice")] == ["G1"]
    assert [g.guard_id for g in filter_guards(guards, "", "Gate A")] == ["G2", "G1"]
    assert [g.guard_id for g in filter_guards(guards, "  ")] == ["G2", "G1", "G3"]
    assert filter_guards(guards, "nobody") == []


def test_frames(activity_rows, attendance_rows):
    result = build_dashboard(activity_rows, attendance_rows, DAY)

    hourly = hourly_frame(result)
    assert hourly["hour"].tolist() == [3, 8, 14]

    guards = guards_frame(result.guards)
    assert guards["rag"].tolist() == ["amber", "red", "red"]
    assert guards.loc[1, "locations"] == ["Gate A", "Gate B"]

    locations = locations_frame(result)
    assert locations["status"].tolist() == ["Optimal", "Optimal", "Needs Attention"]

    by_location, by_guard = compliance_frames(result)
    assert len(by_location) == 3
    assert len(by_guard) == 3


def test_frames_for_empty_result(activity_rows, attendance_rows):
    result = build_dashboard([], [], DAY)
    assert hourly_frame(result).empty
    assert guards_frame(result.guards).empty
    assert "status" in locations_frame(result).columns


def test_get_available_dates():
    activity_df = pd.DataFrame({"Date/Time": ["2024-10-19 08:00:00", "bad", "2024-10-20 09:00:00"]})
    attendance_df = pd.DataFrame({"Login Date": ["2024-10-18 06:00", ""]})

    assert get_available_dates(activity_df, attendance_df) == ["2024-10-18", "2024-10-19", "2024-10-20"]
    assert get_available_dates(None, pd.DataFrame()) == []


def test_available_dates_only_offer_dates_the_filter_can_match():
    activity_df = pd.DataFrame({"Date/Time": ["19/10/2024 10:00", "Logged 2024-10-21 at 07:00"]})
    attendance_df = pd.DataFrame({"Login Date": ["Oct 20, 2024 06:00"]})

    assert get_available_dates(activity_df, attendance_df) == ["2024-10-21"]
