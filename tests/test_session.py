"""
Reload coordination tests: concurrent fetch join, error state, and
generation tokens discarding superseded reloads.
"""

import threading

import pandas as pd
import pytest

from guard_ops_dashboard.dashboard import build_dashboard
from guard_ops_dashboard.loaders import (
    ReportLoadError,
    decode_activity_records,
    decode_attendance_records,
)
from guard_ops_dashboard.session import DashboardSession
from tests.conftest import DAY, OTHER_DAY

ACTIVITY_DF = pd.DataFrame([
    {"Date/Time": f"{DAY} 08:05:00", "Service Number": "G1", "Time Accuracy": "On Time",
     "Location Accuracy": "5", "Post Name": "Gate A", "User Name": "Alice Dube", "Alert": "None"},
    {"Date/Time": f"{OTHER_DAY} 10:00:00", "Service Number": "G1", "Time Accuracy": "On Time",
     "Location Accuracy": "5", "Post Name": "Gate A", "User Name": "Alice Dube", "Alert": "None"},
])

ATTENDANCE_DF = pd.DataFrame([
    {"Login Date": f"{DAY} 06:00", "Service Number": "G1", "Full Name": "Alice Dube",
     "Post Name": "Gate A", "Late Hours": "On-time", "Duty Hours": "12"},
    {"Login Date": f"{OTHER_DAY} 06:00", "Service Number": "G1", "Full Name": "Alice Dube",
     "Post Name": "Gate B", "Late Hours": "00:30", "Duty Hours": "11"},
])


def _session(**kwargs):
    kwargs.setdefault("activity_loader", lambda _: ACTIVITY_DF)
    kwargs.setdefault("attendance_loader", lambda _: ATTENDANCE_DF)
    return DashboardSession("activity.csv", "attendance.csv", **kwargs)


def test_reload_applies_result():
    session = _session()
    state = session.reload(DAY)

    assert state.status == "ready"
    assert state.generation == 1
    assert session.current is state
    assert state.result.guards[0].performance_score == 80


def test_each_reload_advances_generation():
    session = _session()
    first = session.reload(DAY)
    second = session.reload(OTHER_DAY)

    assert (first.generation, second.generation) == (1, 2)
    assert session.current.selected_date == OTHER_DAY
    assert session.current.result.guards[0].locations == {"Gate B"}


def test_load_failure_becomes_error_state():
    def failing_loader(_):
        raise ReportLoadError("Could not load attendance.csv: 404")

    session = _session(attendance_loader=failing_loader)
    state = session.reload(DAY)

    assert state.status == "error"
    assert state.result is None
    assert "404" in state.error
    assert session.current is state


def test_fetches_run_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    def waiting_loader(df):
        def load(_):
            barrier.wait()
            return df
        return load

    session = _session(
        activity_loader=waiting_loader(ACTIVITY_DF),
        attendance_loader=waiting_loader(ATTENDANCE_DF),
    )
    assert session.reload(DAY).status == "ready"


def test_superseded_reload_is_discarded():
    release_first = threading.Event()
    first_started = threading.Event()
    calls = []

    def slow_then_fast(_):
        calls.append(None)
        if len(calls) == 1:
            first_started.set()
            assert release_first.wait(timeout=5)
        return ATTENDANCE_DF

    session = _session(attendance_loader=slow_then_fast)
    outcome = {}

    worker = threading.Thread(target=lambda: outcome.setdefault("old", session.reload(DAY)))
    worker.start()
    assert first_started.wait(timeout=5)

    newer = session.reload(OTHER_DAY)
    release_first.set()
    worker.join(timeout=5)

    assert newer.status == "ready"
    assert outcome["old"].status == "stale"
    assert outcome["old"].generation == 1
    assert session.current is newer
    assert session.latest_generation == 2


def test_unexpected_loader_errors_propagate():
    def broken(_):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        _session(activity_loader=broken).reload(DAY)


def test_reused_session_follows_rerun_settings():
    patrol_only = pd.concat([ACTIVITY_DF, pd.DataFrame([
        {"Date/Time": f"{DAY} 09:00:00", "Service Number": "G2", "Time Accuracy": "On Time",
         "Location Accuracy": "5", "Post Name": "Gate A", "User Name": "Bob Ncube", "Alert": "None"},
    ])], ignore_index=True)
    session = _session(activity_loader=lambda _: patrol_only)

    first = session.reload(DAY)
    session.include_activity_only_guards = True
    second = session.reload(DAY)

    assert [g.guard_id for g in first.result.guards] == ["G1"]
    assert {g.guard_id for g in second.result.guards} == {"G1", "G2"}
    assert second.generation == 2
    assert second.result == build_dashboard(
        decode_activity_records(patrol_only),
        decode_attendance_records(ATTENDANCE_DF),
        DAY,
        include_activity_only_guards=True,
    )
