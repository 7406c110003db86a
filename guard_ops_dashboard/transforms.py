"""
Data transforms: fold decoded report rows into hourly, per-guard and
per-location profiles for one selected date.
"""

import logging
from typing import Iterable, Sequence

from .config import (
    ACTIVITY_DELAY_MARKER,
    ACTIVITY_ON_TIME,
    ALERT_NONE_VALUES,
    INCLUDE_ACTIVITY_ONLY_GUARDS,
    LOCATION_ACCURACY_THRESHOLD_M,
    SHIFT_ON_TIME,
)
from .kpis import calc_performance_components, round_half_up, safe_rate
from .loaders.utils import matches_date, parse_hour
from .models import (
    ActivityRecord,
    AttendanceRecord,
    AttendanceSummary,
    GuardProfile,
    HourlyBucket,
    LocationProfile,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field predicates shared by the hourly and guard passes
# ---------------------------------------------------------------------------

def is_on_time_activity(record: ActivityRecord) -> bool:
    return record.time_accuracy == ACTIVITY_ON_TIME


def is_delayed_activity(record: ActivityRecord) -> bool:
    return ACTIVITY_DELAY_MARKER in record.time_accuracy


def is_location_accurate(record: ActivityRecord) -> bool:
    accuracy = record.location_accuracy_m
    return accuracy is not None and accuracy <= LOCATION_ACCURACY_THRESHOLD_M


def has_alert(record: ActivityRecord) -> bool:
    return record.alert.lower() not in ALERT_NONE_VALUES


def is_on_time_shift(record: AttendanceRecord) -> bool:
    return record.lateness == SHIFT_ON_TIME


# ---------------------------------------------------------------------------
# Date filter
# ---------------------------------------------------------------------------

def filter_activity_for_date(
    records: Iterable[ActivityRecord],
    selected_date: str,
) -> list[ActivityRecord]:
    """Keep activity rows whose Date/Time contains selected_date."""
    return [r for r in records if matches_date(r.timestamp, selected_date)]


def filter_attendance_for_date(
    records: Iterable[AttendanceRecord],
    selected_date: str,
) -> list[AttendanceRecord]:
    """Keep attendance rows whose Login Date contains selected_date."""
    return [r for r in records if matches_date(r.login_date, selected_date)]


# ---------------------------------------------------------------------------
# Hourly activity
# ---------------------------------------------------------------------------

def aggregate_hourly_activity(records: Iterable[ActivityRecord]) -> list[HourlyBucket]:
    """Group activities by hour of day.

    Rows without a parseable timestamp are skipped. The compliance rate of
    each bucket is computed from its final totals:
        round(100 * (on_time + location_accurate) / (2 * total))

    Returns
    -------
    One HourlyBucket per observed hour, ascending by hour.
    """
    counters: dict[int, dict[str, int]] = {}
    skipped = 0

    for record in records:
        hour = parse_hour(record.timestamp)
        if hour is None:
            skipped += 1
            continue

        bucket = counters.setdefault(hour, {
            "total": 0,
            "on_time": 0,
            "location_accurate": 0,
            "delayed": 0,
            "alert_count": 0,
        })
        bucket["total"] += 1
        bucket["on_time"] += is_on_time_activity(record)
        bucket["location_accurate"] += is_location_accurate(record)
        bucket["delayed"] += is_delayed_activity(record)
        bucket["alert_count"] += has_alert(record)

    if skipped:
        logger.debug("Skipped %d activity rows without a usable timestamp", skipped)

    buckets = [
        HourlyBucket(
            hour=hour,
            compliance_rate=round_half_up(safe_rate(
                c["on_time"] + c["location_accurate"], 2 * c["total"],
            )),
            **c,
        )
        for hour, c in sorted(counters.items())
    ]
    logger.info("Built %d hourly activity buckets", len(buckets))
    return buckets


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------

def _new_guard(guard_id: str, name: str) -> dict:
    return {
        "guard_id": guard_id,
        "name": name,
        "total_shifts": 0,
        "on_time_shifts": 0,
        "late_shifts": 0,
        "total_activities": 0,
        "on_time_activities": 0,
        "location_accurate_activities": 0,
        "locations": set(),
        "duty_hours": 0.0,
    }


def _score_guard(acc: dict) -> GuardProfile:
    components = calc_performance_components(
        on_time_shifts=acc["on_time_shifts"],
        total_shifts=acc["total_shifts"],
        on_time_activities=acc["on_time_activities"],
        location_accurate_activities=acc["location_accurate_activities"],
        total_activities=acc["total_activities"],
        location_count=len(acc["locations"]),
    )
    return GuardProfile(
        **{**acc, "locations": frozenset(acc["locations"])},
        **components,
        attendance_rate=round_half_up(
            safe_rate(acc["on_time_shifts"], acc["total_shifts"])
        ),
        activity_compliance_rate=round_half_up(safe_rate(
            acc["on_time_activities"] + acc["location_accurate_activities"],
            2 * acc["total_activities"],
        )),
    )


def aggregate_guards(
    attendance: Iterable[AttendanceRecord],
    activity: Iterable[ActivityRecord],
    include_activity_only_guards: bool = INCLUDE_ACTIVITY_ONLY_GUARDS,
) -> list[GuardProfile]:
    """Join attendance and activity rows by guard and score each guard.

    Rules
    -----
    - Pass 1 (attendance): rows with both a Service Number and a Full Name
      seed the guard and count a shift (on-time when Late Hours is
      "On-time", late otherwise), add the post to the guard's covered
      locations, and add Duty Hours (non-numeric counts as 0).
    - Pass 2 (activity): rows attach to guards seeded in pass 1. With
      include_activity_only_guards=True an unseen guard is seeded from the
      activity row instead (name from User Name, else the Service Number).

    Returns
    -------
    GuardProfile list sorted by performance_score descending; ties keep
    first-seen order.
    """
    guards: dict[str, dict] = {}

    for record in attendance:
        if not record.guard_id or not record.full_name:
            continue
        acc = guards.get(record.guard_id)
        if acc is None:
            acc = guards[record.guard_id] = _new_guard(record.guard_id, record.full_name)

        acc["total_shifts"] += 1
        if is_on_time_shift(record):
            acc["on_time_shifts"] += 1
        else:
            acc["late_shifts"] += 1

        if record.post_name:
            acc["locations"].add(record.post_name)
        if record.duty_hours is not None:
            acc["duty_hours"] += record.duty_hours

    unmatched = 0
    for record in activity:
        if not record.guard_id:
            continue
        acc = guards.get(record.guard_id)
        if acc is None:
            if not include_activity_only_guards:
                unmatched += 1
                continue
            acc = guards[record.guard_id] = _new_guard(
                record.guard_id, record.user_name or record.guard_id
            )

        acc["total_activities"] += 1
        acc["on_time_activities"] += is_on_time_activity(record)
        acc["location_accurate_activities"] += is_location_accurate(record)

    if unmatched:
        logger.info(
            "Ignored %d activity rows for guards with no attendance record", unmatched
        )

    profiles = sorted(
        (_score_guard(acc) for acc in guards.values()),
        key=lambda g: g.performance_score,
        reverse=True,
    )
    logger.info("Built %d guard profiles", len(profiles))
    return profiles


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------

def aggregate_locations(attendance: Iterable[AttendanceRecord]) -> list[LocationProfile]:
    """Group attendance rows by post.

    Rules
    -----
    - Every row with a Post Name counts toward total shifts.
    - Rows that also carry a Full Name count as covered; only covered rows
      add to on-time shifts, distinct guards and duty hours.
    - coverage_rate = round(100 * covered / total)
      punctuality_rate = round(100 * on_time / covered)
      average_shift_hours = round(duty_hours / covered, 1)
      Each is 0 when its denominator is 0.

    Returns
    -------
    LocationProfile list sorted by coverage_rate descending; ties keep
    first-seen order.
    """
    locations: dict[str, dict] = {}

    for record in attendance:
        if not record.post_name:
            continue
        acc = locations.setdefault(record.post_name, {
            "location": record.post_name,
            "total_shifts": 0,
            "covered_shifts": 0,
            "on_time_shifts": 0,
            "guards": set(),
            "duty_hours": 0.0,
        })
        acc["total_shifts"] += 1

        if not record.full_name:
            continue
        acc["covered_shifts"] += 1
        acc["guards"].add(record.full_name)
        if is_on_time_shift(record):
            acc["on_time_shifts"] += 1
        if record.duty_hours is not None:
            acc["duty_hours"] += record.duty_hours

    profiles = []
    for acc in locations.values():
        covered = acc["covered_shifts"]
        profiles.append(LocationProfile(
            **{**acc, "guards": frozenset(acc["guards"])},
            coverage_rate=round_half_up(safe_rate(covered, acc["total_shifts"])),
            punctuality_rate=round_half_up(safe_rate(acc["on_time_shifts"], covered)),
            average_shift_hours=(
                round_half_up(acc["duty_hours"] / covered, 1) if covered else 0.0
            ),
        ))

    profiles.sort(key=lambda loc: loc.coverage_rate, reverse=True)
    logger.info("Built %d location profiles", len(profiles))
    return profiles


# ---------------------------------------------------------------------------
# Attendance summary
# ---------------------------------------------------------------------------

def summarise_attendance(attendance: Sequence[AttendanceRecord]) -> AttendanceSummary:
    """Shift totals for the overview cards.

    Every row counts as a shift; rows not marked "On-time" count as late.
    """
    total = len(attendance)
    on_time = sum(1 for r in attendance if is_on_time_shift(r))
    return AttendanceSummary(
        total_shifts=total,
        on_time=on_time,
        late=total - on_time,
        punctuality_rate=round_half_up(safe_rate(on_time, total)),
    )
