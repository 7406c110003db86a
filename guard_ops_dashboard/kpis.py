"""
KPI computation functions — pure functions with no side effects.

Provides rounding and guarded rate helpers, the guard performance score,
RAG/coverage classification, and the compliance evaluator.
"""

import logging
import math
from typing import Iterable

from .config import (
    ACTIVITY_WEIGHT,
    ADEQUATE_COVERAGE_RATE,
    ATTENDANCE_WEIGHT,
    COMPLIANCE_CHECKS,
    COVERAGE_SATURATION_LOCATIONS,
    COVERAGE_WEIGHT,
    FULL_COVERAGE_RATE,
    HIGH_PERFORMER_SCORE,
    PERFORMANCE_AMBER_SCORE,
)
from .models import (
    ComplianceResult,
    GuardCompliance,
    GuardProfile,
    LocationCompliance,
    LocationProfile,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float, decimals: int = 0) -> float | int:
    """Round halves away from zero for positive values (2.5 -> 3).

    Returns an int when decimals == 0. Non-finite values round to 0.
    """
    factor = 10 ** decimals
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return 0 if decimals == 0 else 0.0
    rounded = math.floor(scaled) / factor
    if decimals == 0:
        return int(rounded)
    return rounded


def safe_rate(numerator: float, denominator: float, scale: float = 100) -> float:
    """Return numerator / denominator * scale, or 0 when denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator * scale


def calc_performance_components(
    on_time_shifts: int,
    total_shifts: int,
    on_time_activities: int,
    location_accurate_activities: int,
    total_activities: int,
    location_count: int,
) -> dict[str, float]:
    """Return the weighted components of a guard's performance score.

    Logic
    -----
    - attendance: 30 * on-time shifts / shifts
    - activity:   40 * (on-time + location-accurate) / (2 * activities)
    - coverage:   30 * locations / 3, saturating at 30

    A zero denominator scores 0 for that component.
    """
    attendance = safe_rate(on_time_shifts, total_shifts, ATTENDANCE_WEIGHT)
    activity = safe_rate(
        on_time_activities + location_accurate_activities,
        2 * total_activities,
        ACTIVITY_WEIGHT,
    )
    coverage = min(
        COVERAGE_WEIGHT,
        safe_rate(location_count, COVERAGE_SATURATION_LOCATIONS, COVERAGE_WEIGHT),
    )
    return {
        "attendance_score": attendance,
        "activity_score": activity,
        "coverage_score": coverage,
        "performance_score": round_half_up(attendance + activity + coverage),
    }


def classify_performance(score: float | None) -> str:
    """Return 'green', 'amber', or 'red' for a 0-100 performance score.

    green  if score >= 80
    amber  if score >= 60
    red    otherwise
    """
    if score is None:
        return "grey"
    if score >= HIGH_PERFORMER_SCORE:
        return "green"
    if score >= PERFORMANCE_AMBER_SCORE:
        return "amber"
    return "red"


def classify_coverage(coverage_rate: float | None) -> str:
    """Return the coverage status label shown against a location."""
    if coverage_rate is None:
        return "Needs Attention"
    if coverage_rate >= FULL_COVERAGE_RATE:
        return "Optimal"
    if coverage_rate >= ADEQUATE_COVERAGE_RATE:
        return "Adequate"
    return "Needs Attention"


def _run_checks(profile, kind: str) -> dict[str, bool]:
    checks = COMPLIANCE_CHECKS[kind]
    return {
        name: getattr(profile, rule["metric"]) >= rule["threshold"]
        for name, rule in checks.items()
    }


def evaluate_compliance(
    locations: Iterable[LocationProfile],
    guards: Iterable[GuardProfile],
) -> ComplianceResult:
    """Score every location and guard against COMPLIANCE_CHECKS.

    Each entity's compliance_score is the share of its checks passed
    (0-100). ``overall`` is passed checks over all checks issued, and is 0
    when there is nothing to check.

    Parameters
    ----------
    locations : Scored location profiles, in display order.
    guards : Scored guard profiles, in display order.

    Returns
    -------
    ComplianceResult with per-location and per-guard rows in input order.
    """
    passed = 0
    total = 0

    by_location = []
    for location in locations:
        results = _run_checks(location, "location")
        hits = sum(results.values())
        passed += hits
        total += len(results)
        by_location.append(LocationCompliance(
            location=location.location,
            compliance_score=round_half_up(safe_rate(hits, len(results))),
            **results,
        ))

    by_guard = []
    for guard in guards:
        results = _run_checks(guard, "guard")
        hits = sum(results.values())
        passed += hits
        total += len(results)
        by_guard.append(GuardCompliance(
            guard_id=guard.guard_id,
            name=guard.name,
            compliance_score=round_half_up(safe_rate(hits, len(results))),
            **results,
        ))

    if total == 0:
        logger.warning("No locations or guards to evaluate, overall compliance is 0")

    overall = round_half_up(safe_rate(passed, total))
    logger.info(
        "Evaluated compliance: %d/%d checks passed (%d%%)", passed, total, overall
    )
    return ComplianceResult(
        overall=overall,
        passed_checks=passed,
        total_checks=total,
        by_location=tuple(by_location),
        by_guard=tuple(by_guard),
    )
