"""
Typed records for decoded report rows and derived dashboard results.

Decoded rows (ActivityRecord, AttendanceRecord) are built once by the
loaders and never mutated. Derived results are produced by the transforms
and kpis modules. Row-level results offer ``to_dict()`` so the
presentation layer can hand them straight to a DataFrame.
"""

from dataclasses import asdict, dataclass, field


# ============================================================================
# DECODED ROWS
# ============================================================================

@dataclass(frozen=True)
class ActivityRecord:
    """One logged guard activity event from the activity report."""
    guard_id: str
    timestamp: str = ""
    location_accuracy_m: int | None = None   # GPS deviation, metres
    time_accuracy: str = ""                  # "On Time", "... Delay ...", other
    alert: str = ""                          # alert classification as exported
    post_name: str = ""
    user_name: str = ""


@dataclass(frozen=True)
class AttendanceRecord:
    """One shift login from the post-basis attendance report."""
    guard_id: str
    full_name: str = ""
    post_name: str = ""
    login_date: str = ""
    lateness: str = ""                       # "On-time" or a late duration
    duty_hours: float | None = None


# ============================================================================
# DERIVED PROFILES
# ============================================================================

@dataclass(frozen=True)
class HourlyBucket:
    hour: int
    total: int
    on_time: int
    location_accurate: int
    delayed: int
    alert_count: int
    compliance_rate: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GuardProfile:
    """Per-guard shift, activity and coverage figures with derived scores.

    Component scores keep their unrounded values; only the headline
    rates and ``performance_score`` are rounded.
    """
    guard_id: str
    name: str
    total_shifts: int = 0
    on_time_shifts: int = 0
    late_shifts: int = 0
    total_activities: int = 0
    on_time_activities: int = 0
    location_accurate_activities: int = 0
    locations: frozenset[str] = field(default_factory=frozenset)
    duty_hours: float = 0.0
    attendance_score: float = 0.0
    activity_score: float = 0.0
    coverage_score: float = 0.0
    attendance_rate: int = 0
    activity_compliance_rate: int = 0
    performance_score: int = 0

    @property
    def coverage_count(self) -> int:
        return len(self.locations)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["locations"] = sorted(self.locations)
        data["coverage_count"] = self.coverage_count
        return data


@dataclass(frozen=True)
class LocationProfile:
    location: str
    total_shifts: int = 0
    covered_shifts: int = 0
    on_time_shifts: int = 0
    guards: frozenset[str] = field(default_factory=frozenset)
    duty_hours: float = 0.0
    coverage_rate: int = 0
    punctuality_rate: int = 0
    average_shift_hours: float = 0.0

    @property
    def guard_count(self) -> int:
        return len(self.guards)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["guards"] = sorted(self.guards)
        data["guard_count"] = self.guard_count
        return data


@dataclass(frozen=True)
class AttendanceSummary:
    total_shifts: int = 0
    on_time: int = 0
    late: int = 0
    punctuality_rate: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================================================
# COMPLIANCE
# ============================================================================

@dataclass(frozen=True)
class LocationCompliance:
    location: str
    coverage_compliance: bool
    punctuality_compliance: bool
    staffing_compliance: bool
    compliance_score: int

    @property
    def passed_checks(self) -> int:
        return sum((self.coverage_compliance, self.punctuality_compliance, self.staffing_compliance))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GuardCompliance:
    guard_id: str
    name: str
    attendance_compliance: bool
    activity_compliance: bool
    coverage_compliance: bool
    compliance_score: int

    @property
    def passed_checks(self) -> int:
        return sum((self.attendance_compliance, self.activity_compliance, self.coverage_compliance))

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ComplianceResult:
    overall: int = 0
    passed_checks: int = 0
    total_checks: int = 0
    by_location: tuple[LocationCompliance, ...] = ()
    by_guard: tuple[GuardCompliance, ...] = ()


# ============================================================================
# DASHBOARD RESULT
# ============================================================================

@dataclass(frozen=True)
class DashboardResult:
    """Everything the presentation layer needs for one selected date.

    A pure function of the selected date's record subset; rebuilt in full
    on every date change.
    """
    selected_date: str
    hourly: tuple[HourlyBucket, ...] = ()
    guards: tuple[GuardProfile, ...] = ()
    locations: tuple[LocationProfile, ...] = ()
    compliance: ComplianceResult = field(default_factory=ComplianceResult)
    attendance: AttendanceSummary = field(default_factory=AttendanceSummary)
    activity_count: int = 0
