"""
Reload coordination for date changes.

Every reload takes a new generation number. Both reports are fetched
concurrently and joined before aggregation starts; the finished result is
applied only if no newer reload was requested in the meantime. Older
reloads finish as "stale" and leave the current state alone.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pandas as pd

from .config import (
    ACTIVITY_REPORT_FILE,
    ATTENDANCE_REPORT_FILE,
    INCLUDE_ACTIVITY_ONLY_GUARDS,
)
from .dashboard import build_dashboard
from .loaders import (
    ReportLoadError,
    decode_activity_records,
    decode_attendance_records,
    load_activity_report,
    load_attendance_report,
)
from .models import DashboardResult

logger = logging.getLogger(__name__)

Source = str | Path
Loader = Callable[[Source], pd.DataFrame]


@dataclass(frozen=True)
class DashboardState:
    """Outcome of one reload.

    status is "ready" (result applied), "error" (a report failed to load)
    or "stale" (superseded by a newer reload before it finished).
    """
    status: str
    generation: int
    selected_date: str
    result: DashboardResult | None = None
    error: str | None = None


class DashboardSession:
    """Owns the latest applied DashboardState for one viewer."""

    def __init__(
        self,
        activity_source: Source = ACTIVITY_REPORT_FILE,
        attendance_source: Source = ATTENDANCE_REPORT_FILE,
        include_activity_only_guards: bool = INCLUDE_ACTIVITY_ONLY_GUARDS,
        activity_loader: Loader = load_activity_report,
        attendance_loader: Loader = load_attendance_report,
    ):
        self.activity_source = activity_source
        self.attendance_source = attendance_source
        self.include_activity_only_guards = include_activity_only_guards
        self._activity_loader = activity_loader
        self._attendance_loader = attendance_loader
        self._lock = threading.Lock()
        self._generation = 0
        self._current: DashboardState | None = None

    @property
    def current(self) -> DashboardState | None:
        with self._lock:
            return self._current

    @property
    def latest_generation(self) -> int:
        with self._lock:
            return self._generation

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _apply(self, state: DashboardState) -> DashboardState:
        with self._lock:
            if state.generation != self._generation:
                logger.info(
                    "Discarding reload %d for %s (latest is %d)",
                    state.generation, state.selected_date, self._generation,
                )
                return DashboardState(
                    status="stale",
                    generation=state.generation,
                    selected_date=state.selected_date,
                    result=state.result,
                    error=state.error,
                )
            self._current = state
            return state

    def _fetch_reports(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        with ThreadPoolExecutor(max_workers=2) as executor:
            activity_future = executor.submit(self._activity_loader, self.activity_source)
            attendance_future = executor.submit(self._attendance_loader, self.attendance_source)
            return activity_future.result(), attendance_future.result()

    def reload(self, selected_date: str) -> DashboardState:
        """Fetch, decode and aggregate both reports for selected_date.

        A load failure produces an "error" state; it replaces the
        displayed state only if this is still the latest reload. There is
        no retry: the caller triggers a new reload.
        """
        generation = self._next_generation()
        logger.info("Reload %d started for %s", generation, selected_date)

        try:
            activity_df, attendance_df = self._fetch_reports()
        except ReportLoadError as exc:
            return self._apply(DashboardState(
                status="error",
                generation=generation,
                selected_date=selected_date,
                error=str(exc),
            ))

        result = build_dashboard(
            decode_activity_records(activity_df),
            decode_attendance_records(attendance_df),
            selected_date,
            include_activity_only_guards=self.include_activity_only_guards,
        )
        return self._apply(DashboardState(
            status="ready",
            generation=generation,
            selected_date=selected_date,
            result=result,
        ))
