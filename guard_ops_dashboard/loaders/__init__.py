"""Report loaders and row decoders for the guard-operations exports."""

from .csv_reports import ReportLoadError
from .csv_reports import load_report, load_activity_report, load_attendance_report
from .csv_reports import decode_activity_records, decode_attendance_records

__all__ = [
    "ReportLoadError",
    "load_report",
    "load_activity_report",
    "load_attendance_report",
    "decode_activity_records",
    "decode_attendance_records",
]
