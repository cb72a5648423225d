from .base import AttendanceStatus
from .requests import AttendanceMark, AttendanceMarkRequest
from .responses import (
    StudentAttendance,
    AttendanceListResponse,
    AttendanceMarkResponse,
    DailyAttendanceSummary,
    AttendanceSummaryResponse
)

__all__ = [
    'AttendanceStatus',
    'AttendanceMark',
    'AttendanceMarkRequest',
    'StudentAttendance',
    'AttendanceListResponse',
    'AttendanceMarkResponse',
    'DailyAttendanceSummary',
    'AttendanceSummaryResponse'
]
