# schemas/attendance/responses.py
from datetime import date as date_type
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .base import AttendanceStatus


class StudentAttendance(BaseModel):
    """One enrolled student and their status for the requested date"""
    student_id: int
    first_name: str
    last_name: str
    status: Optional[AttendanceStatus] = None


class AttendanceListResponse(BaseModel):
    attendance: List[StudentAttendance]


class AttendanceMarkResponse(BaseModel):
    success: bool = True
    attendance: List[StudentAttendance]


class DailyAttendanceSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: date_type
    present_count: int = Field(alias="presentCount")
    total_count: int = Field(alias="totalCount")


class AttendanceSummaryResponse(BaseModel):
    summary: List[DailyAttendanceSummary]
