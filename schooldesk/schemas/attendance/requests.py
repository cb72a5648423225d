# schemas/attendance/requests.py
from datetime import date as date_type
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.fields import RequiredId
from .base import AttendanceStatus


class AttendanceMark(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: RequiredId = Field(alias="studentId")
    status: AttendanceStatus


class AttendanceMarkRequest(BaseModel):
    """Full set of statuses for one class on one date"""
    model_config = ConfigDict(populate_by_name=True)

    class_id: RequiredId = Field(alias="classId")
    date: date_type
    records: List[AttendanceMark]

    @field_validator("records")
    @classmethod
    def unique_students(cls, v: List[AttendanceMark]) -> List[AttendanceMark]:
        seen = set()
        for record in v:
            if record.student_id in seen:
                raise ValueError(f"student {record.student_id} is listed more than once")
            seen.add(record.student_id)
        return v
