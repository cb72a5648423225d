# routes/attendance.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from schooldesk.core.dependencies import get_attendance_service, get_current_user
from schooldesk.models import User
from schooldesk.schemas import (
    AttendanceListResponse,
    AttendanceMarkRequest,
    AttendanceMarkResponse,
    AttendanceSummaryResponse,
)
from schooldesk.services import AttendanceService

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.get("", response_model=AttendanceListResponse)
async def get_attendance(
    class_id: int = Query(..., alias="classId"),
    on: date = Query(..., alias="date"),
    current_user: User = Depends(get_current_user),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """Enrolled students of a class with their status on the given date"""
    return {"attendance": await attendance_service.get_attendance(current_user, class_id, on)}


@router.put("", response_model=AttendanceMarkResponse)
async def mark_attendance(
    payload: AttendanceMarkRequest,
    current_user: User = Depends(get_current_user),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    """Replace the attendance of a class for one date"""
    attendance = await attendance_service.mark_attendance(current_user, payload)
    return {"success": True, "attendance": attendance}


@router.get("/summary", response_model=AttendanceSummaryResponse)
async def get_attendance_summary(
    class_id: int = Query(..., alias="classId"),
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    current_user: User = Depends(get_current_user),
    attendance_service: AttendanceService = Depends(get_attendance_service)
):
    summary = await attendance_service.get_summary(current_user, class_id, start, end)
    return {"summary": summary}
