# routes/teachers.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from schooldesk.core.dependencies import get_current_user, get_teacher_service
from schooldesk.models import User
from schooldesk.schemas import (
    RegisterResponse,
    SuccessResponse,
    TeacherCreateRequest,
    TeacherListResponse,
    TeacherUpdateRequest,
    TeacherUpdateResponse,
)
from schooldesk.services import TeacherService

router = APIRouter(prefix="/teachers", tags=["Teachers"])


@router.get("", response_model=TeacherListResponse)
async def list_teachers(
    school_id: Optional[int] = Query(default=None, alias="schoolId"),
    current_user: User = Depends(get_current_user),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    return {"teachers": await teacher_service.list_teachers(current_user, school_id)}


@router.post("", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def create_teacher(
    payload: TeacherCreateRequest,
    current_user: User = Depends(get_current_user),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    user = await teacher_service.create_teacher(current_user, payload)
    return {"success": True, "user": user}


@router.put("/{teacher_id}", response_model=TeacherUpdateResponse)
async def update_teacher(
    teacher_id: int,
    payload: TeacherUpdateRequest,
    current_user: User = Depends(get_current_user),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    teacher = await teacher_service.update_teacher(current_user, teacher_id, payload)
    return {"success": True, "teacher": teacher}


@router.delete("/{teacher_id}", response_model=SuccessResponse)
async def delete_teacher(
    teacher_id: int,
    current_user: User = Depends(get_current_user),
    teacher_service: TeacherService = Depends(get_teacher_service)
):
    """Unassign the teacher's classes, then remove the profile and login"""
    await teacher_service.delete_teacher(current_user, teacher_id)
    return {"success": True}
