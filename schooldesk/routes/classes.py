# routes/classes.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from schooldesk.core.dependencies import get_class_service, get_current_user
from schooldesk.models import User
from schooldesk.schemas import (
    ClassCreateRequest,
    ClassEnvelope,
    ClassListResponse,
    ClassUpdateRequest,
    EnrollmentRequest,
    SuccessResponse,
)
from schooldesk.services import ClassService

router = APIRouter(tags=["Classes"])


@router.get("/classes", response_model=ClassListResponse)
async def list_classes(
    school_id: Optional[int] = Query(default=None, alias="schoolId"),
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    """Classes with their teacher and a flat list of enrolled students"""
    return {"classes": await class_service.list_classes(current_user, school_id)}


@router.post("/classes", response_model=ClassEnvelope, status_code=status.HTTP_201_CREATED)
async def create_class(
    payload: ClassCreateRequest,
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    return {"class": await class_service.create_class(current_user, payload)}


@router.get("/classes/{class_id}", response_model=ClassEnvelope)
async def get_class(
    class_id: int,
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    return {"class": await class_service.get_class(current_user, class_id)}


@router.put("/classes/{class_id}", response_model=ClassEnvelope)
async def update_class(
    class_id: int,
    payload: ClassUpdateRequest,
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    return {"class": await class_service.update_class(current_user, class_id, payload)}


@router.delete("/classes/{class_id}", response_model=SuccessResponse)
async def delete_class(
    class_id: int,
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    await class_service.delete_class(current_user, class_id)
    return {"success": True}


@router.post("/class-students", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def add_student_to_class(
    payload: EnrollmentRequest,
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    await class_service.enroll_student(current_user, payload.class_id, payload.student_id)
    return {"success": True}


@router.delete("/class-students", response_model=SuccessResponse)
async def remove_student_from_class(
    payload: EnrollmentRequest,
    current_user: User = Depends(get_current_user),
    class_service: ClassService = Depends(get_class_service)
):
    await class_service.unenroll_student(current_user, payload.class_id, payload.student_id)
    return {"success": True}
