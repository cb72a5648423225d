# routes/schools.py
from fastapi import APIRouter, Depends, status

from schooldesk.core.dependencies import get_current_user, get_school_service
from schooldesk.models import User
from schooldesk.schemas import (
    SchoolCreateRequest,
    SchoolEnvelope,
    SchoolListResponse,
    SchoolUpdateRequest,
    SuccessResponse,
)
from schooldesk.services import SchoolService

router = APIRouter(prefix="/schools", tags=["Schools"])


@router.get("", response_model=SchoolListResponse)
async def list_schools(
    current_user: User = Depends(get_current_user),
    school_service: SchoolService = Depends(get_school_service)
):
    """Schools with user, class and student counts"""
    return {"schools": await school_service.list_schools(current_user)}


@router.post("", response_model=SchoolEnvelope, status_code=status.HTTP_201_CREATED)
async def create_school(
    payload: SchoolCreateRequest,
    current_user: User = Depends(get_current_user),
    school_service: SchoolService = Depends(get_school_service)
):
    return {"school": await school_service.create_school(current_user, payload)}


@router.get("/{school_id}", response_model=SchoolEnvelope)
async def get_school(
    school_id: int,
    current_user: User = Depends(get_current_user),
    school_service: SchoolService = Depends(get_school_service)
):
    return {"school": await school_service.get_school(current_user, school_id)}


@router.put("/{school_id}", response_model=SchoolEnvelope)
async def update_school(
    school_id: int,
    payload: SchoolUpdateRequest,
    current_user: User = Depends(get_current_user),
    school_service: SchoolService = Depends(get_school_service)
):
    return {"school": await school_service.update_school(current_user, school_id, payload)}


@router.delete("/{school_id}", response_model=SuccessResponse)
async def delete_school(
    school_id: int,
    current_user: User = Depends(get_current_user),
    school_service: SchoolService = Depends(get_school_service)
):
    """Delete a school; its users, classes and students are detached, not removed"""
    await school_service.delete_school(current_user, school_id)
    return {"success": True}
