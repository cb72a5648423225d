# routes/grades.py
from fastapi import APIRouter, Depends, status

from schooldesk.core.dependencies import get_current_user, get_grade_service
from schooldesk.models import User
from schooldesk.schemas import (
    GradeItemEnvelope,
    GradeItemListResponse,
    GradeItemRequest,
    GradeSheetResponse,
    GradeUpdateRequest,
    GradeUpdateResponse,
    SuccessResponse,
)
from schooldesk.services import GradeService

router = APIRouter(tags=["Grades"])


@router.get("/classes/{class_id}/grade-items", response_model=GradeItemListResponse)
async def list_grade_items(
    class_id: int,
    current_user: User = Depends(get_current_user),
    grade_service: GradeService = Depends(get_grade_service)
):
    return {"gradeItems": await grade_service.list_items(current_user, class_id)}


@router.post(
    "/classes/{class_id}/grade-items",
    response_model=GradeItemEnvelope,
    status_code=status.HTTP_201_CREATED
)
async def create_grade_item(
    class_id: int,
    payload: GradeItemRequest,
    current_user: User = Depends(get_current_user),
    grade_service: GradeService = Depends(get_grade_service)
):
    """Add an assignment; every enrolled student gets an ungraded entry"""
    item = await grade_service.create_item(current_user, class_id, payload.name)
    return {"gradeItem": item}


@router.put("/grade-items/{item_id}", response_model=GradeItemEnvelope)
async def rename_grade_item(
    item_id: int,
    payload: GradeItemRequest,
    current_user: User = Depends(get_current_user),
    grade_service: GradeService = Depends(get_grade_service)
):
    item = await grade_service.rename_item(current_user, item_id, payload.name)
    return {"gradeItem": item}


@router.delete("/grade-items/{item_id}", response_model=SuccessResponse)
async def delete_grade_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    grade_service: GradeService = Depends(get_grade_service)
):
    await grade_service.delete_item(current_user, item_id)
    return {"success": True}


@router.get("/grade-items/{item_id}/grades", response_model=GradeSheetResponse)
async def get_grades(
    item_id: int,
    current_user: User = Depends(get_current_user),
    grade_service: GradeService = Depends(get_grade_service)
):
    return await grade_service.get_grades(current_user, item_id)


@router.put("/grade-items/{item_id}/grades", response_model=GradeUpdateResponse)
async def set_grades(
    item_id: int,
    payload: GradeUpdateRequest,
    current_user: User = Depends(get_current_user),
    grade_service: GradeService = Depends(get_grade_service)
):
    sheet = await grade_service.set_grades(current_user, item_id, payload)
    return {"success": True, **sheet}
