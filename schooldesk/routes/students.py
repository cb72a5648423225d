# routes/students.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from schooldesk.core.dependencies import get_current_user, get_student_service
from schooldesk.models import User
from schooldesk.schemas import (
    StudentBatchResponse,
    StudentCreateRequest,
    StudentEnvelope,
    StudentListResponse,
    StudentUpdateRequest,
    SuccessResponse,
)
from schooldesk.services import StudentService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("", response_model=StudentListResponse)
async def list_students(
    school_id: Optional[int] = Query(default=None, alias="schoolId"),
    class_id: Optional[int] = Query(default=None, alias="classId"),
    current_user: User = Depends(get_current_user),
    student_service: StudentService = Depends(get_student_service)
):
    students = await student_service.list_students(current_user, school_id, class_id)
    return {"students": students}


@router.post("", response_model=StudentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_student(
    payload: StudentCreateRequest,
    current_user: User = Depends(get_current_user),
    student_service: StudentService = Depends(get_student_service)
):
    return {"student": await student_service.create_student(current_user, payload)}


@router.post("/batch", response_model=StudentBatchResponse, status_code=status.HTTP_201_CREATED)
async def import_students(
    file: UploadFile = File(...),
    school_id: Optional[int] = Form(default=None, alias="schoolId"),
    current_user: User = Depends(get_current_user),
    student_service: StudentService = Depends(get_student_service)
):
    """Bulk upload students from a CSV file (first_name,last_name[,email])"""
    content = await file.read()
    students = await student_service.import_students(current_user, content, school_id)
    return {"success": True, "studentsAdded": len(students), "students": students}


@router.put("/{student_id}", response_model=StudentEnvelope)
async def update_student(
    student_id: int,
    payload: StudentUpdateRequest,
    current_user: User = Depends(get_current_user),
    student_service: StudentService = Depends(get_student_service)
):
    return {"student": await student_service.update_student(current_user, student_id, payload)}


@router.delete("/{student_id}", response_model=SuccessResponse)
async def delete_student(
    student_id: int,
    current_user: User = Depends(get_current_user),
    student_service: StudentService = Depends(get_student_service)
):
    """Delete a student with their enrollments, attendance and grades"""
    await student_service.delete_student(current_user, student_id)
    return {"success": True}
