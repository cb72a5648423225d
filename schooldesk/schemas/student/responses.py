# schemas/student/responses.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    school_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudentEnvelope(BaseModel):
    student: StudentResponse


class StudentListResponse(BaseModel):
    students: List[StudentResponse]


class StudentBatchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    students_added: int = Field(alias="studentsAdded")
    students: List[StudentResponse]
