from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClassTeacher(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str


class RosterStudent(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None


class ClassResponse(BaseModel):
    """Class with its teacher and a flat list of enrolled students"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    teacher_id: Optional[int] = None
    school_id: Optional[int] = None
    teacher: Optional[ClassTeacher] = None
    students: List[RosterStudent] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ClassEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_: ClassResponse = Field(alias="class")


class ClassListResponse(BaseModel):
    classes: List[ClassResponse]
