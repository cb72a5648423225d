from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..user.responses import UserResponse


class TeacherClassSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class TeacherListItem(BaseModel):
    """Teacher row with the classes they teach"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    school_id: Optional[int] = None
    classes: List[TeacherClassSummary] = []


class TeacherListResponse(BaseModel):
    teachers: List[TeacherListItem]


class TeacherUpdateResponse(BaseModel):
    success: bool = True
    teacher: UserResponse
