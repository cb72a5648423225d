from datetime import date as date_type
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GradeItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    class_id: int
    name: str
    created_on: Optional[date_type] = None


class GradeItemEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    grade_item: GradeItemResponse = Field(alias="gradeItem")


class GradeItemListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    grade_items: List[GradeItemResponse] = Field(alias="gradeItems")


class StudentGrade(BaseModel):
    id: int
    student_id: int
    first_name: str
    last_name: str
    assignment_name: str
    score: Optional[float] = None
    date: Optional[date_type] = None


class GradeStats(BaseModel):
    average: Optional[float] = None
    graded: int = 0
    ungraded: int = 0


class GradeSheetResponse(BaseModel):
    grades: List[StudentGrade]
    stats: GradeStats


class GradeUpdateResponse(GradeSheetResponse):
    success: bool = True
