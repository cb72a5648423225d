from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.fields import NonEmptyStr, OptionalStr, RequiredId


class ClassCreateRequest(BaseModel):
    name: NonEmptyStr
    description: OptionalStr = None
    teacher_id: RequiredId
    school_id: Optional[int] = None


class ClassUpdateRequest(BaseModel):
    """Partial update; an explicit ``teacher_id: null`` unassigns the teacher"""
    name: Optional[NonEmptyStr] = None
    description: OptionalStr = None
    teacher_id: Optional[int] = None


class EnrollmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: RequiredId = Field(alias="studentId")
    class_id: RequiredId = Field(alias="classId")
