from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..common.fields import NonEmptyStr, RequiredId


class GradeItemRequest(BaseModel):
    name: NonEmptyStr


class GradeScore(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: RequiredId = Field(alias="studentId")
    score: Optional[float] = Field(default=None, ge=0, le=100)


class GradeUpdateRequest(BaseModel):
    grades: List[GradeScore]
