from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SchoolResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SchoolWithCountsResponse(SchoolResponse):
    users_count: int = 0
    classes_count: int = 0
    students_count: int = 0


class SchoolEnvelope(BaseModel):
    school: SchoolResponse


class SchoolListResponse(BaseModel):
    schools: List[SchoolWithCountsResponse]
