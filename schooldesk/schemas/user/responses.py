from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .role import UserRoleEnum


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    first_name: str
    last_name: str
    role: UserRoleEnum
    school_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserEnvelope(BaseModel):
    user: UserResponse


class RoleResponse(BaseModel):
    role: UserRoleEnum
