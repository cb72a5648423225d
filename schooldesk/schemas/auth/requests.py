from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..common.fields import NonEmptyStr


class LoginRequest(BaseModel):
    email: EmailStr
    password: NonEmptyStr


class RegisterRequest(BaseModel):
    """Staff account creation. ``role`` is validated by the service so a
    missing role is reported as a 400 naming the field."""
    model_config = ConfigDict(populate_by_name=True)

    first_name: NonEmptyStr = Field(alias="firstName")
    last_name: NonEmptyStr = Field(alias="lastName")
    email: EmailStr
    password: str = Field(min_length=6)
    role: Optional[str] = None
    school_id: Optional[int] = Field(default=None, alias="schoolId")
