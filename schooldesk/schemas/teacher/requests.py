from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..common.fields import NonEmptyStr


class TeacherCreateRequest(BaseModel):
    """Schema for creating a teacher account"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: NonEmptyStr = Field(alias="firstName")
    last_name: NonEmptyStr = Field(alias="lastName")
    email: EmailStr
    password: str = Field(min_length=6)
    school_id: Optional[int] = Field(default=None, alias="schoolId")


class TeacherUpdateRequest(BaseModel):
    """Schema for updating an existing teacher; unset fields are left alone"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[NonEmptyStr] = Field(default=None, alias="firstName")
    last_name: Optional[NonEmptyStr] = Field(default=None, alias="lastName")
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
