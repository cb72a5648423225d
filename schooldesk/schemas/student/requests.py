from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr

from ..common.fields import NonEmptyStr, OptionalStr


class StudentCreateRequest(BaseModel):
    first_name: NonEmptyStr
    last_name: OptionalStr = None
    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = None
    school_id: Optional[int] = None


class StudentUpdateRequest(BaseModel):
    first_name: Optional[NonEmptyStr] = None
    last_name: OptionalStr = None
    email: Optional[EmailStr] = None
    date_of_birth: Optional[date] = None
