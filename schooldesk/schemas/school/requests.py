from pydantic import BaseModel

from ..common.fields import NonEmptyStr, OptionalStr


class SchoolCreateRequest(BaseModel):
    name: NonEmptyStr
    address: OptionalStr = None


class SchoolUpdateRequest(BaseModel):
    name: NonEmptyStr
    address: OptionalStr = None
