from typing import Optional

from pydantic import BaseModel

from ..user.role import UserRoleEnum


# Claims carried by an access token
class TokenData(BaseModel):
    sub: str
    role: UserRoleEnum
    type: str = "access"
    school_id: Optional[int] = None
    jti: Optional[str] = None

    @property
    def user_id(self) -> int:
        return int(self.sub)
