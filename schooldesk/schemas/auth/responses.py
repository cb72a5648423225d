from pydantic import BaseModel

from ..user.responses import UserResponse


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class RegisterResponse(BaseModel):
    success: bool = True
    user: UserResponse
