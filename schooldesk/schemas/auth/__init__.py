from .requests import LoginRequest, RegisterRequest
from .responses import LoginResponse, RegisterResponse
from .tokens import TokenData

__all__ = ["LoginRequest", "RegisterRequest", "LoginResponse", "RegisterResponse", "TokenData"]
