from .role import UserRoleEnum
from .responses import UserResponse, UserEnvelope, RoleResponse

__all__ = ["UserRoleEnum", "UserResponse", "UserEnvelope", "RoleResponse"]
