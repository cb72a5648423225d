# schemas/user/role.py
from enum import Enum


class UserRoleEnum(str, Enum):
    SUPER_ADMIN = "super_admin"
    SCHOOL_ADMIN = "school_admin"
    TEACHER = "teacher"

    @classmethod
    def values(cls):
        return [role.value for role in cls]
