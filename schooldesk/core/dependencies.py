# core/dependencies.py
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from schooldesk.core.database import get_db
from schooldesk.core.errors import AuthenticationError
from schooldesk.core.security import decode_token
from schooldesk.models.user import User
from schooldesk.services.auth_service import AuthService
from schooldesk.services.user_service import UserService
from schooldesk.services.school_service import SchoolService
from schooldesk.services.class_service import ClassService
from schooldesk.services.student_service import StudentService
from schooldesk.services.teacher_service import TeacherService
from schooldesk.services.attendance_service import AttendanceService
from schooldesk.services.grade_service import GradeService
from schooldesk.services.overview_service import OverviewService


# Service providers
async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_school_service(db: AsyncSession = Depends(get_db)) -> SchoolService:
    return SchoolService(db)


async def get_class_service(db: AsyncSession = Depends(get_db)) -> ClassService:
    return ClassService(db)


async def get_student_service(db: AsyncSession = Depends(get_db)) -> StudentService:
    return StudentService(db)


async def get_teacher_service(db: AsyncSession = Depends(get_db)) -> TeacherService:
    return TeacherService(db)


async def get_attendance_service(db: AsyncSession = Depends(get_db)) -> AttendanceService:
    return AttendanceService(db)


async def get_grade_service(db: AsyncSession = Depends(get_db)) -> GradeService:
    return GradeService(db)


async def get_overview_service(db: AsyncSession = Depends(get_db)) -> OverviewService:
    return OverviewService(db)


def _extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the access_token cookie"""
    auth_header = request.headers.get("Authorization")
    if auth_header:
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return token.strip()
    cookie = request.cookies.get("access_token")
    if cookie:
        cookie = cookie.strip('"')
        if cookie.lower().startswith("bearer "):
            cookie = cookie[len("bearer "):]
        return cookie or None
    return None


async def get_current_user(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """Resolve the caller's profile from the access token"""
    token = _extract_token(request)
    if not token:
        raise AuthenticationError("Not authenticated")

    claims = decode_token(token)
    user = await auth_service.get_user_by_id(claims.user_id)
    if not user:
        raise AuthenticationError("Invalid token - user not found")

    request.state.user_id = user.id
    return user
