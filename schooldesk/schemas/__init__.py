# schemas/__init__.py

from .common import SuccessResponse

from .auth import (
    TokenData,
    LoginRequest,
    RegisterRequest,
    LoginResponse,
    RegisterResponse,
)
from .user import UserRoleEnum, UserResponse, UserEnvelope, RoleResponse
from .school import (
    SchoolCreateRequest,
    SchoolUpdateRequest,
    SchoolResponse,
    SchoolWithCountsResponse,
    SchoolEnvelope,
    SchoolListResponse,
)
from .class_ import (
    ClassCreateRequest,
    ClassUpdateRequest,
    EnrollmentRequest,
    ClassResponse,
    ClassEnvelope,
    ClassListResponse,
)
from .student import (
    StudentCreateRequest,
    StudentUpdateRequest,
    StudentResponse,
    StudentEnvelope,
    StudentListResponse,
    StudentBatchResponse,
)
from .teacher import (
    TeacherCreateRequest,
    TeacherUpdateRequest,
    TeacherListItem,
    TeacherListResponse,
    TeacherUpdateResponse,
)
from .attendance import (
    AttendanceStatus,
    AttendanceMarkRequest,
    AttendanceListResponse,
    AttendanceMarkResponse,
    AttendanceSummaryResponse,
)
from .grade import (
    GradeItemRequest,
    GradeUpdateRequest,
    GradeItemEnvelope,
    GradeItemListResponse,
    GradeSheetResponse,
    GradeUpdateResponse,
)
from .overview import OverviewResponse

__all__ = [
    # Common
    'SuccessResponse',

    # Auth
    'TokenData',
    'LoginRequest',
    'RegisterRequest',
    'LoginResponse',
    'RegisterResponse',

    # Users
    'UserRoleEnum',
    'UserResponse',
    'UserEnvelope',
    'RoleResponse',

    # Schools
    'SchoolCreateRequest',
    'SchoolUpdateRequest',
    'SchoolResponse',
    'SchoolWithCountsResponse',
    'SchoolEnvelope',
    'SchoolListResponse',

    # Classes
    'ClassCreateRequest',
    'ClassUpdateRequest',
    'EnrollmentRequest',
    'ClassResponse',
    'ClassEnvelope',
    'ClassListResponse',

    # Students
    'StudentCreateRequest',
    'StudentUpdateRequest',
    'StudentResponse',
    'StudentEnvelope',
    'StudentListResponse',
    'StudentBatchResponse',

    # Teachers
    'TeacherCreateRequest',
    'TeacherUpdateRequest',
    'TeacherListItem',
    'TeacherListResponse',
    'TeacherUpdateResponse',

    # Attendance
    'AttendanceStatus',
    'AttendanceMarkRequest',
    'AttendanceListResponse',
    'AttendanceMarkResponse',
    'AttendanceSummaryResponse',

    # Grades
    'GradeItemRequest',
    'GradeUpdateRequest',
    'GradeItemEnvelope',
    'GradeItemListResponse',
    'GradeSheetResponse',
    'GradeUpdateResponse',

    # Overview
    'OverviewResponse',
]
