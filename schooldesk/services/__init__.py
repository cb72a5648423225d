from .auth_service import AuthService
from .identity_service import IdentityService
from .user_service import UserService
from .school_service import SchoolService
from .class_service import ClassService
from .student_service import StudentService
from .teacher_service import TeacherService
from .attendance_service import AttendanceService
from .grade_service import GradeService
from .overview_service import OverviewService

__all__ = [
    'AuthService',
    'IdentityService',
    'UserService',
    'SchoolService',
    'ClassService',
    'StudentService',
    'TeacherService',
    'AttendanceService',
    'GradeService',
    'OverviewService',
]
