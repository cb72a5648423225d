from .base import Base, TenantModel
from .identity import Identity
from .school import School
from .user import User
from .class_ import Class
from .student import Student
from .enrollment import Enrollment
from .attendance import AttendanceRecord
from .grade import GradeItem, GradeEntry

__all__ = [
    'Base',
    'TenantModel',
    'Identity',
    'School',
    'User',
    'Class',
    'Student',
    'Enrollment',
    'AttendanceRecord',
    'GradeItem',
    'GradeEntry'
]
