from .requests import ClassCreateRequest, ClassUpdateRequest, EnrollmentRequest
from .responses import ClassTeacher, RosterStudent, ClassResponse, ClassEnvelope, ClassListResponse

__all__ = [
    "ClassCreateRequest",
    "ClassUpdateRequest",
    "EnrollmentRequest",
    "ClassTeacher",
    "RosterStudent",
    "ClassResponse",
    "ClassEnvelope",
    "ClassListResponse",
]
