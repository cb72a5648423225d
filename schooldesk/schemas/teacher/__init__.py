from .requests import TeacherCreateRequest, TeacherUpdateRequest
from .responses import TeacherClassSummary, TeacherListItem, TeacherListResponse, TeacherUpdateResponse

__all__ = [
    "TeacherCreateRequest",
    "TeacherUpdateRequest",
    "TeacherClassSummary",
    "TeacherListItem",
    "TeacherListResponse",
    "TeacherUpdateResponse",
]
