from .requests import GradeItemRequest, GradeScore, GradeUpdateRequest
from .responses import (
    GradeItemResponse,
    GradeItemEnvelope,
    GradeItemListResponse,
    StudentGrade,
    GradeStats,
    GradeSheetResponse,
    GradeUpdateResponse
)

__all__ = [
    "GradeItemRequest",
    "GradeScore",
    "GradeUpdateRequest",
    "GradeItemResponse",
    "GradeItemEnvelope",
    "GradeItemListResponse",
    "StudentGrade",
    "GradeStats",
    "GradeSheetResponse",
    "GradeUpdateResponse",
]
