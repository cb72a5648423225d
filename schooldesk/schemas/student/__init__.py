from .requests import StudentCreateRequest, StudentUpdateRequest
from .responses import StudentResponse, StudentEnvelope, StudentListResponse, StudentBatchResponse

__all__ = [
    "StudentCreateRequest",
    "StudentUpdateRequest",
    "StudentResponse",
    "StudentEnvelope",
    "StudentListResponse",
    "StudentBatchResponse",
]
