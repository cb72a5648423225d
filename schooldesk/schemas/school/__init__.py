from .requests import SchoolCreateRequest, SchoolUpdateRequest
from .responses import SchoolResponse, SchoolWithCountsResponse, SchoolEnvelope, SchoolListResponse

__all__ = [
    "SchoolCreateRequest",
    "SchoolUpdateRequest",
    "SchoolResponse",
    "SchoolWithCountsResponse",
    "SchoolEnvelope",
    "SchoolListResponse",
]
