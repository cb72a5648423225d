# routes/overview.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from schooldesk.core.dependencies import get_current_user, get_overview_service
from schooldesk.models import User
from schooldesk.schemas import OverviewResponse
from schooldesk.services import OverviewService

router = APIRouter(prefix="/overview", tags=["Dashboard"])


@router.get("", response_model=OverviewResponse)
async def get_overview(
    school_id: Optional[int] = Query(default=None, alias="schoolId"),
    current_user: User = Depends(get_current_user),
    overview_service: OverviewService = Depends(get_overview_service)
):
    """Counts, attendance rate, grade averages and today's absences"""
    return {"overview": await overview_service.get_overview(current_user, school_id)}
