# routes/users.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from schooldesk.core.dependencies import get_current_user, get_user_service
from schooldesk.models import User
from schooldesk.schemas import RoleResponse
from schooldesk.services import UserService

router = APIRouter(prefix="/user", tags=["Users"])


@router.get("/role", response_model=RoleResponse)
async def get_user_role(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    role = await user_service.get_role(current_user, user_id)
    return {"role": role}
