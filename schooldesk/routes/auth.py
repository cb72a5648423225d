# routes/auth.py
from fastapi import APIRouter, Depends, Request, Response, status

from schooldesk.core.config import settings
from schooldesk.core.dependencies import get_auth_service, get_current_user, get_user_service
from schooldesk.core.logging import logger
from schooldesk.models import User
from schooldesk.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserEnvelope,
)
from schooldesk.services import AuthService, UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    credentials: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Authenticate with email and password and receive an access token"""
    result = await auth_service.login(credentials.email, credentials.password)

    response.set_cookie(
        key="access_token",
        value=result["access_token"],
        httponly=True,
        samesite="lax",
        secure=not settings.DEBUG,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info(
        "Login successful",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "user_id": result["user"].id,
        }
    )
    return result


@router.get("/me", response_model=UserEnvelope)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get details of currently authenticated user."""
    return {"user": current_user}


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    """
    Create a staff account.

    Super admins may create any role; school admins may only create teachers
    in their own school.
    """
    user = await user_service.create_user(
        current_user,
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        school_id=payload.school_id,
    )
    return {"success": True, "user": user}
