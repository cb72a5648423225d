from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from schooldesk.core.logging import logger


class BaseAPIError(Exception):
    """Base exception class for API errors"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(BaseAPIError):
    """Raised when caller input is missing or malformed"""
    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details=details
        )


class AuthenticationError(BaseAPIError):
    """Base class for authentication-related errors"""
    def __init__(
        self,
        message: str = "Not authenticated",
        error_code: str = "AUTH_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=error_code,
            details=details
        )


class InvalidCredentialsException(AuthenticationError):
    """Raised when user credentials are invalid"""
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message=message, error_code="INVALID_CREDENTIALS")


class TokenError(AuthenticationError):
    """Raised when there's a token-related error"""
    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message=message, error_code="TOKEN_ERROR")


class PermissionDenied(BaseAPIError):
    """Raised when user doesn't have required permissions"""
    def __init__(
        self,
        message: str = "Not authorized",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="PERMISSION_DENIED",
            details=details
        )


class NotFoundError(BaseAPIError):
    """Raised when a requested resource is not found"""
    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details=details
        )


class ConflictError(BaseAPIError):
    """Raised when a write would duplicate an existing resource"""
    def __init__(
        self,
        message: str = "Resource already exists",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="CONFLICT",
            details=details
        )


class DatabaseError(BaseAPIError):
    """Raised when there's a database-related error"""
    def __init__(
        self,
        message: str = "Database error occurred",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="DB_ERROR",
            details=details
        )


def _field_name(loc) -> str:
    # ("body", "firstName") -> "firstName"
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "form")]
    return ".".join(parts) or "request"


def format_validation_error(exc: RequestValidationError) -> str:
    """Turn the first pydantic error into a message naming the field"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = _field_name(first.get("loc", ()))
    blank = first.get("type") == "string_too_short" and (first.get("ctx") or {}).get("min_length") == 1
    if first.get("type") == "missing" or blank:
        return f"{field} is required"
    message = str(first.get("msg", "is invalid"))
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{field}: {message}"


def error_body(message: str) -> Dict[str, Any]:
    return {"error": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {"error": <message>} with the matching status"""

    @app.exception_handler(BaseAPIError)
    async def api_error_handler(request: Request, exc: BaseAPIError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
        elif exc.status_code in (401, 403):
            logger.warning(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(format_validation_error(exc))
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Unhandled database error on {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Database error occurred")
        )
