# core/security.py

from datetime import datetime, timezone
import secrets
from typing import Dict, Optional, Any
from jose import JWTError, jwt
from passlib.context import CryptContext

from schooldesk.core.config import settings, get_token_expires_delta
from schooldesk.core.errors import TokenError
from schooldesk.core.logging import logger
from schooldesk.schemas.auth.tokens import TokenData


class TokenType:
    ACCESS = "access"


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS
)


def get_password_hash(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash in the store
        return False


def create_token(data: Dict[str, Any], token_type: str, minutes: Optional[int] = None) -> str:
    """Create JWT token with specified type and expiration"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + get_token_expires_delta(minutes)

    to_encode.update({
        "exp": expire,
        "type": token_type,
        "jti": secrets.token_urlsafe(32)
    })

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_access_token(user) -> str:
    """Create access token carrying the profile id, role and school"""
    data = {
        "sub": str(user.id),
        "role": user.role.value,
        "school_id": user.school_id,
    }
    return create_token(data, TokenType.ACCESS)


def decode_token(token: str, token_type: str = TokenType.ACCESS) -> TokenData:
    """
    Verify a JWT and return its claims.

    Raises:
        TokenError: signature, expiry or type check failed
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Token verification failed: {str(e)}")
        raise TokenError("Could not validate credentials")

    if payload.get("type") != token_type:
        raise TokenError(f"Invalid token type. Expected {token_type}")

    try:
        return TokenData(**payload)
    except ValueError:
        raise TokenError("Malformed token claims")
