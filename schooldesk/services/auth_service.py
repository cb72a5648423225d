# services/auth_service.py
from typing import Any, Dict, Optional

from schooldesk.core.errors import InvalidCredentialsException
from schooldesk.core.logging import logger
from schooldesk.core.security import create_access_token
from schooldesk.models.user import User
from .base_service import BaseService
from .identity_service import IdentityService


class AuthService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.identities = IdentityService(db)

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Check credentials and issue an access token for the matching profile"""
        identity = await self.identities.authenticate(email, password)
        if identity is None:
            logger.warning(f"Failed login attempt for {email}")
            raise InvalidCredentialsException()

        user = await self.get_user_by_id(identity.id)
        if user is None:
            # Identity without a profile: a half-finished registration
            logger.error(f"Identity {identity.id} has no profile row")
            raise InvalidCredentialsException()

        logger.info(f"User {user.id} logged in")
        return {
            "access_token": create_access_token(user),
            "token_type": "bearer",
            "user": user,
        }
