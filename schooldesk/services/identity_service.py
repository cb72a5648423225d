# services/identity_service.py
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from schooldesk.core.errors import ConflictError, DatabaseError, NotFoundError
from schooldesk.core.logging import logger
from schooldesk.core.security import get_password_hash, verify_password
from schooldesk.models.identity import Identity
from .base_service import BaseService


class IdentityService(BaseService):
    """
    Login credentials store.

    Behaves like an external identity provider: every call commits on its
    own, so a caller combining it with profile writes has to undo a created
    identity itself when a later step fails.
    """

    async def get_by_email(self, email: str) -> Optional[Identity]:
        result = await self.db.execute(select(Identity).where(Identity.email == email.lower()))
        return result.scalar_one_or_none()

    async def create(self, email: str, password: str) -> Identity:
        identity = Identity(
            email=email.lower(),
            password_hash=get_password_hash(password),
            email_confirmed=True
        )
        self.db.add(identity)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("A user with this email already exists")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to create identity", exc_info=e)
            raise DatabaseError("Failed to create user account")
        logger.info(f"Identity {identity.id} created")
        return identity

    async def update(self, identity_id: int, email: Optional[str] = None, password: Optional[str] = None) -> Identity:
        identity = await self.db.get(Identity, identity_id)
        if identity is None:
            raise NotFoundError("User account not found")
        if email is not None:
            identity.email = email.lower()
        if password:
            identity.password_hash = get_password_hash(password)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("A user with this email already exists")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to update identity {identity_id}", exc_info=e)
            raise DatabaseError("Failed to update user account")
        return identity

    async def delete(self, identity_id: int) -> bool:
        identity = await self.db.get(Identity, identity_id)
        if identity is None:
            return False
        await self.db.delete(identity)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to delete identity {identity_id}", exc_info=e)
            raise DatabaseError("Failed to delete user account")
        logger.info(f"Identity {identity_id} deleted")
        return True

    async def authenticate(self, email: str, password: str) -> Optional[Identity]:
        identity = await self.get_by_email(email)
        if identity is None or not verify_password(password, identity.password_hash):
            return None
        return identity
