# services/user_service.py
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from schooldesk.core.errors import (
    BaseAPIError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models.user import User
from schooldesk.schemas.user.role import UserRoleEnum
from .base_service import BaseService
from .identity_service import IdentityService


class UserService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.identities = IdentityService(db)

    @staticmethod
    def parse_role(role: Optional[str]) -> UserRoleEnum:
        if role is None or not str(role).strip():
            raise ValidationError("role is required")
        try:
            return UserRoleEnum(str(role).strip())
        except ValueError:
            raise ValidationError(f"Invalid role. Expected one of: {', '.join(UserRoleEnum.values())}")

    async def create_user(
        self,
        caller: User,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: Optional[str],
        school_id: Optional[int] = None,
    ) -> User:
        """
        Create a login identity and its profile row.

        The identity is committed first. If the profile insert fails the
        identity is deleted again before the error is returned, so a failed
        registration never leaves a credential without a profile.
        """
        # Callers who may not create accounts at all are turned away before
        # their input is looked at
        authorize(caller, Action.CREATE, Resource.USER, target_role=UserRoleEnum.TEACHER)

        caller_id = caller.id
        target_role = self.parse_role(role)
        email = email.lower()

        if school_id is None and caller.role == UserRoleEnum.SCHOOL_ADMIN:
            school_id = caller.school_id
        if school_id is None and target_role != UserRoleEnum.SUPER_ADMIN:
            raise ValidationError("schoolId is required")

        authorize(caller, Action.CREATE, Resource.USER, school_id=school_id, target_role=target_role)

        identity = await self.identities.create(email, password)
        # The rollback after a failed profile insert expires ``identity``
        identity_id = identity.id

        try:
            profile = await self._insert_profile(
                identity_id,
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=target_role,
                school_id=school_id if target_role != UserRoleEnum.SUPER_ADMIN else None,
            )
        except BaseAPIError:
            await self._compensate(identity_id)
            raise

        logger.info(f"User {identity_id} created with role {target_role.value} by {caller_id}")
        return profile

    async def _insert_profile(self, user_id: int, **fields) -> User:
        profile = User(id=user_id, **fields)
        self.db.add(profile)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Profile insert for {user_id} rejected: {e.orig}")
            raise ValidationError("Invalid user data: check that the school exists and the email is unused")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Profile insert for {user_id} failed", exc_info=e)
            raise DatabaseError("Failed to create user profile")
        return profile

    async def _compensate(self, identity_id: int) -> None:
        try:
            await self.identities.delete(identity_id)
            logger.warning(f"Removed identity {identity_id} after failed profile insert")
        except BaseAPIError:
            logger.error(f"Could not remove orphaned identity {identity_id}")

    async def get_user(self, user_id: int) -> User:
        return await self._get_or_404(User, user_id, "User")

    async def get_role(self, caller: User, user_id: Optional[int]) -> UserRoleEnum:
        if user_id is None:
            raise ValidationError("userId is required")
        user = await self.get_user(user_id)
        authorize(
            caller,
            Action.READ,
            Resource.USER,
            school_id=user.school_id,
            owner_id=user.id,
        )
        return user.role
