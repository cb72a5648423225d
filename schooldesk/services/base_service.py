# services/base_service.py
from contextlib import asynccontextmanager
from typing import Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from schooldesk.core.errors import DatabaseError, NotFoundError, ValidationError
from schooldesk.core.logging import logger
from schooldesk.models.user import User
from schooldesk.schemas.user.role import UserRoleEnum

ModelT = TypeVar("ModelT")


class BaseService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_or_404(self, model: Type[ModelT], pk, label: str) -> ModelT:
        obj = await self.db.get(model, pk)
        if obj is None:
            raise NotFoundError(f"{label} not found")
        return obj

    async def _commit(self, action: str) -> None:
        """
        Commit the unit of work, translating store failures.

        An IntegrityError comes from a bad caller-supplied reference or a
        duplicate and is reported as 400; anything else is a 500.
        """
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Integrity error while {action}: {e.orig}")
            raise ValidationError(f"Invalid data while {action}")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Database error while {action}", exc_info=e)
            raise DatabaseError(f"Database error while {action}")

    @asynccontextmanager
    async def transaction(self, action: str):
        """Run the block's writes as one unit; any failure rolls all of them back"""
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(f"Integrity error while {action}: {e.orig}")
            raise ValidationError(f"Invalid data while {action}")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Database error while {action}", exc_info=e)
            raise DatabaseError(f"Database error while {action}")
        except Exception:
            await self.db.rollback()
            raise
        await self._commit(action)

    @staticmethod
    def effective_school_id(caller: User, requested: Optional[int]) -> Optional[int]:
        """
        School a query should be limited to.

        Super admins see everything unless they ask for a school; everyone
        else defaults to their own school. A different explicit school is
        passed through so authorization can reject it.
        """
        if requested is not None:
            return requested
        if caller.role == UserRoleEnum.SUPER_ADMIN:
            return None
        return caller.school_id
