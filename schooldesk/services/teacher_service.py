# teacher_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from schooldesk.core.errors import ConflictError, DatabaseError, NotFoundError
from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import Class, User
from schooldesk.schemas.teacher.requests import TeacherCreateRequest, TeacherUpdateRequest
from schooldesk.schemas.user.role import UserRoleEnum
from .base_service import BaseService
from .identity_service import IdentityService
from .user_service import UserService


class TeacherService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.identities = IdentityService(db)
        self.users = UserService(db)

    async def _get_teacher(self, teacher_id: int) -> User:
        teacher = await self.db.get(User, teacher_id)
        if teacher is None or teacher.role != UserRoleEnum.TEACHER:
            raise NotFoundError("Teacher not found")
        return teacher

    async def list_teachers(self, caller: User, school_id: Optional[int] = None) -> List[Dict[str, Any]]:
        school_id = self.effective_school_id(caller, school_id)
        is_teacher = caller.role == UserRoleEnum.TEACHER
        authorize(
            caller,
            Action.READ,
            Resource.USER,
            school_id=school_id,
            owner_id=caller.id if is_teacher else None,
        )

        stmt = (
            select(User)
            .options(selectinload(User.classes))
            .where(User.role == UserRoleEnum.TEACHER)
            .order_by(User.last_name, User.first_name)
        )
        if school_id is not None:
            stmt = stmt.where(User.school_id == school_id)
        if is_teacher:
            stmt = stmt.where(User.id == caller.id)

        result = await self.db.execute(stmt)
        return [
            {
                "id": teacher.id,
                "first_name": teacher.first_name,
                "last_name": teacher.last_name,
                "email": teacher.email,
                "school_id": teacher.school_id,
                "classes": [{"id": c.id, "name": c.name} for c in teacher.classes],
            }
            for teacher in result.scalars().all()
        ]

    async def create_teacher(self, caller: User, data: TeacherCreateRequest) -> User:
        return await self.users.create_user(
            caller,
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            password=data.password,
            role=UserRoleEnum.TEACHER.value,
            school_id=data.school_id,
        )

    async def update_teacher(self, caller: User, teacher_id: int, data: TeacherUpdateRequest) -> User:
        """
        Update login details first, then the profile.

        The two writes are separate commits. If the identity update fails
        nothing has changed; if the profile update fails afterwards the new
        email or password stays in effect on the identity.
        """
        teacher = await self._get_teacher(teacher_id)
        authorize(
            caller,
            Action.UPDATE,
            Resource.USER,
            school_id=teacher.school_id,
            target_role=teacher.role,
        )

        new_email = data.email.lower() if data.email is not None else None
        email_changed = new_email is not None and new_email != teacher.email.lower()
        if email_changed or data.password:
            await self.identities.update(
                teacher_id,
                email=new_email if email_changed else None,
                password=data.password,
            )

        if data.first_name is not None:
            teacher.first_name = data.first_name
        if data.last_name is not None:
            teacher.last_name = data.last_name
        if email_changed:
            teacher.email = new_email

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.error(f"Profile update for teacher {teacher_id} rejected after identity update")
            raise ConflictError("A user with this email already exists")
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Profile update for teacher {teacher_id} failed after identity update", exc_info=e)
            raise DatabaseError("Failed to update teacher profile")

        await self.db.refresh(teacher)
        logger.info(f"Teacher {teacher_id} updated by {caller.id}")
        return teacher

    async def delete_teacher(self, caller: User, teacher_id: int) -> None:
        """
        Remove a teacher: unassign their classes, delete the profile, then
        delete the login identity.
        """
        caller_id = caller.id
        teacher = await self._get_teacher(teacher_id)
        authorize(
            caller,
            Action.DELETE,
            Resource.USER,
            school_id=teacher.school_id,
            target_role=teacher.role,
        )

        async with self.transaction("deleting teacher"):
            await self.db.execute(
                update(Class)
                .where(Class.teacher_id == teacher_id)
                .values(teacher_id=None)
                .execution_options(synchronize_session=False)
            )
            await self.db.delete(teacher)

        await self.identities.delete(teacher_id)
        logger.info(f"Teacher {teacher_id} deleted by {caller_id}")
