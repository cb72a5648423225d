# services/school_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, select, update

from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import Class, School, Student, User
from schooldesk.schemas.school.requests import SchoolCreateRequest, SchoolUpdateRequest
from schooldesk.schemas.user.role import UserRoleEnum
from .base_service import BaseService


class SchoolService(BaseService):

    @staticmethod
    def _counts_query():
        users_count = (
            select(func.count(User.id)).where(User.school_id == School.id).scalar_subquery()
        )
        classes_count = (
            select(func.count(Class.id)).where(Class.school_id == School.id).scalar_subquery()
        )
        students_count = (
            select(func.count(Student.id)).where(Student.school_id == School.id).scalar_subquery()
        )
        return select(
            School,
            users_count.label("users_count"),
            classes_count.label("classes_count"),
            students_count.label("students_count"),
        )

    @staticmethod
    def _with_counts(row) -> Dict[str, Any]:
        school = row[0]
        return {
            "id": school.id,
            "name": school.name,
            "address": school.address,
            "created_at": school.created_at,
            "updated_at": school.updated_at,
            "users_count": row.users_count or 0,
            "classes_count": row.classes_count or 0,
            "students_count": row.students_count or 0,
        }

    async def list_schools(self, caller: User) -> List[Dict[str, Any]]:
        """All schools for super admins, the caller's own school for everyone else"""
        stmt = self._counts_query().order_by(School.name)
        if caller.role != UserRoleEnum.SUPER_ADMIN:
            authorize(caller, Action.READ, Resource.SCHOOL, school_id=caller.school_id)
            stmt = stmt.where(School.id == caller.school_id)
        result = await self.db.execute(stmt)
        return [self._with_counts(row) for row in result.all()]

    async def get_school(self, caller: User, school_id: int) -> School:
        authorize(caller, Action.READ, Resource.SCHOOL, school_id=school_id)
        return await self._get_or_404(School, school_id, "School")

    async def create_school(self, caller: User, data: SchoolCreateRequest) -> School:
        authorize(caller, Action.CREATE, Resource.SCHOOL)
        school = School(name=data.name, address=data.address)
        self.db.add(school)
        await self._commit("creating school")
        await self.db.refresh(school)
        logger.info(f"School {school.id} created by {caller.id}")
        return school

    async def update_school(self, caller: User, school_id: int, data: SchoolUpdateRequest) -> School:
        authorize(caller, Action.UPDATE, Resource.SCHOOL, school_id=school_id)
        school = await self._get_or_404(School, school_id, "School")
        school.name = data.name
        school.address = data.address
        await self._commit("updating school")
        await self.db.refresh(school)
        return school

    async def delete_school(self, caller: User, school_id: int) -> None:
        """
        Delete a school.

        Users, classes and students of the school are kept but detached:
        their school_id is nulled in the same transaction that removes the
        school row.
        """
        caller_id = caller.id
        authorize(caller, Action.DELETE, Resource.SCHOOL, school_id=school_id)
        await self._get_or_404(School, school_id, "School")

        async with self.transaction("deleting school"):
            for model in (User, Class, Student):
                await self.db.execute(
                    update(model)
                    .where(model.school_id == school_id)
                    .values(school_id=None)
                    .execution_options(synchronize_session=False)
                )
            await self.db.execute(delete(School).where(School.id == school_id))

        logger.info(f"School {school_id} deleted by {caller_id}")
