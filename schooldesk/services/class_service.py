# services/class_service.py
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from schooldesk.core.errors import ConflictError, NotFoundError, ValidationError
from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import (
    AttendanceRecord,
    Class,
    Enrollment,
    GradeEntry,
    GradeItem,
    Student,
    User,
)
from schooldesk.schemas.class_.requests import ClassCreateRequest, ClassUpdateRequest
from schooldesk.schemas.user.role import UserRoleEnum
from .base_service import BaseService


class ClassService(BaseService):

    @staticmethod
    def _roster_query():
        return select(Class).options(
            selectinload(Class.teacher),
            selectinload(Class.enrollments).selectinload(Enrollment.student),
        )

    @staticmethod
    def serialize(class_: Class) -> Dict[str, Any]:
        """
        Class with its teacher and enrolled students.

        The enrollment join rows are flattened into a plain ``students``
        list; clients rely on that shape.
        """
        students = sorted(
            (enrollment.student for enrollment in class_.enrollments),
            key=lambda s: (s.last_name.lower(), s.first_name.lower()),
        )
        teacher = class_.teacher
        return {
            "id": class_.id,
            "name": class_.name,
            "description": class_.description,
            "teacher_id": class_.teacher_id,
            "school_id": class_.school_id,
            "teacher": {
                "id": teacher.id,
                "first_name": teacher.first_name,
                "last_name": teacher.last_name,
                "email": teacher.email,
            } if teacher else None,
            "students": [
                {
                    "id": s.id,
                    "first_name": s.first_name,
                    "last_name": s.last_name,
                    "email": s.email,
                }
                for s in students
            ],
            "created_at": class_.created_at,
            "updated_at": class_.updated_at,
        }

    async def load_class(self, class_id: int) -> Class:
        result = await self.db.execute(self._roster_query().where(Class.id == class_id))
        class_ = result.scalar_one_or_none()
        if class_ is None:
            raise NotFoundError("Class not found")
        return class_

    async def _validate_teacher(self, teacher_id: int, school_id: Optional[int]) -> User:
        teacher = await self.db.get(User, teacher_id)
        if teacher is None or teacher.role != UserRoleEnum.TEACHER:
            raise ValidationError("teacher_id must reference a teacher")
        if school_id is not None and teacher.school_id is not None and teacher.school_id != school_id:
            raise ValidationError("Teacher belongs to a different school")
        return teacher

    async def list_classes(self, caller: User, school_id: Optional[int] = None) -> List[Dict[str, Any]]:
        school_id = self.effective_school_id(caller, school_id)
        is_teacher = caller.role == UserRoleEnum.TEACHER
        authorize(
            caller,
            Action.READ,
            Resource.CLASS,
            school_id=school_id,
            owner_id=caller.id if is_teacher else None,
        )

        stmt = self._roster_query().order_by(Class.name)
        if school_id is not None:
            stmt = stmt.where(Class.school_id == school_id)
        if is_teacher:
            stmt = stmt.where(Class.teacher_id == caller.id)

        result = await self.db.execute(stmt)
        return [self.serialize(c) for c in result.scalars().all()]

    async def get_class(self, caller: User, class_id: int) -> Dict[str, Any]:
        class_ = await self.load_class(class_id)
        authorize(caller, Action.READ, Resource.CLASS, school_id=class_.school_id, owner_id=class_.teacher_id)
        return self.serialize(class_)

    async def create_class(self, caller: User, data: ClassCreateRequest) -> Dict[str, Any]:
        school_id = self.effective_school_id(caller, data.school_id)
        authorize(caller, Action.CREATE, Resource.CLASS, school_id=school_id)

        teacher = await self._validate_teacher(data.teacher_id, school_id)
        if school_id is None:
            school_id = teacher.school_id

        class_ = Class(
            name=data.name,
            description=data.description,
            teacher_id=teacher.id,
            school_id=school_id,
        )
        self.db.add(class_)
        await self._commit("creating class")
        logger.info(f"Class {class_.id} created by {caller.id}")
        return self.serialize(await self._reload(class_.id))

    async def update_class(self, caller: User, class_id: int, data: ClassUpdateRequest) -> Dict[str, Any]:
        class_ = await self.load_class(class_id)
        authorize(caller, Action.UPDATE, Resource.CLASS, school_id=class_.school_id, owner_id=class_.teacher_id)

        changes = data.model_dump(exclude_unset=True)
        if "name" in changes:
            if changes["name"] is None:
                raise ValidationError("name is required")
            class_.name = changes["name"]
        if "description" in changes:
            class_.description = changes["description"]
        if "teacher_id" in changes:
            teacher_id = changes["teacher_id"]
            if teacher_id is not None:
                await self._validate_teacher(teacher_id, class_.school_id)
            class_.teacher_id = teacher_id

        await self._commit("updating class")
        return self.serialize(await self._reload(class_id))

    async def delete_class(self, caller: User, class_id: int) -> None:
        """Remove a class with its enrollments, attendance, grades and grade items"""
        caller_id = caller.id
        class_ = await self._get_or_404(Class, class_id, "Class")
        authorize(caller, Action.DELETE, Resource.CLASS, school_id=class_.school_id, owner_id=class_.teacher_id)

        async with self.transaction("deleting class"):
            await self.db.execute(delete(GradeEntry).where(GradeEntry.class_id == class_id))
            await self.db.execute(delete(GradeItem).where(GradeItem.class_id == class_id))
            await self.db.execute(delete(AttendanceRecord).where(AttendanceRecord.class_id == class_id))
            await self.db.execute(delete(Enrollment).where(Enrollment.class_id == class_id))
            await self.db.execute(delete(Class).where(Class.id == class_id))

        logger.info(f"Class {class_id} deleted by {caller_id}")

    async def _reload(self, class_id: int) -> Class:
        # Overwrite cached rows so relationships reflect the committed state
        result = await self.db.execute(
            self._roster_query()
            .where(Class.id == class_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def enroll_student(self, caller: User, class_id: int, student_id: int) -> None:
        class_ = await self._get_or_404(Class, class_id, "Class")
        authorize(
            caller,
            Action.CREATE,
            Resource.ENROLLMENT,
            school_id=class_.school_id,
            owner_id=class_.teacher_id,
        )
        student = await self._get_or_404(Student, student_id, "Student")
        if (
            class_.school_id is not None
            and student.school_id is not None
            and class_.school_id != student.school_id
        ):
            raise ValidationError("Student belongs to a different school")

        if await self.db.get(Enrollment, (class_id, student_id)) is not None:
            raise ConflictError("Student is already enrolled in this class")

        self.db.add(Enrollment(class_id=class_id, student_id=student_id))
        await self._commit("enrolling student")
        logger.info(f"Student {student_id} enrolled in class {class_id}")

    async def unenroll_student(self, caller: User, class_id: int, student_id: int) -> None:
        class_ = await self._get_or_404(Class, class_id, "Class")
        authorize(
            caller,
            Action.DELETE,
            Resource.ENROLLMENT,
            school_id=class_.school_id,
            owner_id=class_.teacher_id,
        )
        enrollment = await self.db.get(Enrollment, (class_id, student_id))
        if enrollment is None:
            raise NotFoundError("Student is not enrolled in this class")

        await self.db.delete(enrollment)
        await self._commit("removing student from class")
        logger.info(f"Student {student_id} removed from class {class_id}")

    async def enrolled_student_ids(self, class_id: int) -> List[int]:
        result = await self.db.execute(
            select(Enrollment.student_id).where(Enrollment.class_id == class_id)
        )
        return list(result.scalars().all())
