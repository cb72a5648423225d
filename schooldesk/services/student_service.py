# services/student_service.py
from typing import List, Optional

from sqlalchemy import delete, insert, select

from schooldesk.core.config import settings
from schooldesk.core.errors import ValidationError
from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import (
    AttendanceRecord,
    Class,
    Enrollment,
    GradeEntry,
    Student,
    User,
)
from schooldesk.schemas.student.requests import StudentCreateRequest, StudentUpdateRequest
from schooldesk.schemas.user.role import UserRoleEnum
from schooldesk.utils.csv_import import parse_student_csv
from .base_service import BaseService


class StudentService(BaseService):

    async def list_students(
        self,
        caller: User,
        school_id: Optional[int] = None,
        class_id: Optional[int] = None,
    ) -> List[Student]:
        """Students ordered by last name; teachers only see students in their classes"""
        school_id = self.effective_school_id(caller, school_id)
        authorize(caller, Action.READ, Resource.STUDENT, school_id=school_id)

        stmt = select(Student).order_by(Student.last_name, Student.first_name)
        if school_id is not None:
            stmt = stmt.where(Student.school_id == school_id)

        if caller.role == UserRoleEnum.TEACHER or class_id is not None:
            taught = (
                select(Enrollment.student_id)
                .join(Class, Class.id == Enrollment.class_id)
            )
            if caller.role == UserRoleEnum.TEACHER:
                taught = taught.where(Class.teacher_id == caller.id)
            if class_id is not None:
                taught = taught.where(Enrollment.class_id == class_id)
            stmt = stmt.where(Student.id.in_(taught))

        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def create_student(self, caller: User, data: StudentCreateRequest) -> Student:
        school_id = self.effective_school_id(caller, data.school_id)
        authorize(caller, Action.CREATE, Resource.STUDENT, school_id=school_id)

        student = Student(
            first_name=data.first_name,
            last_name=data.last_name or settings.CSV_IMPORT_LAST_NAME_PLACEHOLDER,
            email=data.email,
            date_of_birth=data.date_of_birth,
            school_id=school_id,
        )
        self.db.add(student)
        await self._commit("creating student")
        await self.db.refresh(student)
        logger.info(f"Student {student.id} created by {caller.id}")
        return student

    async def update_student(self, caller: User, student_id: int, data: StudentUpdateRequest) -> Student:
        student = await self._get_or_404(Student, student_id, "Student")
        authorize(caller, Action.UPDATE, Resource.STUDENT, school_id=student.school_id)

        changes = data.model_dump(exclude_unset=True)
        if "first_name" in changes:
            if not changes["first_name"]:
                raise ValidationError("first_name is required")
            student.first_name = changes["first_name"]
        if "last_name" in changes:
            student.last_name = changes["last_name"] or settings.CSV_IMPORT_LAST_NAME_PLACEHOLDER
        if "email" in changes:
            student.email = changes["email"]
        if "date_of_birth" in changes:
            student.date_of_birth = changes["date_of_birth"]

        await self._commit("updating student")
        await self.db.refresh(student)
        return student

    async def delete_student(self, caller: User, student_id: int) -> None:
        """Remove a student together with enrollments, attendance and grades"""
        caller_id = caller.id
        student = await self._get_or_404(Student, student_id, "Student")
        authorize(caller, Action.DELETE, Resource.STUDENT, school_id=student.school_id)

        async with self.transaction("deleting student"):
            await self.db.execute(delete(GradeEntry).where(GradeEntry.student_id == student_id))
            await self.db.execute(delete(AttendanceRecord).where(AttendanceRecord.student_id == student_id))
            await self.db.execute(delete(Enrollment).where(Enrollment.student_id == student_id))
            await self.db.execute(delete(Student).where(Student.id == student_id))

        logger.info(f"Student {student_id} deleted by {caller_id}")

    async def import_students(
        self,
        caller: User,
        content: bytes,
        school_id: Optional[int] = None,
    ) -> List[Student]:
        """
        Bulk create students from an uploaded CSV file.

        Invalid rows are dropped silently; if nothing valid is left the
        upload is rejected. All rows go in with one insert.
        """
        school_id = self.effective_school_id(caller, school_id)
        authorize(caller, Action.CREATE, Resource.STUDENT, school_id=school_id)

        if len(content) > settings.MAX_UPLOAD_BYTES:
            raise ValidationError("File is too large")
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError("File must be UTF-8 encoded CSV")

        rows = parse_student_csv(text)
        if not rows:
            raise ValidationError("No valid students found in file")

        for row in rows:
            row["school_id"] = school_id

        async with self.transaction("importing students"):
            result = await self.db.execute(insert(Student).returning(Student.id), rows)
            ids = list(result.scalars().all())

        created = await self.db.execute(
            select(Student).where(Student.id.in_(ids)).order_by(Student.id)
        )
        students = list(created.scalars().all())
        logger.info(f"Imported {len(students)} students into school {school_id}")
        return students
