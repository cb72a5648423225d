# services/grade_service.py
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select

from schooldesk.core.errors import ConflictError, ValidationError
from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import Class, Enrollment, GradeEntry, GradeItem, Student, User
from schooldesk.schemas.grade.requests import GradeUpdateRequest
from .base_service import BaseService


def grade_stats(scores: List[Optional[float]]) -> Dict[str, Any]:
    """Average of the entered scores, rounded to one decimal, plus graded and ungraded counts"""
    graded = [s for s in scores if s is not None]
    average = round(sum(graded) / len(graded), 1) if graded else None
    return {
        "average": average,
        "graded": len(graded),
        "ungraded": len(scores) - len(graded),
    }


class GradeService(BaseService):

    async def _authorize_class(self, caller: User, class_id: int, action: Action) -> Class:
        class_ = await self._get_or_404(Class, class_id, "Class")
        authorize(
            caller,
            action,
            Resource.GRADE,
            school_id=class_.school_id,
            owner_id=class_.teacher_id,
        )
        return class_

    async def _authorize_item(self, caller: User, item_id: int, action: Action) -> GradeItem:
        item = await self._get_or_404(GradeItem, item_id, "Grade item")
        await self._authorize_class(caller, item.class_id, action)
        return item

    async def _name_taken(self, class_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(GradeItem.id).where(GradeItem.class_id == class_id, GradeItem.name == name)
        if exclude_id is not None:
            stmt = stmt.where(GradeItem.id != exclude_id)
        return (await self.db.execute(stmt)).first() is not None

    async def list_items(self, caller: User, class_id: int) -> List[GradeItem]:
        await self._authorize_class(caller, class_id, Action.READ)
        result = await self.db.execute(
            select(GradeItem)
            .where(GradeItem.class_id == class_id)
            .order_by(GradeItem.created_on.desc(), GradeItem.id.desc())
        )
        return list(result.scalars().all())

    async def create_item(self, caller: User, class_id: int, name: str) -> GradeItem:
        """
        Add an assignment to a class.

        Every currently enrolled student gets an ungraded entry for it.
        """
        await self._authorize_class(caller, class_id, Action.CREATE)

        student_ids = (await self.db.execute(
            select(Enrollment.student_id).where(Enrollment.class_id == class_id)
        )).scalars().all()
        if not student_ids:
            raise ValidationError("No students enrolled in this class")
        if await self._name_taken(class_id, name):
            raise ConflictError(f"A grade item named '{name}' already exists in this class")

        today = date.today()
        item = GradeItem(class_id=class_id, name=name, created_on=today)
        async with self.transaction("creating grade item"):
            self.db.add(item)
            await self.db.flush()
            await self.db.execute(
                insert(GradeEntry),
                [
                    {
                        "class_id": class_id,
                        "student_id": student_id,
                        "grade_item_id": item.id,
                        "score": None,
                        "date": today,
                    }
                    for student_id in student_ids
                ],
            )

        logger.info(f"Grade item {item.id} '{name}' added to class {class_id} for {len(student_ids)} students")
        return item

    async def rename_item(self, caller: User, item_id: int, name: str) -> GradeItem:
        """Rename an assignment; a name already used in the class is rejected"""
        item = await self._authorize_item(caller, item_id, Action.UPDATE)
        if await self._name_taken(item.class_id, name, exclude_id=item.id):
            raise ConflictError(f"A grade item named '{name}' already exists in this class")

        item.name = name
        await self._commit("renaming grade item")
        return item

    async def delete_item(self, caller: User, item_id: int) -> None:
        caller_id = caller.id
        item = await self._authorize_item(caller, item_id, Action.DELETE)
        async with self.transaction("deleting grade item"):
            await self.db.execute(delete(GradeEntry).where(GradeEntry.grade_item_id == item.id))
            await self.db.execute(delete(GradeItem).where(GradeItem.id == item.id))
        logger.info(f"Grade item {item_id} deleted by {caller_id}")

    async def _sheet(self, item: GradeItem) -> Dict[str, Any]:
        result = await self.db.execute(
            select(GradeEntry, Student)
            .join(Student, Student.id == GradeEntry.student_id)
            .where(GradeEntry.grade_item_id == item.id)
            .order_by(Student.last_name, Student.first_name)
        )
        grades = [
            {
                "id": entry.id,
                "student_id": student.id,
                "first_name": student.first_name,
                "last_name": student.last_name,
                "assignment_name": item.name,
                "score": entry.score,
                "date": entry.date,
            }
            for entry, student in result.all()
        ]
        return {"grades": grades, "stats": grade_stats([g["score"] for g in grades])}

    async def get_grades(self, caller: User, item_id: int) -> Dict[str, Any]:
        item = await self._authorize_item(caller, item_id, Action.READ)
        return await self._sheet(item)

    async def set_grades(self, caller: User, item_id: int, data: GradeUpdateRequest) -> Dict[str, Any]:
        """
        Replace the scores of a grade item.

        All entries of the item are rewritten in one transaction; only
        students enrolled in the class may be graded.
        """
        item = await self._authorize_item(caller, item_id, Action.UPDATE)

        enrolled = set((await self.db.execute(
            select(Enrollment.student_id).where(Enrollment.class_id == item.class_id)
        )).scalars().all())
        submitted = [g.student_id for g in data.grades]
        if len(set(submitted)) != len(submitted):
            raise ValidationError("Each student may only be graded once")
        strangers = sorted(set(submitted) - enrolled)
        if strangers:
            raise ValidationError(
                f"Students not enrolled in this class: {', '.join(str(s) for s in strangers)}"
            )

        today = date.today()
        async with self.transaction("saving grades"):
            await self.db.execute(delete(GradeEntry).where(GradeEntry.grade_item_id == item.id))
            if data.grades:
                await self.db.execute(
                    insert(GradeEntry),
                    [
                        {
                            "class_id": item.class_id,
                            "student_id": g.student_id,
                            "grade_item_id": item.id,
                            "score": g.score,
                            "date": today,
                        }
                        for g in data.grades
                    ],
                )

        logger.info(f"Grades for item {item_id} saved by {caller.id}")
        return await self._sheet(item)
