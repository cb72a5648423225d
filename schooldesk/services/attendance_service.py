# services/attendance_service.py
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import case, delete, func, insert, select

from schooldesk.core.errors import ValidationError
from schooldesk.core.logging import logger
from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import AttendanceRecord, Class, Enrollment, Student, User
from schooldesk.schemas.attendance.base import AttendanceStatus
from schooldesk.schemas.attendance.requests import AttendanceMarkRequest
from .base_service import BaseService


class AttendanceService(BaseService):

    async def _authorized_class(self, caller: User, class_id: int, action: Action) -> Class:
        class_ = await self._get_or_404(Class, class_id, "Class")
        authorize(
            caller,
            action,
            Resource.ATTENDANCE,
            school_id=class_.school_id,
            owner_id=class_.teacher_id,
        )
        return class_

    async def _class_sheet(self, class_id: int, on: date) -> List[Dict[str, Any]]:
        """Every enrolled student with their status on ``on`` (None when unmarked)"""
        stmt = (
            select(Student, AttendanceRecord.status)
            .join(Enrollment, Enrollment.student_id == Student.id)
            .outerjoin(
                AttendanceRecord,
                (AttendanceRecord.student_id == Student.id)
                & (AttendanceRecord.class_id == class_id)
                & (AttendanceRecord.date == on),
            )
            .where(Enrollment.class_id == class_id)
            .order_by(Student.last_name, Student.first_name)
        )
        result = await self.db.execute(stmt)
        return [
            {
                "student_id": student.id,
                "first_name": student.first_name,
                "last_name": student.last_name,
                "status": status,
            }
            for student, status in result.all()
        ]

    async def get_attendance(self, caller: User, class_id: int, on: date) -> List[Dict[str, Any]]:
        await self._authorized_class(caller, class_id, Action.READ)
        return await self._class_sheet(class_id, on)

    async def mark_attendance(self, caller: User, data: AttendanceMarkRequest) -> List[Dict[str, Any]]:
        """
        Replace the attendance of a class for one date.

        Existing rows for (class, date) are deleted and the submitted set is
        inserted in the same transaction, so readers never see the date
        half-marked and repeated calls keep one row per student.
        """
        await self._authorized_class(caller, data.class_id, Action.UPDATE)

        enrolled = set(
            (await self.db.execute(
                select(Enrollment.student_id).where(Enrollment.class_id == data.class_id)
            )).scalars().all()
        )
        strangers = sorted({r.student_id for r in data.records} - enrolled)
        if strangers:
            raise ValidationError(
                f"Students not enrolled in this class: {', '.join(str(s) for s in strangers)}"
            )

        async with self.transaction("marking attendance"):
            await self.db.execute(
                delete(AttendanceRecord).where(
                    AttendanceRecord.class_id == data.class_id,
                    AttendanceRecord.date == data.date,
                )
            )
            if data.records:
                await self.db.execute(
                    insert(AttendanceRecord),
                    [
                        {
                            "class_id": data.class_id,
                            "student_id": record.student_id,
                            "date": data.date,
                            "status": record.status,
                        }
                        for record in data.records
                    ],
                )

        logger.info(
            f"Attendance for class {data.class_id} on {data.date} set for "
            f"{len(data.records)} students by {caller.id}"
        )
        return await self._class_sheet(data.class_id, data.date)

    async def get_summary(
        self,
        caller: User,
        class_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Present and total counts per date, oldest first"""
        await self._authorized_class(caller, class_id, Action.READ)
        if start and end and start > end:
            raise ValidationError("start must not be after end")

        present = func.sum(case((AttendanceRecord.status == AttendanceStatus.PRESENT, 1), else_=0))
        stmt = (
            select(
                AttendanceRecord.date,
                present.label("present_count"),
                func.count(AttendanceRecord.id).label("total_count"),
            )
            .where(AttendanceRecord.class_id == class_id)
            .group_by(AttendanceRecord.date)
            .order_by(AttendanceRecord.date)
        )
        if start:
            stmt = stmt.where(AttendanceRecord.date >= start)
        if end:
            stmt = stmt.where(AttendanceRecord.date <= end)

        result = await self.db.execute(stmt)
        return [
            {
                "date": row.date,
                "present_count": int(row.present_count or 0),
                "total_count": row.total_count,
            }
            for row in result.all()
        ]
