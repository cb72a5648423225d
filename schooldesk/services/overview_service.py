# services/overview_service.py
from datetime import date, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import case, func, select

from schooldesk.core.permissions import Action, Resource, authorize
from schooldesk.models import AttendanceRecord, Class, Enrollment, GradeEntry, Student, User
from schooldesk.schemas.attendance.base import AttendanceStatus
from schooldesk.schemas.user.role import UserRoleEnum
from .base_service import BaseService

ATTENDANCE_WINDOW_DAYS = 30


class OverviewService(BaseService):

    async def get_overview(self, caller: User, school_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Dashboard figures.

        School admins and super admins get the whole school (or every school
        when a super admin names none); teachers get their own classes.
        """
        school_id = self.effective_school_id(caller, school_id)
        is_teacher = caller.role == UserRoleEnum.TEACHER
        authorize(
            caller,
            Action.READ,
            Resource.CLASS,
            school_id=school_id,
            owner_id=caller.id if is_teacher else None,
        )

        class_ids = select(Class.id)
        if school_id is not None:
            class_ids = class_ids.where(Class.school_id == school_id)
        if is_teacher:
            class_ids = class_ids.where(Class.teacher_id == caller.id)

        if is_teacher:
            students = (
                select(func.count(func.distinct(Enrollment.student_id)))
                .where(Enrollment.class_id.in_(class_ids))
            )
        else:
            students = select(func.count(Student.id))
            if school_id is not None:
                students = students.where(Student.school_id == school_id)

        teachers = select(func.count(User.id)).where(User.role == UserRoleEnum.TEACHER)
        if school_id is not None:
            teachers = teachers.where(User.school_id == school_id)

        classes = select(func.count()).select_from(class_ids.subquery())

        # One round trip for all three counts
        counts = (await self.db.execute(
            select(
                students.scalar_subquery().label("students"),
                teachers.scalar_subquery().label("teachers"),
                classes.scalar_subquery().label("classes"),
            )
        )).one()

        today = date.today()
        present = func.sum(case((AttendanceRecord.status == AttendanceStatus.PRESENT, 1), else_=0))
        attendance = (await self.db.execute(
            select(present.label("present"), func.count(AttendanceRecord.id).label("total"))
            .where(
                AttendanceRecord.class_id.in_(class_ids),
                AttendanceRecord.date >= today - timedelta(days=ATTENDANCE_WINDOW_DAYS),
                AttendanceRecord.date <= today,
            )
        )).one()
        average_attendance = (
            round((attendance.present or 0) / attendance.total * 100) if attendance.total else 0
        )

        performance_rows = (await self.db.execute(
            select(Class.name, func.avg(GradeEntry.score).label("average"))
            .join(GradeEntry, GradeEntry.class_id == Class.id)
            .where(Class.id.in_(class_ids), GradeEntry.score.is_not(None))
            .group_by(Class.id, Class.name)
            .order_by(Class.name)
        )).all()
        class_performance = [
            {"name": row.name, "average": round(float(row.average), 1)}
            for row in performance_rows
        ]
        average_grade = (
            round(sum(c["average"] for c in class_performance) / len(class_performance))
            if class_performance else 0
        )

        absence_rows = (await self.db.execute(
            select(Student.id, Student.first_name, Student.last_name, Class.name, AttendanceRecord.status)
            .join(AttendanceRecord, AttendanceRecord.student_id == Student.id)
            .join(Class, Class.id == AttendanceRecord.class_id)
            .where(
                AttendanceRecord.class_id.in_(class_ids),
                AttendanceRecord.date == today,
                AttendanceRecord.status == AttendanceStatus.ABSENT,
            )
            .order_by(Class.name, Student.last_name, Student.first_name)
        )).all()

        return {
            "total_students": counts.students or 0,
            "total_teachers": counts.teachers or 0,
            "total_classes": counts.classes or 0,
            "average_attendance": average_attendance,
            "average_grade": average_grade,
            "class_performance": class_performance,
            "today_absences": [
                {
                    "student_id": student_id,
                    "first_name": first_name,
                    "last_name": last_name,
                    "class_name": class_name,
                    "status": status.value if isinstance(status, AttendanceStatus) else status,
                }
                for student_id, first_name, last_name, class_name, status in absence_rows
            ],
        }
