from sqlalchemy import Column, Integer, Date, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin
from schooldesk.schemas.attendance.base import AttendanceStatus


class AttendanceRecord(TimestampMixin, Base):
    """One status per (class, student, date)"""
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("class_id", "student_id", "date", name="uq_attendance_class_student_date"),
    )

    id = Column(Integer, primary_key=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    status = Column(
        Enum(
            AttendanceStatus,
            name="attendance_status",
            values_callable=lambda statuses: [status.value for status in statuses]
        ),
        nullable=False
    )

    class_ = relationship("Class")
    student = relationship("Student", back_populates="attendances")

    def __repr__(self):
        return f"<AttendanceRecord(class_id={self.class_id}, student_id={self.student_id}, date={self.date}, status={self.status})>"
