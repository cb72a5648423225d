from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .base import Base


class Enrollment(Base):
    """class_students join row; the (class_id, student_id) pair is the key"""
    __tablename__ = "class_students"

    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    class_ = relationship("Class", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")

    def __repr__(self):
        return f"<Enrollment(class_id={self.class_id}, student_id={self.student_id})>"
