from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import TenantModel


class Class(TenantModel):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    # Nulled when the teacher is deleted
    teacher_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    school = relationship("School", back_populates="classes")
    teacher = relationship("User", back_populates="classes")
    enrollments = relationship("Enrollment", back_populates="class_", passive_deletes=True)
    grade_items = relationship("GradeItem", back_populates="class_", passive_deletes=True)

    def __repr__(self):
        try:
            name = self.__dict__.get('name', '<detached>')
            school_id = self.__dict__.get('school_id', '<detached>')
            return f"<Class(name={name}, school_id={school_id})>"
        except Exception:
            return "<Class(detached)>"
