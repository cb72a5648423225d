from sqlalchemy import Column, Integer, String, Date, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class GradeItem(TimestampMixin, Base):
    """An assignment within a class; grade rows reference it by id"""
    __tablename__ = "grade_items"
    __table_args__ = (
        UniqueConstraint("class_id", "name", name="uq_grade_items_class_name"),
    )

    id = Column(Integer, primary_key=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_on = Column(Date, nullable=False)

    class_ = relationship("Class", back_populates="grade_items")
    entries = relationship("GradeEntry", back_populates="grade_item", passive_deletes=True)

    def __repr__(self):
        return f"<GradeItem(id={self.id}, class_id={self.class_id}, name={self.name})>"


class GradeEntry(TimestampMixin, Base):
    __tablename__ = "grades"
    __table_args__ = (
        UniqueConstraint("grade_item_id", "student_id", name="uq_grades_item_student"),
    )

    id = Column(Integer, primary_key=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    grade_item_id = Column(Integer, ForeignKey("grade_items.id", ondelete="CASCADE"), nullable=False, index=True)
    score = Column(Float, nullable=True)
    date = Column(Date, nullable=False)

    grade_item = relationship("GradeItem", back_populates="entries")
    student = relationship("Student")

    def __repr__(self):
        return f"<GradeEntry(grade_item_id={self.grade_item_id}, student_id={self.student_id}, score={self.score})>"
