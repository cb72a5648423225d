from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class School(TimestampMixin, Base):
    """
    Root of the tenant hierarchy.
    Users, classes and students point at a school through a nullable school_id.
    """
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=True)

    users = relationship("User", back_populates="school", passive_deletes=True)
    classes = relationship("Class", back_populates="school", passive_deletes=True)
    students = relationship("Student", back_populates="school", passive_deletes=True)

    def __repr__(self):
        return f"<School(id={self.id}, name={self.name})>"
