from sqlalchemy import Column, Integer, String, Date
from sqlalchemy.orm import relationship
from .base import TenantModel


class Student(TenantModel):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="-")
    email = Column(String(255), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    school = relationship("School", back_populates="students")
    enrollments = relationship("Enrollment", back_populates="student", passive_deletes=True)
    attendances = relationship("AttendanceRecord", back_populates="student", passive_deletes=True)

    def __repr__(self):
        return f"<Student(id={self.id}, name={self.first_name} {self.last_name})>"
