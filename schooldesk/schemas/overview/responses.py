from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClassPerformance(BaseModel):
    name: str
    average: Optional[float] = None


class TodayAbsence(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: int = Field(alias="studentId")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    class_name: str = Field(alias="className")
    status: str


class Overview(BaseModel):
    """Dashboard figures for a school, or for a teacher's own classes"""
    model_config = ConfigDict(populate_by_name=True)

    total_students: int = Field(alias="totalStudents")
    total_teachers: int = Field(alias="totalTeachers")
    total_classes: int = Field(alias="totalClasses")
    average_attendance: int = Field(alias="averageAttendance")
    average_grade: Optional[float] = Field(default=None, alias="averageGrade")
    class_performance: List[ClassPerformance] = Field(default_factory=list, alias="classPerformance")
    today_absences: List[TodayAbsence] = Field(default_factory=list, alias="todayAbsences")


class OverviewResponse(BaseModel):
    overview: Overview
