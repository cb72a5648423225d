from . import attendance, auth, classes, grades, overview, schools, students, teachers, users

__all__ = [
    "attendance",
    "auth",
    "classes",
    "grades",
    "overview",
    "schools",
    "students",
    "teachers",
    "users",
]
