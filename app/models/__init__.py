# app/models/__init__.py - Import all models so SQLAlchemy can discover them

from app.models.base import Base
from app.models.student import Student
from app.models.course import Course

__all__ = [
    "Base",
    "Student",
    "Course",
]
