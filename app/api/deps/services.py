# app/api/deps/services.py - Per-request stores and domain components
import logging
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import ValidationError
from app.services.course_guard import ReferentialGuard
from app.services.stats_service import StatsAggregator
from app.services.store import CourseStore, StudentStore


def get_student_store(db: Session = Depends(get_db)) -> StudentStore:
    return StudentStore(db)


def get_course_store(db: Session = Depends(get_db)) -> CourseStore:
    return CourseStore(db)


def get_referential_guard(
    students: StudentStore = Depends(get_student_store),
) -> ReferentialGuard:
    return ReferentialGuard(students, log=logging.getLogger("app.guard"))


def get_stats_aggregator(
    students: StudentStore = Depends(get_student_store),
    courses: CourseStore = Depends(get_course_store),
) -> StatsAggregator:
    return StatsAggregator(students, courses, log=logging.getLogger("app.stats"))


def parse_uuid(value: str, label: str) -> UUID:
    """Reject malformed ids before they reach the store"""
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"Invalid {label} ID format")
