# app/services/stats_service.py - Dashboard statistics over the student and course stores
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from app.core.errors import AggregationError, StorageError
from app.schemas.dashboard import StatsSnapshot
from app.services.store import CourseStore, StudentStore

logger = logging.getLogger(__name__)

# Course records carry no "course" field, so every course lands in a single
# null-keyed group counting all courses (no group at all when there are none).
COURSE_GROUP_KEY = "course"
NULL_GROUP_KEY = "null"


def success_rate(graduates: int, total_students: int) -> int:
    """Graduates as a whole percentage of all students, rounded half-up; 0 when there are no students"""
    if total_students <= 0:
        return 0
    rate = Decimal(graduates) * 100 / Decimal(total_students)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StatsAggregator:
    """
    Computes the dashboard snapshot.

    Each figure comes from its own query, so under concurrent writes the
    numbers are not guaranteed to be mutually consistent. Any store failure
    aborts the whole computation.
    """

    def __init__(
        self,
        students: StudentStore,
        courses: CourseStore,
        log: Optional[logging.Logger] = None,
    ):
        self.students = students
        self.courses = courses
        self.log = log or logger

    def compute_stats(self) -> StatsSnapshot:
        try:
            total_students = self.students.count()
            active_students = self.students.count(status="Active")
            total_courses = self.courses.count()
            active_courses = self.courses.count(status="Active")
            # Inactive students are reported as graduates
            graduates = self.students.count(status="Inactive")
            course_counts = self.courses.group_and_count(COURSE_GROUP_KEY)
        except StorageError as e:
            self.log.error(f"Dashboard statistics aborted: {e}")
            raise AggregationError("Failed to compute dashboard statistics") from e

        return StatsSnapshot(
            total_students=total_students,
            total_courses=total_courses,
            active_students=active_students,
            active_courses=active_courses,
            graduates=graduates,
            course_counts={
                NULL_GROUP_KEY if key is None else str(key): count
                for key, count in course_counts.items()
            },
            success_rate=success_rate(graduates, total_students),
        )
