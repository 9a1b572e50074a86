# app/services/course_guard.py - Blocks deletion of courses still referenced by students
import logging
from typing import Optional
from uuid import UUID

from app.services.store import StudentStore

logger = logging.getLogger(__name__)


class ReferentialGuard:
    """
    Read-only check run before a course is deleted.

    The check is advisory: nothing locks the students table between
    ``can_delete`` and the delete that follows, so a student inserted in
    between can still end up referencing a deleted course.
    """

    def __init__(self, students: StudentStore, log: Optional[logging.Logger] = None):
        self.students = students
        self.log = log or logger

    def referencing_count(self, course_id) -> int:
        """Number of students whose ``course`` equals the course id"""
        return self.students.count(course=str(course_id))

    def can_delete(self, course_id: UUID) -> bool:
        enrolled = self.referencing_count(course_id)
        if enrolled > 0:
            self.log.warning(
                "Course still referenced by students",
                extra={"context": {"courseId": str(course_id), "enrolledStudents": enrolled}}
            )
            return False
        return True
