# app/api/routers/students.py
from fastapi import APIRouter, Depends, status, Query
from typing import List
import logging

from app.api.deps.services import get_course_store, get_student_store, parse_uuid
from app.core.config import settings
from app.core.errors import NotFoundError, ValidationError
from app.schemas.common import MessageOut
from app.schemas.student import StudentCreate, StudentOut, StudentUpdate
from app.services.store import CourseStore, StudentStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _ensure_unique_email(students: StudentStore, email: str, current_id=None):
    existing = students.find_all(email=email)
    if any(student.id != current_id for student in existing):
        raise ValidationError(f"Student with email {email} already exists")


def _resolve_course(courses: CourseStore, course: str) -> str:
    """
    Value to store in Student.course.

    With ENFORCE_COURSE_REFERENCES off the free text is kept as given. With it
    on, the value must be the id of an existing course and is stored in the
    canonical form the referential guard compares against.
    """
    if not settings.ENFORCE_COURSE_REFERENCES:
        return course
    try:
        course_uuid = parse_uuid(course, "course")
    except ValidationError:
        raise ValidationError(f"Course {course} does not exist")
    if not courses.find_by_id(course_uuid):
        raise ValidationError(f"Course {course} does not exist")
    return str(course_uuid)


@router.get("", response_model=List[StudentOut])
def get_students(students: StudentStore = Depends(get_student_store)):
    """List all students, newest first"""
    results = students.newest_first()
    logger.info(f"Retrieved {len(results)} students successfully")
    return results


@router.post("", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(
    student_data: StudentCreate,
    students: StudentStore = Depends(get_student_store),
    courses: CourseStore = Depends(get_course_store),
):
    _ensure_unique_email(students, student_data.email)
    create_data = student_data.model_dump()
    create_data["course"] = _resolve_course(courses, student_data.course)

    student = students.insert(create_data)

    logger.info(
        "New student created successfully",
        extra={"context": {
            "studentId": str(student.id),
            "name": student.name,
            "course": student.course,
        }}
    )
    return student


# Must be registered before /{student_id} so "search" is not parsed as an id
@router.get("/search", response_model=List[StudentOut])
def search_students(
    q: str = Query("", description="Matches name, course or email (case-insensitive)"),
    students: StudentStore = Depends(get_student_store),
):
    logger.info("Student search initiated", extra={"context": {"searchTerm": q}})

    results = students.search_students(q)

    logger.info(
        "Student search completed",
        extra={"context": {"searchTerm": q, "resultsCount": len(results)}}
    )
    return results


@router.get("/{student_id}", response_model=StudentOut)
def get_student(
    student_id: str,
    students: StudentStore = Depends(get_student_store),
):
    student = students.find_by_id(parse_uuid(student_id, "student"))
    if not student:
        logger.warning("Student record not found", extra={"context": {"studentId": student_id}})
        raise NotFoundError("Student record not found")
    return student


@router.put("/{student_id}", response_model=StudentOut)
def update_student(
    student_id: str,
    student_data: StudentUpdate,
    students: StudentStore = Depends(get_student_store),
    courses: CourseStore = Depends(get_course_store),
):
    """Update a student record, overwriting only the provided fields"""
    student_uuid = parse_uuid(student_id, "student")

    update_data = student_data.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in update_data:
        _ensure_unique_email(students, update_data["email"], current_id=student_uuid)
    if "course" in update_data:
        update_data["course"] = _resolve_course(courses, update_data["course"])

    student = students.update_by_id(student_uuid, update_data)
    if not student:
        logger.warning("Student record not found", extra={"context": {"studentId": student_id}})
        raise NotFoundError("Student record not found")

    logger.info(
        "Student record updated successfully",
        extra={"context": {
            "studentId": str(student.id),
            "name": student.name,
            "course": student.course,
        }}
    )
    return student


@router.delete("/{student_id}", response_model=MessageOut)
def delete_student(
    student_id: str,
    students: StudentStore = Depends(get_student_store),
):
    student = students.delete_by_id(parse_uuid(student_id, "student"))
    if not student:
        logger.warning("Student record not found", extra={"context": {"studentId": student_id}})
        raise NotFoundError("Student record not found")

    logger.info(
        "Student record deleted successfully",
        extra={"context": {
            "studentId": str(student.id),
            "name": student.name,
            "course": student.course,
        }}
    )
    return {"message": "Student record deleted successfully"}
