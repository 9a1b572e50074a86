# app/api/routers/courses.py
from fastapi import APIRouter, Depends, status
from typing import List
import logging

from app.api.deps.services import get_course_store, get_referential_guard, parse_uuid
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.schemas.common import MessageOut
from app.schemas.course import CourseCreate, CourseOut, CourseUpdate
from app.services.course_guard import ReferentialGuard
from app.services.store import CourseStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _ensure_unique_name(courses: CourseStore, name: str, current_id=None):
    existing = courses.find_all(name=name)
    if any(course.id != current_id for course in existing):
        raise ValidationError(f"Course with name '{name}' already exists")


@router.get("", response_model=List[CourseOut])
def get_courses(courses: CourseStore = Depends(get_course_store)):
    """List all courses sorted by name"""
    results = courses.by_name()
    logger.info(f"Retrieved {len(results)} courses successfully")
    return results


@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(
    course_data: CourseCreate,
    courses: CourseStore = Depends(get_course_store),
):
    _ensure_unique_name(courses, course_data.name)

    course = courses.insert(course_data.model_dump())

    logger.info(
        "New course created",
        extra={"context": {"courseId": str(course.id), "name": course.name}}
    )
    return course


@router.get("/{course_id}", response_model=CourseOut)
def get_course(
    course_id: str,
    courses: CourseStore = Depends(get_course_store),
):
    course = courses.find_by_id(parse_uuid(course_id, "course"))
    if not course:
        raise NotFoundError("Course not found")
    return course


@router.put("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: str,
    course_data: CourseUpdate,
    courses: CourseStore = Depends(get_course_store),
):
    """Update a course, overwriting only the provided fields"""
    course_uuid = parse_uuid(course_id, "course")

    update_data = course_data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in update_data:
        _ensure_unique_name(courses, update_data["name"], current_id=course_uuid)

    course = courses.update_by_id(course_uuid, update_data)
    if not course:
        logger.warning("Course not found for update", extra={"context": {"courseId": course_id}})
        raise NotFoundError("Course not found")

    logger.info(
        "Course updated successfully",
        extra={"context": {"courseId": str(course.id), "name": course.name}}
    )
    return course


@router.delete("/{course_id}", response_model=MessageOut)
def delete_course(
    course_id: str,
    courses: CourseStore = Depends(get_course_store),
    guard: ReferentialGuard = Depends(get_referential_guard),
):
    """Delete a course (only if no student references it)"""
    course_uuid = parse_uuid(course_id, "course")

    if not courses.find_by_id(course_uuid):
        logger.warning("Course not found for deletion", extra={"context": {"courseId": course_id}})
        raise NotFoundError("Course not found")

    if not guard.can_delete(course_uuid):
        raise ConflictError("cannot delete: referenced by existing students")

    course = courses.delete_by_id(course_uuid)
    if not course:
        raise NotFoundError("Course not found")

    logger.info(
        "Course deleted successfully",
        extra={"context": {"courseId": str(course.id), "name": course.name}}
    )
    return {"message": "Course deleted successfully"}
