# app/schemas/dashboard.py
from typing import Dict

from app.schemas.common import CamelModel


class StatsSnapshot(CamelModel):
    total_students: int
    total_courses: int
    active_students: int
    active_courses: int
    graduates: int
    course_counts: Dict[str, int]
    success_rate: int
