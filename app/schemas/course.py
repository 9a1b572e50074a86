# app/schemas/course.py
from pydantic import Field, validator
from typing import Optional
from datetime import datetime
from uuid import UUID

from app.schemas.common import CamelModel, RecordStatus


class CourseCreate(CamelModel):
    name: str
    description: str
    duration: float = Field(..., ge=0)
    status: RecordStatus = "Active"

    @validator('name', 'description')
    def validate_text(cls, v):
        if not v or not v.strip():
            raise ValueError('This field cannot be empty')
        return v.strip()


class CourseUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[float] = Field(default=None, ge=0)
    status: Optional[RecordStatus] = None

    @validator('name', 'description')
    def validate_text(cls, v):
        if v is not None and not v.strip():
            raise ValueError('This field cannot be empty')
        return v.strip() if v is not None else v


class CourseOut(CamelModel):
    id: UUID
    name: str
    description: str
    duration: float
    status: str
    created_at: datetime
    updated_at: datetime
