# app/schemas/student.py
from pydantic import EmailStr, validator
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from app.schemas.common import CamelModel, RecordStatus


def _require_text(v):
    if v is None or not v.strip():
        raise ValueError('This field cannot be empty')
    return v.strip()


class StudentCreate(CamelModel):
    name: str
    email: EmailStr
    course: str
    enrollment_date: date
    status: RecordStatus = "Active"

    @validator('name', 'course')
    def validate_text(cls, v):
        return _require_text(v)

    @validator('email')
    def normalize_email(cls, v):
        return v.lower()


class StudentUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    course: Optional[str] = None
    enrollment_date: Optional[date] = None
    status: Optional[RecordStatus] = None

    @validator('name', 'course')
    def validate_text(cls, v):
        if v is not None:
            return _require_text(v)
        return v

    @validator('email')
    def normalize_email(cls, v):
        if v is not None:
            return v.lower()
        return v


class StudentOut(CamelModel):
    id: UUID
    name: str
    email: str
    course: str
    enrollment_date: date
    status: str
    created_at: datetime
    updated_at: datetime
