# app/schemas/health.py
from datetime import datetime
from typing import Optional

from app.schemas.common import CamelModel


class HealthOut(CamelModel):
    status: str
    timestamp: datetime
    uptime: float
    environment: str


class DatabaseStatus(CamelModel):
    status: str
    name: str
    host: Optional[str] = None


class MemoryUsage(CamelModel):
    max_rss: float
    unit: str = "MB"


class UptimeInfo(CamelModel):
    seconds: int
    formatted: str


class SystemInfo(CamelModel):
    memory: MemoryUsage
    uptime: UptimeInfo
    python_version: str
    platform: str


class HealthDetailOut(CamelModel):
    status: str
    timestamp: datetime
    database: DatabaseStatus
    system: SystemInfo
    environment: str
