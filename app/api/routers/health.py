# app/api/routers/health.py
from datetime import datetime, timezone
from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging

from app.core.config import settings
from app.core.db import db_manager
from app.schemas.health import HealthDetailOut, HealthOut
from app.services.health_service import process_uptime, system_info

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=HealthOut)
async def health_check():
    """Liveness check"""
    return HealthOut(
        status="UP",
        timestamp=datetime.now(timezone.utc),
        uptime=process_uptime(),
        environment=settings.ENV,
    )


@router.get("/detail", response_model=HealthDetailOut)
def health_detail():
    """Database connectivity plus process metrics"""
    try:
        return HealthDetailOut(
            status="UP",
            timestamp=datetime.now(timezone.utc),
            database=db_manager.connection_info(),
            system=system_info(),
            environment=settings.ENV,
        )
    except Exception as e:
        logger.error(f"Detailed health check failed: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "status": "DOWN",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "message": str(e),
            }
        )
