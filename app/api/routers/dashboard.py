# app/api/routers/dashboard.py
from fastapi import APIRouter, Depends
import logging

from app.api.deps.services import get_stats_aggregator
from app.schemas.dashboard import StatsSnapshot
from app.services.stats_service import StatsAggregator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/stats", response_model=StatsSnapshot)
def get_dashboard_stats(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """Summary counts across students and courses"""
    stats = aggregator.compute_stats()
    logger.info(
        "Dashboard statistics retrieved successfully",
        extra={"context": stats.model_dump(by_alias=True)}
    )
    return stats
