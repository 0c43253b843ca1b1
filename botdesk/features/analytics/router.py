"""Analytics API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from botdesk.core.schema import AnalyticsCreate, AnalyticsSnapshot

from .service import AnalyticsService, get_analytics_service

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Optional[AnalyticsSnapshot])
async def get_analytics(service: AnalyticsService = Depends(get_analytics_service)):
    """
    Get the latest analytics snapshot.

    Returns null when no snapshot has been recorded.
    """
    try:
        return await service.get_latest()
    except Exception:
        logger.exception("Failed to fetch analytics")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")


@router.get("/history", response_model=list[AnalyticsSnapshot])
async def get_analytics_history(
    limit: int = Query(default=30, ge=1, le=365),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get recent snapshots, most recent first."""
    try:
        return await service.get_history(limit)
    except Exception:
        logger.exception("Failed to fetch analytics history")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")


@router.post("", response_model=AnalyticsSnapshot, status_code=status.HTTP_201_CREATED)
async def record_analytics(
    body: AnalyticsCreate,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Record a new analytics snapshot."""
    try:
        return await service.record_snapshot(body)
    except Exception:
        logger.exception("Failed to record analytics")
        raise HTTPException(status_code=500, detail="Failed to record analytics")
