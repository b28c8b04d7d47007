"""Dashboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.dashboard import DashboardStatsResponse
from ...services.dashboard import compute_dashboard_stats
from ..deps import get_current_user_id

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsResponse, status_code=status.HTTP_200_OK)
def get_dashboard_stats(user_id: str = Depends(get_current_user_id)) -> DashboardStatsResponse:
    return DashboardStatsResponse(**compute_dashboard_stats(user_id))
