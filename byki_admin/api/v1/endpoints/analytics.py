"""Analytics API: dashboard snapshot and revenue chart."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from byki_admin.api.v1.dependencies import get_analytics_service
from byki_admin.application.dtos import DashboardStats, RevenuePoint
from byki_admin.application.services import AnalyticsService

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    return await analytics.get_dashboard_stats()


@router.get("/revenue", response_model=list[RevenuePoint])
async def revenue(
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
    days: int = Query(default=30, ge=1, le=365),
):
    return await analytics.get_revenue_chart_data(days)
