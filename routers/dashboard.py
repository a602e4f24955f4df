# routers/dashboard.py
"""
Owner dashboard: headline numbers for the current month and a trailing
series of rent collected and occupancy.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config import settings
from database import get_session
from dependencies import Scope, require_owner
from schemas.common import IntegrityWarningResponse
from schemas.dashboard import (
     DashboardSummaryResponse,
     DashboardTrendResponse,
     TrendPointResponse,
)
from services.dashboard_service import DashboardService
from routers.complaints import build_complaint_response
from routers.tenants import build_tenant_response

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardSummaryResponse, summary="Dashboard summary")
def get_dashboard(
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     summary = DashboardService.summary(db, scope.owner_id)
     return DashboardSummaryResponse(
          total_rooms=summary.total_rooms,
          occupied_rooms=summary.occupied_rooms,
          vacant_rooms=summary.vacant_rooms,
          maintenance_rooms=summary.maintenance_rooms,
          total_tenants=summary.total_tenants,
          rent_collected=summary.rent_collected,
          rent_pending=summary.rent_pending,
          collection_rate=summary.collection_rate,
          pending_complaints=summary.pending_complaints,
          recent_tenants=[build_tenant_response(t) for t in summary.recent_tenants],
          recent_complaints=[build_complaint_response(c) for c in summary.recent_complaints],
          warnings=[
               IntegrityWarningResponse.model_validate(w, from_attributes=True)
               for w in summary.warnings
          ],
     )


@router.get("/trend", response_model=DashboardTrendResponse, summary="Trailing monthly trend")
def get_trend(
     months: Optional[int] = Query(None, ge=1, le=24, description="Number of months, oldest first"),
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     months = months or settings.DASHBOARD_MONTHS
     series = DashboardService.trend(db, scope.owner_id, months=months)
     return DashboardTrendResponse(
          months=months,
          series=[TrendPointResponse.model_validate(p) for p in series],
     )
