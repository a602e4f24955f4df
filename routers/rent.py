# routers/rent.py
"""
Monthly rent reconciliation API.

The live view is always computed from active tenants, their rooms and the
month's payments. rent_records is only a stored copy; /sync rewrites it and
reports where it had drifted.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Scope, get_scope, require_owner
from models.rent_record import RentStatus
from schemas.common import IntegrityWarningResponse
from schemas.rent import (
     RentDiscrepancyResponse,
     RentReconciliationResponse,
     RentRecordResponse,
     RentSummaryResponse,
     RentSyncResponse,
)
from services.rent_service import RentReconciliation, RentService
from utils.dates import make_month

router = APIRouter(prefix="/api/rent", tags=["rent"])


def _month_or_400(year: int, month: int) -> date:
     try:
          return make_month(year, month)
     except ValueError:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="Month must be between 1 and 12"
          )


@router.get(
     "/{year}/{month}",
     response_model=RentReconciliationResponse,
     summary="Rent status for a month"
)
def get_rent_month(
     year: int,
     month: int,
     status_filter: Optional[RentStatus] = Query(None, alias="status"),
     search: Optional[str] = Query(None, description="Tenant name or room number"),
     db: Session = Depends(get_session),
     scope: Scope = Depends(get_scope),
):
     """
     One line per active tenant with a room:
     - **paid**: a payment exists for the month
     - **pending**: unpaid, due date not yet passed
     - **overdue**: unpaid after the due date

     The summary always covers the whole month; status and search only
     narrow the listed records. Tenant logins see only their own line.
     """
     target = _month_or_400(year, month)
     reconciliation = RentService.reconcile_month(
          db,
          scope.owner_id,
          target,
          tenant_id=None if scope.is_owner else scope.tenant_id,
     )
     return _build_reconciliation_response(
          reconciliation,
          reconciliation.filtered(status=status_filter, search=search),
          include_warnings=scope.is_owner,
     )


@router.post(
     "/{year}/{month}/sync",
     response_model=RentSyncResponse,
     summary="Rewrite stored rent records from the live view"
)
def sync_rent_month(
     year: int,
     month: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     target = _month_or_400(year, month)
     result = RentService.sync_rent_records(db, scope.owner_id, target)
     return RentSyncResponse(
          month=result.reconciliation.month,
          created=result.created,
          updated=result.updated,
          removed=result.removed,
          discrepancies=[
               RentDiscrepancyResponse.model_validate(d, from_attributes=True)
               for d in result.discrepancies
          ],
     )


def _build_reconciliation_response(
     reconciliation: RentReconciliation,
     records: list,
     include_warnings: bool = True,
) -> RentReconciliationResponse:
     warnings = reconciliation.warnings if include_warnings else []
     return RentReconciliationResponse(
          month=reconciliation.month,
          due_date=reconciliation.due_date,
          records=[RentRecordResponse.model_validate(r, from_attributes=True) for r in records],
          summary=RentSummaryResponse.model_validate(reconciliation, from_attributes=True),
          warnings=[
               IntegrityWarningResponse.model_validate(w, from_attributes=True) for w in warnings
          ],
     )
