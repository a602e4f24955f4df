# routers/payments.py
"""
Payment recording API.

POST /api/payments: record one month's rent for a tenant (owner only).
GET  /api/payments: payment history; a tenant login only sees its own.

At most one payment per tenant per month; a second one is a 409.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Scope, get_scope, require_owner
from models import Payment
from schemas.payment import PaymentCreate, PaymentResponse
from services.payment_service import PaymentService
from utils.dates import parse_month

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.post(
     "",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Record a rent payment"
)
def record_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     payment = PaymentService.record_payment(db, owner_id=scope.owner_id, **body.model_dump())
     return _build_payment_response(payment)


@router.get("", response_model=list[PaymentResponse], summary="List payments")
def list_payments(
     month: Optional[str] = Query(None, description="Month as YYYY-MM"),
     tenant_id: Optional[int] = Query(None, gt=0),
     db: Session = Depends(get_session),
     scope: Scope = Depends(get_scope),
):
     month_filter: Optional[date] = None
     if month:
          try:
               month_filter = parse_month(month)
          except ValueError:
               raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid month, expected YYYY-MM"
               )

     if not scope.is_owner:
          tenant_id = scope.tenant_id

     payments = PaymentService.list_payments(
          db, scope.owner_id, month=month_filter, tenant_id=tenant_id
     )
     return [_build_payment_response(p) for p in payments]


def _build_payment_response(payment: Payment) -> PaymentResponse:
     tenant = payment.tenant
     return PaymentResponse(
          id=payment.id,
          tenant_id=payment.tenant_id,
          tenant_name=tenant.full_name if tenant else None,
          payment_date=payment.payment_date,
          payment_month=payment.payment_month,
          rent_amount=payment.rent_amount,
          deposit_amount=payment.deposit_amount,
          other_charges=payment.other_charges,
          total_amount=payment.total_amount,
          payment_method=payment.payment_method,
          remarks=payment.remarks,
          created_at=payment.created_at,
     )
