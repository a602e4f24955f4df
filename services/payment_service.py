# services/payment_service.py
"""
Payment Service - records rent collected from tenants.

Payments are append-only: there is no update or delete path. A tenant
can have at most one payment per month.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from models import Payment, PaymentMethod, Tenant, TenantStatus
from utils.dates import month_end, month_start
from utils.exceptions import ConflictError, InputValidationError, NotFoundError

logger = logging.getLogger(__name__)

PAYABLE_STATUSES = (TenantStatus.ACTIVE, TenantStatus.NOTICE_PERIOD)


class PaymentService:

     @staticmethod
     def record_payment(
          db: Session,
          owner_id: int,
          tenant_id: int,
          payment_date: date,
          payment_month: date,
          rent_amount: Decimal,
          payment_method: PaymentMethod,
          deposit_amount: Decimal = Decimal("0"),
          other_charges: Decimal = Decimal("0"),
          remarks: Optional[str] = None,
     ) -> Payment:
          """
          Record one month's payment for a tenant.

          Raises:
               NotFoundError: tenant missing or owned by someone else
               InputValidationError: tenant has left, or amounts are invalid
               ConflictError: a payment for that month already exists
          """
          tenant = (
               db.query(Tenant)
               .filter(Tenant.id == tenant_id, Tenant.owner_id == owner_id)
               .first()
          )
          if tenant is None:
               raise NotFoundError(f"Tenant with ID {tenant_id} not found")
          if tenant.status not in PAYABLE_STATUSES:
               raise InputValidationError("Payments can only be recorded for current tenants")
          if rent_amount <= 0:
               raise InputValidationError("Rent amount must be greater than 0")
          if deposit_amount < 0 or other_charges < 0:
               raise InputValidationError("Deposit and other charges cannot be negative")

          payment_month = month_start(payment_month)
          existing = (
               db.query(Payment)
               .filter(Payment.tenant_id == tenant.id, Payment.payment_month == payment_month)
               .first()
          )
          if existing:
               raise ConflictError(
                    f"Payment for {payment_month:%B %Y} already recorded for {tenant.full_name}"
               )

          payment = Payment(
               tenant_id=tenant.id,
               owner_id=owner_id,
               payment_date=payment_date,
               payment_month=payment_month,
               rent_amount=rent_amount,
               deposit_amount=deposit_amount,
               other_charges=other_charges,
               payment_method=payment_method,
               remarks=remarks or None,
          )
          db.add(payment)
          db.flush()
          logger.info("Recorded payment %s for tenant %s (%s)", payment.id, tenant.id, f"{payment_month:%Y-%m}")
          return payment

     @staticmethod
     def list_payments(
          db: Session,
          owner_id: int,
          month: Optional[date] = None,
          tenant_id: Optional[int] = None,
     ) -> list:
          query = db.query(Payment).filter(Payment.owner_id == owner_id)
          if month is not None:
               query = query.filter(
                    Payment.payment_month >= month_start(month),
                    Payment.payment_month <= month_end(month),
               )
          if tenant_id is not None:
               query = query.filter(Payment.tenant_id == tenant_id)
          return query.order_by(desc(Payment.payment_month), desc(Payment.payment_date), desc(Payment.id)).all()
