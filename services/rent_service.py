# services/rent_service.py
"""
Rent Reconciliation Engine - monthly rent status per tenant.

Status is never read from storage. For a target month it is derived from
three independent record sets:
- the owner's active tenants
- the rent_amount of each tenant's room
- payments whose payment_month falls in the target month

A tenant with a payment for the month is PAID; otherwise OVERDUE once the
due date has passed, else PENDING. Only the presence of a payment counts;
partial amounts are not reconciled.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from config import settings
from models import Payment, RentRecord, RentStatus, Room, Tenant, TenantStatus
from utils.dates import due_date_for, month_end, month_start
from utils.exceptions import IntegrityWarning

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class RentLine:
     tenant_id: int
     tenant_name: str
     room_id: int
     room_number: str
     amount_due: Decimal
     due_date: date
     status: RentStatus
     paid_amount: Decimal = ZERO
     paid_date: Optional[date] = None
     payment_ids: tuple = ()


@dataclass
class RentReconciliation:
     month: date
     due_date: date
     records: list = field(default_factory=list)
     total_rent: Decimal = ZERO
     collected: Decimal = ZERO
     pending: Decimal = ZERO
     overdue: Decimal = ZERO
     paid_count: int = 0
     pending_count: int = 0
     overdue_count: int = 0
     collection_rate: float = 0.0
     warnings: list = field(default_factory=list)

     def filtered(self, status: Optional[RentStatus] = None, search: Optional[str] = None) -> list:
          """Records narrowed for display. Aggregates always cover the full month."""
          records = self.records
          if status is not None:
               records = [r for r in records if r.status == status]
          if search:
               term = search.lower()
               records = [
                    r for r in records
                    if term in r.tenant_name.lower() or term in r.room_number.lower()
               ]
          return records


def rent_status(paid: bool, due_date: date, today: date) -> RentStatus:
     if paid:
          return RentStatus.PAID
     if today > due_date:
          return RentStatus.OVERDUE
     return RentStatus.PENDING


def collection_rate(collected: Decimal, total_rent: Decimal) -> float:
     if not total_rent:
          return 0.0
     return round(float(collected / total_rent * 100), 2)


def reconcile_rent(
     month: date,
     tenants: Iterable,
     rooms: Iterable,
     payments: Iterable,
     today: Optional[date] = None,
     due_day: Optional[int] = None,
) -> RentReconciliation:
     """
     Reconcile one month of rent.

     Args:
          month: any date inside the target month
          tenants: the owner's tenants; only ACTIVE ones are billed
          rooms: the owner's rooms (source of the amount due)
          payments: the owner's payments; those outside the month are ignored
          today: reference date for overdue detection (defaults to today)
          due_day: day of month rent falls due (defaults to RENT_DUE_DAY)

     Returns:
          RentReconciliation with one RentLine per billable tenant.
          Tenants with no room, or a room that no longer exists, are left
          out of every sum and reported in `warnings`.
     """
     month = month_start(month)
     today = today or date.today()
     due_day = settings.RENT_DUE_DAY if due_day is None else due_day
     due_date = due_date_for(month, due_day)
     result = RentReconciliation(month=month, due_date=due_date)

     rooms_by_id = {room.id: room for room in rooms}
     payments_by_tenant = {}
     for payment in payments:
          if payment.payment_month is None or month_start(payment.payment_month) != month:
               continue
          payments_by_tenant.setdefault(payment.tenant_id, []).append(payment)

     for tenant in tenants:
          if tenant.status != TenantStatus.ACTIVE:
               continue
          if tenant.room_id is None:
               result.warnings.append(IntegrityWarning(
                    code="tenant_without_room",
                    message=f"Active tenant {tenant.full_name} has no room assigned",
                    tenant_id=tenant.id,
               ))
               continue
          room = rooms_by_id.get(tenant.room_id)
          if room is None:
               result.warnings.append(IntegrityWarning(
                    code="missing_room",
                    message=f"Tenant {tenant.full_name} references missing room {tenant.room_id}",
                    tenant_id=tenant.id,
                    room_id=tenant.room_id,
               ))
               continue

          matched = payments_by_tenant.get(tenant.id, [])
          if len(matched) > 1:
               result.warnings.append(IntegrityWarning(
                    code="multiple_payments",
                    message=f"Tenant {tenant.full_name} has {len(matched)} payments for {month:%Y-%m}",
                    tenant_id=tenant.id,
                    room_id=room.id,
               ))

          amount_due = Decimal(str(room.rent_amount))
          status = rent_status(bool(matched), due_date, today)
          paid_amount = sum((Decimal(str(p.rent_amount)) for p in matched), ZERO)
          paid_date = max((p.payment_date for p in matched), default=None)

          result.records.append(RentLine(
               tenant_id=tenant.id,
               tenant_name=tenant.full_name,
               room_id=room.id,
               room_number=room.room_number,
               amount_due=amount_due,
               due_date=due_date,
               status=status,
               paid_amount=paid_amount,
               paid_date=paid_date,
               payment_ids=tuple(sorted(p.id for p in matched if p.id is not None)),
          ))

          result.total_rent += amount_due
          if status == RentStatus.PAID:
               result.collected += paid_amount
               result.paid_count += 1
          else:
               result.pending += amount_due
               if status == RentStatus.OVERDUE:
                    result.overdue += amount_due
                    result.overdue_count += 1
               else:
                    result.pending_count += 1

     result.records.sort(key=lambda r: (r.room_number, r.tenant_name))
     result.collection_rate = collection_rate(result.collected, result.total_rent)
     return result


@dataclass(frozen=True)
class RentDiscrepancy:
     tenant_id: int
     stored_status: Optional[str]
     live_status: Optional[str]
     stored_due_date: Optional[date] = None


@dataclass
class RentSyncResult:
     reconciliation: RentReconciliation
     created: int = 0
     updated: int = 0
     removed: int = 0
     discrepancies: list = field(default_factory=list)


class RentService:
     """Loads the month's snapshot from the store and runs the reconciliation."""

     @staticmethod
     def load_month(db: Session, owner_id: int, month: date) -> tuple:
          start, end = month_start(month), month_end(month)
          tenants = (
               db.query(Tenant)
               .filter(Tenant.owner_id == owner_id, Tenant.status == TenantStatus.ACTIVE)
               .all()
          )
          rooms = db.query(Room).filter(Room.owner_id == owner_id).all()
          payments = (
               db.query(Payment)
               .filter(
                    Payment.owner_id == owner_id,
                    Payment.payment_month >= start,
                    Payment.payment_month <= end,
               )
               .all()
          )
          return tenants, rooms, payments

     @staticmethod
     def reconcile_month(
          db: Session,
          owner_id: int,
          month: date,
          today: Optional[date] = None,
          tenant_id: Optional[int] = None,
     ) -> RentReconciliation:
          """Live reconciliation; tenant_id narrows it to one tenant's line."""
          tenants, rooms, payments = RentService.load_month(db, owner_id, month)
          if tenant_id is not None:
               tenants = [t for t in tenants if t.id == tenant_id]
               payments = [p for p in payments if p.tenant_id == tenant_id]
          result = reconcile_rent(month, tenants, rooms, payments, today=today)
          for warning in result.warnings:
               logger.warning("Rent integrity issue for owner %s: %s", owner_id, warning.message)
          return result

     @staticmethod
     def sync_rent_records(
          db: Session,
          owner_id: int,
          month: date,
          today: Optional[date] = None,
     ) -> RentSyncResult:
          """
          Overwrite the stored rent_records for a month with the live view.

          Stored rows are matched per tenant on any due date inside the
          month, so rows written under another due day are found too. For
          each billed tenant one row is kept (the one on the live due date
          if present) and moved onto the live values; further rows for that
          tenant and month are deleted. Every stored row whose status or due
          date disagreed with the live line, every deleted row, and every
          row with no live counterpart (left alone) is returned as a
          discrepancy.
          """
          reconciliation = RentService.reconcile_month(db, owner_id, month, today=today)
          sync = RentSyncResult(reconciliation=reconciliation)

          stored = {}
          rows = (
               db.query(RentRecord)
               .filter(
                    RentRecord.owner_id == owner_id,
                    RentRecord.due_date >= month_start(reconciliation.month),
                    RentRecord.due_date <= month_end(reconciliation.month),
               )
               .order_by(RentRecord.tenant_id, RentRecord.due_date, RentRecord.id)
          )
          for record in rows:
               stored.setdefault(record.tenant_id, []).append(record)

          for line in reconciliation.records:
               records = stored.pop(line.tenant_id, [])
               if not records:
                    db.add(RentRecord(
                         tenant_id=line.tenant_id,
                         room_id=line.room_id,
                         owner_id=owner_id,
                         amount=line.amount_due,
                         due_date=line.due_date,
                         paid_date=line.paid_date,
                         status=line.status.value,
                    ))
                    sync.created += 1
                    continue

               keep = next((r for r in records if r.due_date == line.due_date), records[0])
               for extra in records:
                    if extra is keep:
                         continue
                    sync.discrepancies.append(RentDiscrepancy(
                         tenant_id=line.tenant_id,
                         stored_status=extra.status,
                         live_status=None,
                         stored_due_date=extra.due_date,
                    ))
                    db.delete(extra)
                    sync.removed += 1

               if keep.status != line.status.value or keep.due_date != line.due_date:
                    sync.discrepancies.append(RentDiscrepancy(
                         tenant_id=line.tenant_id,
                         stored_status=keep.status,
                         live_status=line.status.value,
                         stored_due_date=keep.due_date,
                    ))
               keep.room_id = line.room_id
               keep.amount = line.amount_due
               keep.due_date = line.due_date
               keep.paid_date = line.paid_date
               keep.status = line.status.value
               sync.updated += 1

          for tenant_id, records in stored.items():
               for record in records:
                    sync.discrepancies.append(RentDiscrepancy(
                         tenant_id=tenant_id,
                         stored_status=record.status,
                         live_status=None,
                         stored_due_date=record.due_date,
                    ))

          db.flush()
          if sync.discrepancies:
               logger.warning(
                    "rent_records for owner %s, %s disagreed with payments in %d row(s)",
                    owner_id, f"{reconciliation.month:%Y-%m}", len(sync.discrepancies),
               )
          return sync
