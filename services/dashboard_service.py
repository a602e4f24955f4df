# services/dashboard_service.py
"""
Dashboard Aggregator - composes occupancy and rent reconciliation into the
numbers shown on the owner's dashboard.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from config import settings
from models import Complaint, ComplaintStatus, Payment, Room, Tenant, TenantStatus
from services.occupancy_service import compute_occupancy
from services.rent_service import reconcile_rent
from utils.dates import month_end, month_start, trailing_months
from utils.exceptions import InputValidationError


@dataclass(frozen=True)
class TrendPoint:
     month: date
     rent_collected: Decimal
     occupancy_percentage: float


@dataclass
class DashboardSummary:
     total_rooms: int
     occupied_rooms: int
     vacant_rooms: int
     maintenance_rooms: int
     total_tenants: int
     rent_collected: Decimal
     rent_pending: Decimal
     collection_rate: float
     pending_complaints: int
     recent_tenants: list = field(default_factory=list)
     recent_complaints: list = field(default_factory=list)
     warnings: list = field(default_factory=list)


def _checked_in_by(tenant, cutoff: date) -> bool:
     start = tenant.check_in_date or tenant.join_date
     return start is None or start <= cutoff


def build_trend(
     months: Iterable,
     rooms: Iterable,
     tenants: Iterable,
     payments: Iterable,
     today: Optional[date] = None,
     due_day: Optional[int] = None,
) -> list:
     """
     One TrendPoint per month: rent collected that month and bed occupancy
     counting only tenants who had checked in by the end of that month.
     """
     rooms, tenants, payments = list(rooms), list(tenants), list(payments)
     series = []
     for month in months:
          month = month_start(month)
          cutoff = month_end(month)
          eligible = [t for t in tenants if _checked_in_by(t, cutoff)]
          rent = reconcile_rent(month, eligible, rooms, payments, today=today, due_day=due_day)
          occupancy = compute_occupancy(rooms, eligible)
          series.append(TrendPoint(
               month=month,
               rent_collected=rent.collected,
               occupancy_percentage=occupancy.occupancy_percentage,
          ))
     return series


class DashboardService:

     @staticmethod
     def trend(
          db: Session,
          owner_id: int,
          months: Optional[int] = None,
          today: Optional[date] = None,
     ) -> list:
          today = today or date.today()
          count = settings.DASHBOARD_MONTHS if months is None else months
          if count < 1:
               raise InputValidationError("Trend needs at least one month")
          window = trailing_months(today, count)
          rooms = db.query(Room).filter(Room.owner_id == owner_id).all()
          tenants = (
               db.query(Tenant)
               .filter(Tenant.owner_id == owner_id, Tenant.status == TenantStatus.ACTIVE)
               .all()
          )
          payments = (
               db.query(Payment)
               .filter(
                    Payment.owner_id == owner_id,
                    Payment.payment_month >= window[0],
                    Payment.payment_month <= month_end(window[-1]),
               )
               .all()
          )
          return build_trend(window, rooms, tenants, payments, today=today)

     @staticmethod
     def summary(db: Session, owner_id: int, today: Optional[date] = None, recent: int = 5) -> DashboardSummary:
          today = today or date.today()
          month = month_start(today)
          rooms = db.query(Room).filter(Room.owner_id == owner_id).all()
          tenants = db.query(Tenant).filter(Tenant.owner_id == owner_id).all()
          payments = (
               db.query(Payment)
               .filter(
                    Payment.owner_id == owner_id,
                    Payment.payment_month >= month,
                    Payment.payment_month <= month_end(month),
               )
               .all()
          )

          occupancy = compute_occupancy(rooms, tenants)
          rent = reconcile_rent(month, tenants, rooms, payments, today=today)

          pending_complaints = (
               db.query(Complaint)
               .filter(
                    Complaint.owner_id == owner_id,
                    Complaint.status.in_([ComplaintStatus.OPEN, ComplaintStatus.IN_PROGRESS]),
               )
               .count()
          )
          recent_tenants = (
               db.query(Tenant)
               .filter(Tenant.owner_id == owner_id, Tenant.status == TenantStatus.ACTIVE)
               .order_by(desc(Tenant.join_date), desc(Tenant.id))
               .limit(recent)
               .all()
          )
          recent_complaints = (
               db.query(Complaint)
               .filter(Complaint.owner_id == owner_id)
               .order_by(desc(Complaint.created_at), desc(Complaint.id))
               .limit(recent)
               .all()
          )

          return DashboardSummary(
               total_rooms=occupancy.total_rooms,
               occupied_rooms=occupancy.full_rooms,
               vacant_rooms=occupancy.available_rooms,
               maintenance_rooms=occupancy.maintenance_rooms,
               total_tenants=sum(1 for t in tenants if t.status == TenantStatus.ACTIVE),
               rent_collected=rent.collected,
               rent_pending=rent.pending,
               collection_rate=rent.collection_rate,
               pending_complaints=pending_complaints,
               recent_tenants=recent_tenants,
               recent_complaints=recent_complaints,
               warnings=occupancy.warnings + rent.warnings,
          )
