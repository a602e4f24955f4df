# services/tenant_service.py
"""
Tenant Service - onboarding, room assignment, status changes and checkout.

Every mutation that can change who occupies a bed finishes by re-deriving
room statuses inside the same session, so the tenant write and the room
status write are committed (or rolled back) together.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from models import DepositReturnStatus, Room, Tenant, TenantStatus
from services.occupancy_service import OccupancyService, ensure_bed_available
from services.room_service import RoomService
from utils.exceptions import InputValidationError, InvalidTransitionError, NotFoundError

logger = logging.getLogger(__name__)

# Allowed status moves; checked_out and inactive are final
TRANSITIONS = {
     TenantStatus.ACTIVE: {TenantStatus.NOTICE_PERIOD, TenantStatus.CHECKED_OUT, TenantStatus.INACTIVE},
     TenantStatus.NOTICE_PERIOD: {TenantStatus.ACTIVE, TenantStatus.CHECKED_OUT, TenantStatus.INACTIVE},
     TenantStatus.CHECKED_OUT: set(),
     TenantStatus.INACTIVE: set(),
}

DETAIL_FIELDS = (
     "full_name", "email", "phone", "join_date", "check_in_date",
     "deposit_amount", "id_proof_url", "agreement_url",
)


def deposit_return_status(deposit_amount, returned) -> DepositReturnStatus:
     if returned is None:
          return DepositReturnStatus.PENDING
     deposit = Decimal(str(deposit_amount or 0))
     returned = Decimal(str(returned))
     if returned >= deposit:
          return DepositReturnStatus.FULL
     if returned == 0:
          return DepositReturnStatus.NONE
     return DepositReturnStatus.PARTIAL


def stay_duration(check_in: date, check_out: date) -> str:
     """Length of stay as '3m 12d', or '12 days' when under a month."""
     days = abs((check_out - check_in).days)
     months, days = divmod(days, 30)
     return f"{months}m {days}d" if months > 0 else f"{days} days"


class TenantService:

     @staticmethod
     def get_tenant(db: Session, owner_id: int, tenant_id: int) -> Tenant:
          tenant = (
               db.query(Tenant)
               .filter(Tenant.id == tenant_id, Tenant.owner_id == owner_id)
               .first()
          )
          if tenant is None:
               raise NotFoundError(f"Tenant with ID {tenant_id} not found")
          return tenant

     @staticmethod
     def list_tenants(
          db: Session,
          owner_id: int,
          status: Optional[TenantStatus] = None,
          search: Optional[str] = None,
          page: int = 1,
          page_size: int = 10,
     ) -> tuple:
          """Returns (tenants, total) ordered by name."""
          query = db.query(Tenant).outerjoin(Room, Tenant.room_id == Room.id).filter(Tenant.owner_id == owner_id)
          if status is not None:
               query = query.filter(Tenant.status == status)
          if search:
               term = f"%{search}%"
               query = query.filter(or_(
                    Tenant.full_name.ilike(term),
                    Tenant.email.ilike(term),
                    Tenant.phone.ilike(term),
                    Room.room_number.ilike(term),
               ))
          total = query.count()
          tenants = (
               query.order_by(Tenant.full_name, Tenant.id)
               .offset((page - 1) * page_size)
               .limit(page_size)
               .all()
          )
          return tenants, total

     @staticmethod
     def create_tenant(
          db: Session,
          owner_id: int,
          room_id: int,
          full_name: str,
          email: str,
          phone: str,
          join_date: date,
          check_in_date: Optional[date] = None,
          deposit_amount: Optional[Decimal] = None,
          id_proof_url: Optional[str] = None,
          agreement_url: Optional[str] = None,
          user_id: Optional[int] = None,
     ) -> Tenant:
          """
          Onboard a tenant into a room with a free bed.

          Raises:
               NotFoundError: room missing or owned by someone else
               CapacityError: room full or under maintenance
          """
          room = RoomService.get_room(db, owner_id, room_id, lock=True)
          residents = db.query(Tenant).filter(Tenant.room_id == room.id).all()
          ensure_bed_available(room, residents)

          if deposit_amount is not None and deposit_amount < 0:
               raise InputValidationError("Deposit cannot be negative")

          tenant = Tenant(
               owner_id=owner_id,
               user_id=user_id,
               room_id=room.id,
               full_name=full_name.strip(),
               email=email.strip().lower(),
               phone=phone.strip(),
               join_date=join_date,
               check_in_date=check_in_date or join_date,
               deposit_amount=deposit_amount,
               id_proof_url=id_proof_url,
               agreement_url=agreement_url,
               status=TenantStatus.ACTIVE,
          )
          db.add(tenant)
          db.flush()
          OccupancyService.sync_room_statuses(db, owner_id)
          logger.info("Tenant %s onboarded into room %s", tenant.id, room.room_number)
          return tenant

     @staticmethod
     def update_details(db: Session, owner_id: int, tenant_id: int, **fields) -> Tenant:
          tenant = TenantService.get_tenant(db, owner_id, tenant_id)
          for name, value in fields.items():
               if name not in DETAIL_FIELDS or value is None:
                    continue
               if name == "deposit_amount" and value < 0:
                    raise InputValidationError("Deposit cannot be negative")
               setattr(tenant, name, value)
          db.flush()
          return tenant

     @staticmethod
     def change_status(
          db: Session,
          owner_id: int,
          tenant_id: int,
          new_status: TenantStatus,
          changed_by: Optional[int] = None,
     ) -> Tenant:
          """
          Move a tenant along active -> notice_period -> checked_out/inactive.

          Raises:
               InvalidTransitionError: move not allowed from the current status
               CapacityError: re-activating into a room with no free bed
          """
          tenant = TenantService.get_tenant(db, owner_id, tenant_id)
          if new_status == tenant.status:
               return tenant
          if new_status not in TRANSITIONS[tenant.status]:
               raise InvalidTransitionError(
                    f"Cannot change tenant status from {tenant.status.value} to {new_status.value}"
               )

          if new_status == TenantStatus.CHECKED_OUT:
               return TenantService.checkout(db, owner_id, tenant_id, checked_out_by=changed_by)

          if new_status == TenantStatus.ACTIVE:
               if tenant.room_id is None:
                    raise InvalidTransitionError("Assign a room before re-activating the tenant")
               room = RoomService.get_room(db, owner_id, tenant.room_id, lock=True)
               residents = db.query(Tenant).filter(Tenant.room_id == room.id).all()
               ensure_bed_available(room, residents, exclude_tenant_id=tenant.id)

          tenant.status = new_status
          db.flush()
          OccupancyService.sync_room_statuses(db, owner_id)
          logger.info("Tenant %s is now %s", tenant.id, new_status.value)
          return tenant

     @staticmethod
     def assign_room(db: Session, owner_id: int, tenant_id: int, room_id: int) -> Tenant:
          """
          Move a tenant to another room.

          Raises:
               InvalidTransitionError: tenant has already left
               CapacityError: active tenant and target room has no free bed
          """
          tenant = TenantService.get_tenant(db, owner_id, tenant_id)
          if tenant.status in (TenantStatus.CHECKED_OUT, TenantStatus.INACTIVE):
               raise InvalidTransitionError("Cannot assign a room to a tenant who has left")
          room = RoomService.get_room(db, owner_id, room_id, lock=True)
          if tenant.room_id == room.id:
               return tenant
          if tenant.status == TenantStatus.ACTIVE:
               residents = db.query(Tenant).filter(Tenant.room_id == room.id).all()
               ensure_bed_available(room, residents, exclude_tenant_id=tenant.id)

          tenant.room_id = room.id
          db.flush()
          OccupancyService.sync_room_statuses(db, owner_id)
          logger.info("Tenant %s moved to room %s", tenant.id, room.room_number)
          return tenant

     @staticmethod
     def checkout(
          db: Session,
          owner_id: int,
          tenant_id: int,
          check_out_date: Optional[date] = None,
          deposit_return_amount: Optional[Decimal] = None,
          checked_out_by: Optional[int] = None,
     ) -> Tenant:
          """
          Check a tenant out and settle the deposit.

          The tenant keeps their room reference for the history view but
          no longer counts toward occupancy.

          Raises:
               InvalidTransitionError: tenant already checked out or inactive
               InputValidationError: check-out before check-in, or a deposit
               return that is negative or larger than the deposit held
          """
          tenant = TenantService.get_tenant(db, owner_id, tenant_id)
          if tenant.status in (TenantStatus.CHECKED_OUT, TenantStatus.INACTIVE):
               raise InvalidTransitionError("Tenant has already checked out")

          check_out_date = check_out_date or date.today()
          if check_out_date < tenant.stay_start:
               raise InputValidationError("Check-out date cannot be before the check-in date")

          if deposit_return_amount is not None:
               if deposit_return_amount < 0:
                    raise InputValidationError("Deposit return cannot be negative")
               if deposit_return_amount > (tenant.deposit_amount or 0):
                    raise InputValidationError("Deposit return cannot exceed the deposit held")

          tenant.status = TenantStatus.CHECKED_OUT
          tenant.check_out_date = check_out_date
          tenant.checked_out_by = checked_out_by
          tenant.deposit_return_amount = deposit_return_amount
          tenant.deposit_return_status = deposit_return_status(tenant.deposit_amount, deposit_return_amount)
          db.flush()
          OccupancyService.sync_room_statuses(db, owner_id)
          logger.info("Tenant %s checked out on %s", tenant.id, check_out_date)
          return tenant

     @staticmethod
     def past_tenants(db: Session, owner_id: int, search: Optional[str] = None) -> list:
          query = (
               db.query(Tenant)
               .outerjoin(Room, Tenant.room_id == Room.id)
               .filter(
                    Tenant.owner_id == owner_id,
                    Tenant.status == TenantStatus.CHECKED_OUT,
                    Tenant.check_out_date.isnot(None),
               )
          )
          if search:
               term = f"%{search}%"
               query = query.filter(or_(Tenant.full_name.ilike(term), Room.room_number.ilike(term)))
          return query.order_by(desc(Tenant.check_out_date), desc(Tenant.id)).all()
