# services/room_service.py
"""
Room Service - room lifecycle rules.

- rent_amount must be positive and capacity a whole number >= 1
- capacity can never drop below the number of active tenants
- rent and capacity edits leave an entry in room_edit_history
- a room can only be deleted once no active tenant references it
"""
import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from models import (
     Complaint, RentRecord, Room, RoomEditHistory, RoomStatus, Tenant, TenantStatus
)
from services.occupancy_service import OccupancyService
from utils.exceptions import CapacityError, ConflictError, InputValidationError, NotFoundError

logger = logging.getLogger(__name__)

AUDITED_FIELDS = ("rent_amount", "capacity")


def validate_rent_and_capacity(rent_amount, capacity) -> None:
     if rent_amount is not None and Decimal(str(rent_amount)) <= 0:
          raise InputValidationError("Rent must be a numeric value greater than 0")
     if capacity is not None and (not isinstance(capacity, int) or capacity < 1):
          raise InputValidationError("Capacity must be an integer greater than 0")


class RoomService:

     @staticmethod
     def get_room(db: Session, owner_id: int, room_id: int, lock: bool = False) -> Room:
          query = db.query(Room).filter(Room.id == room_id, Room.owner_id == owner_id)
          if lock:
               query = query.with_for_update()
          room = query.first()
          if room is None:
               raise NotFoundError(f"Room with ID {room_id} not found")
          return room

     @staticmethod
     def active_tenant_count(db: Session, room_id: int) -> int:
          return (
               db.query(Tenant)
               .filter(Tenant.room_id == room_id, Tenant.status == TenantStatus.ACTIVE)
               .count()
          )

     @staticmethod
     def create_room(
          db: Session,
          owner_id: int,
          room_number: str,
          room_type: str,
          rent_amount: Decimal,
          capacity: int = 1,
          floor: Optional[int] = None,
          under_maintenance: bool = False,
     ) -> Room:
          """
          Create a room for the owner.

          Raises:
               InputValidationError: non-positive rent or capacity
               ConflictError: room_number already used by this owner
          """
          validate_rent_and_capacity(rent_amount, capacity)
          room_number = room_number.strip()
          if not room_number:
               raise InputValidationError("Room number is required")

          existing = (
               db.query(Room)
               .filter(Room.owner_id == owner_id, Room.room_number == room_number)
               .first()
          )
          if existing:
               raise ConflictError(f"Room {room_number} already exists")

          room = Room(
               owner_id=owner_id,
               room_number=room_number,
               room_type=room_type,
               rent_amount=rent_amount,
               capacity=capacity,
               floor=floor,
               status=RoomStatus.UNDER_MAINTENANCE if under_maintenance else RoomStatus.VACANT,
          )
          db.add(room)
          db.flush()
          logger.info("Owner %s created room %s", owner_id, room_number)
          return room

     @staticmethod
     def update_room(
          db: Session,
          owner_id: int,
          room_id: int,
          edited_by: int,
          rent_amount: Optional[Decimal] = None,
          capacity: Optional[int] = None,
          room_type: Optional[str] = None,
          floor: Optional[int] = None,
          under_maintenance: Optional[bool] = None,
     ) -> Room:
          """
          Edit a room. Only provided fields change.

          Raises:
               InputValidationError: non-positive rent or capacity
               CapacityError: capacity below current active occupancy
          """
          validate_rent_and_capacity(rent_amount, capacity)
          room = RoomService.get_room(db, owner_id, room_id, lock=True)

          if capacity is not None:
               occupancy = RoomService.active_tenant_count(db, room.id)
               if capacity < occupancy:
                    raise CapacityError("Capacity cannot be less than current occupancy.")

          changes = {}
          if rent_amount is not None and Decimal(str(rent_amount)) != Decimal(str(room.rent_amount)):
               changes["rent_amount"] = (room.rent_amount, rent_amount)
          if capacity is not None and capacity != room.capacity:
               changes["capacity"] = (room.capacity, capacity)

          for field_name in AUDITED_FIELDS:
               if field_name not in changes:
                    continue
               old_value, new_value = changes[field_name]
               db.add(RoomEditHistory(
                    room_id=room.id,
                    field_name=field_name,
                    old_value=str(old_value),
                    new_value=str(new_value),
                    edited_by=edited_by,
               ))
               setattr(room, field_name, new_value)

          if room_type is not None:
               room.room_type = room_type
          if floor is not None:
               room.floor = floor
          if under_maintenance is True:
               room.status = RoomStatus.UNDER_MAINTENANCE
          elif under_maintenance is False and room.status == RoomStatus.UNDER_MAINTENANCE:
               # Cleared here; the occupancy sync below picks the real status
               room.status = RoomStatus.VACANT

          db.flush()
          OccupancyService.sync_room_statuses(db, owner_id)
          if changes:
               logger.info("Room %s edited by %s: %s", room.id, edited_by, ", ".join(changes))
          return room

     @staticmethod
     def delete_room(db: Session, owner_id: int, room_id: int) -> None:
          """
          Raises:
               ConflictError: the room still has active tenants
          """
          room = RoomService.get_room(db, owner_id, room_id, lock=True)
          if RoomService.active_tenant_count(db, room.id):
               raise ConflictError("Cannot delete a room with active tenants")

          # Former tenants and complaints keep their rows without the room
          db.query(Tenant).filter(Tenant.room_id == room.id).update(
               {Tenant.room_id: None}, synchronize_session="fetch"
          )
          db.query(Complaint).filter(Complaint.room_id == room.id).update(
               {Complaint.room_id: None}, synchronize_session="fetch"
          )
          db.query(RentRecord).filter(RentRecord.room_id == room.id).delete(synchronize_session="fetch")
          db.delete(room)
          db.flush()
          logger.info("Owner %s deleted room %s", owner_id, room.room_number)

     @staticmethod
     def edit_history(db: Session, owner_id: int, room_id: int) -> list:
          room = RoomService.get_room(db, owner_id, room_id)
          return (
               db.query(RoomEditHistory)
               .filter(RoomEditHistory.room_id == room.id)
               .order_by(RoomEditHistory.edited_at.desc(), RoomEditHistory.id.desc())
               .all()
          )
