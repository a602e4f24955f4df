# services/occupancy_service.py
"""
Occupancy Calculator - derives per-room occupancy from tenant records.

compute_occupancy() is a pure function over a snapshot of rooms and
tenants; it never touches the database. OccupancyService wraps it for the
cases where the derived status has to be written back to rooms.status.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from models import Room, RoomStatus, Tenant, TenantStatus
from utils.exceptions import CapacityError, IntegrityWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomOccupancy:
     room_id: int
     room_number: str
     capacity: int
     occupied: int
     available: int
     status: RoomStatus
     is_full: bool
     tenant_ids: tuple = ()


@dataclass
class OccupancyReport:
     rooms: list = field(default_factory=list)
     total_rooms: int = 0
     full_rooms: int = 0
     available_rooms: int = 0
     maintenance_rooms: int = 0
     total_beds: int = 0
     occupied_beds: int = 0
     occupancy_percentage: float = 0.0
     warnings: list = field(default_factory=list)

     def for_room(self, room_id: int) -> Optional[RoomOccupancy]:
          for entry in self.rooms:
               if entry.room_id == room_id:
                    return entry
          return None


def effective_capacity(room) -> int:
     """A capacity of zero (or missing) counts as a single bed."""
     return max(room.capacity or 0, 1)


def derive_room_status(room, occupied: int) -> RoomStatus:
     if room.status == RoomStatus.UNDER_MAINTENANCE:
          return RoomStatus.UNDER_MAINTENANCE
     if occupied >= effective_capacity(room):
          return RoomStatus.OCCUPIED
     return RoomStatus.VACANT


def active_tenants_by_room(tenants: Iterable) -> dict:
     grouped = defaultdict(list)
     for tenant in tenants:
          if tenant.status != TenantStatus.ACTIVE or tenant.room_id is None:
               continue
          grouped[tenant.room_id].append(tenant)
     return grouped


def compute_occupancy(rooms: Iterable, tenants: Iterable) -> OccupancyReport:
     """
     Derive occupancy for every room from the active tenants pointing at it.

     Args:
          rooms: Room rows (or any objects with the same attributes)
          tenants: Tenant rows for the same owner; non-active ones are ignored

     Returns:
          OccupancyReport with one RoomOccupancy per room, the aggregate
          counters and a warning per active tenant whose room is missing.
     """
     rooms = list(rooms)
     grouped = active_tenants_by_room(tenants)
     report = OccupancyReport()
     known_room_ids = set()

     for room in rooms:
          known_room_ids.add(room.id)
          residents = grouped.get(room.id, [])
          capacity = effective_capacity(room)
          occupied = len(residents)
          available = max(0, capacity - occupied)
          status = derive_room_status(room, occupied)

          if occupied > capacity:
               report.warnings.append(IntegrityWarning(
                    code="over_capacity",
                    message=f"Room {room.room_number} has {occupied} active tenants for {capacity} beds",
                    room_id=room.id,
               ))

          report.rooms.append(RoomOccupancy(
               room_id=room.id,
               room_number=room.room_number,
               capacity=capacity,
               occupied=occupied,
               available=available,
               status=status,
               is_full=occupied >= capacity,
               tenant_ids=tuple(sorted(t.id for t in residents)),
          ))

          report.total_rooms += 1
          report.total_beds += capacity
          report.occupied_beds += min(occupied, capacity)
          if status == RoomStatus.UNDER_MAINTENANCE:
               report.maintenance_rooms += 1
          elif occupied >= capacity:
               report.full_rooms += 1
          else:
               report.available_rooms += 1

     for room_id, residents in grouped.items():
          if room_id in known_room_ids:
               continue
          for tenant in residents:
               report.warnings.append(IntegrityWarning(
                    code="orphan_tenant",
                    message=f"Tenant {tenant.full_name} references missing room {room_id}",
                    tenant_id=tenant.id,
                    room_id=room_id,
               ))

     if report.total_beds:
          report.occupancy_percentage = round(report.occupied_beds / report.total_beds * 100, 2)

     return report


def ensure_bed_available(room, tenants: Iterable, exclude_tenant_id: Optional[int] = None) -> None:
     """
     Raise CapacityError unless the room can take one more active tenant.

     exclude_tenant_id lets a tenant already counted in the room be moved
     or re-activated without counting twice.
     """
     if room.status == RoomStatus.UNDER_MAINTENANCE:
          raise CapacityError(f"Room {room.room_number} is under maintenance")
     occupied = sum(
          1 for t in tenants
          if t.room_id == room.id and t.status == TenantStatus.ACTIVE and t.id != exclude_tenant_id
     )
     if occupied >= effective_capacity(room):
          raise CapacityError(f"Room {room.room_number} has no available beds")


class OccupancyService:
     """Database-facing helpers around the occupancy calculation."""

     @staticmethod
     def load_snapshot(db: Session, owner_id: int) -> tuple:
          rooms = db.query(Room).filter(Room.owner_id == owner_id).order_by(Room.room_number).all()
          tenants = db.query(Tenant).filter(Tenant.owner_id == owner_id).all()
          return rooms, tenants

     @staticmethod
     def report_for_owner(db: Session, owner_id: int) -> OccupancyReport:
          rooms, tenants = OccupancyService.load_snapshot(db, owner_id)
          report = compute_occupancy(rooms, tenants)
          for warning in report.warnings:
               logger.warning("Occupancy integrity issue for owner %s: %s", owner_id, warning.message)
          return report

     @staticmethod
     def sync_room_statuses(db: Session, owner_id: int) -> OccupancyReport:
          """
          Write derived statuses back to rooms.status.

          Runs inside the caller's transaction, so a tenant insert and the
          room status update that follows it commit together.
          """
          db.flush()
          rooms, tenants = OccupancyService.load_snapshot(db, owner_id)
          report = compute_occupancy(rooms, tenants)
          by_id = {room.id: room for room in rooms}
          changed = 0
          for entry in report.rooms:
               room = by_id[entry.room_id]
               if room.status != entry.status:
                    room.status = entry.status
                    changed += 1
          if changed:
               db.flush()
               logger.info("Updated status of %d room(s) for owner %s", changed, owner_id)
          return report
