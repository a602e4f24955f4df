# routers/rooms.py
"""
Room API routes.

Rooms are always returned with their derived occupancy; the stored status
column is only a cache of it. Owner-only.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Scope, require_owner
from models import Room
from schemas.common import IntegrityWarningResponse
from schemas.room import (
     OccupancyReportResponse,
     RoomCreate,
     RoomEditHistoryResponse,
     RoomListResponse,
     RoomResponse,
     RoomUpdate,
)
from services.occupancy_service import OccupancyService, RoomOccupancy
from services.room_service import RoomService

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=RoomListResponse, summary="List rooms with occupancy")
def list_rooms(
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     rooms, _ = OccupancyService.load_snapshot(db, scope.owner_id)
     report = OccupancyService.report_for_owner(db, scope.owner_id)
     return RoomListResponse(
          rooms=[_build_room_response(room, report.for_room(room.id)) for room in rooms],
          total=len(rooms),
          warnings=[IntegrityWarningResponse.model_validate(w) for w in report.warnings],
     )


@router.get("/occupancy", response_model=OccupancyReportResponse, summary="Occupancy report")
def get_occupancy(
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """
     Occupied and available beds per room, plus totals:
     - **full_rooms**: rooms with every bed taken
     - **available_rooms**: rooms with at least one free bed
     - **maintenance_rooms**: rooms flagged under maintenance
     """
     report = OccupancyService.report_for_owner(db, scope.owner_id)
     return OccupancyReportResponse.model_validate(report, from_attributes=True)


@router.post(
     "",
     response_model=RoomResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a room"
)
def create_room(
     body: RoomCreate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     room = RoomService.create_room(
          db,
          owner_id=scope.owner_id,
          room_number=body.room_number,
          room_type=body.room_type,
          rent_amount=body.rent_amount,
          capacity=body.capacity,
          floor=body.floor,
          under_maintenance=body.under_maintenance,
     )
     return _room_with_occupancy(db, scope.owner_id, room)


@router.get("/{room_id}", response_model=RoomResponse, summary="Get room by ID")
def get_room(
     room_id: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     room = RoomService.get_room(db, scope.owner_id, room_id)
     return _room_with_occupancy(db, scope.owner_id, room)


@router.put("/{room_id}", response_model=RoomResponse, summary="Update room")
def update_room(
     room_id: int,
     body: RoomUpdate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """
     Edit rent, capacity, type, floor or the maintenance flag.

     Capacity can not go below the number of active tenants. Rent and
     capacity changes are written to the room's edit history.
     """
     room = RoomService.update_room(
          db,
          owner_id=scope.owner_id,
          room_id=room_id,
          edited_by=scope.user.id,
          rent_amount=body.rent_amount,
          capacity=body.capacity,
          room_type=body.room_type,
          floor=body.floor,
          under_maintenance=body.under_maintenance,
     )
     return _room_with_occupancy(db, scope.owner_id, room)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete room")
def delete_room(
     room_id: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """Only rooms without active tenants can be deleted."""
     RoomService.delete_room(db, scope.owner_id, room_id)
     return None


@router.get(
     "/{room_id}/history",
     response_model=list[RoomEditHistoryResponse],
     summary="Room edit history"
)
def get_room_history(
     room_id: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     return RoomService.edit_history(db, scope.owner_id, room_id)


def _room_with_occupancy(db: Session, owner_id: int, room: Room) -> RoomResponse:
     report = OccupancyService.report_for_owner(db, owner_id)
     return _build_room_response(room, report.for_room(room.id))


def _build_room_response(room: Room, occupancy: RoomOccupancy) -> RoomResponse:
     """
     Helper function to build RoomResponse with derived occupancy.
     """
     return RoomResponse(
          id=room.id,
          room_number=room.room_number,
          room_type=room.room_type,
          rent_amount=room.rent_amount,
          capacity=room.capacity,
          floor=room.floor,
          status=occupancy.status if occupancy else room.status,
          occupied=occupancy.occupied if occupancy else 0,
          available=occupancy.available if occupancy else room.capacity,
          is_full=occupancy.is_full if occupancy else False,
          created_at=room.created_at,
     )
