# schemas/room.py
"""
Pydantic schemas for Room API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict

from models.room import RoomStatus
from .common import IntegrityWarningResponse


class RoomCreate(BaseModel):
     """Schema for creating a room."""
     room_number: str = Field(..., min_length=1, max_length=50, description="Unique per owner")
     room_type: str = Field(..., min_length=1, max_length=50, description="single, double, triple, ...")
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Monthly rent per tenant")
     capacity: int = Field(1, ge=1, description="Number of beds")
     floor: Optional[int] = None
     under_maintenance: bool = False

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "room_number": "A-101",
                    "room_type": "double",
                    "rent_amount": 8000.00,
                    "capacity": 2,
                    "floor": 1
               }
          }
     )


class RoomUpdate(BaseModel):
     """Schema for editing a room. Rent and capacity changes are audited."""
     rent_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     capacity: Optional[int] = Field(None, ge=1)
     room_type: Optional[str] = Field(None, min_length=1, max_length=50)
     floor: Optional[int] = None
     under_maintenance: Optional[bool] = None


class RoomResponse(BaseModel):
     """Room with its derived occupancy."""
     id: int
     room_number: str
     room_type: str
     rent_amount: Decimal
     capacity: int
     floor: Optional[int] = None
     status: RoomStatus
     occupied: int = 0
     available: int = 0
     is_full: bool = False
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class RoomListResponse(BaseModel):
     rooms: List[RoomResponse]
     total: int
     warnings: List[IntegrityWarningResponse] = []


class RoomOccupancyResponse(BaseModel):
     room_id: int
     room_number: str
     capacity: int
     occupied: int
     available: int
     status: RoomStatus
     is_full: bool
     tenant_ids: List[int] = []

     model_config = ConfigDict(from_attributes=True)


class OccupancyReportResponse(BaseModel):
     """Occupancy for every room plus owner-wide totals."""
     rooms: List[RoomOccupancyResponse]
     total_rooms: int
     full_rooms: int
     available_rooms: int
     maintenance_rooms: int
     total_beds: int
     occupied_beds: int
     occupancy_percentage: float
     warnings: List[IntegrityWarningResponse] = []

     model_config = ConfigDict(from_attributes=True)


class RoomEditHistoryResponse(BaseModel):
     id: int
     room_id: int
     field_name: str
     old_value: Optional[str] = None
     new_value: Optional[str] = None
     edited_by: int
     edited_at: datetime

     model_config = ConfigDict(from_attributes=True)
