# models/room.py
import enum

from sqlalchemy import (
     Column, Integer, String, Numeric, Text, DateTime, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from .base import Base, value_enum


class RoomStatus(str, enum.Enum):
     """Room availability. Stored, but derived from active tenants on every write."""
     OCCUPIED = "occupied"
     VACANT = "vacant"
     UNDER_MAINTENANCE = "under_maintenance"


class Room(Base):
     """
     Room model - a rentable room with one or more beds.

     rent_amount is charged per tenant per month; capacity is the number
     of beds and can never drop below the number of active tenants.
     """
     __tablename__ = "rooms"
     __table_args__ = (
          UniqueConstraint("owner_id", "room_number", name="uq_rooms_owner_room_number"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     room_number = Column(String(50), nullable=False)
     room_type = Column(String(50), nullable=False)  # single, double, triple, dormitory
     rent_amount = Column(Numeric(12, 2), nullable=False)
     capacity = Column(Integer, default=1, nullable=False)
     floor = Column(Integer, nullable=True)
     status = Column(
          value_enum(RoomStatus, "room_status"),
          default=RoomStatus.VACANT,
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     owner = relationship("User", back_populates="rooms")
     tenants = relationship("Tenant", back_populates="room")
     meter = relationship("Meter", back_populates="room", uselist=False, cascade="all, delete-orphan")
     edit_history = relationship(
          "RoomEditHistory",
          back_populates="room",
          cascade="all, delete-orphan",
          order_by="RoomEditHistory.edited_at.desc()"
     )

     def __repr__(self):
          return f"<Room(id={self.id}, room_number='{self.room_number}', status='{self.status}')>"


class RoomEditHistory(Base):
     """
     Audit entry written whenever an owner changes a room's rent or capacity.
     """
     __tablename__ = "room_edit_history"

     id = Column(Integer, primary_key=True, autoincrement=True)
     room_id = Column(
          Integer,
          ForeignKey("rooms.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     field_name = Column(String(50), nullable=False)
     old_value = Column(Text, nullable=True)
     new_value = Column(Text, nullable=True)
     edited_by = Column(Integer, ForeignKey("users.id"), nullable=False)
     edited_at = Column(DateTime, server_default=func.now(), nullable=False)

     room = relationship("Room", back_populates="edit_history")

     def __repr__(self):
          return f"<RoomEditHistory(room_id={self.room_id}, field='{self.field_name}')>"
