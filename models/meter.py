# models/meter.py
"""
Electricity meters and their reading ledger.

Readings are append-only: each one stores the units consumed since the
previous reading (or since the meter's starting reading) and the bill
computed for those units at the time it was recorded.
"""
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Meter(Base):
     """One electricity meter per room."""
     __tablename__ = "meters"

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     room_id = Column(
          Integer,
          ForeignKey("rooms.id", ondelete="CASCADE"),
          nullable=False,
          unique=True
     )
     meter_number = Column(String(50), nullable=False)
     starting_reading = Column(Numeric(12, 2), default=0, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     room = relationship("Room", back_populates="meter")
     readings = relationship(
          "MeterReading",
          back_populates="meter",
          cascade="all, delete-orphan"
     )

     def __repr__(self):
          return f"<Meter(id={self.id}, room_id={self.room_id}, meter_number='{self.meter_number}')>"


class MeterReading(Base):
     # Table name comes from Base: meter_readings

     id = Column(Integer, primary_key=True, autoincrement=True)
     meter_id = Column(
          Integer,
          ForeignKey("meters.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     reading_value = Column(Numeric(12, 2), nullable=False)
     reading_date = Column(Date, nullable=False)
     units_consumed = Column(Numeric(12, 2), nullable=False)
     bill_amount = Column(Numeric(12, 2), nullable=False)
     recorded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
     recorded_at = Column(DateTime, server_default=func.now(), nullable=False)

     meter = relationship("Meter", back_populates="readings")

     def __repr__(self):
          return f"<MeterReading(meter_id={self.meter_id}, value={self.reading_value}, date={self.reading_date})>"
