# services/meter_service.py
"""
Meter Billing Engine - validates and prices electricity meter readings.

When a reading is added:
1. Look up the most recent reading for the meter (by reading_date, then
   recorded_at), or fall back to the meter's starting reading
2. Reject non-positive values and values or dates that go backwards
3. units_consumed = new value - previous value
4. bill_amount = tiered tariff applied to units_consumed
5. Append the reading; earlier readings are never modified

prepare_reading() is the pure part; MeterService does the locking and I/O.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from models import Meter, MeterReading, Room
from services.tariff import compute_tiered_bill
from utils.exceptions import (
     ConflictError,
     InputValidationError,
     InvalidReadingValueError,
     NonMonotonicDateError,
     NonMonotonicValueError,
     NotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedReading:
     reading_value: Decimal
     reading_date: date
     previous_value: Decimal
     units_consumed: Decimal
     bill_amount: Decimal


@dataclass(frozen=True)
class MeterTotals:
     current_reading: Decimal
     total_units: Decimal
     total_bill: Decimal
     reading_count: int


def prepare_reading(
     meter,
     previous_reading,
     new_value,
     new_date: date,
     rate_fn: Callable = compute_tiered_bill,
) -> PreparedReading:
     """
     Validate a new reading against the last one and price it.

     Args:
          meter: Meter (only starting_reading is used)
          previous_reading: latest MeterReading, or None for the first reading
          new_value: reading on the meter face
          new_date: date the reading was taken
          rate_fn: units -> bill amount

     Raises:
          InvalidReadingValueError: new_value <= 0
          NonMonotonicValueError: new_value below the previous reading
          NonMonotonicDateError: new_date before the previous reading's date
     """
     new_value = Decimal(str(new_value))
     if new_value <= 0:
          raise InvalidReadingValueError("Reading value must be greater than 0")

     if previous_reading is not None:
          previous_value = Decimal(str(previous_reading.reading_value))
          if new_value < previous_value:
               raise NonMonotonicValueError(
                    f"Reading value must be greater than or equal to last reading ({previous_value})"
               )
          if new_date < previous_reading.reading_date:
               raise NonMonotonicDateError(
                    "Reading date cannot be earlier than the last recorded reading date"
               )
     else:
          previous_value = Decimal(str(meter.starting_reading or 0))
          # First reading is measured from the starting reading
          if new_value < previous_value:
               raise NonMonotonicValueError(
                    f"Reading value must be greater than or equal to the starting reading ({previous_value})"
               )

     units_consumed = new_value - previous_value
     bill_amount = Decimal(str(rate_fn(units_consumed)))

     return PreparedReading(
          reading_value=new_value,
          reading_date=new_date,
          previous_value=previous_value,
          units_consumed=units_consumed,
          bill_amount=bill_amount,
     )


def latest_reading(readings: Iterable) -> Optional[object]:
     """Most recent reading by reading_date, then recorded_at, then id."""
     readings = list(readings)
     if not readings:
          return None
     return max(
          readings,
          key=lambda r: (r.reading_date, r.recorded_at is not None, r.recorded_at or 0, r.id or 0),
     )


def summarize_readings(meter, readings: Iterable) -> MeterTotals:
     """Fold the reading history into current reading and totals."""
     readings = list(readings)
     last = latest_reading(readings)
     current = Decimal(str(last.reading_value)) if last else Decimal(str(meter.starting_reading or 0))
     return MeterTotals(
          current_reading=current,
          total_units=sum((Decimal(str(r.units_consumed)) for r in readings), Decimal("0")),
          total_bill=sum((Decimal(str(r.bill_amount)) for r in readings), Decimal("0")),
          reading_count=len(readings),
     )


class MeterService:
     """Persistence side of the billing engine."""

     @staticmethod
     def get_meter(db: Session, owner_id: int, meter_id: int, lock: bool = False) -> Meter:
          query = db.query(Meter).filter(Meter.id == meter_id, Meter.owner_id == owner_id)
          if lock:
               query = query.with_for_update()
          meter = query.first()
          if meter is None:
               raise NotFoundError(f"Meter with ID {meter_id} not found")
          return meter

     @staticmethod
     def create_meter(
          db: Session,
          owner_id: int,
          room_id: int,
          meter_number: str,
          starting_reading: Decimal,
     ) -> Meter:
          room = db.query(Room).filter(Room.id == room_id, Room.owner_id == owner_id).first()
          if room is None:
               raise NotFoundError(f"Room with ID {room_id} not found")
          if db.query(Meter).filter(Meter.room_id == room_id).first():
               raise ConflictError(f"Room {room.room_number} already has a meter")
          if starting_reading < 0:
               raise InputValidationError("Starting reading cannot be negative")

          meter = Meter(
               owner_id=owner_id,
               room_id=room_id,
               meter_number=meter_number,
               starting_reading=starting_reading,
          )
          db.add(meter)
          db.flush()
          return meter

     @staticmethod
     def last_reading(db: Session, meter_id: int) -> Optional[MeterReading]:
          return (
               db.query(MeterReading)
               .filter(MeterReading.meter_id == meter_id)
               .order_by(
                    desc(MeterReading.reading_date),
                    desc(MeterReading.recorded_at),
                    desc(MeterReading.id),
               )
               .limit(1)
               .first()
          )

     @staticmethod
     def list_readings(db: Session, meter_id: int) -> list:
          return (
               db.query(MeterReading)
               .filter(MeterReading.meter_id == meter_id)
               .order_by(
                    desc(MeterReading.reading_date),
                    desc(MeterReading.recorded_at),
                    desc(MeterReading.id),
               )
               .all()
          )

     @staticmethod
     def record_reading(
          db: Session,
          owner_id: int,
          meter_id: int,
          reading_value: Decimal,
          reading_date: date,
          recorded_by: Optional[int] = None,
          rate_fn: Callable = compute_tiered_bill,
     ) -> MeterReading:
          """
          Append a validated reading to the meter's ledger.

          The meter row is locked for the rest of the transaction so two
          concurrent readings for one meter are validated one after the
          other instead of against the same previous reading.

          Raises:
               NotFoundError: meter missing or owned by someone else
               InputValidationError subclasses: see prepare_reading()
          """
          meter = MeterService.get_meter(db, owner_id, meter_id, lock=True)
          previous = MeterService.last_reading(db, meter.id)
          prepared = prepare_reading(meter, previous, reading_value, reading_date, rate_fn)

          reading = MeterReading(
               meter_id=meter.id,
               reading_value=prepared.reading_value,
               reading_date=prepared.reading_date,
               units_consumed=prepared.units_consumed,
               bill_amount=prepared.bill_amount,
               recorded_by=recorded_by,
          )
          db.add(reading)
          db.flush()
          logger.info(
               "Recorded reading %s for meter %s: %s units, bill %s",
               prepared.reading_value, meter.id, prepared.units_consumed, prepared.bill_amount,
          )
          return reading

     @staticmethod
     def totals(db: Session, meter: Meter) -> MeterTotals:
          return summarize_readings(meter, MeterService.list_readings(db, meter.id))
