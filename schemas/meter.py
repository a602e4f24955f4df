# schemas/meter.py
"""
Pydantic schemas for electricity meters and readings.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict


class MeterCreate(BaseModel):
     room_id: int = Field(..., gt=0)
     meter_number: str = Field(..., min_length=1, max_length=50)
     starting_reading: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)


class MeterReadingCreate(BaseModel):
     """Reading taken from the meter face. Validated against the last reading."""
     reading_value: Decimal = Field(..., max_digits=12, decimal_places=2)
     reading_date: date = Field(default_factory=date.today)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "reading_value": 1250.5,
                    "reading_date": "2024-07-31"
               }
          }
     )


class MeterReadingResponse(BaseModel):
     id: int
     meter_id: int
     reading_value: Decimal
     reading_date: date
     units_consumed: Decimal
     bill_amount: Decimal
     recorded_by: Optional[int] = None
     recorded_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class MeterResponse(BaseModel):
     """Meter with aggregates folded from its reading history."""
     id: int
     room_id: int
     room_number: Optional[str] = None
     meter_number: str
     starting_reading: Decimal
     current_reading: Decimal
     total_units: Decimal
     total_bill: Decimal
     reading_count: int


class MeterReadingListResponse(BaseModel):
     meter: MeterResponse
     readings: List[MeterReadingResponse]


class BillPreviewRequest(BaseModel):
     units: Decimal = Field(..., ge=0)


class BillPreviewResponse(BaseModel):
     units: Decimal
     bill_amount: Decimal
