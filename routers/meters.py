# routers/meters.py
"""
Electricity meter API - one meter per room, an append-only reading ledger
and a tariff preview. Owner-only.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import Scope, require_owner
from models import Meter
from schemas.meter import (
     BillPreviewRequest,
     BillPreviewResponse,
     MeterCreate,
     MeterReadingCreate,
     MeterReadingListResponse,
     MeterReadingResponse,
     MeterResponse,
)
from services.meter_service import MeterService, MeterTotals
from services.tariff import compute_tiered_bill

router = APIRouter(prefix="/api/meters", tags=["meters"])


@router.post(
     "",
     response_model=MeterResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Install a meter in a room"
)
def create_meter(
     body: MeterCreate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     meter = MeterService.create_meter(
          db,
          owner_id=scope.owner_id,
          room_id=body.room_id,
          meter_number=body.meter_number.strip(),
          starting_reading=body.starting_reading,
     )
     return _build_meter_response(meter, MeterService.totals(db, meter))


@router.post("/bill-preview", response_model=BillPreviewResponse, summary="Price a number of units")
def preview_bill(
     body: BillPreviewRequest,
     scope: Scope = Depends(require_owner),
):
     return BillPreviewResponse(units=body.units, bill_amount=compute_tiered_bill(body.units))


@router.get("/{meter_id}", response_model=MeterResponse, summary="Get meter with totals")
def get_meter(
     meter_id: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     meter = MeterService.get_meter(db, scope.owner_id, meter_id)
     return _build_meter_response(meter, MeterService.totals(db, meter))


@router.get(
     "/{meter_id}/readings",
     response_model=MeterReadingListResponse,
     summary="Reading history, newest first"
)
def list_readings(
     meter_id: int,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     meter = MeterService.get_meter(db, scope.owner_id, meter_id)
     readings = MeterService.list_readings(db, meter.id)
     return MeterReadingListResponse(
          meter=_build_meter_response(meter, MeterService.totals(db, meter)),
          readings=[MeterReadingResponse.model_validate(r) for r in readings],
     )


@router.post(
     "/{meter_id}/readings",
     response_model=MeterReadingResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a meter reading"
)
def add_reading(
     meter_id: int,
     body: MeterReadingCreate,
     db: Session = Depends(get_session),
     scope: Scope = Depends(require_owner),
):
     """
     The reading must be positive and must not go below the previous reading
     (or the meter's starting reading). Its date must not be earlier than
     the previous reading's date. Units and bill are computed server side.
     """
     reading = MeterService.record_reading(
          db,
          owner_id=scope.owner_id,
          meter_id=meter_id,
          reading_value=body.reading_value,
          reading_date=body.reading_date,
          recorded_by=scope.user.id,
     )
     return MeterReadingResponse.model_validate(reading)


def _build_meter_response(meter: Meter, totals: MeterTotals) -> MeterResponse:
     return MeterResponse(
          id=meter.id,
          room_id=meter.room_id,
          room_number=meter.room.room_number if meter.room else None,
          meter_number=meter.meter_number,
          starting_reading=meter.starting_reading,
          current_reading=totals.current_reading,
          total_units=totals.total_units,
          total_bill=totals.total_bill,
          reading_count=totals.reading_count,
     )
