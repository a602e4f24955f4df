# schemas/rent.py
"""
Pydantic schemas for the monthly rent reconciliation.
"""
from datetime import date
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, ConfigDict

from models.rent_record import RentStatus
from .common import IntegrityWarningResponse


class RentRecordResponse(BaseModel):
     """One tenant's rent for the month."""
     tenant_id: int
     tenant_name: str
     room_id: int
     room_number: str
     amount_due: Decimal
     due_date: date
     status: RentStatus
     paid_amount: Decimal
     paid_date: Optional[date] = None
     payment_ids: List[int] = []

     model_config = ConfigDict(from_attributes=True)


class RentSummaryResponse(BaseModel):
     total_rent: Decimal
     collected: Decimal
     pending: Decimal
     overdue: Decimal
     paid_count: int
     pending_count: int
     overdue_count: int
     collection_rate: float

     model_config = ConfigDict(from_attributes=True)


class RentReconciliationResponse(BaseModel):
     month: date
     due_date: date
     records: List[RentRecordResponse]
     summary: RentSummaryResponse
     warnings: List[IntegrityWarningResponse] = []


class RentDiscrepancyResponse(BaseModel):
     tenant_id: int
     stored_status: Optional[str] = None
     live_status: Optional[str] = None
     stored_due_date: Optional[date] = None

     model_config = ConfigDict(from_attributes=True)


class RentSyncResponse(BaseModel):
     month: date
     created: int
     updated: int
     removed: int = 0
     discrepancies: List[RentDiscrepancyResponse]
