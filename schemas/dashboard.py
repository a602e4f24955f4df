# schemas/dashboard.py
from datetime import date
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict

from .common import IntegrityWarningResponse
from .complaint import ComplaintResponse
from .tenant import TenantResponse


class TrendPointResponse(BaseModel):
     month: date
     rent_collected: Decimal
     occupancy_percentage: float

     model_config = ConfigDict(from_attributes=True)


class DashboardTrendResponse(BaseModel):
     months: int
     series: List[TrendPointResponse]


class DashboardSummaryResponse(BaseModel):
     total_rooms: int
     occupied_rooms: int
     vacant_rooms: int
     maintenance_rooms: int
     total_tenants: int
     rent_collected: Decimal
     rent_pending: Decimal
     collection_rate: float
     pending_complaints: int
     recent_tenants: List[TenantResponse]
     recent_complaints: List[ComplaintResponse]
     warnings: List[IntegrityWarningResponse] = []
