# services/__init__.py
from .occupancy_service import OccupancyService, compute_occupancy
from .rent_service import RentService, reconcile_rent
from .meter_service import MeterService, prepare_reading, summarize_readings
from .tariff import TariffSchedule, compute_tiered_bill
from .dashboard_service import DashboardService, build_trend
from .room_service import RoomService
from .tenant_service import TenantService
from .payment_service import PaymentService
from .complaint_service import ComplaintService

__all__ = [
     "OccupancyService",
     "compute_occupancy",
     "RentService",
     "reconcile_rent",
     "MeterService",
     "prepare_reading",
     "summarize_readings",
     "TariffSchedule",
     "compute_tiered_bill",
     "DashboardService",
     "build_trend",
     "RoomService",
     "TenantService",
     "PaymentService",
     "ComplaintService",
]
