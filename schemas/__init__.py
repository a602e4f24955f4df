# schemas/__init__.py
from .common import IntegrityWarningResponse
from .room import (
     RoomCreate,
     RoomUpdate,
     RoomResponse,
     RoomListResponse,
     OccupancyReportResponse,
     RoomEditHistoryResponse,
)
from .tenant import (
     TenantCreate,
     TenantUpdate,
     TenantStatusUpdate,
     TenantRoomUpdate,
     TenantCheckout,
     TenantResponse,
     TenantListResponse,
     PastTenantResponse,
)
from .payment import PaymentCreate, PaymentResponse
from .rent import RentReconciliationResponse, RentSyncResponse
from .meter import (
     MeterCreate,
     MeterReadingCreate,
     MeterResponse,
     MeterReadingResponse,
     MeterReadingListResponse,
     BillPreviewRequest,
     BillPreviewResponse,
)
from .complaint import ComplaintCreate, ComplaintStatusUpdate, ComplaintResponse
from .dashboard import DashboardSummaryResponse, DashboardTrendResponse

__all__ = [
     "IntegrityWarningResponse",
     "RoomCreate",
     "RoomUpdate",
     "RoomResponse",
     "RoomListResponse",
     "OccupancyReportResponse",
     "RoomEditHistoryResponse",
     "TenantCreate",
     "TenantUpdate",
     "TenantStatusUpdate",
     "TenantRoomUpdate",
     "TenantCheckout",
     "TenantResponse",
     "TenantListResponse",
     "PastTenantResponse",
     "PaymentCreate",
     "PaymentResponse",
     "RentReconciliationResponse",
     "RentSyncResponse",
     "MeterCreate",
     "MeterReadingCreate",
     "MeterResponse",
     "MeterReadingResponse",
     "MeterReadingListResponse",
     "BillPreviewRequest",
     "BillPreviewResponse",
     "ComplaintCreate",
     "ComplaintStatusUpdate",
     "ComplaintResponse",
     "DashboardSummaryResponse",
     "DashboardTrendResponse",
]
