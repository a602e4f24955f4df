# models/__init__.py
from .base import Base
from .user import User, UserRole
from .room import Room, RoomStatus, RoomEditHistory
from .tenant import Tenant, TenantStatus, DepositReturnStatus
from .payment import Payment, PaymentMethod
from .rent_record import RentRecord, RentStatus
from .meter import Meter, MeterReading
from .complaint import Complaint, ComplaintPriority, ComplaintStatus

__all__ = [
     "Base",
     "User",
     "UserRole",
     "Room",
     "RoomStatus",
     "RoomEditHistory",
     "Tenant",
     "TenantStatus",
     "DepositReturnStatus",
     "Payment",
     "PaymentMethod",
     "RentRecord",
     "RentStatus",
     "Meter",
     "MeterReading",
     "Complaint",
     "ComplaintPriority",
     "ComplaintStatus",
]
