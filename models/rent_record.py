# models/rent_record.py
"""
RentRecord model - persisted copy of a month's rent status.

The live reconciliation computed from tenants, rooms and payments is the
source of truth. This table is only refreshed from it on demand, and any
row that disagrees with the live view is reported as a discrepancy.
"""
import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, UniqueConstraint, func
from .base import Base


class RentStatus(str, enum.Enum):
     PAID = "paid"
     PENDING = "pending"
     OVERDUE = "overdue"


class RentRecord(Base):
     __tablename__ = "rent_records"
     __table_args__ = (
          UniqueConstraint("tenant_id", "due_date", name="uq_rent_records_tenant_due_date"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
     owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

     amount = Column(Numeric(12, 2), nullable=False)
     due_date = Column(Date, nullable=False, index=True)
     paid_date = Column(Date, nullable=True)
     status = Column(String(20), default="pending", nullable=False)  # pending, paid, overdue

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     def __repr__(self):
          return f"<RentRecord(tenant_id={self.tenant_id}, due_date={self.due_date}, status='{self.status}')>"
