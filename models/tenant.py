# models/tenant.py
import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, value_enum


class TenantStatus(str, enum.Enum):
     """Tenant lifecycle status. Only ACTIVE tenants hold a bed."""
     ACTIVE = "active"
     NOTICE_PERIOD = "notice_period"
     INACTIVE = "inactive"
     CHECKED_OUT = "checked_out"


class DepositReturnStatus(str, enum.Enum):
     PENDING = "pending"
     FULL = "full"
     PARTIAL = "partial"
     NONE = "none"


class Tenant(Base):
     """
     Tenant model - a paying guest living in (or who lived in) one of the
     owner's rooms.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     # Set when the tenant has their own login
     user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True)
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True, index=True)

     # Personal info
     full_name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=False)
     phone = Column(String(20), nullable=False)

     # Stay
     join_date = Column(Date, nullable=False)
     check_in_date = Column(Date, nullable=True)
     check_out_date = Column(Date, nullable=True)
     checked_out_by = Column(Integer, ForeignKey("users.id"), nullable=True)
     status = Column(
          value_enum(TenantStatus, "tenant_status"),
          default=TenantStatus.ACTIVE,
          nullable=False,
          index=True
     )

     # Deposit
     deposit_amount = Column(Numeric(12, 2), nullable=True)
     deposit_return_amount = Column(Numeric(12, 2), nullable=True)
     deposit_return_status = Column(
          value_enum(DepositReturnStatus, "deposit_return_status"),
          nullable=True
     )

     # Documents (URLs into external storage)
     id_proof_url = Column(String(500), nullable=True)
     agreement_url = Column(String(500), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

     # Relationships
     room = relationship("Room", back_populates="tenants")
     payments = relationship("Payment", back_populates="tenant")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.full_name}', status='{self.status}')>"

     @property
     def is_active(self) -> bool:
          return self.status == TenantStatus.ACTIVE

     @property
     def stay_start(self):
          """Check-in date, falling back to the join date."""
          return self.check_in_date or self.join_date
