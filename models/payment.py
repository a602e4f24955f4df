# models/payment.py
import enum

from sqlalchemy import (
     Column, Integer, String, Numeric, Date, DateTime, Text, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from .base import Base, value_enum


class PaymentMethod(str, enum.Enum):
     CASH = "cash"
     UPI = "upi"
     BANK_TRANSFER = "bank_transfer"
     CARD = "card"
     CHEQUE = "cheque"


class Payment(Base):
     """
     Payment model - rent collected from a tenant for one month.

     payment_month is always the first day of the month the payment
     covers. Payments are immutable once recorded.
     """
     __tablename__ = "payments"
     __table_args__ = (
          UniqueConstraint("tenant_id", "payment_month", name="uq_payments_tenant_month"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     tenant_id = Column(
          Integer,
          ForeignKey("tenants.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     owner_id = Column(
          Integer,
          ForeignKey("users.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     # Payment details
     payment_date = Column(Date, nullable=False)
     payment_month = Column(Date, nullable=False, index=True)
     rent_amount = Column(Numeric(12, 2), nullable=False)
     deposit_amount = Column(Numeric(12, 2), default=0, nullable=False)
     other_charges = Column(Numeric(12, 2), default=0, nullable=False)
     payment_method = Column(value_enum(PaymentMethod, "payment_method"), nullable=False)
     remarks = Column(Text, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     tenant = relationship("Tenant", back_populates="payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, tenant_id={self.tenant_id}, month={self.payment_month})>"

     @property
     def total_amount(self):
          return (self.rent_amount or 0) + (self.deposit_amount or 0) + (self.other_charges or 0)
