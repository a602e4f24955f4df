# models/complaint.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base, value_enum


class ComplaintPriority(str, enum.Enum):
     LOW = "low"
     MEDIUM = "medium"
     HIGH = "high"


class ComplaintStatus(str, enum.Enum):
     OPEN = "open"
     IN_PROGRESS = "in_progress"
     RESOLVED = "resolved"


class Complaint(Base):
     """
     Complaint model - maintenance or service issue raised by a tenant or
     logged by the owner on a tenant's behalf.
     """
     __tablename__ = "complaints"

     id = Column(Integer, primary_key=True, autoincrement=True)
     owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
     room_id = Column(Integer, ForeignKey("rooms.id", ondelete="SET NULL"), nullable=True)

     title = Column(String(200), nullable=False)
     description = Column(Text, nullable=False)
     priority = Column(
          value_enum(ComplaintPriority, "complaint_priority"),
          default=ComplaintPriority.MEDIUM,
          nullable=False
     )
     status = Column(
          value_enum(ComplaintStatus, "complaint_status"),
          default=ComplaintStatus.OPEN,
          nullable=False,
          index=True
     )

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
     resolved_at = Column(DateTime, nullable=True)

     tenant = relationship("Tenant")
     room = relationship("Room")

     def __repr__(self):
          return f"<Complaint(id={self.id}, title='{self.title}', status='{self.status}')>"

     @property
     def is_pending(self) -> bool:
          return self.status != ComplaintStatus.RESOLVED
