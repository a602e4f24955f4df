# schemas/complaint.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from models.complaint import ComplaintPriority, ComplaintStatus


class ComplaintCreate(BaseModel):
     title: str = Field(..., min_length=1, max_length=200)
     description: str = Field(..., min_length=1)
     priority: ComplaintPriority = ComplaintPriority.MEDIUM
     tenant_id: Optional[int] = Field(None, gt=0, description="Ignored for tenant logins")
     room_id: Optional[int] = Field(None, gt=0)


class ComplaintStatusUpdate(BaseModel):
     status: ComplaintStatus


class ComplaintResponse(BaseModel):
     id: int
     tenant_id: Optional[int] = None
     tenant_name: Optional[str] = None
     room_id: Optional[int] = None
     room_number: Optional[str] = None
     title: str
     description: str
     priority: ComplaintPriority
     status: ComplaintStatus
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     resolved_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
