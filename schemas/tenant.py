# schemas/tenant.py
"""
Pydantic schemas for Tenant API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from models.tenant import DepositReturnStatus, TenantStatus
from .common import normalize_email, normalize_phone


class TenantCreate(BaseModel):
     """Schema for onboarding a tenant into a room with a free bed."""
     room_id: int = Field(..., gt=0, description="Room with at least one free bed")
     full_name: str = Field(..., min_length=1, max_length=200)
     email: str = Field(..., max_length=255)
     phone: str = Field(..., max_length=20)
     join_date: date
     check_in_date: Optional[date] = None
     deposit_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     id_proof_url: Optional[str] = Field(None, max_length=500)
     agreement_url: Optional[str] = Field(None, max_length=500)
     user_id: Optional[int] = Field(None, gt=0, description="Login account for the tenant, if any")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "room_id": 1,
                    "full_name": "Rahul Sharma",
                    "email": "rahul.sharma@email.com",
                    "phone": "+91 9876543210",
                    "join_date": "2024-01-15",
                    "deposit_amount": 16000.00
               }
          }
     )

     @field_validator("email")
     @classmethod
     def validate_email(cls, v):
          return normalize_email(v)

     @field_validator("phone")
     @classmethod
     def validate_phone(cls, v):
          return normalize_phone(v)

     @model_validator(mode="after")
     def check_dates(self):
          if self.check_in_date and self.check_in_date < self.join_date:
               raise ValueError("Check-in date cannot be before the join date")
          return self


class TenantUpdate(BaseModel):
     """Schema for editing tenant details. Status and room have their own endpoints."""
     full_name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[str] = Field(None, max_length=255)
     phone: Optional[str] = Field(None, max_length=20)
     join_date: Optional[date] = None
     check_in_date: Optional[date] = None
     deposit_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
     id_proof_url: Optional[str] = Field(None, max_length=500)
     agreement_url: Optional[str] = Field(None, max_length=500)

     @field_validator("email")
     @classmethod
     def validate_email(cls, v):
          return normalize_email(v) if v is not None else v

     @field_validator("phone")
     @classmethod
     def validate_phone(cls, v):
          return normalize_phone(v) if v is not None else v


class TenantStatusUpdate(BaseModel):
     status: TenantStatus


class TenantRoomUpdate(BaseModel):
     room_id: int = Field(..., gt=0)


class TenantCheckout(BaseModel):
     check_out_date: Optional[date] = None
     deposit_return_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class TenantResponse(BaseModel):
     id: int
     room_id: Optional[int] = None
     room_number: Optional[str] = None
     full_name: str
     email: str
     phone: str
     join_date: date
     check_in_date: Optional[date] = None
     check_out_date: Optional[date] = None
     status: TenantStatus
     deposit_amount: Optional[Decimal] = None
     deposit_return_amount: Optional[Decimal] = None
     deposit_return_status: Optional[DepositReturnStatus] = None
     id_proof_url: Optional[str] = None
     agreement_url: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class TenantListResponse(BaseModel):
     """Schema for paginated tenant list response."""
     tenants: List[TenantResponse]
     total: int
     page: int = 1
     page_size: int = 10


class PastTenantResponse(TenantResponse):
     stay_duration: str
