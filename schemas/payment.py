# schemas/payment.py
"""
Pydantic schemas for payment recording API.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from models.payment import PaymentMethod


class PaymentCreate(BaseModel):
     """Request body for POST /payments."""

     tenant_id: int = Field(..., gt=0, description="Tenant paying")
     payment_date: date = Field(default_factory=date.today)
     payment_month: date = Field(..., description="Any day in the month covered; stored as the 1st")
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     deposit_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     other_charges: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
     payment_method: PaymentMethod
     remarks: Optional[str] = Field(None, max_length=1000)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "tenant_id": 1,
                    "payment_date": "2024-07-03",
                    "payment_month": "2024-07-01",
                    "rent_amount": 8000.00,
                    "payment_method": "upi",
               }
          }
     )


class PaymentResponse(BaseModel):
     id: int
     tenant_id: int
     tenant_name: Optional[str] = None
     payment_date: date
     payment_month: date
     rent_amount: Decimal
     deposit_amount: Decimal
     other_charges: Decimal
     total_amount: Decimal
     payment_method: PaymentMethod
     remarks: Optional[str] = None
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
