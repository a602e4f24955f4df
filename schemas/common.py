# schemas/common.py
"""
Shared pydantic pieces: integrity warnings and contact-field validation.
"""
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

EMAIL_REGEX = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"
# Indian mobile numbers, optionally prefixed with +91 or 0
MOBILE_REGEX = r"^[6-9]\d{9}$"


def normalize_email(value: str) -> str:
     value = value.strip().lower()
     if not re.match(EMAIL_REGEX, value):
          raise ValueError("Invalid email address")
     return value


def normalize_phone(value: str) -> str:
     digits = re.sub(r"[\s\-()]", "", value)
     if digits.startswith("+91"):
          digits = digits[3:]
     elif digits.startswith("0") and len(digits) == 11:
          digits = digits[1:]
     if not re.match(MOBILE_REGEX, digits):
          raise ValueError("Invalid mobile number. Must be 10 digits starting with 6-9")
     return digits


class IntegrityWarningResponse(BaseModel):
     """Inconsistency found while building a view; the affected row was left out."""
     code: str
     message: str
     tenant_id: Optional[int] = None
     room_id: Optional[int] = None

     model_config = ConfigDict(from_attributes=True)
