# utils/exceptions.py
"""
Domain errors raised by the service layer.

Routers translate these into HTTP responses; services never import FastAPI.
"""
from dataclasses import dataclass
from typing import Optional


class PGManagerError(Exception):
     pass


class InputValidationError(PGManagerError):
     """User-correctable input problem. Raised before any write."""
     pass


class InvalidReadingValueError(InputValidationError):
     pass


class NonMonotonicValueError(InputValidationError):
     pass


class NonMonotonicDateError(InputValidationError):
     pass


class CapacityError(InputValidationError):
     pass


class InvalidTransitionError(InputValidationError):
     pass


class ConflictError(PGManagerError):
     pass


class NotFoundError(PGManagerError):
     pass


class PermissionDeniedError(PGManagerError):
     pass


@dataclass(frozen=True)
class IntegrityWarning:
     """
     Data inconsistency found while reading.

     Not raised: collected into aggregate views so the rest of the view
     still renders.
     """
     code: str
     message: str
     tenant_id: Optional[int] = None
     room_id: Optional[int] = None
