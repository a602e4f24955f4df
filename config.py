# config.py
"""
Application settings loaded from the environment.

Usage:
     from config import settings

     settings.DATABASE_URL
     settings.RENT_DUE_DAY
"""
import json
import os
from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _database_url() -> str:
     url = os.getenv("DATABASE_URL", "sqlite:///./pg_manager.db")
     # Hosted Postgres providers still hand out postgres:// URLs
     if url.startswith("postgres://"):
          url = url.replace("postgres://", "postgresql://", 1)
     return url


def _int_setting(name: str, default: int, minimum: int, maximum: Optional[int] = None) -> int:
     """Integer from the environment, rejected at startup when out of range."""
     value = int(os.getenv(name, str(default)))
     if value < minimum or (maximum is not None and value > maximum):
          bound = f"between {minimum} and {maximum}" if maximum is not None else f"at least {minimum}"
          raise ValueError(f"{name} must be {bound}, got {value}")
     return value


def _tariff_slabs() -> list:
     """
     Electricity slabs as [[upper_bound, rate], ...].
     The last slab uses null as its upper bound (no ceiling).
     """
     raw = os.getenv("ELECTRICITY_TARIFF")
     if not raw:
          return [[100, "5.00"], [200, "6.50"], [None, "8.00"]]
     return json.loads(raw)


class Settings:
     APP_NAME = "PG Manager API"
     DATABASE_URL = _database_url()
     SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

     JWT_SECRET = os.getenv("JWT_SECRET", "TEMP_SECRET_CHANGE_IN_PRODUCTION")
     JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

     CORS_ORIGINS = [o for o in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",") if o]
     LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

     # Rent falls due on this day of every month
     RENT_DUE_DAY = _int_setting("RENT_DUE_DAY", 5, minimum=1, maximum=31)
     DASHBOARD_MONTHS = _int_setting("DASHBOARD_MONTHS", 6, minimum=1)

     ELECTRICITY_TARIFF = _tariff_slabs()
     ELECTRICITY_FIXED_CHARGE = Decimal(os.getenv("ELECTRICITY_FIXED_CHARGE", "0"))


settings = Settings()
