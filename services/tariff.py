# services/tariff.py
"""
Tiered electricity tariff.

The schedule is configuration, not business logic: a list of slabs, each
charging its own per-unit rate for the units that fall inside it, plus an
optional fixed charge added to every bill.

Example with slabs [(100, 5.00), (200, 6.50), (None, 8.00)]:
     250 units -> 100 * 5.00 + 100 * 6.50 + 50 * 8.00 = 1550.00
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from config import settings
from utils.exceptions import InputValidationError

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class TariffSlab:
     upper_bound: Optional[Decimal]  # None means no ceiling
     rate: Decimal


@dataclass(frozen=True)
class TariffSchedule:
     slabs: tuple
     fixed_charge: Decimal = Decimal("0")

     @classmethod
     def from_config(cls, slabs: Sequence, fixed_charge=0) -> "TariffSchedule":
          """
          Build a schedule from [[upper_bound, rate], ...] pairs.

          Raises:
               InputValidationError: if bounds are not increasing, a rate is
               negative, or an open-ended slab is not last.
          """
          parsed = []
          previous_bound = Decimal("0")
          for index, (bound, rate) in enumerate(slabs):
               rate = Decimal(str(rate))
               if rate < 0:
                    raise InputValidationError("Tariff rates cannot be negative")
               if bound is None:
                    if index != len(slabs) - 1:
                         raise InputValidationError("Only the last tariff slab can be open-ended")
                    parsed.append(TariffSlab(None, rate))
                    continue
               bound = Decimal(str(bound))
               if bound <= previous_bound:
                    raise InputValidationError("Tariff slab bounds must be increasing")
               parsed.append(TariffSlab(bound, rate))
               previous_bound = bound
          fixed_charge = Decimal(str(fixed_charge))
          if fixed_charge < 0:
               raise InputValidationError("Fixed charge cannot be negative")
          return cls(slabs=tuple(parsed), fixed_charge=fixed_charge)


def default_schedule() -> TariffSchedule:
     return TariffSchedule.from_config(settings.ELECTRICITY_TARIFF, settings.ELECTRICITY_FIXED_CHARGE)


def compute_tiered_bill(units, schedule: Optional[TariffSchedule] = None) -> Decimal:
     """
     Bill for the given units under the schedule.

     Monotonic and never negative. Zero units cost only the fixed charge.
     Units beyond a closed last slab are charged at that slab's rate.
     """
     if schedule is None:
          schedule = default_schedule()
     units = Decimal(str(units))
     if units < 0:
          raise InputValidationError("Units consumed cannot be negative")

     total = Decimal("0")
     lower = Decimal("0")
     last_rate = Decimal("0")
     for slab in schedule.slabs:
          last_rate = slab.rate
          if units <= lower:
               break
          upper = units if slab.upper_bound is None else min(units, slab.upper_bound)
          total += (upper - lower) * slab.rate
          if slab.upper_bound is None:
               lower = units
               break
          lower = slab.upper_bound
     if units > lower:
          total += (units - lower) * last_rate

     return (total + schedule.fixed_charge).quantize(CENTS, rounding=ROUND_HALF_UP)
