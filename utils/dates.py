# utils/dates.py
from calendar import monthrange
from datetime import date


def month_start(value: date) -> date:
     return value.replace(day=1)


def month_end(value: date) -> date:
     return value.replace(day=monthrange(value.year, value.month)[1])


def make_month(year: int, month: int) -> date:
     """First day of the given month. Raises ValueError for month outside 1-12."""
     if month < 1 or month > 12:
          raise ValueError("Month must be between 1 and 12")
     return date(year, month, 1)


def parse_month(value: str) -> date:
     """Parse 'YYYY-MM' (or a full ISO date) into the first of that month."""
     parts = value.split("-")
     if len(parts) < 2:
          raise ValueError(f"Invalid month: {value!r}")
     return make_month(int(parts[0]), int(parts[1]))


def add_months(value: date, months: int) -> date:
     """Shift a first-of-month date by a number of months (may be negative)."""
     index = value.year * 12 + (value.month - 1) + months
     return date(index // 12, index % 12 + 1, 1)


def trailing_months(reference: date, count: int) -> list:
     """The `count` months ending with the reference month, oldest first."""
     current = month_start(reference)
     return [add_months(current, -offset) for offset in range(count - 1, -1, -1)]


def due_date_for(month: date, due_day: int) -> date:
     """Due date in the month; a due day past the month's end falls on its last day."""
     last_day = monthrange(month.year, month.month)[1]
     return date(month.year, month.month, min(max(due_day, 1), last_day))
