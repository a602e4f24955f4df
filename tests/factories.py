"""Transient ORM objects for the pure engine tests (never added to a session)."""
from datetime import date
from decimal import Decimal

from models import (
    Meter, MeterReading, Payment, PaymentMethod, Room, RoomStatus, Tenant, TenantStatus
)


def make_room(id=1, room_number="101", rent="8000.00", capacity=2, status=RoomStatus.VACANT):
    return Room(
        id=id,
        owner_id=1,
        room_number=room_number,
        room_type="double",
        rent_amount=Decimal(rent),
        capacity=capacity,
        status=status,
    )


def make_tenant(id=1, room_id=1, name="Tenant", status=TenantStatus.ACTIVE, check_in=date(2024, 1, 1)):
    return Tenant(
        id=id,
        owner_id=1,
        room_id=room_id,
        full_name=name,
        email=f"tenant{id}@example.com",
        phone="9876543210",
        join_date=check_in,
        check_in_date=check_in,
        status=status,
    )


def make_payment(id=1, tenant_id=1, month=date(2024, 7, 1), amount="8000.00", paid_on=None):
    return Payment(
        id=id,
        owner_id=1,
        tenant_id=tenant_id,
        payment_month=month,
        payment_date=paid_on or month,
        rent_amount=Decimal(amount),
        deposit_amount=Decimal("0"),
        other_charges=Decimal("0"),
        payment_method=PaymentMethod.UPI,
    )


def make_meter(starting="100"):
    return Meter(id=1, owner_id=1, room_id=1, meter_number="M-1", starting_reading=Decimal(starting))


def make_reading(id=1, value="150", on=date(2024, 7, 31), units="50", bill="250.00"):
    return MeterReading(
        id=id,
        meter_id=1,
        reading_value=Decimal(value),
        reading_date=on,
        units_consumed=Decimal(units),
        bill_amount=Decimal(bill),
    )
