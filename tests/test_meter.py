from datetime import date
from decimal import Decimal

import pytest

from models import MeterReading
from services.meter_service import MeterService, prepare_reading, summarize_readings
from utils.exceptions import (
    ConflictError,
    InvalidReadingValueError,
    NonMonotonicDateError,
    NonMonotonicValueError,
    NotFoundError,
)

from tests.factories import make_meter, make_reading


def flat_rate(units):
    return units * Decimal("5")


class TestPrepareReading:

    def test_first_reading_measured_from_starting_reading(self):
        prepared = prepare_reading(make_meter("100"), None, Decimal("150"), date(2024, 7, 31), flat_rate)

        assert prepared.previous_value == Decimal("100")
        assert prepared.units_consumed == Decimal("50")
        assert prepared.bill_amount == Decimal("250")

    def test_consumption_since_previous_reading(self):
        previous = make_reading(value="150", on=date(2024, 7, 31))

        prepared = prepare_reading(make_meter(), previous, Decimal("230"), date(2024, 8, 31), flat_rate)

        assert prepared.units_consumed == Decimal("80")

    def test_equal_value_gives_zero_units(self):
        previous = make_reading(value="150")

        prepared = prepare_reading(make_meter(), previous, Decimal("150"), date(2024, 8, 31), flat_rate)

        assert prepared.units_consumed == Decimal("0")
        assert prepared.bill_amount == Decimal("0")

    def test_lower_value_rejected(self):
        with pytest.raises(NonMonotonicValueError):
            prepare_reading(make_meter(), make_reading(value="150"), Decimal("140"), date(2024, 8, 31))

    def test_below_starting_reading_rejected(self):
        with pytest.raises(NonMonotonicValueError):
            prepare_reading(make_meter("100"), None, Decimal("90"), date(2024, 7, 31))

    def test_earlier_date_rejected(self):
        previous = make_reading(on=date(2024, 7, 31))
        with pytest.raises(NonMonotonicDateError):
            prepare_reading(make_meter(), previous, Decimal("200"), date(2024, 7, 30))

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_non_positive_value_rejected(self, value):
        with pytest.raises(InvalidReadingValueError):
            prepare_reading(make_meter(), None, Decimal(value), date(2024, 7, 31))


class TestSummarizeReadings:

    def test_totals(self):
        readings = [
            make_reading(id=1, value="150", on=date(2024, 7, 31), units="50", bill="250.00"),
            make_reading(id=2, value="230", on=date(2024, 8, 31), units="80", bill="400.00"),
        ]

        totals = summarize_readings(make_meter(), readings)

        assert totals.current_reading == Decimal("230")
        assert totals.total_units == Decimal("130")
        assert totals.total_bill == Decimal("650.00")
        assert totals.reading_count == 2

    def test_no_readings(self):
        totals = summarize_readings(make_meter("100"), [])

        assert totals.current_reading == Decimal("100")
        assert totals.reading_count == 0


class TestMeterService:

    def test_record_reading_persists(self, db, owner, room):
        meter = MeterService.create_meter(db, owner.id, room.id, "M-101", Decimal("100"))

        reading = MeterService.record_reading(db, owner.id, meter.id, Decimal("150"), date(2024, 7, 31))
        db.commit()

        assert reading.units_consumed == Decimal("50")
        assert reading.bill_amount == Decimal("250.00")

    def test_rejected_reading_is_not_persisted(self, db, owner, room):
        meter = MeterService.create_meter(db, owner.id, room.id, "M-101", Decimal("100"))
        MeterService.record_reading(db, owner.id, meter.id, Decimal("150"), date(2024, 7, 31))
        db.commit()

        with pytest.raises(NonMonotonicValueError):
            MeterService.record_reading(db, owner.id, meter.id, Decimal("140"), date(2024, 8, 31))
        db.rollback()

        assert db.query(MeterReading).filter(MeterReading.meter_id == meter.id).count() == 1
        assert MeterService.totals(db, meter).current_reading == Decimal("150")

    def test_one_meter_per_room(self, db, owner, room):
        MeterService.create_meter(db, owner.id, room.id, "M-101", Decimal("0"))
        with pytest.raises(ConflictError):
            MeterService.create_meter(db, owner.id, room.id, "M-102", Decimal("0"))

    def test_other_owners_meter_is_not_found(self, db, owner, room):
        meter = MeterService.create_meter(db, owner.id, room.id, "M-101", Decimal("0"))
        with pytest.raises(NotFoundError):
            MeterService.get_meter(db, owner.id + 1, meter.id)

    def test_last_reading_is_latest_by_date(self, db, owner, room):
        meter = MeterService.create_meter(db, owner.id, room.id, "M-101", Decimal("0"))
        MeterService.record_reading(db, owner.id, meter.id, Decimal("10"), date(2024, 6, 30))
        MeterService.record_reading(db, owner.id, meter.id, Decimal("25"), date(2024, 7, 31))

        assert MeterService.last_reading(db, meter.id).reading_value == Decimal("25")
