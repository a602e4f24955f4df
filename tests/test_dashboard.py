from datetime import date
from decimal import Decimal

import pytest

from models import Complaint, ComplaintStatus, Payment, PaymentMethod
from services.dashboard_service import DashboardService, build_trend
from utils.exceptions import InputValidationError

from tests.factories import make_payment, make_room, make_tenant


class TestBuildTrend:

    def test_series_is_oldest_first_with_checkin_cutoff(self):
        months = [date(2024, 5, 1), date(2024, 6, 1), date(2024, 7, 1)]
        rooms = [make_room(capacity=2)]
        tenants = [
            make_tenant(id=1, check_in=date(2024, 1, 10)),
            make_tenant(id=2, check_in=date(2024, 6, 20)),
        ]
        payments = [
            make_payment(id=1, tenant_id=1, month=date(2024, 6, 1)),
            make_payment(id=2, tenant_id=2, month=date(2024, 7, 1)),
        ]

        series = build_trend(months, rooms, tenants, payments, today=date(2024, 7, 15), due_day=5)

        assert [p.month for p in series] == months
        assert [p.occupancy_percentage for p in series] == [50.0, 100.0, 100.0]
        assert series[0].rent_collected == Decimal("0")
        assert series[1].rent_collected == Decimal("8000.00")
        assert series[2].rent_collected == Decimal("8000.00")

    def test_empty_property(self):
        series = build_trend([date(2024, 7, 1)], [], [], [], today=date(2024, 7, 15))

        assert series[0].occupancy_percentage == 0.0
        assert series[0].rent_collected == Decimal("0")


class TestDashboardSummary:

    def test_summary_counts(self, db, owner, room, tenant):
        db.add(Payment(
            owner_id=owner.id,
            tenant_id=tenant.id,
            payment_month=date(2024, 7, 1),
            payment_date=date(2024, 7, 2),
            rent_amount=Decimal("8000.00"),
            deposit_amount=Decimal("0"),
            other_charges=Decimal("0"),
            payment_method=PaymentMethod.CASH,
        ))
        db.add(Complaint(owner_id=owner.id, tenant_id=tenant.id, title="Leaking tap", description="Bathroom"))
        db.add(Complaint(
            owner_id=owner.id, title="Old issue", description="Done", status=ComplaintStatus.RESOLVED
        ))
        db.commit()

        summary = DashboardService.summary(db, owner.id, today=date(2024, 7, 10))

        assert summary.total_rooms == 1
        assert summary.vacant_rooms == 1
        assert summary.total_tenants == 1
        assert summary.rent_collected == Decimal("8000.00")
        assert summary.collection_rate == 100.0
        assert summary.pending_complaints == 1
        assert [t.id for t in summary.recent_tenants] == [tenant.id]

    def test_trend_uses_configured_window(self, db, owner, room, tenant):
        series = DashboardService.trend(db, owner.id, months=3, today=date(2024, 7, 10))

        assert [p.month for p in series] == [date(2024, 5, 1), date(2024, 6, 1), date(2024, 7, 1)]
        assert all(p.occupancy_percentage == 50.0 for p in series)

    def test_trend_rejects_empty_window(self, db, owner, room, tenant):
        with pytest.raises(InputValidationError):
            DashboardService.trend(db, owner.id, months=0, today=date(2024, 7, 10))
