from datetime import date
from decimal import Decimal

from models import RentStatus, TenantStatus
from services.rent_service import collection_rate, reconcile_rent

from tests.factories import make_payment, make_room, make_tenant

JULY = date(2024, 7, 1)


class TestReconcileRent:
    """One line per active tenant with a room; payments decide paid/pending/overdue"""

    def test_unpaid_after_due_date_is_overdue(self):
        result = reconcile_rent(JULY, [make_tenant()], [make_room()], [], today=date(2024, 7, 10), due_day=5)

        assert result.due_date == date(2024, 7, 5)
        assert result.records[0].status == RentStatus.OVERDUE
        assert result.overdue == Decimal("8000.00")
        assert result.pending == Decimal("8000.00")
        assert result.overdue_count == 1
        assert result.collection_rate == 0.0

    def test_unpaid_on_due_date_is_pending(self):
        result = reconcile_rent(JULY, [make_tenant()], [make_room()], [], today=date(2024, 7, 5), due_day=5)

        assert result.records[0].status == RentStatus.PENDING
        assert result.pending_count == 1
        assert result.overdue == Decimal("0")

    def test_payment_marks_paid(self):
        payment = make_payment(paid_on=date(2024, 7, 3))

        result = reconcile_rent(JULY, [make_tenant()], [make_room()], [payment], today=date(2024, 7, 10), due_day=5)

        line = result.records[0]
        assert line.status == RentStatus.PAID
        assert line.paid_date == date(2024, 7, 3)
        assert line.payment_ids == (1,)
        assert result.collected == Decimal("8000.00")
        assert result.collection_rate == 100.0

    def test_payment_for_another_month_is_ignored(self):
        payment = make_payment(month=date(2024, 6, 1))

        result = reconcile_rent(JULY, [make_tenant()], [make_room()], [payment], today=date(2024, 7, 1), due_day=5)

        assert result.records[0].status == RentStatus.PENDING

    def test_no_active_tenants_gives_zero_rate(self):
        tenants = [make_tenant(status=TenantStatus.CHECKED_OUT)]

        result = reconcile_rent(JULY, tenants, [make_room()], [], today=date(2024, 7, 10))

        assert result.records == []
        assert result.total_rent == Decimal("0")
        assert result.collection_rate == 0.0

    def test_notice_period_tenants_are_not_billed(self):
        tenants = [make_tenant(id=1), make_tenant(id=2, status=TenantStatus.NOTICE_PERIOD)]

        result = reconcile_rent(JULY, tenants, [make_room()], [], today=date(2024, 7, 1), due_day=5)

        assert [r.tenant_id for r in result.records] == [1]

    def test_tenant_without_room_is_warned_and_excluded(self):
        tenants = [make_tenant(id=1), make_tenant(id=2, room_id=None), make_tenant(id=3, room_id=42)]

        result = reconcile_rent(JULY, tenants, [make_room()], [], today=date(2024, 7, 1), due_day=5)

        assert result.total_rent == Decimal("8000.00")
        assert sorted(w.code for w in result.warnings) == ["missing_room", "tenant_without_room"]

    def test_multiple_payments_are_summed_and_warned(self):
        payments = [make_payment(id=1, amount="4000.00"), make_payment(id=2, amount="4000.00")]

        result = reconcile_rent(JULY, [make_tenant()], [make_room()], payments, today=date(2024, 7, 10), due_day=5)

        assert result.collected == Decimal("8000.00")
        assert result.warnings[0].code == "multiple_payments"

    def test_due_day_clamped_to_month_end(self):
        result = reconcile_rent(date(2024, 2, 1), [], [], [], today=date(2024, 2, 1), due_day=31)

        assert result.due_date == date(2024, 2, 29)

    def test_filtered_keeps_totals(self):
        rooms = [make_room(id=1), make_room(id=2, room_number="202")]
        tenants = [make_tenant(id=1, name="Asha"), make_tenant(id=2, room_id=2, name="Vikram")]
        payments = [make_payment(tenant_id=1)]

        result = reconcile_rent(JULY, tenants, rooms, payments, today=date(2024, 7, 10), due_day=5)

        assert [r.tenant_name for r in result.filtered(status=RentStatus.OVERDUE)] == ["Vikram"]
        assert [r.tenant_name for r in result.filtered(search="asha")] == ["Asha"]
        assert result.total_rent == Decimal("16000.00")
        assert result.collection_rate == 50.0


class TestCollectionRate:

    def test_zero_total(self):
        assert collection_rate(Decimal("0"), Decimal("0")) == 0.0

    def test_overpayment_not_clamped(self):
        assert collection_rate(Decimal("12000"), Decimal("8000")) == 150.0
