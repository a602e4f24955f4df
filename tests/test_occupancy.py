import pytest

from models import RoomStatus, TenantStatus
from services.occupancy_service import compute_occupancy, ensure_bed_available
from utils.exceptions import CapacityError

from tests.factories import make_room, make_tenant


class TestComputeOccupancy:
    """Occupancy is derived from active tenants, never from the stored status"""

    def test_counts_only_active_tenants(self):
        rooms = [make_room(capacity=3)]
        tenants = [
            make_tenant(id=1),
            make_tenant(id=2, status=TenantStatus.NOTICE_PERIOD),
            make_tenant(id=3, status=TenantStatus.CHECKED_OUT),
        ]

        report = compute_occupancy(rooms, tenants)
        entry = report.for_room(1)

        assert entry.occupied == 1
        assert entry.available == 2
        assert entry.status == RoomStatus.VACANT
        assert report.available_rooms == 1
        assert report.full_rooms == 0

    def test_full_room_is_occupied(self):
        report = compute_occupancy([make_room(capacity=2)], [make_tenant(id=1), make_tenant(id=2)])

        entry = report.for_room(1)
        assert entry.is_full
        assert entry.status == RoomStatus.OCCUPIED
        assert report.full_rooms == 1
        assert report.occupancy_percentage == 100.0

    def test_stale_stored_status_is_ignored(self):
        room = make_room(capacity=1, status=RoomStatus.OCCUPIED)

        report = compute_occupancy([room], [])

        assert report.for_room(1).status == RoomStatus.VACANT

    def test_maintenance_status_is_kept(self):
        room = make_room(capacity=2, status=RoomStatus.UNDER_MAINTENANCE)

        report = compute_occupancy([room], [])

        assert report.for_room(1).status == RoomStatus.UNDER_MAINTENANCE
        assert report.maintenance_rooms == 1
        assert report.available_rooms == 0

    def test_zero_capacity_counts_as_one_bed(self):
        report = compute_occupancy([make_room(capacity=0)], [make_tenant(id=1)])

        assert report.for_room(1).capacity == 1
        assert report.for_room(1).is_full
        assert report.total_beds == 1

    def test_over_capacity_is_reported(self):
        tenants = [make_tenant(id=i) for i in (1, 2, 3)]

        report = compute_occupancy([make_room(capacity=2)], tenants)

        assert report.for_room(1).available == 0
        assert [w.code for w in report.warnings] == ["over_capacity"]
        assert report.occupied_beds == 2

    def test_tenant_in_missing_room_is_reported(self):
        report = compute_occupancy([make_room()], [make_tenant(id=7, room_id=99)])

        assert report.for_room(1).occupied == 0
        assert report.warnings[0].code == "orphan_tenant"
        assert report.warnings[0].tenant_id == 7

    def test_percentage_over_all_beds(self):
        rooms = [make_room(id=1, capacity=2), make_room(id=2, room_number="102", capacity=2)]

        report = compute_occupancy(rooms, [make_tenant(id=1, room_id=1)])

        assert report.total_beds == 4
        assert report.occupancy_percentage == 25.0

    def test_no_rooms(self):
        report = compute_occupancy([], [])

        assert report.total_rooms == 0
        assert report.occupancy_percentage == 0.0

    def test_same_snapshot_gives_same_report(self):
        rooms = [make_room(id=1, capacity=2), make_room(id=2, room_number="102", capacity=1)]
        tenants = [make_tenant(id=1, room_id=1), make_tenant(id=2, room_id=2), make_tenant(id=3, room_id=9)]

        first = compute_occupancy(rooms, tenants)
        second = compute_occupancy(rooms, tenants)

        assert first == second

    def test_occupied_plus_available_equals_capacity(self):
        rooms = [
            make_room(id=1, capacity=3),
            make_room(id=2, room_number="102", capacity=2),
            make_room(id=3, room_number="103", capacity=1),
        ]
        tenants = [make_tenant(id=1, room_id=1), make_tenant(id=2, room_id=2), make_tenant(id=3, room_id=2)]

        report = compute_occupancy(rooms, tenants)

        for entry in report.rooms:
            assert entry.occupied + entry.available == entry.capacity

    def test_inactive_tenant_frees_bed(self):
        room = make_room(capacity=2)
        first, second = make_tenant(id=1, name="A"), make_tenant(id=2, name="B")

        full = compute_occupancy([room], [first, second]).for_room(1)
        assert full.is_full
        assert full.available == 0
        assert full.status == RoomStatus.OCCUPIED

        first.status = TenantStatus.INACTIVE
        after = compute_occupancy([room], [first, second]).for_room(1)
        assert after.status == RoomStatus.VACANT
        assert after.available == 1
        assert after.tenant_ids == (2,)


class TestEnsureBedAvailable:

    def test_free_bed(self):
        ensure_bed_available(make_room(capacity=2), [make_tenant(id=1)])

    def test_full_room_raises(self):
        with pytest.raises(CapacityError):
            ensure_bed_available(make_room(capacity=1), [make_tenant(id=1)])

    def test_excluded_tenant_is_not_counted(self):
        ensure_bed_available(make_room(capacity=1), [make_tenant(id=1)], exclude_tenant_id=1)

    def test_maintenance_room_raises(self):
        room = make_room(capacity=2, status=RoomStatus.UNDER_MAINTENANCE)
        with pytest.raises(CapacityError):
            ensure_bed_available(room, [])
