"""
Tests for the record store.
"""

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from chargelog.models import ChargingRecord, ParkingRecord, RecordKind
from factories import charge, park


class TestCollections:
    """Tests for get, set and replace."""

    def test_empty(self, store):
        assert store.get(RecordKind.CHARGING) == []
        assert store.get("parking") == []

    def test_set_and_get_sorted_by_date(self, store, sample_charging):
        store.set(RecordKind.CHARGING, list(reversed(sample_charging)))

        stored = store.get(RecordKind.CHARGING)

        assert [r.id for r in stored] == [r.id for r in sample_charging]

    def test_get_returns_detached_copies(self, store, sample_parking):
        store.set(RecordKind.PARKING, sample_parking)

        first = store.get(RecordKind.PARKING)[0]
        first.cost = 999.0

        assert store.get(RecordKind.PARKING)[0].cost == 10.0

    def test_replace_is_all_or_nothing(self, store, sample_charging, sample_parking):
        """A failing kind rolls back the other kind too."""
        store.set(RecordKind.CHARGING, sample_charging)
        store.set(RecordKind.PARKING, sample_parking)
        broken = ParkingRecord(id="parking_broken", date=None, cost=5.0)

        with pytest.raises(IntegrityError):
            store.replace({
                RecordKind.CHARGING: [charge(date(2024, 4, 1), 13000, cost=10)],
                RecordKind.PARKING: [broken],
            })

        assert len(store.get(RecordKind.CHARGING)) == 5
        assert len(store.get(RecordKind.PARKING)) == 4

    def test_clear(self, store, sample_charging, sample_parking):
        store.set(RecordKind.CHARGING, sample_charging)
        store.set(RecordKind.PARKING, sample_parking)

        store.clear()

        assert store.get(RecordKind.CHARGING) == []
        assert store.get(RecordKind.PARKING) == []


class TestSingleRecords:
    """Tests for add, update and delete."""

    def test_add_assigns_id(self, store):
        record = ChargingRecord(date=date(2024, 3, 5), mileage=12000.0, cost=36.0)

        stored = store.add(RecordKind.CHARGING, record)

        assert stored.id.startswith("charging_")
        assert store.get_by_id(RecordKind.CHARGING, stored.id).mileage == 12000.0

    def test_update(self, store):
        stored = store.add(RecordKind.PARKING, park(date(2024, 3, 6), 15))

        assert store.update(RecordKind.PARKING, stored.id, {"cost": 20.0, "id": "ignored"}) is True

        assert store.get_by_id(RecordKind.PARKING, stored.id).cost == 20.0
        assert store.get_by_id(RecordKind.PARKING, "ignored") is None

    def test_update_unknown_id(self, store):
        assert store.update(RecordKind.PARKING, "parking_missing", {"cost": 1.0}) is False

    def test_delete(self, store, sample_parking):
        store.set(RecordKind.PARKING, sample_parking)

        assert store.delete(RecordKind.PARKING, sample_parking[0].id) is True
        assert len(store.get(RecordKind.PARKING)) == 3

    def test_delete_unknown_id_leaves_data_unchanged(self, store, sample_parking):
        store.set(RecordKind.PARKING, sample_parking)

        assert store.delete(RecordKind.PARKING, "parking_missing") is False
        assert [r.id for r in store.get(RecordKind.PARKING)] == [r.id for r in sample_parking]


class TestSettings:
    """Tests for settings and the last export time."""

    def test_default(self, store):
        assert store.get_setting("missing", "fallback") == "fallback"

    def test_set_and_overwrite(self, store):
        store.set_setting("theme", "dark")
        store.set_setting("theme", "light")
        assert store.get_setting("theme") == "light"

    def test_last_export(self, store):
        assert store.last_export() is None

        when = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
        store.record_last_export(when)

        assert store.last_export() == when

    def test_unreadable_last_export(self, store):
        store.set_setting("last_export_at", "sometime")
        assert store.last_export() is None
