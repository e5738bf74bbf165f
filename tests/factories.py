"""
Test Data Factories for ChargeLog

Build charging and parking records with sensible defaults so tests only
spell out the fields they care about.

Usage:
    record = ChargingRecordFactory.build(date=date(2024, 3, 5), mileage=12000)
    fulls = ChargingRecordFactory.build_batch(3, is_full=True)
"""

from datetime import date
from typing import Any, Dict

from chargelog.models import ChargingRecord, ParkingRecord, RecordKind, new_record_id


class BaseFactory:
    """Base factory with common functionality."""

    model = None
    kind = None

    @classmethod
    def build(cls, **kwargs):
        """Build a transient instance; a fresh id is used unless one is given."""
        defaults = cls.get_defaults()
        defaults.update(kwargs)
        if not defaults.get("id"):
            defaults["id"] = new_record_id(cls.kind)
        return cls.model(**defaults)

    @classmethod
    def build_batch(cls, count: int, **kwargs):
        """Build multiple instances."""
        return [cls.build(**kwargs) for _ in range(count)]

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        """Override in subclasses to provide default values."""
        raise NotImplementedError


class ChargingRecordFactory(BaseFactory):
    """Factory for ChargingRecord instances."""

    model = ChargingRecord
    kind = RecordKind.CHARGING

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            "date": date(2024, 3, 5),
            "mileage": 12000.0,
            "amount": 30.0,
            "price": 1.2,
            "cost": 36.0,
            "is_full": False,
        }


class ParkingRecordFactory(BaseFactory):
    """Factory for ParkingRecord instances."""

    model = ParkingRecord
    kind = RecordKind.PARKING

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        return {
            "date": date(2024, 3, 6),
            "cost": 15.0,
        }


def charge(day, mileage, amount=0.0, price=0.0, cost=0.0, is_full=False):
    """Shorthand for a charging record with positional date and mileage."""
    return ChargingRecordFactory.build(
        date=day, mileage=float(mileage), amount=float(amount),
        price=float(price), cost=float(cost), is_full=is_full,
    )


def park(day, cost):
    """Shorthand for a parking record."""
    return ParkingRecordFactory.build(date=day, cost=float(cost))
