"""
Tests for number coercion and entry form rules.
"""

import pytest

from chargelog.exceptions import RecordValidationError
from chargelog.utils.form_helpers import (
    fill_missing_charge_field,
    safe_float,
    validate_charging_entry,
    validate_parking_entry,
)


class TestSafeFloat:
    """Tests for safe_float."""

    @pytest.mark.parametrize("value,expected", [
        (None, 0.0),
        ("", 0.0),
        ("12.5", 12.5),
        (" 7 ", 7.0),
        ("1,234.5", 1234.5),
        (3, 3.0),
        ("n/a", 0.0),
        ([], 0.0),
        ("36元", 36.0),
        ("1.2 元/度", 1.2),
        ("-5km", -5.0),
    ])
    def test_values(self, value, expected):
        assert safe_float(value) == expected

    @pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-Infinity", "1e400", float("nan"), float("inf")])
    def test_non_finite_becomes_zero(self, value):
        """Stored columns never receive NaN or infinity."""
        assert safe_float(value) == 0.0


class TestFillMissingChargeField:
    """Tests for the amount/price/cost auto-calculation."""

    def test_derives_cost(self):
        result = fill_missing_charge_field(amount=30, price=1.2)
        assert result["cost"] == 36.0
        assert result["filled"] == "cost"

    def test_derives_price(self):
        result = fill_missing_charge_field(amount="30", cost="36")
        assert result["price"] == 1.2
        assert result["filled"] == "price"

    def test_derives_amount(self):
        result = fill_missing_charge_field(price=1.5, cost=45)
        assert result["amount"] == 30.0
        assert result["filled"] == "amount"

    def test_zero_divisor_gives_zero(self):
        """A zero price cannot produce an amount."""
        result = fill_missing_charge_field(price=0, cost=45)
        assert result["amount"] == 0.0

    def test_unit_suffix_counts_as_given(self):
        result = fill_missing_charge_field(amount="30度", price="1.2元")
        assert result["cost"] == 36.0
        assert result["filled"] == "cost"

    def test_nan_counts_as_missing(self):
        result = fill_missing_charge_field(amount="nan", price=1.2, cost=36)
        assert result["amount"] == 30.0
        assert result["filled"] == "amount"

    def test_two_missing_left_alone(self):
        """Nothing is derived unless exactly one value is missing."""
        result = fill_missing_charge_field(amount=30, price="")
        assert result == {"amount": 30.0, "price": None, "cost": None, "filled": None}

    def test_all_present_left_alone(self):
        result = fill_missing_charge_field(amount=30, price=1, cost=99)
        assert result["cost"] == 99.0
        assert result["filled"] is None


class TestValidateChargingEntry:
    """Tests for validate_charging_entry."""

    def test_accepts_and_rounds_mileage(self):
        cleaned = validate_charging_entry({"mileage": "12345.6", "cost": "36", "is_full": "是"})

        assert cleaned["mileage"] == 12346.0
        assert cleaned["cost"] == 36.0
        assert cleaned["amount"] == 0.0
        assert cleaned["is_full"] is True

    def test_rejects_zero_mileage(self):
        with pytest.raises(RecordValidationError) as exc_info:
            validate_charging_entry({"mileage": 0, "amount": 30})
        assert exc_info.value.field == "mileage"

    @pytest.mark.parametrize("mileage", ["nan", "inf", float("nan")])
    def test_rejects_non_finite_mileage(self, mileage):
        with pytest.raises(RecordValidationError) as exc_info:
            validate_charging_entry({"mileage": mileage, "cost": 36})
        assert exc_info.value.field == "mileage"

    def test_rejects_no_amounts(self):
        """At least one of amount, price or cost is required."""
        with pytest.raises(RecordValidationError):
            validate_charging_entry({"mileage": 100, "amount": "", "price": 0})

    @pytest.mark.parametrize("flag,expected", [
        (True, True), ("true", True), ("1", True), ("yes", True),
        (False, False), ("否", False), (None, False), ("", False),
    ])
    def test_is_full_flags(self, flag, expected):
        assert validate_charging_entry({"mileage": 1, "price": 1, "is_full": flag})["is_full"] is expected


class TestValidateParkingEntry:
    """Tests for validate_parking_entry."""

    def test_accepts_positive_cost(self):
        assert validate_parking_entry({"cost": "15"}) == {"cost": 15.0}

    def test_rejects_zero_cost(self):
        with pytest.raises(RecordValidationError) as exc_info:
            validate_parking_entry({"cost": 0})
        assert exc_info.value.field == "cost"
