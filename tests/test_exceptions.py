"""Tests for custom ChargeLog exceptions."""

import pytest

from chargelog.exceptions import (
    ChargeLogError,
    ConfigurationError,
    EmptyExportSource,
    ExportFailed,
    FileFormatUnsupported,
    FileReadFailure,
    InterchangeError,
    ParseFailure,
    RecordValidationError,
    WorkbookParseError,
)


class TestChargeLogError:
    """Tests for base ChargeLogError."""

    def test_basic_message(self):
        """Test exception with just a message."""
        error = ChargeLogError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details == {}

    def test_with_details(self):
        """Test exception with details dict."""
        error = ChargeLogError("Error occurred", {"key": "value"})
        assert str(error) == "Error occurred - {'key': 'value'}"

    def test_is_exception(self):
        with pytest.raises(ChargeLogError):
            raise ChargeLogError("test")


class TestFieldErrors:
    """Tests for ParseFailure and RecordValidationError."""

    @pytest.mark.parametrize("cls", [ParseFailure, RecordValidationError])
    def test_field_and_value(self, cls):
        error = cls("Bad value", field="mileage", value="abc")
        assert error.field == "mileage"
        assert error.details == {"field": "mileage", "value": "abc"}
        assert isinstance(error, ChargeLogError)

    def test_without_field(self):
        assert RecordValidationError("Bad").details == {}


class TestInterchangeErrors:
    """Tests for file-level errors."""

    @pytest.mark.parametrize("cls", [FileFormatUnsupported, FileReadFailure, WorkbookParseError])
    def test_inheritance(self, cls):
        error = cls("Problem", filename="data.xlsx")
        assert isinstance(error, InterchangeError)
        assert error.filename == "data.xlsx"
        assert "data.xlsx" in str(error)


class TestExportErrors:
    """Tests for export errors."""

    def test_empty_source_default_message(self):
        assert str(EmptyExportSource()) == "No records to export"

    def test_export_failed_attempted(self):
        error = ExportFailed("All failed", attempted=["xlsx", "csv"])
        assert error.attempted == ["xlsx", "csv"]
        assert error.details == {"attempted": ["xlsx", "csv"]}


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_config_key(self):
        error = ConfigurationError("Unknown timezone", config_key="TIMEZONE")
        assert error.config_key == "TIMEZONE"
        assert "TIMEZONE" in str(error)
