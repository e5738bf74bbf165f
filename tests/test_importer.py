"""
Tests for file import.
"""

from datetime import date

import pytest

from chargelog.exceptions import FileFormatUnsupported, FileReadFailure, WorkbookParseError
from chargelog.interchange import build_csv, build_workbook
from chargelog.interchange.importer import apply_import, detect_format, import_file, import_records
from chargelog.models import RecordKind
from factories import charge, park


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize("filename,expected", [
        ("records.xlsx", "xlsx"),
        ("RECORDS.XLS", "xls"),
        ("export.Csv", "csv"),
    ])
    def test_supported(self, filename, expected):
        assert detect_format(filename) == expected

    @pytest.mark.parametrize("filename", ["notes.txt", "records", "", None])
    def test_unsupported(self, filename):
        with pytest.raises(FileFormatUnsupported):
            detect_format(filename)


class TestImportRecords:
    """Tests for import_records."""

    def test_drops_rows_without_mileage_or_cost(self):
        charging = [
            charge(date(2024, 1, 5), 12000, amount=30, cost=36),
            charge(date(2024, 1, 6), 0, amount=10, cost=12),
        ]
        parking = [park(date(2024, 1, 6), 15), park(date(2024, 1, 7), 0)]

        result = import_records("backup.csv", build_csv(charging, parking))

        assert [r.mileage for r in result.charging_records] == [12000.0]
        assert [r.cost for r in result.parking_records] == [15.0]
        assert result.stats == {
            "format": "csv",
            "charging_rows": 2,
            "parking_rows": 2,
            "charging_imported": 1,
            "parking_imported": 1,
            "skipped_rows": 2,
        }

    def test_workbook(self, sample_charging, sample_parking):
        result = import_records("backup.xlsx", build_workbook(sample_charging, sample_parking))

        assert len(result.charging_records) == 5
        assert len(result.parking_records) == 4
        assert result.stats["format"] == "xlsx"

    def test_fresh_ids(self, sample_charging):
        result = import_records("backup.csv", build_csv(sample_charging, []))
        original_ids = {r.id for r in sample_charging}
        assert not original_ids & {r.id for r in result.charging_records}

    def test_unsupported_extension(self):
        with pytest.raises(FileFormatUnsupported):
            import_records("backup.json", b"{}")

    def test_corrupt_workbook(self):
        with pytest.raises(WorkbookParseError):
            import_records("backup.xlsx", b"not a zip")


class TestImportFile:
    """Tests for import_file."""

    def test_reads_from_disk(self, tmp_path, sample_charging):
        path = tmp_path / "backup.csv"
        path.write_bytes(build_csv(sample_charging, []))

        result = import_file(str(path))

        assert len(result.charging_records) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileReadFailure) as exc_info:
            import_file(str(tmp_path / "missing.csv"))
        assert exc_info.value.filename == "missing.csv"

    def test_format_checked_before_reading(self, tmp_path):
        """An unsupported extension is reported even if the file does not exist."""
        with pytest.raises(FileFormatUnsupported):
            import_file(str(tmp_path / "missing.txt"))


class TestApplyImport:
    """Tests for apply_import."""

    def test_replaces_only_kinds_with_rows(self, store, sample_charging, sample_parking):
        store.set(RecordKind.CHARGING, sample_charging)
        store.set(RecordKind.PARKING, sample_parking)
        result = import_records("backup.csv", build_csv([charge(date(2024, 4, 1), 13000, cost=10)], []))

        summary = apply_import(store, result)

        assert summary == {"charging": 1, "parking": 0, "replaced": ["charging"]}
        assert [r.mileage for r in store.get(RecordKind.CHARGING)] == [13000.0]
        assert len(store.get(RecordKind.PARKING)) == 4

    def test_empty_result_changes_nothing(self, store, sample_parking):
        store.set(RecordKind.PARKING, sample_parking)
        result = import_records("backup.csv", build_csv([], []))

        summary = apply_import(store, result)

        assert summary["replaced"] == []
        assert len(store.get(RecordKind.PARKING)) == 4

    def test_non_finite_and_unit_cells(self, store):
        """Cells like nan or 36元 still import and store as finite numbers."""
        content = "\n".join([
            "车辆费用记录",
            "",
            "充电记录",
            "日期,里程(公里),充电量(度),电费单价(元/度),本次充电费用(元),是否充满",
            "2024年3月5日,12000,nan,1.2,36元,是",
            "2024年3月9日,12300,inf,1e400,12,否",
            "",
            "停车记录",
            "日期,停车费用(元)",
            "2024年3月6日,15元",
        ]).encode("utf-8-sig")
        result = import_records("backup.csv", content)

        summary = apply_import(store, result)

        assert summary["charging"] == 2
        stored = store.get(RecordKind.CHARGING)
        assert [(r.amount, r.price, r.cost) for r in stored] == [(0.0, 1.2, 36.0), (0.0, 0.0, 12.0)]
        assert [r.cost for r in store.get(RecordKind.PARKING)] == [15.0]
