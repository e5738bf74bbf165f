"""
Import records from a workbook or sectioned CSV file.

Parsing never touches the record store. apply_import() then replaces each
collection that produced at least one valid row, in a single transaction,
so a file that fails to parse leaves existing data exactly as it was.
"""

import logging
import os
from typing import Dict, List, NamedTuple

from chargelog.exceptions import FileFormatUnsupported, FileReadFailure
from chargelog.models import RecordKind

from .csv_codec import parse_csv
from .layout import is_importable_charging, is_importable_parking
from .workbook import parse_workbook

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {
    '.xlsx': 'xlsx',
    '.xls': 'xls',
    '.csv': 'csv',
}


class ImportResult(NamedTuple):
    """Records parsed from one file, plus row statistics."""

    charging_records: List
    parking_records: List
    stats: Dict


def detect_format(filename: str) -> str:
    """
    Determine the file format from its extension.

    Raises:
        FileFormatUnsupported: If the extension is not xlsx, xls or csv
    """
    extension = os.path.splitext(filename or '')[1].lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise FileFormatUnsupported(
            "Please choose an Excel (.xlsx, .xls) or CSV (.csv) file", filename=filename
        )
    return SUPPORTED_EXTENSIONS[extension]


def import_records(filename: str, content: bytes, as_of=None) -> ImportResult:
    """
    Parse file content into canonical records.

    Every row gets a freshly generated id. Charging rows without a positive
    mileage and parking rows without a positive cost are dropped.

    Args:
        filename: Original file name, used to detect the format
        content: Raw file bytes
        as_of: Fallback date for unreadable date cells (default: today)

    Returns:
        ImportResult

    Raises:
        FileFormatUnsupported: Unknown extension
        WorkbookParseError: Content could not be parsed
    """
    file_format = detect_format(filename)

    if file_format == 'csv':
        charging, parking = parse_csv(content, as_of=as_of)
    else:
        charging, parking = parse_workbook(content, file_format, as_of=as_of)

    kept_charging = [r for r in charging if is_importable_charging(r)]
    kept_parking = [r for r in parking if is_importable_parking(r)]

    stats = {
        'format': file_format,
        'charging_rows': len(charging),
        'parking_rows': len(parking),
        'charging_imported': len(kept_charging),
        'parking_imported': len(kept_parking),
        'skipped_rows': (len(charging) - len(kept_charging)) + (len(parking) - len(kept_parking)),
    }
    logger.info(
        f"Parsed {filename}: {stats['charging_imported']}/{stats['charging_rows']} charging, "
        f"{stats['parking_imported']}/{stats['parking_rows']} parking rows kept"
    )
    return ImportResult(kept_charging, kept_parking, stats)


def import_file(path: str, as_of=None) -> ImportResult:
    """
    Read and parse a file from disk.

    The format is checked before the file is opened.

    Raises:
        FileFormatUnsupported: Unknown extension
        FileReadFailure: The file could not be read
        WorkbookParseError: Content could not be parsed
    """
    filename = os.path.basename(path)
    detect_format(filename)

    try:
        with open(path, 'rb') as fh:
            content = fh.read()
    except OSError as e:
        raise FileReadFailure(f"Could not read file: {e}", filename=filename) from e

    return import_records(filename, content, as_of=as_of)


def apply_import(store, result: ImportResult) -> Dict:
    """
    Replace the stored collections with the imported records.

    Only kinds with at least one imported record are replaced; an empty
    result for a kind leaves its stored records untouched.

    Returns:
        Dict with per-kind imported counts and the list of replaced kinds
    """
    collections = {}
    if result.charging_records:
        collections[RecordKind.CHARGING] = result.charging_records
    if result.parking_records:
        collections[RecordKind.PARKING] = result.parking_records

    if collections:
        store.replace(collections)

    replaced = [kind.value for kind in collections]
    logger.info(f"Import applied, replaced collections: {replaced or 'none'}")
    return {
        'charging': len(result.charging_records),
        'parking': len(result.parking_records),
        'replaced': replaced,
    }
