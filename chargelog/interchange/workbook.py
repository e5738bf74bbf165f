"""
Two-sheet spreadsheet workbook codec.

Writes .xlsx via openpyxl. Reads .xlsx via openpyxl and legacy .xls via
xlrd. Rows are mapped by header name, so column order in an imported file
does not matter. Date cells may arrive as datetimes (openpyxl), serial
numbers (xlrd) or display text; all of them go through normalize_date.
"""

import io
import logging
from typing import Any, Dict, List, Tuple

import openpyxl
import xlrd

from chargelog.exceptions import WorkbookParseError

from .layout import (
    CHARGING_HEADERS,
    CHARGING_SHEET,
    COL_AMOUNT,
    COL_COST,
    COL_DATE,
    COL_FULL,
    COL_MILEAGE,
    COL_PARKING_COST,
    COL_PRICE,
    PARKING_HEADERS,
    PARKING_SHEET,
    build_charging_record,
    build_parking_record,
    charging_values,
    parking_values,
)

logger = logging.getLogger(__name__)


def build_workbook(charging_records, parking_records) -> bytes:
    """
    Serialize both collections into an .xlsx workbook.

    The charging sheet keeps an empty consumption column so the file
    matches the layout users edit by hand.

    Returns:
        Raw .xlsx bytes
    """
    workbook = openpyxl.Workbook()

    charging_sheet = workbook.active
    charging_sheet.title = CHARGING_SHEET
    charging_sheet.append(CHARGING_HEADERS)
    for record in charging_records:
        charging_sheet.append(charging_values(record) + [None])

    parking_sheet = workbook.create_sheet(PARKING_SHEET)
    parking_sheet.append(PARKING_HEADERS)
    for record in parking_records:
        parking_sheet.append(parking_values(record))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _rows_to_dicts(rows: List[List[Any]]) -> List[Dict[str, Any]]:
    """Map data rows onto the first row's headers, dropping empty rows."""
    if not rows:
        return []

    headers = [str(h).strip() if h is not None else '' for h in rows[0]]
    mapped = []
    for row in rows[1:]:
        if all(cell is None or str(cell).strip() == '' for cell in row):
            continue
        mapped.append({
            header: row[idx] if idx < len(row) else None
            for idx, header in enumerate(headers)
            if header
        })
    return mapped


def _read_xlsx_sheets(content: bytes) -> Dict[str, List[List[Any]]]:
    workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheets = {}
        for name in (CHARGING_SHEET, PARKING_SHEET):
            if name in workbook.sheetnames:
                sheets[name] = [list(row) for row in workbook[name].iter_rows(values_only=True)]
        return sheets
    finally:
        workbook.close()


def _read_xls_sheets(content: bytes) -> Dict[str, List[List[Any]]]:
    book = xlrd.open_workbook(file_contents=content)
    sheets = {}
    for name in (CHARGING_SHEET, PARKING_SHEET):
        if name in book.sheet_names():
            sheet = book.sheet_by_name(name)
            sheets[name] = [sheet.row_values(idx) for idx in range(sheet.nrows)]
    return sheets


def parse_workbook(content: bytes, file_format: str = 'xlsx', as_of=None) -> Tuple[List, List]:
    """
    Parse the charging and parking sheets of a workbook.

    A missing sheet yields an empty list for that kind. Rows are not
    filtered here; see importer.import_records.

    Args:
        content: Raw workbook bytes
        file_format: 'xlsx' or 'xls'
        as_of: Fallback date for unreadable date cells

    Returns:
        Tuple of (charging records, parking records), each with fresh ids

    Raises:
        WorkbookParseError: If the bytes cannot be read as a workbook
    """
    reader = _read_xls_sheets if file_format == 'xls' else _read_xlsx_sheets
    try:
        sheets = reader(content)
    except Exception as e:
        raise WorkbookParseError(f"Could not read {file_format} workbook: {e}") from e

    charging = [
        build_charging_record(
            row.get(COL_DATE),
            row.get(COL_MILEAGE),
            row.get(COL_AMOUNT),
            row.get(COL_PRICE),
            row.get(COL_COST),
            row.get(COL_FULL),
            as_of=as_of,
        )
        for row in _rows_to_dicts(sheets.get(CHARGING_SHEET, []))
    ]

    parking = [
        build_parking_record(row.get(COL_DATE), row.get(COL_PARKING_COST), as_of=as_of)
        for row in _rows_to_dicts(sheets.get(PARKING_SHEET, []))
    ]

    logger.debug(
        f"Workbook sheets found: {sorted(sheets)}; "
        f"{len(charging)} charging rows, {len(parking)} parking rows"
    )
    return charging, parking
