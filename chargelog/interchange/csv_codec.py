"""
Sectioned CSV format used when a workbook cannot be produced.

Layout (UTF-8 with BOM, comma separated, no quoting):

    车辆费用记录

    充电记录
    日期,里程(公里),充电量(度),电费单价(元/度),本次充电费用(元),是否充满
    2024年1月5日,12000,30.00,1.20,36.00,是

    停车记录
    日期,停车费用(元)
    2024年1月6日,15

Embedded commas are not escaped, so free-text values containing a comma do
not survive a round trip.
"""

import logging
from typing import List, Tuple, Union

from chargelog.exceptions import WorkbookParseError

from .layout import (
    CHARGING_SHEET,
    CSV_CHARGING_HEADER,
    CSV_DELIMITER,
    CSV_PARKING_HEADER,
    DOCUMENT_TITLE,
    MIN_CHARGING_COLUMNS,
    MIN_PARKING_COLUMNS,
    PARKING_SHEET,
    build_charging_record,
    build_parking_record,
    charging_values,
    format_plain_number,
    parking_values,
)

logger = logging.getLogger(__name__)

SECTIONS = {
    CHARGING_SHEET: 'charging',
    PARKING_SHEET: 'parking',
}


def build_csv(charging_records, parking_records) -> bytes:
    """
    Serialize both collections into the sectioned CSV layout.

    Returns:
        UTF-8 bytes with a leading byte-order mark
    """
    lines = [DOCUMENT_TITLE, '', CHARGING_SHEET, CSV_DELIMITER.join(CSV_CHARGING_HEADER)]

    for record in charging_records:
        date_text, mileage, amount, price, cost, full = charging_values(record)
        lines.append(CSV_DELIMITER.join([
            date_text,
            str(mileage),
            f"{amount:.2f}",
            f"{price:.2f}",
            f"{cost:.2f}",
            full,
        ]))

    lines.extend(['', PARKING_SHEET, CSV_DELIMITER.join(CSV_PARKING_HEADER)])

    for record in parking_records:
        date_text, cost = parking_values(record)
        lines.append(CSV_DELIMITER.join([date_text, format_plain_number(cost)]))

    return ('\n'.join(lines) + '\n').encode('utf-8-sig')


def parse_csv(content: Union[bytes, str], as_of=None) -> Tuple[List, List]:
    """
    Parse the sectioned CSV layout into records.

    A line equal to a section name switches section and the following line
    (its header row) is skipped. Blank lines and the title line are ignored.
    Data lines with too few columns for their section are skipped silently.
    Rows are not filtered here; see importer.import_records.

    Args:
        content: Raw file bytes (BOM optional) or already decoded text
        as_of: Fallback date for unreadable date cells

    Returns:
        Tuple of (charging records, parking records), each with fresh ids

    Raises:
        WorkbookParseError: If the bytes are not valid UTF-8
    """
    if isinstance(content, bytes):
        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise WorkbookParseError(f"CSV is not valid UTF-8: {e}") from e
    else:
        text = content.lstrip('\ufeff')

    lines = [line.strip() for line in text.splitlines() if line.strip()]

    charging, parking = [], []
    section = None
    skip_header = False

    for line_number, line in enumerate(lines, start=1):
        if skip_header:
            skip_header = False
            continue

        if line in SECTIONS:
            section = SECTIONS[line]
            skip_header = True
            continue
        if line == DOCUMENT_TITLE:
            continue

        columns = [col.strip() for col in line.split(CSV_DELIMITER)]

        if section == 'charging' and len(columns) >= MIN_CHARGING_COLUMNS:
            charging.append(build_charging_record(*columns[:MIN_CHARGING_COLUMNS], as_of=as_of))
        elif section == 'parking' and len(columns) >= MIN_PARKING_COLUMNS:
            parking.append(build_parking_record(*columns[:MIN_PARKING_COLUMNS], as_of=as_of))
        else:
            logger.debug(f"Skipping CSV line {line_number} ({len(columns)} columns, section={section})")

    return charging, parking
