"""
Export records to a downloadable file.

The workbook format is tried first; if it cannot be produced the sectioned
CSV layout is used instead. Only when every format fails is the export
reported as failed.
"""

import logging
import os
from typing import NamedTuple

from chargelog.config import Config
from chargelog.exceptions import EmptyExportSource, ExportFailed
from chargelog.utils.time_utils import resolve_as_of

from .csv_codec import build_csv
from .workbook import build_workbook

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
CSV_MEDIA_TYPE = 'text/csv; charset=utf-8'

# (format, builder, media type), in order of preference
EXPORT_STRATEGIES = (
    ('xlsx', build_workbook, XLSX_MEDIA_TYPE),
    ('csv', build_csv, CSV_MEDIA_TYPE),
)


class ExportArtifact(NamedTuple):
    """A serialized export ready to be written or downloaded."""

    filename: str
    content: bytes
    media_type: str
    file_format: str


def export_filename(file_format: str, as_of=None) -> str:
    """File name such as ``车辆费用记录_20240105.xlsx``."""
    today = resolve_as_of(as_of)
    return f"{Config.EXPORT_FILE_PREFIX}_{today:%Y%m%d}.{file_format}"


def export_records(charging_records, parking_records, as_of=None, strategies=EXPORT_STRATEGIES) -> ExportArtifact:
    """
    Serialize both collections, falling back through the export formats.

    Args:
        charging_records: Charging records to export
        parking_records: Parking records to export
        as_of: Date used in the file name (default: today)
        strategies: Ordered (format, builder, media type) tuples

    Returns:
        ExportArtifact for the first format that succeeded

    Raises:
        EmptyExportSource: If both collections are empty
        ExportFailed: If every format failed
    """
    charging = list(charging_records)
    parking = list(parking_records)
    if not charging and not parking:
        raise EmptyExportSource()

    attempted = []
    for file_format, builder, media_type in strategies:
        attempted.append(file_format)
        try:
            content = builder(charging, parking)
        except Exception as e:
            logger.warning(f"{file_format} export failed, trying next format: {e}", exc_info=True)
            continue

        filename = export_filename(file_format, as_of)
        logger.info(
            f"Exported {len(charging)} charging and {len(parking)} parking records "
            f"as {file_format} ({len(content)} bytes)"
        )
        return ExportArtifact(filename, content, media_type, file_format)

    raise ExportFailed("All export formats failed", attempted=attempted)


def export_to_file(charging_records, parking_records, directory: str, as_of=None) -> bool:
    """
    Write an export into ``directory``.

    Returns:
        True on success; False when there was nothing to export or every
        format failed (the reason is logged, nothing is raised)
    """
    try:
        artifact = export_records(charging_records, parking_records, as_of=as_of)
    except EmptyExportSource:
        logger.warning("Nothing to export")
        return False
    except ExportFailed as e:
        logger.error(f"Export failed: {e}")
        return False

    path = os.path.join(directory, artifact.filename)
    try:
        with open(path, 'wb') as fh:
            fh.write(artifact.content)
    except OSError as e:
        logger.error(f"Could not write export file {path}: {e}", exc_info=True)
        return False

    logger.info(f"Export written to {path}")
    return True
