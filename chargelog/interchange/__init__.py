"""Spreadsheet and CSV import/export of charging and parking records."""

from .csv_codec import build_csv, parse_csv
from .exporter import ExportArtifact, export_filename, export_records, export_to_file
from .importer import ImportResult, apply_import, detect_format, import_file, import_records
from .workbook import build_workbook, parse_workbook

__all__ = [
    'build_csv',
    'parse_csv',
    'build_workbook',
    'parse_workbook',
    'ExportArtifact',
    'export_filename',
    'export_records',
    'export_to_file',
    'ImportResult',
    'apply_import',
    'detect_format',
    'import_file',
    'import_records',
]
