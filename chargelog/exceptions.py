"""
Custom exceptions for ChargeLog.

Field-level problems (ParseFailure) are absorbed by the parsers and turned
into defaults. File-level problems (InterchangeError and subclasses) propagate
to the caller so a failed import never touches the record store.
"""


class ChargeLogError(Exception):
    """Base exception for all ChargeLog errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ParseFailure(ChargeLogError):
    """A date or number could not be read from its raw representation."""

    def __init__(self, message: str, field: str = None, value=None):
        details = {}
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class RecordValidationError(ChargeLogError):
    """A record submitted for entry or edit is not acceptable."""

    def __init__(self, message: str, field: str = None, value=None):
        details = {}
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InterchangeError(ChargeLogError):
    """Import or export of a record file failed."""

    def __init__(self, message: str, filename: str = None):
        details = {}
        if filename:
            details['filename'] = filename
        super().__init__(message, details)
        self.filename = filename


class FileFormatUnsupported(InterchangeError):
    """The file extension is not one of xlsx, xls or csv."""

    pass


class FileReadFailure(InterchangeError):
    """The source file could not be read."""

    pass


class WorkbookParseError(InterchangeError):
    """The file was read but its content is not a usable workbook or CSV."""

    pass


class EmptyExportSource(ChargeLogError):
    """There are no records to export."""

    def __init__(self, message: str = "No records to export"):
        super().__init__(message)


class ExportFailed(ChargeLogError):
    """Every serialization strategy failed."""

    def __init__(self, message: str, attempted: list = None):
        details = {}
        if attempted:
            details['attempted'] = attempted
        super().__init__(message, details)
        self.attempted = attempted or []


class ConfigurationError(ChargeLogError):
    """Invalid or missing configuration."""

    def __init__(self, message: str, config_key: str = None):
        details = {}
        if config_key:
            details['config_key'] = config_key
        super().__init__(message, details)
        self.config_key = config_key
