"""
Routes module for ChargeLog Flask blueprints.

This module contains Flask blueprints that handle different areas of the API.
"""

import logging

from flask import jsonify

from chargelog.exceptions import (
    ChargeLogError,
    EmptyExportSource,
    ExportFailed,
    FileFormatUnsupported,
    FileReadFailure,
    RecordValidationError,
    WorkbookParseError,
)
from chargelog.routes.dashboard import dashboard_bp
from chargelog.routes.export import export_bp
from chargelog.routes.records import records_bp

logger = logging.getLogger(__name__)

__all__ = [
    "dashboard_bp",
    "export_bp",
    "records_bp",
    "register_blueprints",
    "register_error_handlers",
]

# HTTP status per exception; the most specific class wins
ERROR_STATUS = {
    RecordValidationError: 400,
    FileFormatUnsupported: 400,
    EmptyExportSource: 400,
    WorkbookParseError: 422,
    FileReadFailure: 500,
    ExportFailed: 500,
    ChargeLogError: 500,
}


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(records_bp, url_prefix="/api")
    app.register_blueprint(dashboard_bp, url_prefix="/api")
    app.register_blueprint(export_bp, url_prefix="/api")


def _error_response(error: ChargeLogError):
    status = next(code for cls, code in ERROR_STATUS.items() if isinstance(error, cls))
    if status >= 500:
        logger.error(f"{type(error).__name__}: {error}", exc_info=True)
    else:
        logger.warning(f"Request rejected ({status}): {error}")

    body = {"error": error.message}
    if error.details:
        body["details"] = error.details
    return jsonify(body), status


def register_error_handlers(app):
    """Map ChargeLog exceptions to JSON error responses."""
    app.register_error_handler(ChargeLogError, _error_response)
