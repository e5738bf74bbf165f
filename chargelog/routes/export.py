"""
Export and import routes for ChargeLog.

Export downloads both collections as a workbook (CSV if the workbook cannot
be built). Import accepts a workbook or CSV upload and replaces the stored
collections only after the whole file parsed.
"""

import io
import logging

from flask import Blueprint, jsonify, request, send_file

from chargelog.database import get_store
from chargelog.interchange import apply_import, export_records, import_records
from chargelog.models import RecordKind
from chargelog.utils.time_utils import days_between, format_date, local_today

from .helpers import as_of_arg

logger = logging.getLogger(__name__)

export_bp = Blueprint("export", __name__)


@export_bp.route("/export", methods=["GET"])
def export_all():
    """Download every record as ``车辆费用记录_YYYYMMDD.xlsx`` (or ``.csv``)."""
    store = get_store()
    artifact = export_records(
        store.get(RecordKind.CHARGING),
        store.get(RecordKind.PARKING),
        as_of=as_of_arg(),
    )
    store.record_last_export()

    return send_file(
        io.BytesIO(artifact.content),
        mimetype=artifact.media_type,
        as_attachment=True,
        download_name=artifact.filename,
    )


@export_bp.route("/export/info", methods=["GET"])
def export_info():
    """When the data was last exported, and how many days ago."""
    last = get_store().last_export()
    if last is None:
        return jsonify({"last_export": None, "last_export_date": None, "days_since_export": None})

    exported_on = local_today(last)
    return jsonify({
        "last_export": last.isoformat(),
        "last_export_date": format_date(exported_on),
        "days_since_export": days_between(exported_on, as_of_arg()),
    })


@export_bp.route("/import", methods=["POST"])
def import_upload():
    """
    Import records from an uploaded .xlsx, .xls or .csv file.

    Expects multipart/form-data with a 'file' field. Each collection that
    yields at least one valid row replaces the stored one.

    Returns:
        JSON with per-kind counts and row statistics
    """
    if "file" not in request.files:
        logger.warning("Import rejected: no file provided")
        return jsonify({"error": "No file provided"}), 400

    upload = request.files["file"]
    if not upload.filename:
        logger.warning("Import rejected: no file selected")
        return jsonify({"error": "No file selected"}), 400

    result = import_records(upload.filename, upload.read(), as_of=as_of_arg())
    summary = apply_import(get_store(), result)

    logger.info(f"Imported {upload.filename}: {summary}")
    return jsonify({"imported": summary, "stats": result.stats})
